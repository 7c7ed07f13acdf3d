"""Build output directory layout.

The output root is relocated outside the module directory (by default to
``<module root>/../build``) and every subproject writes to
``<root>/<subproject name>``. The layout is computed once, before any task
is registered, and passed by value to whatever needs it.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from buildconf.errors import ConfigurationError, UnknownProjectError

logger = logging.getLogger(__name__)

DEFAULT_BUILD_DIR = "../build"


@dataclass(frozen=True)
class BuildLayout:
    """Resolved output directories of a build.

    Attributes:
        module_root: Absolute module directory.
        root: Absolute relocated output root.
        project_dirs: Subproject name to output directory, declaration order.
    """

    module_root: Path
    root: Path
    project_dirs: Mapping[str, Path] = field(default_factory=dict)

    def project_dir(self, name: str) -> Path:
        """Return the output directory of a subproject.

        Raises:
            UnknownProjectError: If the subproject is not part of the layout.
        """
        try:
            return self.project_dirs[name]
        except KeyError:
            raise UnknownProjectError(name) from None

    def relative(self, path: Path) -> str:
        """Render a layout path relative to the module root (POSIX style)."""
        return Path(os.path.relpath(path, self.module_root)).as_posix()


def relocate_output_root(module_root: Path, build_dir: str = DEFAULT_BUILD_DIR) -> Path:
    """Compute the relocated output root.

    Args:
        module_root: Module directory.
        build_dir: Output root, absolute or relative to the module root.

    Returns:
        Absolute output root.

    Raises:
        ConfigurationError: If the root would contain the module sources,
            or exists and is not a directory.
    """
    module_root = module_root.resolve()
    root = (module_root / build_dir).resolve()
    if root == module_root or root in module_root.parents:
        raise ConfigurationError(
            f"build_dir '{build_dir}' resolves to {root}, which contains the "
            f"module root {module_root}",
            details={"build_dir": build_dir, "root": str(root)},
        )
    if root.exists() and not root.is_dir():
        raise ConfigurationError(
            f"build_dir '{build_dir}' resolves to {root}, which is not a directory",
            details={"build_dir": build_dir, "root": str(root)},
        )
    return root


def compute_layout(
    module_root: Path,
    projects: Iterable[str],
    build_dir: str = DEFAULT_BUILD_DIR,
) -> BuildLayout:
    """Compute the output layout for all subprojects.

    Args:
        module_root: Module directory.
        projects: Subproject names in declaration order.
        build_dir: Output root relative to the module root.

    Returns:
        Frozen BuildLayout.

    Raises:
        ConfigurationError: If two subprojects would share a directory.
    """
    root = relocate_output_root(module_root, build_dir)
    project_dirs: dict[str, Path] = {}
    folded: dict[str, str] = {}
    for name in projects:
        # Case-insensitive filesystems would merge these
        key = name.casefold()
        if key in folded:
            raise ConfigurationError(
                f"Subprojects '{folded[key]}' and '{name}' resolve to the same "
                f"output directory under {root}",
                details={"projects": [folded[key], name]},
            )
        folded[key] = name
        project_dirs[name] = root / name

    logger.info("Relocated build output root to %s", root)
    for name, path in project_dirs.items():
        logger.debug("Output directory for :%s -> %s", name, path)

    return BuildLayout(
        module_root=module_root.resolve(), root=root, project_dirs=project_dirs
    )


__all__ = [
    "DEFAULT_BUILD_DIR",
    "BuildLayout",
    "compute_layout",
    "relocate_output_root",
]

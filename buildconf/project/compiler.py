"""Uniform compiler options.

This module handles:
- Validation of the compiler option set
- Creation of the per-variant compilation tasks, all sharing one option set
  and writing below their subproject's relocated output directory

Incremental compilation is a policy flag: when the descriptor leaves it
unset, the settings default applies (disabled unless configured
otherwise). Disabling it forces full recompilation on every build.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from buildconf.descriptor.schema import CompilerOptionsSchema
from buildconf.errors import ConfigurationError
from buildconf.project.layout import BuildLayout
from buildconf.types import TaskKind

logger = logging.getLogger(__name__)

SUPPORTED_JVM_TARGETS: tuple[str, ...] = ("1.8",) + tuple(
    str(v) for v in range(9, 22)
)
KOTLIN_CLASSES_DIR = Path("tmp", "kotlin-classes")


@dataclass(frozen=True)
class CompilerOptions:
    """Compiler options shared by every compilation task of the build.

    Attributes:
        jvm_target: Target JVM bytecode version.
        incremental: Whether incremental compilation is enabled.
    """

    jvm_target: str
    incremental: bool

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization."""
        return {"jvm_target": self.jvm_target, "incremental": self.incremental}


@dataclass(frozen=True)
class CompileTask:
    """A Kotlin compilation task of one subproject variant.

    Attributes:
        project: Subproject name.
        variant: Build variant.
        options: Option set shared by every compile task.
        destination: Class output directory, inside the subproject's
            relocated output directory.
    """

    project: str
    variant: str
    options: CompilerOptions
    destination: Path

    kind = TaskKind.COMPILE

    @property
    def name(self) -> str:
        return f"compile{self.variant[:1].upper()}{self.variant[1:]}Kotlin"

    @property
    def path(self) -> str:
        return f":{self.project}:{self.name}"

    @property
    def description(self) -> str:
        return f"Compiles the {self.variant} Kotlin sources of :{self.project}"


def build_compiler_options(
    schema: CompilerOptionsSchema | None,
    *,
    default_incremental: bool = False,
) -> CompilerOptions:
    """Validate descriptor compiler settings into a frozen option set.

    Args:
        schema: Compiler section of the descriptor, if any.
        default_incremental: Policy used when the descriptor leaves
            ``incremental`` unset.

    Returns:
        CompilerOptions instance.

    Raises:
        ConfigurationError: If the JVM target is not supported.
    """
    schema = schema or CompilerOptionsSchema()
    if schema.jvm_target not in SUPPORTED_JVM_TARGETS:
        raise ConfigurationError(
            f"Unsupported jvm_target '{schema.jvm_target}'. "
            f"Supported: {', '.join(SUPPORTED_JVM_TARGETS)}",
            details={"option": "jvm_target", "value": schema.jvm_target},
        )
    incremental = (
        schema.incremental if schema.incremental is not None else default_incremental
    )
    if not incremental:
        logger.debug("Incremental compilation disabled; every build recompiles fully")
    return CompilerOptions(jvm_target=schema.jvm_target, incremental=incremental)


def compile_destination(layout: BuildLayout, project: str, variant: str) -> Path:
    """Return the class output directory of one subproject variant."""
    return layout.project_dir(project) / KOTLIN_CLASSES_DIR / variant


def apply_compiler_options(
    projects: Iterable[tuple[str, Sequence[str]]],
    options: CompilerOptions,
    layout: BuildLayout,
) -> tuple[CompileTask, ...]:
    """Create the compile tasks of every project, all bound to ``options``.

    Output directories come from the already relocated ``layout``.

    Args:
        projects: Pairs of (subproject name, variants).
        options: The option set applied to every task.
        layout: Relocated output layout.

    Returns:
        Compile tasks, grouped by project in declaration order.

    Raises:
        UnknownProjectError: If a project is missing from the layout.
    """
    tasks = tuple(
        CompileTask(
            project=name,
            variant=variant,
            options=options,
            destination=compile_destination(layout, name, variant),
        )
        for name, variants in projects
        for variant in variants
    )
    logger.info(
        "Applied compiler options (jvm_target=%s, incremental=%s) to %d task(s)",
        options.jvm_target,
        options.incremental,
        len(tasks),
    )
    return tasks


def uniform_options(tasks: Iterable[CompileTask]) -> CompilerOptions | None:
    """Return the option set shared by all tasks.

    Returns:
        The shared options, or None when there are no tasks.

    Raises:
        ConfigurationError: If two tasks disagree.
    """
    shared: CompilerOptions | None = None
    for task in tasks:
        if shared is None:
            shared = task.options
        elif task.options != shared:
            raise ConfigurationError(
                f"Task {task.path} uses {task.options.to_dict()}, "
                f"expected {shared.to_dict()}",
                details={"task": task.path},
            )
    return shared


__all__ = [
    "KOTLIN_CLASSES_DIR",
    "SUPPORTED_JVM_TARGETS",
    "CompileTask",
    "CompilerOptions",
    "apply_compiler_options",
    "build_compiler_options",
    "compile_destination",
    "uniform_options",
]

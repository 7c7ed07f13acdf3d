"""Tests for the build output layout."""

from pathlib import Path

import pytest

from buildconf.errors import ConfigurationError, UnknownProjectError
from buildconf.project.layout import compute_layout, relocate_output_root


class TestRelocateOutputRoot:
    """Tests for relocate_output_root."""

    def test_default_is_sibling_build(self, module_dir: Path) -> None:
        """The default root is <parent of module root>/build."""
        assert relocate_output_root(module_dir) == module_dir.parent.resolve() / "build"

    def test_custom_relative(self, module_dir: Path) -> None:
        """Relative build_dir values resolve against the module root."""
        root = relocate_output_root(module_dir, "out/gradle")
        assert root == module_dir.resolve() / "out" / "gradle"

    def test_absolute(self, module_dir: Path, tmp_path: Path) -> None:
        """Absolute build_dir values are used as-is."""
        target = tmp_path / "elsewhere"
        assert relocate_output_root(module_dir, str(target)) == target.resolve()

    @pytest.mark.parametrize("build_dir", [".", "..", "../.."])
    def test_root_must_not_contain_module(self, module_dir: Path, build_dir: str) -> None:
        """Cleaning the root must never delete the module sources."""
        with pytest.raises(ConfigurationError, match="contains the module root"):
            relocate_output_root(module_dir, build_dir)

    def test_existing_file_rejected(self, module_dir: Path) -> None:
        """An output root that is an existing regular file is refused."""
        notes = module_dir.parent / "notes.txt"
        notes.write_text("keep me")

        with pytest.raises(ConfigurationError, match="not a directory"):
            relocate_output_root(module_dir, "../notes.txt")

        assert notes.read_text() == "keep me"


class TestComputeLayout:
    """Tests for compute_layout."""

    def test_project_dirs_under_root(self, module_dir: Path) -> None:
        """Each subproject writes to <root>/<name>."""
        layout = compute_layout(module_dir, ["app", "camera", "charts"])

        assert layout.root == module_dir.parent.resolve() / "build"
        for name in ("app", "camera", "charts"):
            assert layout.project_dir(name) == layout.root / name
        assert len(set(layout.project_dirs.values())) == 3

    def test_root_independent_of_project(self, module_dir: Path) -> None:
        """Every project directory shares the same root."""
        layout = compute_layout(module_dir, ["app", "camera"])
        assert {p.parent for p in layout.project_dirs.values()} == {layout.root}

    def test_declaration_order_kept(self, module_dir: Path) -> None:
        """Project directories keep declaration order."""
        layout = compute_layout(module_dir, ["zeta", "alpha"])
        assert list(layout.project_dirs) == ["zeta", "alpha"]

    def test_case_collision_rejected(self, module_dir: Path) -> None:
        """Names differing only in case would share a directory."""
        with pytest.raises(ConfigurationError, match="same output directory"):
            compute_layout(module_dir, ["app", "App"])

    def test_unknown_project(self, module_dir: Path) -> None:
        """Asking for a missing project is an unknown-project error."""
        layout = compute_layout(module_dir, ["app"])
        with pytest.raises(UnknownProjectError):
            layout.project_dir("camera")

    def test_relative_rendering(self, module_dir: Path) -> None:
        """Paths render relative to the module root."""
        layout = compute_layout(module_dir, ["app"])
        assert layout.relative(layout.root) == "../build"
        assert layout.relative(layout.project_dir("app")) == "../build/app"

    def test_does_not_touch_filesystem(self, module_dir: Path) -> None:
        """Computing the layout creates no directories."""
        layout = compute_layout(module_dir, ["app"])
        assert not layout.root.exists()

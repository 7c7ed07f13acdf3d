"""Tests for descriptor schema validation."""

from typing import Any

import pytest
from pydantic import ValidationError

from buildconf.descriptor.schema import (
    DEFAULT_VARIANTS,
    CompilerOptionsSchema,
    DescriptorSchema,
    RepositorySpecSchema,
    SubprojectSchema,
    normalize_project_name,
)


class TestNormalizeProjectName:
    """Tests for normalize_project_name."""

    def test_strips_leading_colon(self) -> None:
        """Gradle path notation should be accepted."""
        assert normalize_project_name(":app") == "app"

    def test_plain_name(self) -> None:
        """Plain names pass through."""
        assert normalize_project_name("camera_plugin") == "camera_plugin"

    @pytest.mark.parametrize("value", ["", ":", ".", "..", "a/b", "a b", ":a:b"])
    def test_rejects_unsafe_names(self, value: str) -> None:
        """Empty, relative and nested names are rejected."""
        with pytest.raises(ValueError):
            normalize_project_name(value)


class TestRepositorySpecSchema:
    """Tests for explicit repositories."""

    def test_valid(self) -> None:
        """An https URL is accepted."""
        repo = RepositorySpecSchema(name="flutter", url="https://example.com/m2")
        assert repo.url == "https://example.com/m2"

    def test_rejects_other_schemes(self) -> None:
        """Only http(s) URLs are accepted."""
        with pytest.raises(ValidationError):
            RepositorySpecSchema(name="local", url="file:///tmp/m2")


class TestCompilerOptionsSchema:
    """Tests for compiler option parsing."""

    def test_defaults(self) -> None:
        """Incremental is left to the settings policy by default."""
        options = CompilerOptionsSchema()
        assert options.jvm_target == "1.8"
        assert options.incremental is None

    @pytest.mark.parametrize(("raw", "expected"), [(11, "11"), (1.8, "1.8"), ("17", "17")])
    def test_jvm_target_coercion(self, raw: Any, expected: str) -> None:
        """Unquoted YAML numbers should become strings."""
        assert CompilerOptionsSchema(jvm_target=raw).jvm_target == expected

    def test_extra_fields_forbidden(self) -> None:
        """Unknown compiler options are rejected."""
        with pytest.raises(ValidationError):
            CompilerOptionsSchema.model_validate({"jvm_target": "11", "verbose": True})


class TestSubprojectSchema:
    """Tests for subprojects."""

    def test_default_variants(self) -> None:
        """Missing variants fall back to debug and release."""
        assert SubprojectSchema(name="app").effective_variants() == list(DEFAULT_VARIANTS)

    def test_depends_on_normalized(self) -> None:
        """Dependency names accept the leading colon."""
        sub = SubprojectSchema(name=":camera", depends_on=[":app"])
        assert sub.name == "camera"
        assert sub.depends_on == ["app"]

    def test_duplicate_variants_rejected(self) -> None:
        """Variants must be unique."""
        with pytest.raises(ValidationError):
            SubprojectSchema(name="app", variants=["debug", "debug"])

    def test_empty_variants_rejected(self) -> None:
        """An explicit empty variant list is an error."""
        with pytest.raises(ValidationError):
            SubprojectSchema(name="app", variants=[])


class TestDescriptorSchema:
    """Tests for the complete descriptor."""

    def test_valid_descriptor(self, descriptor_data: dict[str, Any]) -> None:
        """The Android host descriptor validates."""
        descriptor = DescriptorSchema.model_validate(descriptor_data)

        assert descriptor.root_project == "android"
        assert descriptor.subproject_names() == ["app", "camera", "charts"]
        assert descriptor.evaluation_depends_on == "app"
        assert descriptor.build_dir == "../build"
        assert descriptor.repositories is not None
        assert isinstance(descriptor.repositories[2], RepositorySpecSchema)

    def test_minimal_descriptor(self) -> None:
        """Every section is optional."""
        descriptor = DescriptorSchema.model_validate({})
        assert descriptor.root_project == "root"
        assert descriptor.module_root == "."
        assert descriptor.subprojects == []

    def test_duplicate_subprojects_rejected(self) -> None:
        """Subproject names must be unique."""
        with pytest.raises(ValidationError, match="duplicate subproject"):
            DescriptorSchema.model_validate({"subprojects": ["app", ":app"]})

    def test_malformed_plugin_rejected(self) -> None:
        """Plugin pins must be group:artifact:version."""
        with pytest.raises(ValidationError):
            DescriptorSchema.model_validate(
                {"buildscript": {"dependencies": ["com.android.tools.build:gradle"]}}
            )

    def test_unknown_top_level_key_rejected(self) -> None:
        """Typos in section names are reported."""
        with pytest.raises(ValidationError):
            DescriptorSchema.model_validate({"subproject": ["app"]})

    def test_extra_values_stringified(self) -> None:
        """Extra properties are stored as strings."""
        descriptor = DescriptorSchema.model_validate({"extra": {"min_sdk": 21}})
        assert descriptor.extra == {"min_sdk": "21"}

    def test_extra_null_value_rejected(self) -> None:
        """An empty extra property is reported instead of becoming 'None'."""
        with pytest.raises(ValidationError, match="kotlin_version"):
            DescriptorSchema.model_validate({"extra": {"kotlin_version": None}})

    def test_root_project_normalized(self) -> None:
        """The root project accepts the Gradle path form."""
        descriptor = DescriptorSchema.model_validate({"root_project": ":android"})
        assert descriptor.root_project == "android"

    @pytest.mark.parametrize("name", [":", "..", "my app"])
    def test_invalid_root_project(self, name: str) -> None:
        with pytest.raises(ValidationError):
            DescriptorSchema.model_validate({"root_project": name})

    def test_empty_build_dir_rejected(self) -> None:
        """build_dir must name a directory."""
        with pytest.raises(ValidationError):
            DescriptorSchema.model_validate({"build_dir": "  "})

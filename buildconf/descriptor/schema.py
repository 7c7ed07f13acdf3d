"""Pydantic models for build descriptor validation.

This module defines the Pydantic models for validating build descriptors
read from YAML/JSON files, and for exporting them back to file formats.

A minimal descriptor:

    root_project: android
    buildscript:
      repositories: [google, mavenCentral]
      dependencies:
        - com.android.tools.build:gradle:8.1.0
    repositories: [google, mavenCentral]
    compiler:
      jvm_target: "11"
      incremental: false
    subprojects: [app]
    evaluation_depends_on: ":app"
"""

import re
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from buildconf.repositories.models import Coordinate

PROJECT_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9_.\-]+$")
DEFAULT_VARIANTS = ("debug", "release")


def normalize_project_name(value: str) -> str:
    """Strip the Gradle-style leading ':' and validate a project name.

    Raises:
        ValueError: If the name is empty or contains unsafe characters.
    """
    name = value.strip()
    if name.startswith(":"):
        name = name[1:]
    if not name:
        raise ValueError("project name must not be empty")
    if name in (".", ".."):
        raise ValueError(f"project name must not be '{name}'")
    if not PROJECT_NAME_PATTERN.match(name):
        raise ValueError(
            f"project name must match pattern {PROJECT_NAME_PATTERN.pattern}, "
            f"got '{value}'"
        )
    return name


class RepositorySpecSchema(BaseModel):
    """Schema for an explicit, URL-based repository.

    Attributes:
        name: Name used in logs and error messages.
        url: Base URL of the Maven repository.
    """

    model_config = ConfigDict(extra="forbid")

    name: Annotated[str, Field(min_length=1, max_length=255)]
    url: Annotated[str, Field(min_length=1)]

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate url uses http or https."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"url must start with http:// or https://, got '{v}'")
        return v


RepositoryEntry = str | RepositorySpecSchema


class BuildscriptSchema(BaseModel):
    """Schema for the plugin (buildscript) section.

    Attributes:
        repositories: Ordered repositories for plugin resolution.
        dependencies: Plugin pins as 'group:artifact:version'.
    """

    model_config = ConfigDict(extra="forbid")

    repositories: list[RepositoryEntry] = Field(default_factory=list)
    dependencies: list[str] = Field(default_factory=list)

    @field_validator("dependencies")
    @classmethod
    def validate_dependencies(cls, v: list[str]) -> list[str]:
        """Validate each entry is a parseable coordinate."""
        for notation in v:
            Coordinate.parse(notation)
        return v


class CompilerOptionsSchema(BaseModel):
    """Schema for compiler options applied to every compilation task.

    Attributes:
        jvm_target: Target JVM bytecode version.
        incremental: Incremental compilation toggle (None = settings policy).
    """

    model_config = ConfigDict(extra="forbid")

    jvm_target: str = Field(default="1.8", description="Target JVM version")
    incremental: bool | None = Field(
        default=None, description="Incremental compilation toggle"
    )

    @field_validator("jvm_target", mode="before")
    @classmethod
    def coerce_jvm_target(cls, v: Any) -> Any:
        """Accept unquoted YAML numbers such as 11 or 1.8."""
        if isinstance(v, bool):
            return v
        if isinstance(v, int | float):
            return str(v)
        return v


class SubprojectSchema(BaseModel):
    """Schema for a subproject.

    Attributes:
        name: Subproject name (leading ':' accepted).
        variants: Build variants, one compile task each.
        depends_on: Subprojects whose evaluation must complete first.
    """

    model_config = ConfigDict(extra="forbid")

    name: str
    variants: list[str] | None = Field(default=None)
    depends_on: list[str] | None = Field(default=None)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Normalize and validate the subproject name."""
        return normalize_project_name(v)

    @field_validator("depends_on")
    @classmethod
    def validate_depends_on(cls, v: list[str] | None) -> list[str] | None:
        """Normalize dependency names."""
        if v is None:
            return v
        return [normalize_project_name(item) for item in v]

    @field_validator("variants")
    @classmethod
    def validate_variants(cls, v: list[str] | None) -> list[str] | None:
        """Validate variants are unique identifiers."""
        if v is None:
            return v
        if not v:
            raise ValueError("variants must not be empty when given")
        for item in v:
            if not re.match(r"^[a-zA-Z][a-zA-Z0-9]*$", item):
                raise ValueError(f"variant must be alphanumeric, got '{item}'")
        if len(set(v)) != len(v):
            raise ValueError("variants must be unique")
        return v

    def effective_variants(self) -> list[str]:
        """Return declared variants or the defaults."""
        return list(self.variants) if self.variants else list(DEFAULT_VARIANTS)


class DescriptorSchema(BaseModel):
    """Complete build descriptor schema.

    Attributes:
        root_project: Name of the root project.
        module_root: Module directory, relative to the descriptor file.
        extra: Extra properties shared by the whole build.
        buildscript: Plugin repositories and pins.
        repositories: Ordered repositories for project dependencies.
        compiler: Uniform compiler options.
        build_dir: Output root, relative to the module root.
        subprojects: Subprojects of the build.
        evaluation_depends_on: Subproject every other one is evaluated after.
    """

    model_config = ConfigDict(extra="forbid")

    root_project: Annotated[
        str, Field(description="Root project name", min_length=1, max_length=255)
    ] = "root"
    module_root: str = Field(
        default=".", description="Module directory relative to the descriptor"
    )
    extra: dict[str, str] | None = Field(
        default=None, description="Extra properties"
    )
    buildscript: BuildscriptSchema | None = Field(
        default=None, description="Plugin repositories and pins"
    )
    repositories: list[RepositoryEntry] | None = Field(
        default=None, description="Project repositories"
    )
    compiler: CompilerOptionsSchema | None = Field(
        default=None, description="Compiler options"
    )
    build_dir: str = Field(
        default="../build", description="Output root relative to the module root"
    )
    subprojects: list[SubprojectSchema] = Field(
        default_factory=list, description="Subprojects"
    )
    evaluation_depends_on: str | None = Field(
        default=None, description="Subproject evaluated before all others"
    )

    @field_validator("extra", mode="before")
    @classmethod
    def coerce_extra(cls, v: Any) -> Any:
        """Render scalar extra property values as strings."""
        if isinstance(v, dict):
            for key, value in v.items():
                if value is None:
                    raise ValueError(f"extra property '{key}' has no value")
            return {
                str(key): value if isinstance(value, str) else str(value)
                for key, value in v.items()
            }
        return v

    @field_validator("root_project")
    @classmethod
    def validate_root_project(cls, v: str) -> str:
        """Normalize the root project name."""
        return normalize_project_name(v)

    @field_validator("subprojects", mode="before")
    @classmethod
    def expand_subproject_shorthand(cls, v: Any) -> Any:
        """Allow plain names in place of subproject mappings."""
        if isinstance(v, list):
            return [{"name": item} if isinstance(item, str) else item for item in v]
        return v

    @field_validator("evaluation_depends_on")
    @classmethod
    def validate_evaluation_depends_on(cls, v: str | None) -> str | None:
        """Normalize the designated subproject name."""
        if v is None:
            return v
        return normalize_project_name(v)

    @field_validator("build_dir")
    @classmethod
    def validate_build_dir(cls, v: str) -> str:
        """Validate build_dir is not empty."""
        if not v.strip():
            raise ValueError("build_dir must not be empty")
        return v

    @model_validator(mode="after")
    def validate_unique_subprojects(self) -> "DescriptorSchema":
        """Validate subproject names are unique."""
        seen: set[str] = set()
        for subproject in self.subprojects:
            if subproject.name in seen:
                raise ValueError(f"duplicate subproject '{subproject.name}'")
            seen.add(subproject.name)
        return self

    def subproject_names(self) -> list[str]:
        """Return subproject names in declaration order."""
        return [s.name for s in self.subprojects]


__all__ = [
    "DEFAULT_VARIANTS",
    "PROJECT_NAME_PATTERN",
    "BuildscriptSchema",
    "CompilerOptionsSchema",
    "DescriptorSchema",
    "RepositoryEntry",
    "RepositorySpecSchema",
    "SubprojectSchema",
    "normalize_project_name",
]

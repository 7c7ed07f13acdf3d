"""Repository and coordinate models.

This module defines the declarative records used for dependency
resolution: repository references (with the well-known aliases expanded)
and Maven coordinates.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import urlparse

from buildconf.errors import ConfigurationError

# Well-known repository aliases and the Maven hosts they expand to
WELL_KNOWN_REPOSITORIES: dict[str, str] = {
    "google": "https://dl.google.com/dl/android/maven2",
    "mavenCentral": "https://repo.maven.apache.org/maven2",
    "gradlePluginPortal": "https://plugins.gradle.org/m2",
}

COORDINATE_PART_PATTERN = re.compile(r"^[A-Za-z0-9_.\-]+$")

# Version selectors that do not pin a single version
_DYNAMIC_VERSION_PATTERN = re.compile(r"(\+|^latest\.|[\[\]\(\),])")


@dataclass(frozen=True)
class RepositoryRef:
    """A named source location consulted during dependency resolution.

    Attributes:
        name: Alias or user-chosen name.
        url: Base URL of the Maven layout (no trailing slash).
    """

    name: str
    url: str

    @classmethod
    def from_alias(cls, alias: str) -> RepositoryRef:
        """Expand a well-known alias such as ``google`` or ``mavenCentral``.

        Raises:
            ConfigurationError: If the alias is not known.
        """
        try:
            url = WELL_KNOWN_REPOSITORIES[alias]
        except KeyError:
            known = ", ".join(sorted(WELL_KNOWN_REPOSITORIES))
            raise ConfigurationError(
                f"Unknown repository alias '{alias}' (known: {known})",
                details={"alias": alias},
            ) from None
        return cls(name=alias, url=url)

    @classmethod
    def from_url(cls, name: str, url: str) -> RepositoryRef:
        """Create a reference for an explicit URL.

        Raises:
            ConfigurationError: If the URL is not an absolute http(s) URL.
        """
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigurationError(
                f"Repository '{name}' must use an http(s) URL, got '{url}'",
                details={"repository": name, "url": url},
            )
        return cls(name=name, url=url.rstrip("/"))


@dataclass(frozen=True)
class Coordinate:
    """A Maven coordinate ``group:artifact:version``."""

    group: str
    artifact: str
    version: str

    @classmethod
    def parse(cls, notation: str) -> Coordinate:
        """Parse ``group:artifact:version`` notation.

        Raises:
            ValueError: If the notation is malformed.
        """
        parts = notation.strip().split(":")
        if len(parts) != 3:
            raise ValueError(
                f"coordinate must be 'group:artifact:version', got '{notation}'"
            )
        group, artifact, version = parts
        for label, value in (("group", group), ("artifact", artifact)):
            if not COORDINATE_PART_PATTERN.match(value):
                raise ValueError(f"invalid {label} '{value}' in '{notation}'")
        if not version or any(c.isspace() for c in version):
            raise ValueError(f"invalid version '{version}' in '{notation}'")
        return cls(group=group, artifact=artifact, version=version)

    @property
    def module(self) -> str:
        """Return ``group:artifact`` without the version."""
        return f"{self.group}:{self.artifact}"

    @property
    def is_fixed_version(self) -> bool:
        """Whether the version selects exactly one release."""
        return not _DYNAMIC_VERSION_PATTERN.search(self.version)

    def pom_path(self) -> str:
        """Return the POM path relative to a Maven repository root."""
        group_path = self.group.replace(".", "/")
        return (
            f"{group_path}/{self.artifact}/{self.version}/"
            f"{self.artifact}-{self.version}.pom"
        )

    def __str__(self) -> str:
        return f"{self.group}:{self.artifact}:{self.version}"


@dataclass(frozen=True)
class ResolvedCoordinate:
    """A coordinate together with the repository that provided it."""

    coordinate: Coordinate
    repository: RepositoryRef
    url: str


__all__ = [
    "WELL_KNOWN_REPOSITORIES",
    "Coordinate",
    "RepositoryRef",
    "ResolvedCoordinate",
]

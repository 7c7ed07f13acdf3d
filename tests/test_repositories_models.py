"""Tests for repository and coordinate models."""

import pytest

from buildconf.errors import ConfigurationError
from buildconf.repositories.models import (
    WELL_KNOWN_REPOSITORIES,
    Coordinate,
    RepositoryRef,
)


class TestRepositoryRef:
    """Tests for RepositoryRef."""

    def test_google_alias(self) -> None:
        """google() expands to the Google Maven host."""
        ref = RepositoryRef.from_alias("google")
        assert ref.name == "google"
        assert ref.url == "https://dl.google.com/dl/android/maven2"

    def test_maven_central_alias(self) -> None:
        """mavenCentral() expands to Maven Central."""
        ref = RepositoryRef.from_alias("mavenCentral")
        assert ref.url == WELL_KNOWN_REPOSITORIES["mavenCentral"]

    def test_unknown_alias(self) -> None:
        """Unknown aliases are configuration errors."""
        with pytest.raises(ConfigurationError, match="Unknown repository alias"):
            RepositoryRef.from_alias("jcenter")

    def test_from_url_strips_trailing_slash(self) -> None:
        """Explicit URLs are normalized."""
        ref = RepositoryRef.from_url("flutter", "https://example.com/flutter/")
        assert ref.url == "https://example.com/flutter"

    @pytest.mark.parametrize("url", ["ftp://example.com", "example.com/m2", "https://"])
    def test_from_url_rejects_invalid(self, url: str) -> None:
        """Only absolute http(s) URLs are accepted."""
        with pytest.raises(ConfigurationError):
            RepositoryRef.from_url("bad", url)


class TestCoordinate:
    """Tests for Coordinate."""

    def test_parse(self) -> None:
        """group:artifact:version is split into its parts."""
        coordinate = Coordinate.parse("com.android.tools.build:gradle:8.1.0")
        assert coordinate.group == "com.android.tools.build"
        assert coordinate.artifact == "gradle"
        assert coordinate.version == "8.1.0"
        assert coordinate.module == "com.android.tools.build:gradle"
        assert str(coordinate) == "com.android.tools.build:gradle:8.1.0"

    @pytest.mark.parametrize(
        "notation",
        ["gradle:8.1.0", "a:b:c:d", ":gradle:8.1.0", "com.android:gradle:", "a b:c:1"],
    )
    def test_parse_invalid(self, notation: str) -> None:
        """Malformed notations raise ValueError."""
        with pytest.raises(ValueError):
            Coordinate.parse(notation)

    def test_pom_path(self) -> None:
        """Group dots become path segments."""
        coordinate = Coordinate.parse("com.google.gms:google-services:4.4.0")
        assert (
            coordinate.pom_path()
            == "com/google/gms/google-services/4.4.0/google-services-4.4.0.pom"
        )

    @pytest.mark.parametrize(
        ("version", "fixed"),
        [
            ("1.9.22", True),
            ("8.1.0-alpha01", True),
            ("1.9.+", False),
            ("+", False),
            ("latest.release", False),
            ("[1.0,2.0)", False),
        ],
    )
    def test_is_fixed_version(self, version: str, fixed: bool) -> None:
        """Dynamic selectors are not fixed versions."""
        assert Coordinate("g", "a", version).is_fixed_version is fixed

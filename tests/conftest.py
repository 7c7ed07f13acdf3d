"""Shared fixtures for buildconf tests."""

import copy
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
import yaml

from buildconf.config import Settings

ANDROID_DESCRIPTOR: dict[str, Any] = {
    "root_project": "android",
    "extra": {"kotlin_version": "1.9.22"},
    "buildscript": {
        "repositories": ["google", "mavenCentral"],
        "dependencies": [
            "com.android.tools.build:gradle:8.1.0",
            "com.google.gms:google-services:4.4.0",
            "org.jetbrains.kotlin:kotlin-gradle-plugin:1.9.22",
        ],
    },
    "repositories": [
        "google",
        "mavenCentral",
        {"name": "flutter", "url": "https://storage.googleapis.com/download.flutter.io"},
    ],
    "compiler": {"jvm_target": "11", "incremental": False},
    "build_dir": "../build",
    "subprojects": ["app", "camera", "charts"],
    "evaluation_depends_on": ":app",
}


@pytest.fixture
def descriptor_data() -> dict[str, Any]:
    """A fresh copy of the Android host descriptor."""
    return copy.deepcopy(ANDROID_DESCRIPTOR)


@pytest.fixture
def settings() -> Settings:
    """Settings that ignore any local .env file."""
    return Settings(_env_file=None, offline=False, incremental_compilation=False)


@pytest.fixture
def module_dir(tmp_path: Path) -> Path:
    """Module directory one level below tmp_path."""
    path = tmp_path / "android"
    path.mkdir()
    return path


@pytest.fixture
def write_descriptor(module_dir: Path) -> Callable[..., Path]:
    """Write descriptor data as YAML into the module directory."""

    def _write(data: dict[str, Any], name: str = "buildconf.yaml") -> Path:
        path = module_dir / name
        path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
        return path

    return _write

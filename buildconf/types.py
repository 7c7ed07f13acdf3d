"""Shared type definitions for buildconf.

This module contains enums and small records shared across subpackages
to avoid circular imports.
"""

from dataclasses import dataclass, field
from enum import Enum


class ConfigurationPhase(str, Enum):
    """Phases of the configuration pipeline, in execution order."""

    REPOSITORIES = "repositories"
    COMPILER_OPTIONS = "compiler_options"
    LAYOUT = "layout"
    EVALUATION_ORDER = "evaluation_order"
    TASKS = "tasks"


class TaskKind(str, Enum):
    """Kind of a registered task."""

    COMPILE = "compile"
    DELETE = "delete"


@dataclass
class OperationResult:
    """Result of an operation (resolve, clean, etc.)."""

    success: bool
    message: str
    code: str | None = None
    details: dict[str, object] = field(default_factory=dict)


PIPELINE_ORDER: tuple[ConfigurationPhase, ...] = tuple(ConfigurationPhase)


__all__ = [
    "PIPELINE_ORDER",
    "ConfigurationPhase",
    "OperationResult",
    "TaskKind",
]

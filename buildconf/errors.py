"""Error definitions for buildconf.

All errors carry a stable code that the CLI surfaces in JSON output.
Errors are raised where they are detected and propagate unchanged; only
the CLI turns them into an exit status.

Taxonomy:
- resolution: a plugin/dependency cannot be located in any repository
- configuration: invalid option values, bad references, cycles
- filesystem: the clean action cannot delete the output tree
"""

from typing import Any

# Error code constants
RESOLUTION_ERROR = "resolution_error"
OFFLINE_MODE = "offline_mode"
CONFIGURATION_ERROR = "configuration_error"
UNKNOWN_PROJECT = "unknown_project"
EVALUATION_CYCLE = "evaluation_cycle"
DESCRIPTOR_ERROR = "descriptor_error"
FILESYSTEM_ERROR = "filesystem_error"


class BuildConfError(Exception):
    """Base class for all buildconf errors.

    Attributes:
        message: Human-readable error message.
        code: Stable error code for programmatic handling.
        details: Optional additional error details.
    """

    default_code = "buildconf_error"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize BuildConfError.

        Args:
            message: Error description.
            code: Error code; the class default is used if not given.
            details: Optional structured details.
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details is not None:
            result["details"] = self.details
        return result


class ResolutionError(BuildConfError):
    """Raised when a coordinate cannot be resolved from any repository."""

    default_code = RESOLUTION_ERROR


class OfflineModeError(ResolutionError):
    """Raised when resolution is required but offline mode is enabled."""

    default_code = OFFLINE_MODE

    def __init__(self, message: str = "Cannot resolve in offline mode") -> None:
        super().__init__(message)


class ConfigurationError(BuildConfError):
    """Raised when the build configuration is invalid."""

    default_code = CONFIGURATION_ERROR


class UnknownProjectError(ConfigurationError):
    """Raised when a reference names a subproject that does not exist."""

    default_code = UNKNOWN_PROJECT

    def __init__(self, project: str, referenced_by: str | None = None) -> None:
        """Initialize UnknownProjectError.

        Args:
            project: The missing subproject name.
            referenced_by: Subproject (or setting) holding the reference.
        """
        where = f" (referenced by {referenced_by})" if referenced_by else ""
        super().__init__(
            f"Project with path ':{project}' could not be found{where}",
            details={"project": project, "referenced_by": referenced_by},
        )
        self.project = project
        self.referenced_by = referenced_by


class CycleError(ConfigurationError):
    """Raised when evaluation dependencies form a cycle."""

    default_code = EVALUATION_CYCLE

    def __init__(self, cycle: list[str]) -> None:
        """Initialize CycleError.

        Args:
            cycle: Subproject names along the cycle, first name repeated last.
        """
        path = " -> ".join(f":{name}" for name in cycle)
        super().__init__(
            f"Circular evaluation dependency: {path}",
            details={"cycle": cycle},
        )
        self.cycle = cycle


class DescriptorError(ConfigurationError):
    """Raised when a descriptor file cannot be read or parsed."""

    default_code = DESCRIPTOR_ERROR


class CleanError(BuildConfError):
    """Raised when the clean action cannot delete the output tree."""

    default_code = FILESYSTEM_ERROR


__all__ = [
    "CONFIGURATION_ERROR",
    "DESCRIPTOR_ERROR",
    "EVALUATION_CYCLE",
    "FILESYSTEM_ERROR",
    "OFFLINE_MODE",
    "RESOLUTION_ERROR",
    "UNKNOWN_PROJECT",
    "BuildConfError",
    "CleanError",
    "ConfigurationError",
    "CycleError",
    "DescriptorError",
    "OfflineModeError",
    "ResolutionError",
    "UnknownProjectError",
]

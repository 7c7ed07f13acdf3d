"""Tests for the error taxonomy."""

import pytest

from buildconf.errors import (
    CONFIGURATION_ERROR,
    EVALUATION_CYCLE,
    FILESYSTEM_ERROR,
    OFFLINE_MODE,
    RESOLUTION_ERROR,
    UNKNOWN_PROJECT,
    BuildConfError,
    CleanError,
    ConfigurationError,
    CycleError,
    DescriptorError,
    OfflineModeError,
    ResolutionError,
    UnknownProjectError,
)


class TestErrorCodes:
    """Each error class should carry its stable code."""

    @pytest.mark.parametrize(
        ("error", "code"),
        [
            (ResolutionError("x"), RESOLUTION_ERROR),
            (OfflineModeError(), OFFLINE_MODE),
            (ConfigurationError("x"), CONFIGURATION_ERROR),
            (UnknownProjectError("app"), UNKNOWN_PROJECT),
            (CycleError(["a", "b", "a"]), EVALUATION_CYCLE),
            (CleanError("x"), FILESYSTEM_ERROR),
        ],
    )
    def test_default_codes(self, error: BuildConfError, code: str) -> None:
        """Default codes should match the taxonomy."""
        assert error.code == code

    def test_explicit_code_overrides_default(self) -> None:
        """An explicit code should win over the class default."""
        error = ResolutionError("boom", code="timeout")
        assert error.code == "timeout"


class TestHierarchy:
    """Errors should group by kind."""

    def test_configuration_family(self) -> None:
        """Reference, cycle and descriptor errors are configuration errors."""
        assert issubclass(UnknownProjectError, ConfigurationError)
        assert issubclass(CycleError, ConfigurationError)
        assert issubclass(DescriptorError, ConfigurationError)

    def test_offline_is_resolution_error(self) -> None:
        """Offline mode blocks resolution."""
        assert issubclass(OfflineModeError, ResolutionError)

    def test_clean_error_is_not_configuration_error(self) -> None:
        """Filesystem errors form their own branch."""
        assert not issubclass(CleanError, ConfigurationError)


class TestMessages:
    """Test messages and serialization."""

    def test_unknown_project_message(self) -> None:
        """Unknown project should name the path and the referrer."""
        error = UnknownProjectError("app", referenced_by="evaluation_depends_on")
        assert "':app'" in str(error)
        assert "evaluation_depends_on" in str(error)
        assert error.details == {
            "project": "app",
            "referenced_by": "evaluation_depends_on",
        }

    def test_cycle_message(self) -> None:
        """Cycle errors should render the cycle path."""
        error = CycleError(["a", "b", "a"])
        assert ":a -> :b -> :a" in str(error)
        assert error.cycle == ["a", "b", "a"]

    def test_to_dict_without_details(self) -> None:
        """Details should be omitted when absent."""
        assert ConfigurationError("bad").to_dict() == {
            "code": CONFIGURATION_ERROR,
            "message": "bad",
        }

    def test_to_dict_with_details(self) -> None:
        """Details should be included when present."""
        data = CleanError("denied", details={"path": "/x"}).to_dict()
        assert data["details"] == {"path": "/x"}

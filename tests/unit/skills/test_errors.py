"""Unit tests for skill error classes."""

import pytest

from agent_skills.skills.errors import (
    SkillError,
    SkillErrorType,
    SkillInstallError,
    SkillManifestError,
    SkillNotFoundError,
    SkillParseError,
    SkillSecurityError,
    SkillValidationError,
)


@pytest.mark.unit
@pytest.mark.skills
class TestSkillErrorHierarchy:
    """Test the exception hierarchy."""

    @pytest.mark.parametrize(
        "error_class",
        [SkillNotFoundError, SkillManifestError, SkillSecurityError, SkillInstallError],
    )
    def test_inherits_from_skill_error(self, error_class):
        """Every skill exception should be catchable as SkillError."""
        assert issubclass(error_class, SkillError)

    @pytest.mark.parametrize("error_class", [SkillParseError, SkillValidationError])
    def test_manifest_errors(self, error_class):
        """Parse and validation errors should share SkillManifestError."""
        assert issubclass(error_class, SkillManifestError)


@pytest.mark.unit
@pytest.mark.skills
class TestSkillErrorType:
    """Test the category carried by each exception."""

    @pytest.mark.parametrize(
        "error_class,error_type",
        [
            (SkillParseError, SkillErrorType.PARSE_ERROR),
            (SkillValidationError, SkillErrorType.VALIDATION_ERROR),
            (SkillNotFoundError, SkillErrorType.NOT_FOUND),
            (SkillSecurityError, SkillErrorType.SECURITY_ERROR),
        ],
    )
    def test_error_type(self, error_class, error_type):
        """Raised errors should report their discovery category."""
        with pytest.raises(error_class) as exc_info:
            raise error_class("boom")
        assert exc_info.value.error_type == error_type
        assert str(exc_info.value) == "boom"

    def test_error_type_values(self):
        """Categories should serialize as their names."""
        assert SkillErrorType.NOT_FOUND.value == "NOT_FOUND"

"""Custom exceptions for skill subsystem.

This module defines a hierarchy of domain-specific exceptions for the
skill package system, plus the error categories reported by discovery.

Exception Hierarchy:
    SkillError (base)
    ├── SkillNotFoundError
    ├── SkillManifestError
    │   ├── SkillParseError
    │   └── SkillValidationError
    ├── SkillSecurityError
    └── SkillInstallError
"""

from enum import Enum


class SkillErrorType(str, Enum):
    """Category of a problem found while loading a skill package."""

    PARSE_ERROR = "PARSE_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    IO_ERROR = "IO_ERROR"
    SECURITY_ERROR = "SECURITY_ERROR"


class SkillError(Exception):
    """Base exception for all skill-related errors.

    All custom exceptions in the skill subsystem inherit from this base class,
    allowing for catch-all error handling when needed.

    Example:
        >>> try:
        ...     # some skill operation
        ...     pass
        ... except SkillError as e:
        ...     print(f"Skill error: {e}")
    """

    error_type: SkillErrorType = SkillErrorType.IO_ERROR


class SkillNotFoundError(SkillError):
    """Configured skill package is missing from disk.

    Reported by discovery for enabled plugin records with no directory.

    Example:
        >>> raise SkillNotFoundError("Skill 'pdf-tools' not found")
    """

    error_type = SkillErrorType.NOT_FOUND


class SkillManifestError(SkillError):
    """Skill manifest (SKILL.md) parsing or validation errors."""

    error_type = SkillErrorType.PARSE_ERROR


class SkillParseError(SkillManifestError):
    """SKILL.md structure is malformed.

    Raised when the YAML front matter is missing, not closed, or is not
    well-formed YAML.

    Example:
        >>> raise SkillParseError("SKILL.md must start with a header section (---)")
    """

    error_type = SkillErrorType.PARSE_ERROR


class SkillValidationError(SkillManifestError):
    """SKILL.md is well-formed but semantically invalid.

    Raised for a bad name, a missing required field, an unrecognized key,
    or a name that does not match the package directory.
    """

    error_type = SkillErrorType.VALIDATION_ERROR


class SkillSecurityError(SkillError):
    """Skill security validation errors.

    Raised when skill name sanitization fails or a path escapes its
    package directory.

    Example:
        >>> raise SkillSecurityError("Invalid skill name: '../etc/passwd'")
    """

    error_type = SkillErrorType.SECURITY_ERROR


class SkillInstallError(SkillError):
    """Plugin installation, update or removal failed."""

    pass

"""Skill manifest schema and validation.

This module defines the Pydantic model for SKILL.md manifests (the YAML
front matter of a skill package) and the validation helpers built on it.

The SKILL.md format follows this structure:
```yaml
---
name: skill-name
description: What the skill does and when to use it
license: MIT
compatibility: Requires git and a POSIX shell
metadata:
  requires: gh git
allowed-tools: Bash(git:*) Read
---

# Skill Instructions
Markdown instructions for using the skill...
```

The schema is closed: any top-level key outside the fields above fails
validation with a single aggregated "unrecognized key(s)" message.
"""

import re
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from agent_skills.skills.errors import SkillValidationError

# Field limits
MAX_SKILL_NAME_LENGTH = 64
MAX_SKILL_DESCRIPTION_LENGTH = 1024
MAX_COMPATIBILITY_LENGTH = 500

# Lowercase alphanumeric segments joined by single hyphens
SKILL_NAME_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")

SKILL_NAME_RULE = (
    'Skill name must be lowercase alphanumeric with single hyphens (e.g., "my-skill-name")'
)


class SkillManifest(BaseModel):
    """Pydantic model for SKILL.md YAML front matter.

    Required fields:
        name: Skill identifier (lowercase alphanumeric + single hyphens, max 64 chars)
        description: What the skill does and when to use it (max 1024 chars)

    Optional fields:
        license: License name or file reference
        compatibility: Environment requirements (max 500 chars)
        metadata: Arbitrary string-to-string mapping
        allowed_tools: Tool patterns, either one space-delimited string or a
            list of strings. Read from the ``allowed-tools`` key. Advisory only.

    Example:
        >>> manifest = SkillManifest(
        ...     name="pdf-tools",
        ...     description="Extract text and tables from PDF files"
        ... )
    """

    model_config = ConfigDict(extra="forbid")

    # Required fields
    name: str = Field(..., min_length=1, max_length=MAX_SKILL_NAME_LENGTH)
    description: str = Field(..., min_length=1, max_length=MAX_SKILL_DESCRIPTION_LENGTH)

    # Optional fields
    license: str | None = None
    compatibility: str | None = Field(
        default=None, min_length=1, max_length=MAX_COMPATIBILITY_LENGTH
    )
    metadata: dict[str, str] | None = None
    allowed_tools: str | list[str] | None = Field(default=None, alias="allowed-tools")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate skill name format.

        No uppercase, no leading/trailing hyphen, no consecutive hyphens.
        """
        if not SKILL_NAME_PATTERN.match(v):
            raise ValueError(SKILL_NAME_RULE)
        return v

    def to_frontmatter(self) -> dict[str, Any]:
        """Return header fields keyed as they appear in SKILL.md.

        Unset optional fields are omitted so a dump/parse cycle is lossless.
        """
        return self.model_dump(by_alias=True, exclude_none=True)


def format_validation_errors(error: ValidationError) -> list[str]:
    """Format Pydantic validation errors into readable messages.

    Unknown keys are folded into one message listing every offending key,
    instead of one message per key.

    Args:
        error: Pydantic ValidationError raised by SkillManifest

    Returns:
        List of formatted error messages
    """
    messages: list[str] = []
    unrecognized: list[str] = []

    for issue in error.errors():
        location = ".".join(str(part) for part in issue["loc"])
        if issue["type"] == "extra_forbidden":
            unrecognized.append(location)
            continue
        prefix = f"{location}: " if location else ""
        messages.append(f"{prefix}{issue['msg']}")

    if unrecognized:
        keys = ", ".join(f"'{key}'" for key in unrecognized)
        messages.append(f"Unrecognized key(s) in object: {keys}")

    return messages


def validate_manifest(data: Any) -> SkillManifest:
    """Validate raw front matter data against the manifest schema.

    Args:
        data: Parsed YAML front matter (normally a dict)

    Returns:
        Validated SkillManifest

    Raises:
        SkillValidationError: If any field is missing, invalid, or unrecognized
    """
    try:
        return SkillManifest.model_validate(data)
    except ValidationError as e:
        errors = format_validation_errors(e)
        raise SkillValidationError(f"Manifest validation failed: {'; '.join(errors)}") from e


def is_valid_skill_name(name: str) -> bool:
    """Check a name against the manifest naming rules without raising.

    Examples:
        >>> is_valid_skill_name("pdf-tools")
        True
        >>> is_valid_skill_name("PDF--tools")
        False
    """
    if not isinstance(name, str) or not 1 <= len(name) <= MAX_SKILL_NAME_LENGTH:
        return False
    return SKILL_NAME_PATTERN.match(name) is not None


def validate_name_matches_directory(skill_name: str, directory_name: str) -> str | None:
    """Validate that skill name matches its directory name.

    Kept outside the schema so the installer can rename a directory
    instead of rejecting the package.

    Args:
        skill_name: Name from manifest
        directory_name: Name of parent directory

    Returns:
        Error message if mismatch, None if valid
    """
    if skill_name != directory_name:
        return f'Skill name "{skill_name}" does not match directory name "{directory_name}"'
    return None


def serialize_skill_md(manifest: SkillManifest, body: str = "") -> str:
    """Render a manifest and body back into SKILL.md text.

    Args:
        manifest: Validated manifest
        body: Markdown instructions (may be empty)

    Returns:
        SKILL.md content that parses back to an identical manifest and body
    """
    header = yaml.safe_dump(
        manifest.to_frontmatter(),
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )
    content = f"---\n{header}---\n"
    if body:
        content += f"\n{body}"
    return content

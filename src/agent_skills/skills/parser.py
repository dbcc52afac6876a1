"""YAML front matter parser for SKILL.md files.

Splits a SKILL.md file into its header and body, parses the header as YAML
and validates it against the manifest schema. Only the header content goes
through a YAML parser; the split itself is a small line scanner.
"""

from dataclasses import dataclass

import yaml

from agent_skills.skills.errors import SkillParseError, SkillValidationError
from agent_skills.skills.manifest import (
    SkillManifest,
    validate_manifest,
    validate_name_matches_directory,
)

FRONTMATTER_MARKER = "---"


@dataclass
class SkillContent:
    """A parsed skill package: manifest plus markdown body."""

    manifest: SkillManifest
    body: str


def split_frontmatter(content: str) -> tuple[str, str]:
    """Split SKILL.md content into raw header text and body.

    CRLF and LF line endings are treated the same. Leading whitespace before
    the opening marker is ignored, and a single blank line directly after
    the closing marker is dropped from the body.

    Args:
        content: Full SKILL.md file content

    Returns:
        Tuple of (header_text, body)

    Raises:
        SkillParseError: If the opening marker is missing or never closed
    """
    lines = content.replace("\r\n", "\n").lstrip().split("\n")

    if lines[0].rstrip() != FRONTMATTER_MARKER:
        raise SkillParseError("SKILL.md must start with a header section delimited by '---'")

    header_lines: list[str] = []
    body_lines: list[str] = []
    in_header = True

    for line in lines[1:]:
        if in_header:
            if line.rstrip() == FRONTMATTER_MARKER:
                in_header = False
            else:
                header_lines.append(line)
        else:
            body_lines.append(line)

    if in_header:
        raise SkillParseError("SKILL.md header section is not properly closed with '---'")

    if body_lines and not body_lines[0].strip():
        body_lines = body_lines[1:]

    return "\n".join(header_lines), "\n".join(body_lines)


def parse_skill_md(
    content: str, directory_name: str, skip_name_validation: bool = False
) -> SkillContent:
    """Parse SKILL.md content into manifest and body.

    Errors are raised in priority order: missing header, unclosed header,
    malformed YAML, schema validation, then name/directory mismatch.

    Args:
        content: Raw SKILL.md file content
        directory_name: Parent directory name for name validation
        skip_name_validation: Skip the name/directory check (used by the
            installer while the clone directory name is still provisional)

    Returns:
        SkillContent with validated manifest and body

    Raises:
        SkillParseError: If the header is missing, unclosed, or not well-formed YAML
        SkillValidationError: If the well-formed header fails the manifest schema
            (including a header that is not a mapping) or the name does not match
            the directory
    """
    header, body = split_frontmatter(content)

    try:
        data = yaml.safe_load(header)
    except yaml.YAMLError as e:
        raise SkillParseError(f"YAML parse error: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise SkillValidationError("Manifest validation failed: header must be a mapping of fields")

    manifest = validate_manifest(data)

    if not skip_name_validation:
        name_error = validate_name_matches_directory(manifest.name, directory_name)
        if name_error is not None:
            raise SkillValidationError(name_error)

    return SkillContent(manifest=manifest, body=body)


def has_yaml_frontmatter(content: str) -> bool:
    """Quick check for an opened and closed header, without parsing it."""
    try:
        split_frontmatter(content)
    except SkillParseError:
        return False
    return True

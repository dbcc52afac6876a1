"""Test data builders for creating test fixtures.

This module provides builder functions for creating common test objects
with sensible defaults, making tests more readable and maintainable.
"""

from pathlib import Path
from typing import Any

import yaml

from agent_skills.skills.manifest import SkillManifest
from agent_skills.skills.models import DiscoveredSkill, SkillSource


def build_skill_md(
    name: str | None = "test-skill",
    description: str | None = "A skill used in tests",
    body: str = "# Test Skill\n\nDo the thing.",
    **fields: Any,
) -> str:
    """Build SKILL.md content with a YAML header.

    Args:
        name: Skill name (omitted from the header if None)
        description: Skill description (omitted from the header if None)
        body: Markdown body
        **fields: Extra header fields (use allowed_tools for "allowed-tools")

    Example:
        >>> build_skill_md("pdf-tools", license="MIT")
    """
    header: dict[str, Any] = {}
    if name is not None:
        header["name"] = name
    if description is not None:
        header["description"] = description
    for key, value in fields.items():
        header["allowed-tools" if key == "allowed_tools" else key] = value

    yaml_text = yaml.safe_dump(header, sort_keys=False) if header else ""
    content = f"---\n{yaml_text}---\n"
    if body:
        content += f"\n{body}\n"
    return content


def write_skill(
    root: Path, name: str = "test-skill", dirname: str | None = None, **kwargs: Any
) -> Path:
    """Write a skill package under root and return its directory.

    Args:
        root: Source root (created if missing)
        name: Skill name declared in the header
        dirname: Directory name (defaults to name)
        **kwargs: Passed to build_skill_md
    """
    skill_dir = root / (dirname or name)
    skill_dir.mkdir(parents=True, exist_ok=True)
    (skill_dir / "SKILL.md").write_text(build_skill_md(name, **kwargs), encoding="utf-8")
    return skill_dir


def build_discovered_skill(
    name: str = "test-skill",
    description: str = "A skill used in tests",
    directory: Path | None = None,
    source: SkillSource = SkillSource.USER,
    **flags: Any,
) -> DiscoveredSkill:
    """Build an in-memory DiscoveredSkill without touching the filesystem.

    Args:
        name: Skill name
        description: Skill description
        directory: Skill directory (defaults to /skills/<name>)
        source: Source tier
        **flags: disabled / unavailable / unavailable_reason
    """
    directory = directory or Path("/skills") / name
    return DiscoveredSkill(
        manifest=SkillManifest(name=name, description=description),
        body="",
        path=directory / "SKILL.md",
        directory=directory,
        source=source,
        **flags,
    )

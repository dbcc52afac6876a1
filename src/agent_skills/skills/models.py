"""Runtime records produced by skill discovery."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from agent_skills.skills.errors import SkillErrorType
from agent_skills.skills.manifest import SkillManifest


class SkillSource(str, Enum):
    """Where a discovered skill came from."""

    BUNDLED = "bundled"
    USER = "user"
    COMPAT = "compat"
    PROJECT = "project"
    PLUGIN = "plugin"


# Fixed scan order; results are grouped in this order
SOURCE_ORDER: tuple[SkillSource, ...] = (
    SkillSource.BUNDLED,
    SkillSource.USER,
    SkillSource.COMPAT,
    SkillSource.PROJECT,
    SkillSource.PLUGIN,
)


@dataclass
class DiscoveredSkill:
    """Skill package with filesystem provenance.

    Attributes:
        manifest: Validated manifest
        body: Markdown instructions following the header
        path: Absolute path to SKILL.md
        directory: Skill directory, root for resource resolution
        source: Source tier the skill was found in
        disabled: Set by configuration overrides, never by the skill itself
        unavailable: Environment requirements are not met
        unavailable_reason: Human-readable reason when unavailable
    """

    manifest: SkillManifest
    body: str
    path: Path
    directory: Path
    source: SkillSource
    disabled: bool = False
    unavailable: bool = False
    unavailable_reason: str | None = None

    @property
    def name(self) -> str:
        return self.manifest.name


@dataclass
class SkillIssue:
    """Problem encountered while loading one skill (discovery never raises)."""

    path: Path
    message: str
    type: SkillErrorType


@dataclass
class SkillDiscoveryResult:
    """Successfully loaded skills plus every issue found along the way."""

    skills: list[DiscoveredSkill] = field(default_factory=list)
    errors: list[SkillIssue] = field(default_factory=list)

    def by_source(self) -> dict[SkillSource, list[DiscoveredSkill]]:
        """Group skills by source, in scan order, omitting empty sources."""
        grouped: dict[SkillSource, list[DiscoveredSkill]] = {}
        for source in SOURCE_ORDER:
            matches = [skill for skill in self.skills if skill.source == source]
            if matches:
                grouped[source] = matches
        return grouped

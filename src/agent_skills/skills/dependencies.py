"""Skill dependency checking.

A skill may list required command-line tools in its manifest metadata:

```yaml
metadata:
  requires: gh git
```

Skills whose commands are missing are reported as unavailable by the loader.
"""

import logging
import shutil
from dataclasses import dataclass, field

from agent_skills.skills.manifest import SkillManifest

logger = logging.getLogger(__name__)

REQUIRES_METADATA_KEY = "requires"


@dataclass
class DependencyCheckResult:
    """Result of a dependency check for one skill."""

    available: bool
    missing_commands: list[str] = field(default_factory=list)
    reason: str | None = None


def check_command_available(command: str) -> bool:
    """Check if a command is on PATH."""
    return shutil.which(command) is not None


def parse_requires(requires: str | None) -> list[str]:
    """Split a space-delimited command list.

    Examples:
        >>> parse_requires("gh  git")
        ['gh', 'git']
        >>> parse_requires(None)
        []
    """
    if not requires or not requires.strip():
        return []
    return requires.split()


def find_missing_commands(commands: list[str]) -> list[str]:
    """Return the commands that are not available, in input order."""
    return [command for command in commands if not check_command_available(command)]


def check_skill_dependencies(requires: str | None) -> DependencyCheckResult:
    """Check the commands listed in a skill's ``requires`` metadata.

    Args:
        requires: Space-delimited command list (None if not declared)

    Returns:
        DependencyCheckResult with missing commands and reason if unavailable
    """
    commands = parse_requires(requires)
    if not commands:
        return DependencyCheckResult(available=True)

    missing = find_missing_commands(commands)
    if not missing:
        return DependencyCheckResult(available=True)

    logger.debug(f"Missing commands: {missing}")
    return DependencyCheckResult(
        available=False,
        missing_commands=missing,
        reason=f"missing commands: {', '.join(missing)}",
    )


def check_manifest_dependencies(manifest: SkillManifest) -> DependencyCheckResult:
    """Default availability checker used by the loader."""
    requires = (manifest.metadata or {}).get(REQUIRES_METADATA_KEY)
    return check_skill_dependencies(requires)

"""Progressive disclosure context provider for skills.

Implements three-tier progressive disclosure over a fixed list of
discovered skills:

1. Metadata (~100 tokens/skill): ``<available_skills>`` XML for the system prompt
2. Instructions: the full SKILL.md of one skill when the agent activates it
3. Resources: files under scripts/, references/ and assets/ on demand

Tier 2 and 3 never raise; an unknown skill, a missing file or a rejected
path all come back as ``None`` (or an empty list).
"""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from agent_skills.config.constants import (
    DEFAULT_MAX_TIER1_TOKENS,
    RESOURCE_CATEGORIES,
    TOKENS_PER_SKILL,
)
from agent_skills.skills.models import DiscoveredSkill
from agent_skills.skills.prompt import (
    estimate_skill_tokens,
    generate_available_skills_xml,
    visible_skills,
)
from agent_skills.skills.security import escapes_directory, escapes_resolved_directory

logger = logging.getLogger(__name__)


class SkillContextProvider:
    """Serve skill context tier by tier.

    Example:
        >>> result = SkillLoader(options).discover()
        >>> provider = SkillContextProvider(result.skills, max_tier1_tokens=1000)
        >>> system_prompt += provider.get_tier1_context()
        >>> instructions = provider.get_tier2_context("hello-world")
        >>> script = provider.get_tier3_resource("hello-world", "scripts/greet.sh")
    """

    def __init__(
        self,
        skills: list[DiscoveredSkill],
        max_tier1_tokens: int = DEFAULT_MAX_TIER1_TOKENS,
        on_debug: Callable[[str, dict[str, Any] | None], None] | None = None,
    ):
        """Initialize skill context provider.

        Args:
            skills: Snapshot of discovered skills
            max_tier1_tokens: Token budget for the metadata digest (default: 1000)
            on_debug: Optional diagnostic callback (message, data)
        """
        self.skills = list(skills)
        self.max_tier1_tokens = max_tier1_tokens
        self.on_debug = on_debug

    def _debug(self, message: str, data: dict[str, Any] | None = None) -> None:
        logger.debug(f"{message} {data}" if data else message)
        if self.on_debug is not None:
            self.on_debug(message, data)

    def get_skill(self, name: str) -> DiscoveredSkill | None:
        """Get skill by name (first match in source order)."""
        return next((skill for skill in self.skills if skill.name == name), None)

    def get_skill_names(self) -> list[str]:
        return [skill.name for skill in self.skills]

    def get_tier1_context(self) -> str:
        """Get Tier 1 context: metadata for every visible skill.

        When the estimate exceeds the budget, only the leading skills that
        fit are kept, so the output is stable for the same input.

        Returns:
            ``<available_skills>`` XML block ("" if there are no skills)
        """
        shown = visible_skills(self.skills)
        tokens = estimate_skill_tokens(shown)
        self._debug(
            "Generating tier 1 context (metadata)", {"skills": len(shown), "tokens": tokens}
        )

        if tokens > self.max_tier1_tokens:
            max_skills = self.max_tier1_tokens // TOKENS_PER_SKILL
            self._debug(
                "Tier 1 token limit exceeded, truncating skills",
                {"limit": self.max_tier1_tokens, "estimated": tokens, "kept": max_skills},
            )
            shown = shown[:max_skills]

        return generate_available_skills_xml(shown)

    def get_tier2_context(self, skill_name: str) -> str | None:
        """Get Tier 2 context: full SKILL.md content for one skill.

        Read from disk on every call.

        Args:
            skill_name: Name of skill to activate

        Returns:
            Full SKILL.md content, or None if unknown or unreadable
        """
        skill = self.get_skill(skill_name)
        if skill is None:
            self._debug("Skill not found for tier 2 context", {"skill": skill_name})
            return None

        try:
            content = skill.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            self._debug("Failed to load tier 2 context", {"skill": skill_name, "error": str(e)})
            return None

        self._debug(
            "Loaded tier 2 context (instructions)",
            {"skill": skill_name, "chars": len(content)},
        )
        return content

    def get_tier3_resource_list(self, skill_name: str, resource_type: str) -> list[str]:
        """Get Tier 3 resource listing for a skill.

        Args:
            skill_name: Name of skill
            resource_type: One of "scripts", "references", "assets"

        Returns:
            Sorted file paths relative to the skill directory
            (e.g. "scripts/greet.sh"); empty if the category is absent
        """
        skill = self.get_skill(skill_name)
        if skill is None or resource_type not in RESOURCE_CATEGORIES:
            return []

        resource_dir = skill.directory / resource_type
        try:
            if not resource_dir.is_dir():
                return []
            files = sorted(
                f"{resource_type}/{entry.name}"
                for entry in resource_dir.iterdir()
                if entry.is_file()
            )
        except OSError:
            return []

        self._debug(
            "Listed tier 3 resources",
            {"skill": skill_name, "type": resource_type, "count": len(files)},
        )
        return files

    def get_tier3_resource(self, skill_name: str, resource_path: str) -> str | None:
        """Get a specific tier 3 resource as text.

        Args:
            skill_name: Name of skill
            resource_path: Path relative to the skill directory (e.g. "scripts/greet.sh")

        Returns:
            UTF-8 resource content, or None if missing, unreadable or rejected
        """
        path = self._resolve_resource(skill_name, resource_path)
        if path is None:
            return None

        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return None

        self._debug(
            "Loaded tier 3 resource",
            {"skill": skill_name, "resource": resource_path, "chars": len(content)},
        )
        return content

    def get_tier3_resource_bytes(self, skill_name: str, resource_path: str) -> bytes | None:
        """Get a specific tier 3 resource as raw bytes (for binary assets)."""
        path = self._resolve_resource(skill_name, resource_path)
        if path is None:
            return None

        try:
            return path.read_bytes()
        except OSError:
            return None

    def _resolve_resource(self, skill_name: str, resource_path: str) -> Path | None:
        """Locate a resource, applying both path containment checks.

        The lexical check rejects "../" and absolute paths without touching
        the filesystem. The resolved check then catches symlinks inside the
        skill directory that point outside it.
        """
        skill = self.get_skill(skill_name)
        if skill is None:
            return None

        if escapes_directory(skill.directory, resource_path):
            self._debug(
                "Rejected tier 3 resource path escape attempt (pre-check)",
                {"skill": skill_name, "resource": resource_path},
            )
            return None

        full_path = skill.directory / resource_path
        try:
            if escapes_resolved_directory(skill.directory, full_path):
                self._debug(
                    "Rejected tier 3 resource symlink escape attempt",
                    {"skill": skill_name, "resource": resource_path},
                )
                return None
            return full_path.resolve(strict=True)
        except OSError:
            return None

"""Skill package subsystem.

Skills are self-describing instruction bundles (a SKILL.md manifest plus
optional scripts, references and assets) that an agent loads into its
context on demand. This package discovers and validates them, serves them
through three-tier progressive disclosure, and installs plugins from git.

Example:
    >>> from agent_skills.config import load_config
    >>> from agent_skills.skills import SkillContextProvider, SkillLoader, SkillLoaderOptions
    >>> options = SkillLoaderOptions.from_config(load_config().skills)
    >>> result = SkillLoader(options).discover()
    >>> provider = SkillContextProvider(result.skills)
    >>> print(provider.get_tier1_context())
"""

from agent_skills.skills.context_provider import SkillContextProvider
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
from agent_skills.skills.installer import (
    InstallResult,
    UpdateResult,
    install_skill,
    list_installed_plugins,
    remove_skill,
    update_skill,
)
from agent_skills.skills.loader import SkillLoader, SkillLoaderOptions, discover_skills
from agent_skills.skills.manifest import SkillManifest, validate_manifest
from agent_skills.skills.models import (
    DiscoveredSkill,
    SkillDiscoveryResult,
    SkillIssue,
    SkillSource,
)
from agent_skills.skills.parser import SkillContent, parse_skill_md

__all__ = [
    "SkillError",
    "SkillErrorType",
    "SkillInstallError",
    "SkillManifestError",
    "SkillNotFoundError",
    "SkillParseError",
    "SkillSecurityError",
    "SkillValidationError",
    "SkillManifest",
    "validate_manifest",
    "SkillContent",
    "parse_skill_md",
    "DiscoveredSkill",
    "SkillDiscoveryResult",
    "SkillIssue",
    "SkillSource",
    "SkillLoader",
    "SkillLoaderOptions",
    "discover_skills",
    "SkillContextProvider",
    "InstallResult",
    "UpdateResult",
    "install_skill",
    "update_skill",
    "remove_skill",
    "list_installed_plugins",
]

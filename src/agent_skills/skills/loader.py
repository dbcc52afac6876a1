"""Skill loader for discovering skills.

This module scans the configured source directories for skill packages,
parses and validates each SKILL.md, applies enable/disable overrides and
availability checks, and collects per-package problems without aborting.
"""

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import TYPE_CHECKING, Any

from agent_skills.config.constants import (
    COMPAT_SKILLS_RELATIVE_DIR,
    DATA_DIR_NAME,
    PLUGINS_DIR_NAME,
    PROJECT_SKILLS_RELATIVE_DIR,
    SKILL_FILE_NAME,
    USER_SKILLS_DIR_NAME,
)
from agent_skills.skills.dependencies import DependencyCheckResult, check_manifest_dependencies
from agent_skills.skills.errors import (
    SkillError,
    SkillErrorType,
    SkillNotFoundError,
    SkillParseError,
)
from agent_skills.skills.manifest import SkillManifest
from agent_skills.skills.models import (
    SOURCE_ORDER,
    DiscoveredSkill,
    SkillDiscoveryResult,
    SkillIssue,
    SkillSource,
)
from agent_skills.skills.parser import parse_skill_md
from agent_skills.skills.security import escapes_resolved_directory

if TYPE_CHECKING:
    from agent_skills.config.schema import PluginSkillSource, SkillsConfig

logger = logging.getLogger(__name__)

DebugCallback = Callable[[str, dict[str, Any] | None], None]
DependencyChecker = Callable[[SkillManifest], DependencyCheckResult]


def get_bundled_dir() -> Path:
    """Locate the bundled skills shipped inside the package."""
    return Path(str(resources.files("agent_skills").joinpath("_bundled_skills")))


def get_user_dir() -> Path:
    return Path.home() / DATA_DIR_NAME / USER_SKILLS_DIR_NAME


def get_compat_dir() -> Path:
    return Path.home() / COMPAT_SKILLS_RELATIVE_DIR


def get_project_dir() -> Path:
    return Path.cwd() / PROJECT_SKILLS_RELATIVE_DIR


def get_default_plugins_dir() -> Path:
    return Path.home() / DATA_DIR_NAME / PLUGINS_DIR_NAME


def resolve_disabled(
    name: str,
    source: SkillSource,
    disabled_bundled: list[str],
    enabled_bundled: list[str],
    plugin_enabled: bool | None = None,
) -> bool:
    """Decide whether a skill is disabled by configuration.

    Rules:
        bundled: disabled when listed in disabled_bundled and not in
            enabled_bundled (explicit enable wins)
        plugin: disabled when its install record says enabled=False
            (no record means enabled)
        other sources: never disabled

    Args:
        name: Skill name from the manifest
        source: Source the skill was discovered in
        disabled_bundled: Bundled skill names disabled by the user
        enabled_bundled: Bundled skill names enabled by the user
        plugin_enabled: Enabled flag from the plugin's install record, if any

    Returns:
        True if the skill is disabled
    """
    if source == SkillSource.BUNDLED:
        return name in disabled_bundled and name not in enabled_bundled
    if source == SkillSource.PLUGIN:
        return plugin_enabled is False
    return False


@dataclass
class SkillLoaderOptions:
    """Directories and overrides for one discovery pass.

    Directories left as None fall back to the built-in defaults.
    """

    bundled_dir: Path | None = None
    user_dir: Path | None = None
    compat_dir: Path | None = None
    project_dir: Path | None = None
    plugins_dir: Path | None = None
    plugins: list["PluginSkillSource"] = field(default_factory=list)
    disabled_bundled: list[str] = field(default_factory=list)
    enabled_bundled: list[str] = field(default_factory=list)
    include_disabled: bool = False
    include_unavailable: bool = False

    @classmethod
    def from_config(cls, config: "SkillsConfig") -> "SkillLoaderOptions":
        """Build loader options from the skills section of the settings."""

        def _path(value: str | None) -> Path | None:
            return Path(value).expanduser() if value else None

        return cls(
            bundled_dir=_path(config.bundled_dir),
            user_dir=_path(config.user_dir),
            compat_dir=_path(config.compat_dir),
            project_dir=_path(config.project_dir),
            plugins_dir=_path(config.plugins_dir),
            plugins=list(config.plugins),
            disabled_bundled=list(config.disabled_bundled),
            enabled_bundled=list(config.enabled_bundled),
            include_disabled=config.include_disabled,
            include_unavailable=config.include_unavailable,
        )

    def source_dirs(self) -> list[tuple[SkillSource, Path]]:
        """Source directories in scan order, with defaults filled in."""
        dirs = {
            SkillSource.BUNDLED: self.bundled_dir or get_bundled_dir(),
            SkillSource.USER: self.user_dir or get_user_dir(),
            SkillSource.COMPAT: self.compat_dir or get_compat_dir(),
            SkillSource.PROJECT: self.project_dir or get_project_dir(),
            SkillSource.PLUGIN: self.plugins_dir or get_default_plugins_dir(),
        }
        return [(source, dirs[source]) for source in SOURCE_ORDER]


class SkillLoader:
    """Discover and validate skills from configured directories.

    Sources are scanned in a fixed order: bundled, user, compat, project,
    plugin. Skills with the same name in several sources are all returned;
    precedence between them is left to the caller.

    Example:
        >>> from agent_skills.config import load_config
        >>> options = SkillLoaderOptions.from_config(load_config().skills)
        >>> result = SkillLoader(options).discover()
        >>> [skill.name for skill in result.skills]
        ['hello-world']
    """

    def __init__(
        self,
        options: SkillLoaderOptions | None = None,
        dependency_checker: DependencyChecker | None = None,
        on_debug: DebugCallback | None = None,
    ):
        """Initialize skill loader.

        Args:
            options: Directories and overrides (defaults if None)
            dependency_checker: Availability check per manifest
                (defaults to checking ``metadata.requires`` commands)
            on_debug: Optional diagnostic callback (message, data)
        """
        self.options = options or SkillLoaderOptions()
        self.dependency_checker = dependency_checker or check_manifest_dependencies
        self.on_debug = on_debug

    def _debug(self, message: str, data: dict[str, Any] | None = None) -> None:
        logger.debug(f"{message} {data}" if data else message)
        if self.on_debug is not None:
            self.on_debug(message, data)

    def discover(self) -> SkillDiscoveryResult:
        """Discover all skills from configured directories.

        Returns:
            SkillDiscoveryResult with accepted skills (in source order) and
            every problem encountered
        """
        result = SkillDiscoveryResult()

        for source, directory in self.options.source_dirs():
            self._debug(f"Scanning {source.value} skills directory", {"dir": str(directory)})

            if not directory.is_dir():
                self._debug("Directory does not exist, skipping", {"dir": str(directory)})
                continue

            scanned = self.scan_directory(directory, source)
            result.skills.extend(scanned.skills)
            result.errors.extend(scanned.errors)

        result.errors.extend(self._missing_plugin_issues(result))

        logger.info(f"Discovered {len(result.skills)} skills ({len(result.errors)} errors)")
        self._debug(
            "Discovery complete", {"total": len(result.skills), "errors": len(result.errors)}
        )
        return result

    def scan_directory(self, directory: Path, source: SkillSource) -> SkillDiscoveryResult:
        """Scan one source directory, one level deep, for skills.

        Args:
            directory: Source root to scan
            source: Source tier recorded on each discovered skill

        Returns:
            SkillDiscoveryResult for this directory only
        """
        result = SkillDiscoveryResult()

        try:
            entries = sorted(directory.iterdir(), key=lambda entry: entry.name)
        except OSError as e:
            result.errors.append(SkillIssue(directory, str(e), SkillErrorType.IO_ERROR))
            return result

        for skill_dir in entries:
            if skill_dir.name.startswith(".") or not skill_dir.is_dir():
                continue

            # Reject skill directories that are symlinks out of the source root
            try:
                if escapes_resolved_directory(directory, skill_dir):
                    self._debug(
                        "Rejected skill directory symlink escape attempt",
                        {"dir": str(skill_dir), "resolved": str(skill_dir.resolve())},
                    )
                    result.errors.append(
                        SkillIssue(
                            skill_dir,
                            "Skill directory symlink escapes base directory",
                            SkillErrorType.SECURITY_ERROR,
                        )
                    )
                    continue
            except OSError:
                continue

            skill_md = skill_dir / SKILL_FILE_NAME
            if not skill_md.is_file():
                self._debug("No SKILL.md found, skipping", {"dir": str(skill_dir)})
                continue

            loaded = self.load_skill(skill_md, source)
            if isinstance(loaded, SkillIssue):
                logger.warning(f"Failed to load skill from {skill_md}: {loaded.message}")
                result.errors.append(loaded)
                continue

            if self._apply_state(loaded):
                result.skills.append(loaded)

        return result

    def load_skill(self, skill_md: Path, source: SkillSource) -> DiscoveredSkill | SkillIssue:
        """Load a single skill from its SKILL.md path.

        Args:
            skill_md: Path to SKILL.md
            source: Source tier of the containing directory

        Returns:
            DiscoveredSkill on success, SkillIssue describing the failure otherwise
        """
        skill_md = skill_md.absolute()
        try:
            content = skill_md.read_text(encoding="utf-8")
            parsed = parse_skill_md(content, skill_md.parent.name)
        except UnicodeDecodeError:
            error = SkillParseError("SKILL.md must be UTF-8 encoded")
            return SkillIssue(skill_md, str(error), error.error_type)
        except SkillError as e:
            return SkillIssue(skill_md, str(e), e.error_type)
        except OSError as e:
            message = str(e) or "Failed to read SKILL.md"
            return SkillIssue(skill_md, message, SkillErrorType.IO_ERROR)

        self._debug("Loaded skill", {"name": parsed.manifest.name, "path": str(skill_md)})
        return DiscoveredSkill(
            manifest=parsed.manifest,
            body=parsed.body,
            path=skill_md,
            directory=skill_md.parent,
            source=source,
        )

    def _apply_state(self, skill: DiscoveredSkill) -> bool:
        """Set disabled/unavailable flags; return False if the skill is filtered out."""
        plugin = self._find_plugin(skill.name) if skill.source == SkillSource.PLUGIN else None
        skill.disabled = resolve_disabled(
            skill.name,
            skill.source,
            self.options.disabled_bundled,
            self.options.enabled_bundled,
            plugin.enabled if plugin is not None else None,
        )
        if skill.disabled and not self.options.include_disabled:
            self._debug(
                "Skipping disabled skill", {"name": skill.name, "source": skill.source.value}
            )
            return False

        check = self.dependency_checker(skill.manifest)
        if not check.available:
            skill.unavailable = True
            skill.unavailable_reason = check.reason
            if not self.options.include_unavailable:
                self._debug(
                    "Skipping unavailable skill", {"name": skill.name, "reason": check.reason}
                )
                return False

        return True

    def _find_plugin(self, name: str) -> "PluginSkillSource | None":
        return next((p for p in self.options.plugins if p.resolved_name() == name), None)

    def _missing_plugin_issues(self, result: SkillDiscoveryResult) -> list[SkillIssue]:
        """Report enabled install records with no plugin directory on disk."""
        plugins_dir = dict(self.options.source_dirs())[SkillSource.PLUGIN]
        issues = []
        for plugin in self.options.plugins:
            if not plugin.enabled:
                continue
            name = plugin.resolved_name()
            if os.path.isdir(plugins_dir / name):
                continue
            logger.warning(
                f"Plugin skill '{name}' not found at {plugins_dir / name}. "
                f"Run: agent-skills skill install {plugin.url}"
            )
            error = SkillNotFoundError(f"Plugin skill '{name}' is configured but not installed")
            issues.append(SkillIssue(plugins_dir / name, str(error), error.error_type))
        return issues


def discover_skills(
    options: SkillLoaderOptions | None = None,
    dependency_checker: DependencyChecker | None = None,
    on_debug: DebugCallback | None = None,
) -> SkillDiscoveryResult:
    """Run one discovery pass with the given options."""
    return SkillLoader(options, dependency_checker, on_debug).discover()

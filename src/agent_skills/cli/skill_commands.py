"""CLI commands for managing skills.

Settings are read fresh for every command. Install records are updated here,
after the installer has changed the plugins directory, so the installer
itself never touches the settings file.
"""

import logging
from typing import NoReturn

import typer

from agent_skills.cli.constants import ExitCodes, StatusIcons
from agent_skills.cli.utils import get_console, load_effective_settings, resolve_plugins_dir
from agent_skills.config import (
    AgentSettings,
    ConfigurationError,
    PluginSkillSource,
    save_config,
)
from agent_skills.skills import installer
from agent_skills.skills.context_provider import SkillContextProvider
from agent_skills.skills.loader import SkillLoader, SkillLoaderOptions
from agent_skills.skills.models import DiscoveredSkill, SkillSource
from agent_skills.skills.prompt import estimate_skill_tokens, visible_skills
from agent_skills.utils.tokens import count_tokens, format_token_count

console = get_console()
logger = logging.getLogger(__name__)


def _fail(message: str) -> NoReturn:
    console.print(f"[red]{message}[/red]")
    raise typer.Exit(ExitCodes.GENERAL_ERROR)


def _load_settings() -> tuple[AgentSettings, AgentSettings]:
    try:
        return load_effective_settings()
    except ConfigurationError as e:
        _fail(f"Error loading configuration: {e}")


def _save_settings(settings: AgentSettings) -> None:
    try:
        save_config(settings)
    except ConfigurationError as e:
        _fail(f"Error saving configuration: {e}")


def _status_icon(skill: DiscoveredSkill) -> str:
    if skill.unavailable:
        return StatusIcons.UNAVAILABLE
    return StatusIcons.DISABLED if skill.disabled else StatusIcons.ENABLED


def _bundled_skill_names(settings: AgentSettings) -> list[str]:
    options = SkillLoaderOptions.from_config(settings.skills)
    bundled_dir = options.source_dirs()[0][1]
    if not bundled_dir.is_dir():
        return []
    scanned = SkillLoader(options).scan_directory(bundled_dir, SkillSource.BUNDLED)
    return [skill.name for skill in scanned.skills]


def show_skills(show_all: bool = False) -> None:
    """Show discovered skills grouped by source, with issues and context cost.

    Args:
        show_all: Also list disabled and unavailable skills
    """
    console.print()
    _, settings = _load_settings()

    options = SkillLoaderOptions.from_config(settings.skills)
    if show_all:
        options.include_disabled = True
        options.include_unavailable = True

    result = SkillLoader(options).discover()
    grouped = result.by_source()

    if not grouped:
        console.print("[yellow]No skills found[/yellow]")

    for source, skills in grouped.items():
        console.print(f"[bold]{source.value.capitalize()}:[/bold]")
        for skill in skills:
            body_tokens = count_tokens(skill.body)
            line = (
                f"  {_status_icon(skill)} {skill.name} [dim]({skill.directory})[/dim]"
                f" · [dim]{format_token_count(body_tokens)} tokens[/dim]"
            )
            if skill.disabled:
                line += " [dim]disabled[/dim]"
            if skill.unavailable:
                line += f" [yellow]unavailable: {skill.unavailable_reason}[/yellow]"
            console.print(line)
        console.print()

    if result.errors:
        console.print(f"[bold]Issues ({len(result.errors)}):[/bold]")
        for issue in result.errors:
            console.print(f"  [red]{issue.type.value}[/red] {issue.path}: {issue.message}")
        console.print()

    provider = SkillContextProvider(
        result.skills, max_tier1_tokens=settings.skills.max_tier1_tokens
    )
    tier1 = provider.get_tier1_context()
    estimated = estimate_skill_tokens(visible_skills(result.skills))
    console.print(
        f"[dim]Skills metadata: ~{format_token_count(estimated)} tokens estimated, "
        f"{format_token_count(count_tokens(tier1))} measured "
        f"(budget {format_token_count(settings.skills.max_tier1_tokens)})[/dim]\n"
    )


def install_plugin(url: str, ref: str | None = None, name: str | None = None) -> None:
    """Install a plugin skill from a git repository and record it in settings.

    Args:
        url: HTTPS git repository URL
        ref: Branch, tag or commit to check out
        name: Provisional directory name (default: repository name)
    """
    console.print(f"\n[bold]Installing skill from:[/bold] {url}\n")
    file_settings, settings = _load_settings()

    result = installer.install_skill(
        url,
        ref=ref,
        name=name,
        base_dir=resolve_plugins_dir(settings),
        timeout=settings.skills.git_timeout,
    )
    if not result.success:
        _fail(f"Error installing skill: {result.error}")

    console.print(f"{StatusIcons.SUCCESS} Installed skill: {result.skill_name}")
    console.print(f"[dim]Location: {result.path}[/dim]\n")

    # Replace any stale record for the same skill
    file_settings.skills.plugins = [
        p for p in file_settings.skills.plugins if p.resolved_name() != result.skill_name
    ]
    file_settings.skills.plugins.append(
        PluginSkillSource(url=url, ref=ref, name=result.skill_name, enabled=True)
    )
    _save_settings(file_settings)
    console.print(f"{StatusIcons.SUCCESS} Configuration updated\n")


def update_plugin(name: str) -> None:
    """Update an installed plugin skill with a fast-forward pull."""
    console.print(f"\n[bold]Updating skill:[/bold] {name}\n")
    _, settings = _load_settings()

    result = installer.update_skill(
        name, base_dir=resolve_plugins_dir(settings), timeout=settings.skills.git_timeout
    )
    if not result.success:
        _fail(f"Error updating skill: {result.error}")

    if result.message:
        console.print(f"[yellow]{result.message}[/yellow]\n")
    elif result.updated:
        console.print(f"{StatusIcons.SUCCESS} Updated skill: {name}\n")
    else:
        console.print(f"Skill '{name}' is already up to date\n")


def remove_plugin(name: str) -> None:
    """Remove an installed plugin skill and its install record."""
    console.print(f"\n[bold]Removing skill:[/bold] {name}\n")
    file_settings, settings = _load_settings()

    removed = installer.remove_skill(name, base_dir=resolve_plugins_dir(settings))
    record = file_settings.skills.find_plugin(name)

    if not removed and record is None:
        console.print("[dim]Run 'agent-skills skill list-installed' to see installed plugins[/dim]")
        _fail(f"Error: Plugin skill '{name}' not found")

    if removed:
        console.print(f"{StatusIcons.SUCCESS} Deleted skill files")

    if record is not None:
        file_settings.skills.plugins = [
            p for p in file_settings.skills.plugins if p.resolved_name() != name
        ]
        _save_settings(file_settings)
        console.print(f"{StatusIcons.SUCCESS} Removed '{name}' from configuration")
    console.print()


def _set_enabled(name: str, enabled: bool) -> None:
    action = "Enabled" if enabled else "Disabled"
    file_settings, settings = _load_settings()
    skills_config = file_settings.skills

    plugin = skills_config.find_plugin(name)
    if plugin is not None:
        if plugin.enabled == enabled:
            console.print(f"[yellow]Skill '{name}' is already {action.lower()}[/yellow]\n")
            return
        plugin.enabled = enabled
        _save_settings(file_settings)
        console.print(f"{StatusIcons.SUCCESS} {action} plugin skill: {name}\n")
        return

    if name not in _bundled_skill_names(settings):
        _fail(f"Skill '{name}' is not a bundled skill or a configured plugin")

    if enabled:
        skills_config.disabled_bundled = [s for s in skills_config.disabled_bundled if s != name]
    else:
        skills_config.enabled_bundled = [s for s in skills_config.enabled_bundled if s != name]
        if name not in skills_config.disabled_bundled:
            skills_config.disabled_bundled.append(name)

    _save_settings(file_settings)
    console.print(f"{StatusIcons.SUCCESS} {action} bundled skill: {name}\n")


def enable_skill(name: str) -> None:
    """Enable a bundled skill or plugin.

    For bundled skills: removes it from disabled_bundled
    For plugin skills: sets enabled=true on its install record
    """
    _set_enabled(name, True)


def disable_skill(name: str) -> None:
    """Disable a bundled skill or plugin.

    For bundled skills: adds it to disabled_bundled (and drops it from enabled_bundled)
    For plugin skills: sets enabled=false on its install record
    """
    _set_enabled(name, False)


def list_installed() -> None:
    """Print plugins present on disk (directories with .git and SKILL.md)."""
    _, settings = _load_settings()
    names = installer.list_installed_plugins(resolve_plugins_dir(settings))

    if not names:
        console.print("[yellow]No plugin skills installed[/yellow]")
        return

    for name in names:
        console.print(name)

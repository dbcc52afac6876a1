"""CLI entry point for agent-skills."""

import logging

import typer
from dotenv import load_dotenv

from agent_skills import __version__
from agent_skills.cli.constants import ExitCodes
from agent_skills.cli.utils import get_console, setup_logging

app = typer.Typer(help="Agent Skills - discover, inspect and install skill packages")

console = get_console()

logger = logging.getLogger(__name__)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
    version_flag: bool = typer.Option(False, "--version", help="Show version"),
) -> None:
    """Agent Skills - manage skill packages for LLM agents.

    \b
    Examples:
        agent-skills skill show                                   # Discovered skills
        agent-skills skill show --all                             # Include disabled/unavailable
        agent-skills skill install https://github.com/user/my-skill --ref v1.0.0
        agent-skills skill update my-skill
        agent-skills skill disable hello-world
    """
    load_dotenv()
    setup_logging(verbose)

    if version_flag:
        console.print(f"agent-skills version {__version__}")
        raise typer.Exit(ExitCodes.SUCCESS)

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


# Skill command group
skill_app = typer.Typer(help="Manage skills (bundled, user, project and plugins)")
app.add_typer(skill_app, name="skill")


@skill_app.callback(invoke_without_command=True)
def skill_callback(ctx: typer.Context) -> None:
    """Skill command callback - shows help if no subcommand given."""
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@skill_app.command("show")
def skill_show_command(
    show_all: bool = typer.Option(
        False, "--all", help="Include disabled and unavailable skills"
    ),
) -> None:
    """Show discovered skills with status, issues and context cost."""
    from agent_skills.cli.skill_commands import show_skills

    show_skills(show_all=show_all)


@skill_app.command("install")
def skill_install_command(
    url: str = typer.Argument(..., help="HTTPS git repository URL"),
    ref: str = typer.Option(None, "--ref", help="Branch, tag or commit to check out"),
    name: str = typer.Option(None, "--name", help="Directory name to clone into"),
) -> None:
    """Install a plugin skill from a git repository.

    The skill ends up in a directory named after the name declared in its SKILL.md.

    Examples:
        agent-skills skill install https://github.com/user/my-skill.git
        agent-skills skill install https://github.com/user/my-skill.git --ref develop
    """
    from agent_skills.cli.skill_commands import install_plugin

    install_plugin(url, ref=ref, name=name)


@skill_app.command("update")
def skill_update_command(
    name: str = typer.Argument(..., help="Installed plugin skill name"),
) -> None:
    """Update a plugin skill (fast-forward only; pinned refs are left alone)."""
    from agent_skills.cli.skill_commands import update_plugin

    update_plugin(name)


@skill_app.command("remove")
def skill_remove_command(
    name: str = typer.Argument(..., help="Installed plugin skill name"),
) -> None:
    """Remove a plugin skill and its configuration record."""
    from agent_skills.cli.skill_commands import remove_plugin

    remove_plugin(name)


@skill_app.command("enable")
def skill_enable_command(name: str = typer.Argument(..., help="Skill name")) -> None:
    """Enable a bundled or plugin skill."""
    from agent_skills.cli.skill_commands import enable_skill

    enable_skill(name)


@skill_app.command("disable")
def skill_disable_command(name: str = typer.Argument(..., help="Skill name")) -> None:
    """Disable a bundled or plugin skill."""
    from agent_skills.cli.skill_commands import disable_skill

    disable_skill(name)


@skill_app.command("list-installed")
def skill_list_installed_command() -> None:
    """List plugin skills present in the plugins directory."""
    from agent_skills.cli.skill_commands import list_installed

    list_installed()


if __name__ == "__main__":
    app()

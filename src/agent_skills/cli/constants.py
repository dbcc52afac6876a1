"""Constants for CLI module."""


class ExitCodes:
    """Standard exit codes."""

    SUCCESS = 0
    GENERAL_ERROR = 1


class StatusIcons:
    """Rich markup for skill state markers."""

    ENABLED = "[green]◉[/green]"
    DISABLED = "[dim]○[/dim]"
    UNAVAILABLE = "[yellow]![/yellow]"
    SUCCESS = "[green]✓[/green]"

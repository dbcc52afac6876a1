"""Utility functions for CLI module."""

import logging
import os
import platform
import sys
from pathlib import Path

from rich.console import Console

from agent_skills.config import AgentSettings, load_config, merge_with_env
from agent_skills.skills.installer import get_plugins_dir
from agent_skills.skills.loader import SkillLoaderOptions

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_console() -> Console:
    """Create Rich console with proper encoding for Windows.

    On Windows in non-interactive mode (subprocess, pipe, etc.), the default
    encoding is often CP1252 which cannot handle the status icons. Force
    UTF-8 in that case.
    """
    if platform.system() == "Windows" and not sys.stdout.isatty():
        try:
            import locale

            encoding = locale.getpreferredencoding() or ""
            if "utf" not in encoding.lower():
                os.environ["PYTHONIOENCODING"] = "utf-8"
                return Console(force_terminal=True, legacy_windows=False)
            return Console()
        except Exception:
            return Console(legacy_windows=True, safe_box=True)
    return Console()


def setup_logging(verbose: bool = False) -> None:
    """Configure root logging once for the CLI process (stderr)."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )


def load_effective_settings() -> tuple[AgentSettings, AgentSettings]:
    """Load settings from disk and with environment overrides applied.

    Returns:
        (file_settings, effective_settings). Mutations must be made on
        file_settings so environment overrides are never persisted.
    """
    file_settings = load_config()
    return file_settings, merge_with_env(file_settings)


def resolve_plugins_dir(settings: AgentSettings) -> Path:
    """Plugins directory for the given (effective) settings."""
    return SkillLoaderOptions.from_config(settings.skills).plugins_dir or get_plugins_dir()

"""Read and write the skills settings file (~/.agent/settings.json).

The file holds install records for plugin skills, bundled enable/disable
overrides and optional directory settings. Directory settings can in turn
be overridden per process through environment variables; those overrides
are applied on a copy and never written back.
"""

import json
import os
from pathlib import Path

from pydantic import ValidationError

from .constants import (
    CONFIG_FILE_NAME,
    DATA_DIR_NAME,
    ENV_PLUGINS_DIR,
    ENV_PROJECT_DIR,
    ENV_USER_DIR,
)
from .schema import AgentSettings

# Environment variable -> SkillsConfig field
ENV_DIR_OVERRIDES = {
    ENV_PLUGINS_DIR: "plugins_dir",
    ENV_USER_DIR: "user_dir",
    ENV_PROJECT_DIR: "project_dir",
}


class ConfigurationError(Exception):
    """Settings file could not be read, validated or written."""


def get_config_path() -> Path:
    return Path.home() / DATA_DIR_NAME / CONFIG_FILE_NAME


def load_config(config_path: Path | None = None) -> AgentSettings:
    """Load settings, falling back to defaults when no file exists yet.

    Args:
        config_path: Settings file (default: ~/.agent/settings.json)

    Returns:
        Validated AgentSettings

    Raises:
        ConfigurationError: If the file is not JSON, fails validation or
            cannot be read

    Example:
        >>> load_config().skills.max_tier1_tokens
        1000
    """
    path = config_path or get_config_path()
    if not path.exists():
        return AgentSettings()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return AgentSettings.model_validate(data)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in configuration file {path}: {e}") from e
    except ValidationError as e:
        raise ConfigurationError(f"Configuration validation failed for {path}:\n{e}") from e
    except OSError as e:
        raise ConfigurationError(f"Could not read configuration file {path}: {e}") from e


def save_config(settings: AgentSettings, config_path: Path | None = None) -> None:
    """Write settings as JSON, readable by the owner only on POSIX.

    Raises:
        ConfigurationError: If the file cannot be written
    """
    path = config_path or get_config_path()
    posix = os.name != "nt"

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        previous_umask = os.umask(0o077) if posix else None
        try:
            path.write_text(settings.model_dump_json_minimal(), encoding="utf-8")
            if posix:
                os.chmod(path, 0o600)
        finally:
            if previous_umask is not None:
                os.umask(previous_umask)
    except OSError as e:
        raise ConfigurationError(f"Could not write configuration file {path}: {e}") from e


def merge_with_env(settings: AgentSettings) -> AgentSettings:
    """Return settings with directory overrides from the environment applied.

    The input is left untouched so callers can still save the file settings.

    Example:
        >>> # AGENT_SKILLS_PLUGINS_DIR=/opt/plugins
        >>> merge_with_env(load_config()).skills.plugins_dir
        '/opt/plugins'
    """
    overrides = {
        field: os.environ[var] for var, field in ENV_DIR_OVERRIDES.items() if os.getenv(var)
    }
    if not overrides:
        return settings

    skills = settings.skills.model_copy(update=overrides)
    return settings.model_copy(update={"skills": skills})

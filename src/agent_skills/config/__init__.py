"""Configuration package for agent-skills."""

from .manager import (
    ConfigurationError,
    get_config_path,
    load_config,
    merge_with_env,
    save_config,
)
from .schema import AgentSettings, PluginSkillSource, SkillsConfig

__all__ = [
    # Schema
    "AgentSettings",
    "PluginSkillSource",
    "SkillsConfig",
    # Manager
    "ConfigurationError",
    "get_config_path",
    "load_config",
    "save_config",
    "merge_with_env",
]

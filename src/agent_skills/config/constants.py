"""Configuration constants for agent-skills.

This module provides a single source of truth for default configuration values.
Separated from schema.py and manager.py to avoid circular imports.
Home-relative defaults are resolved at call time by the modules using them.
"""

from pathlib import Path

# Layout of the per-user data directory (relative to the home directory)
DATA_DIR_NAME = ".agent"
CONFIG_FILE_NAME = "settings.json"
USER_SKILLS_DIR_NAME = "skills"
PLUGINS_DIR_NAME = "plugins"

# Sibling skills directory sharing the same <root>/<name>/SKILL.md convention
COMPAT_SKILLS_RELATIVE_DIR = Path(".claude") / "skills"

# Project skills live under the working directory
PROJECT_SKILLS_RELATIVE_DIR = Path(DATA_DIR_NAME) / USER_SKILLS_DIR_NAME

# Skill package layout
SKILL_FILE_NAME = "SKILL.md"
GIT_DIR_NAME = ".git"
RESOURCE_CATEGORIES = ("scripts", "references", "assets")

# Progressive disclosure budgets
DEFAULT_MAX_TIER1_TOKENS = 1000
TOKENS_PER_SKILL = 100

# Git network operations (clone, fetch, pull), in seconds
DEFAULT_GIT_TIMEOUT = 60

# Environment variable overrides
ENV_PLUGINS_DIR = "AGENT_SKILLS_PLUGINS_DIR"
ENV_USER_DIR = "AGENT_SKILLS_USER_DIR"
ENV_PROJECT_DIR = "AGENT_SKILLS_PROJECT_DIR"

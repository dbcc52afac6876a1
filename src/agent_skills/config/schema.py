"""Pydantic models for agent-skills configuration."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from agent_skills.config.constants import DEFAULT_GIT_TIMEOUT, DEFAULT_MAX_TIER1_TOKENS
from agent_skills.skills.security import extract_repo_name, is_valid_git_url, is_valid_ref


class PluginSkillSource(BaseModel):
    """Install record for a git-based plugin skill.

    The plugins directory on disk is the source of truth for what is
    installed; this record only carries source and enable state.
    """

    url: str = Field(description="HTTPS git repository URL")
    ref: str | None = Field(default=None, description="Branch, tag or commit to check out")
    name: str | None = Field(
        default=None, description="Skill name (derived from the URL when omitted)"
    )
    enabled: bool = Field(default=True, description="Enable/disable this plugin skill")
    installed_at: datetime = Field(default_factory=datetime.now)

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Only HTTPS remotes are accepted."""
        if not is_valid_git_url(v):
            raise ValueError(f"Invalid git URL '{v}': only HTTPS URLs are supported")
        return v

    @field_validator("ref")
    @classmethod
    def validate_ref(cls, v: str | None) -> str | None:
        if v is not None and not is_valid_ref(v):
            raise ValueError(f"Invalid git ref '{v}'")
        return v

    def resolved_name(self) -> str:
        """Skill name for this record, falling back to the repository name."""
        return self.name or extract_repo_name(self.url)


class SkillsConfig(BaseModel):
    """Skills system configuration."""

    # Plugin skills (git-based, user-installed)
    plugins: list[PluginSkillSource] = Field(
        default_factory=list,
        description="Git-based plugin skills with source configuration",
    )

    # Bundled skills control (explicit enable wins over disable)
    disabled_bundled: list[str] = Field(
        default_factory=list,
        description="Bundled skills explicitly disabled by user.",
    )
    enabled_bundled: list[str] = Field(
        default_factory=list,
        description="Bundled skills explicitly enabled by user (overrides disabled_bundled).",
    )

    # Directory configuration (None = built-in default)
    bundled_dir: str | None = Field(default=None, description="Directory for bundled skills")
    user_dir: str | None = Field(default=None, description="Directory for user skills")
    compat_dir: str | None = Field(
        default=None, description="Directory for compatible third-party skills"
    )
    project_dir: str | None = Field(default=None, description="Directory for project skills")
    plugins_dir: str | None = Field(
        default=None, description="Directory for git-installed plugin skills"
    )

    # Disclosure and git behaviour
    max_tier1_tokens: int = Field(
        default=DEFAULT_MAX_TIER1_TOKENS,
        gt=0,
        description="Token budget for the skills metadata digest",
    )
    git_timeout: int = Field(
        default=DEFAULT_GIT_TIMEOUT,
        gt=0,
        description="Timeout in seconds for git clone/fetch/pull",
    )

    # Management views keep filtered skills visible with flags set
    include_disabled: bool = False
    include_unavailable: bool = False

    @model_validator(mode="after")
    def expand_paths(self) -> "SkillsConfig":
        """Expand user home directory in paths after validation."""
        for attr in ("bundled_dir", "user_dir", "compat_dir", "project_dir", "plugins_dir"):
            value = getattr(self, attr)
            if value and "~" in value:
                setattr(self, attr, str(Path(value).expanduser().resolve()))
        return self

    def find_plugin(self, name: str) -> PluginSkillSource | None:
        """Find a plugin record by its resolved skill name."""
        return next((p for p in self.plugins if p.resolved_name() == name), None)


class AgentSettings(BaseModel):
    """Root configuration model for agent-skills settings."""

    version: str = "1.0"
    skills: SkillsConfig = Field(default_factory=SkillsConfig)

    def model_dump_json_minimal(self) -> str:
        """Dump model to JSON without null values."""
        data = self.model_dump(mode="json", exclude_none=True)
        return json.dumps(data, indent=2)

    @classmethod
    def get_json_schema(cls) -> dict[str, Any]:
        """Get JSON schema for the settings model."""
        return cls.model_json_schema()

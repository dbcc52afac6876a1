"""CLI module for agent-skills."""

from agent_skills.cli.app import app

__all__ = ["app"]

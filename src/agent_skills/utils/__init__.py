"""Utility modules for agent-skills."""

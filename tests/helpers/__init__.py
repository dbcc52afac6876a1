"""Test helpers and utilities.

This module provides shared utilities for testing:
- builders: Test data builders for skill packages and discovered skills
"""

from tests.helpers.builders import build_discovered_skill, build_skill_md, write_skill

__all__ = [
    "build_skill_md",
    "build_discovered_skill",
    "write_skill",
]

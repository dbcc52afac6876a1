"""Skill-related test fixtures."""

from pathlib import Path

import pytest

from agent_skills.skills.dependencies import DependencyCheckResult
from agent_skills.skills.loader import SkillLoaderOptions


@pytest.fixture
def skill_roots(tmp_path) -> dict[str, Path]:
    """Create one empty directory per skill source."""
    roots = {
        name: tmp_path / name for name in ("bundled", "user", "compat", "project", "plugins")
    }
    for root in roots.values():
        root.mkdir()
    return roots


@pytest.fixture
def loader_options(skill_roots) -> SkillLoaderOptions:
    """Loader options pointing every source at the temporary roots."""
    return SkillLoaderOptions(
        bundled_dir=skill_roots["bundled"],
        user_dir=skill_roots["user"],
        compat_dir=skill_roots["compat"],
        project_dir=skill_roots["project"],
        plugins_dir=skill_roots["plugins"],
    )


@pytest.fixture
def always_available():
    """Dependency checker that accepts every skill."""
    return lambda manifest: DependencyCheckResult(available=True)

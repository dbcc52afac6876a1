"""Unit tests for skill dependency checks."""

from unittest.mock import patch

import pytest

from agent_skills.skills.dependencies import (
    check_command_available,
    check_manifest_dependencies,
    check_skill_dependencies,
    find_missing_commands,
    parse_requires,
)
from agent_skills.skills.manifest import SkillManifest


def _which(available: set[str]):
    return lambda command: f"/usr/bin/{command}" if command in available else None


@pytest.mark.unit
@pytest.mark.skills
class TestDependencies:
    """Test command availability checks."""

    def test_parse_requires(self):
        """Should split on any whitespace and ignore empty input."""
        assert parse_requires("gh  git\tjq") == ["gh", "git", "jq"]
        assert parse_requires("   ") == []
        assert parse_requires(None) == []

    @patch("agent_skills.skills.dependencies.shutil.which")
    def test_check_command_available(self, mock_which):
        """Should use shutil.which."""
        mock_which.side_effect = _which({"git"})

        assert check_command_available("git")
        assert not check_command_available("nope")

    @patch("agent_skills.skills.dependencies.shutil.which")
    def test_find_missing_commands_keeps_order(self, mock_which):
        """Should list missing commands in input order."""
        mock_which.side_effect = _which({"git"})

        assert find_missing_commands(["zz", "git", "aa"]) == ["zz", "aa"]

    @patch("agent_skills.skills.dependencies.shutil.which")
    def test_all_available(self, mock_which):
        """Should report available when every command exists."""
        mock_which.side_effect = _which({"gh", "git"})

        result = check_skill_dependencies("gh git")

        assert result.available
        assert result.missing_commands == []
        assert result.reason is None

    @patch("agent_skills.skills.dependencies.shutil.which")
    def test_missing_commands_reason(self, mock_which):
        """Should explain which commands are missing."""
        mock_which.side_effect = _which({"git"})

        result = check_skill_dependencies("gh git jq")

        assert not result.available
        assert result.missing_commands == ["gh", "jq"]
        assert result.reason == "missing commands: gh, jq"

    def test_no_requirements(self):
        """Should treat a skill without requirements as available."""
        assert check_skill_dependencies(None).available
        assert check_skill_dependencies("").available

    @patch("agent_skills.skills.dependencies.shutil.which", return_value=None)
    def test_manifest_dependencies_from_metadata(self, mock_which):
        """Should read the requires key from manifest metadata."""
        manifest = SkillManifest(
            name="x", description="d", metadata={"requires": "definitely-missing"}
        )

        result = check_manifest_dependencies(manifest)

        assert not result.available
        assert result.missing_commands == ["definitely-missing"]

    def test_manifest_without_metadata(self):
        """Should treat missing metadata as no requirements."""
        assert check_manifest_dependencies(SkillManifest(name="x", description="d")).available

"""Unit tests for skill prompt generation."""

import pytest

from agent_skills.skills.models import SkillSource
from agent_skills.skills.prompt import (
    escape_xml,
    estimate_skill_tokens,
    format_skills_summary,
    generate_available_skills_xml,
)
from tests.helpers.builders import build_discovered_skill


@pytest.mark.unit
@pytest.mark.skills
class TestAvailableSkillsXml:
    """Test the <available_skills> block."""

    def test_empty(self):
        """Should render nothing for no skills."""
        assert generate_available_skills_xml([]) == ""

    def test_single_skill(self, tmp_path):
        """Should render name, description and location."""
        skill = build_discovered_skill("hello", "Say hello", directory=tmp_path / "hello")

        xml = generate_available_skills_xml([skill])

        assert xml == (
            "<available_skills>\n"
            "<skill>\n"
            "<name>hello</name>\n"
            "<description>Say hello</description>\n"
            f"<location>{tmp_path / 'hello' / 'SKILL.md'}</location>\n"
            "</skill>\n"
            "</available_skills>"
        )

    def test_preserves_order(self):
        """Should list skills in the given order."""
        skills = [build_discovered_skill("b"), build_discovered_skill("a")]

        xml = generate_available_skills_xml(skills)

        assert xml.index("<name>b</name>") < xml.index("<name>a</name>")

    def test_escapes_description(self):
        """Should escape characters that would break the XML."""
        skill = build_discovered_skill("x", 'Use <tags> & "quotes" or \'apostrophes\'')

        xml = generate_available_skills_xml([skill])

        assert (
            "<description>Use &lt;tags&gt; &amp; &quot;quotes&quot; or &apos;apostrophes&apos;"
            "</description>" in xml
        )
        assert "<tags>" not in xml

    def test_skips_disabled_and_unavailable(self):
        """Should hide skills the model must not use."""
        skills = [
            build_discovered_skill("on"),
            build_discovered_skill("off", disabled=True),
            build_discovered_skill("broken", unavailable=True, unavailable_reason="missing"),
        ]

        xml = generate_available_skills_xml(skills)

        assert "<name>on</name>" in xml
        assert "off" not in xml
        assert "broken" not in xml

    def test_only_hidden_skills(self):
        """Should render nothing when every skill is hidden."""
        assert generate_available_skills_xml([build_discovered_skill(disabled=True)]) == ""


@pytest.mark.unit
@pytest.mark.skills
class TestPromptHelpers:
    """Test token estimation and summaries."""

    def test_escape_xml(self):
        """Should escape all five XML special characters."""
        assert escape_xml("<a & 'b' \"c\">") == "&lt;a &amp; &apos;b&apos; &quot;c&quot;&gt;"

    def test_estimate_tokens(self):
        """Should budget 100 tokens per skill."""
        assert estimate_skill_tokens([]) == 0
        assert estimate_skill_tokens([build_discovered_skill()] * 3) == 300

    def test_summary_empty(self):
        """Should say when there is nothing to list."""
        assert format_skills_summary([]) == "No skills available"

    def test_summary_truncates(self):
        """Should truncate long descriptions to 60 chars."""
        skills = [
            build_discovered_skill("short", "Brief", source=SkillSource.BUNDLED),
            build_discovered_skill("long", "x" * 80, source=SkillSource.PLUGIN),
        ]

        summary = format_skills_summary(skills)

        assert summary.splitlines()[0] == "Available skills (2):"
        assert "  - short (bundled): Brief" in summary
        assert f"  - long (plugin): {'x' * 57}..." in summary

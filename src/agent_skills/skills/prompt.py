"""Skill prompt generation for system prompt injection.

Generates the ``<available_skills>`` XML block that tells the model which
skills exist (tier 1 of progressive disclosure) and estimates its cost.
"""

from xml.sax.saxutils import escape

from agent_skills.config.constants import TOKENS_PER_SKILL
from agent_skills.skills.models import DiscoveredSkill

# Truncate to 60 chars total: 57 chars + "..."
SUMMARY_DESCRIPTION_MAX_LENGTH = 60

_XML_QUOTE_ENTITIES = {'"': "&quot;", "'": "&apos;"}


def escape_xml(text: str) -> str:
    """Escape XML special characters so content cannot break the listing.

    Examples:
        >>> escape_xml('<b> & "x"')
        '&lt;b&gt; &amp; &quot;x&quot;'
    """
    return escape(text, _XML_QUOTE_ENTITIES)


def _skill_xml(skill: DiscoveredSkill) -> str:
    return (
        "<skill>\n"
        f"<name>{escape_xml(skill.manifest.name)}</name>\n"
        f"<description>{escape_xml(skill.manifest.description)}</description>\n"
        f"<location>{escape_xml(str(skill.path))}</location>\n"
        "</skill>"
    )


def visible_skills(skills: list[DiscoveredSkill]) -> list[DiscoveredSkill]:
    """Skills the model may be told about (not disabled, not unavailable)."""
    return [skill for skill in skills if not skill.disabled and not skill.unavailable]


def generate_available_skills_xml(skills: list[DiscoveredSkill]) -> str:
    """Generate the complete ``<available_skills>`` XML block.

    Disabled and unavailable skills are left out so the model never tries
    a skill that will fail or was switched off.

    Args:
        skills: Discovered skills

    Returns:
        XML string for the system prompt, or "" if no skill is visible

    Example output:
        <available_skills>
        <skill>
        <name>hello-world</name>
        <description>A simple greeting skill for testing</description>
        <location>/path/to/hello-world/SKILL.md</location>
        </skill>
        </available_skills>
    """
    shown = visible_skills(skills)
    if not shown:
        return ""

    elements = "\n".join(_skill_xml(skill) for skill in shown)
    return f"<available_skills>\n{elements}\n</available_skills>"


def estimate_skill_tokens(skills: list[DiscoveredSkill]) -> int:
    """Estimate token count for skills metadata.

    Each entry is budgeted at roughly 100 tokens: XML structure, name,
    description and location path.
    """
    return len(skills) * TOKENS_PER_SKILL


def format_skills_summary(skills: list[DiscoveredSkill]) -> str:
    """Format skills for debug/display output."""
    if not skills:
        return "No skills available"

    lines = []
    for skill in skills:
        description = skill.manifest.description
        if len(description) > SUMMARY_DESCRIPTION_MAX_LENGTH:
            description = f"{description[: SUMMARY_DESCRIPTION_MAX_LENGTH - 3]}..."
        lines.append(f"  - {skill.name} ({skill.source.value}): {description}")

    return f"Available skills ({len(skills)}):\n" + "\n".join(lines)

"""Rendering of the managed <skills> block."""

from __future__ import annotations

from typing import Sequence

from skills_to_agents.core.errors import InvalidInputError
from skills_to_agents.skills.parser import SkillRecord

OPEN_TAG = "<skills>"
CLOSE_TAG = "</skills>"


def format_skill_line(skill: SkillRecord) -> str:
    """Format one skill as a Markdown bullet. No escaping is applied."""
    return f"- [{skill.name}]({skill.link}) - {skill.description}"


def build_skills_block(skills: Sequence[SkillRecord], preamble: str = "") -> str:
    """Render skills into a delimited block, in the order given.

    Args:
        skills: Skill records to list
        preamble: Optional text placed between the opening tag and the list

    Returns:
        Block text ending with a newline

    Raises:
        InvalidInputError: If the preamble contains a delimiter line, which
            would make the block impossible to locate again.
    """
    preamble = preamble or ""
    for line in preamble.split("\n"):
        if line.rstrip("\r") in (OPEN_TAG, CLOSE_TAG):
            raise InvalidInputError(f"Preamble must not contain a '{line.strip()}' line")

    lines = [OPEN_TAG, ""]
    if preamble:
        lines.extend([preamble, ""])
    lines.extend(format_skill_line(skill) for skill in skills)
    lines.append(CLOSE_TAG)
    return "\n".join(lines) + "\n"

"""Skills pipeline - discovery, SKILL.md parsing, block rendering and merging."""

from skills_to_agents.skills.discovery import SkillCandidate, find_skills
from skills_to_agents.skills.parser import (
    DESCRIPTOR_FILENAME,
    SkillRecord,
    extract_front_matter,
    parse_front_matter,
    read_skill,
    read_skills,
)
from skills_to_agents.skills.renderer import CLOSE_TAG, OPEN_TAG, build_skills_block
from skills_to_agents.skills.merger import find_managed_region, merge_skills_block

__all__ = [
    "SkillCandidate",
    "SkillRecord",
    "DESCRIPTOR_FILENAME",
    "OPEN_TAG",
    "CLOSE_TAG",
    "find_skills",
    "extract_front_matter",
    "parse_front_matter",
    "read_skill",
    "read_skills",
    "build_skills_block",
    "find_managed_region",
    "merge_skills_block",
]

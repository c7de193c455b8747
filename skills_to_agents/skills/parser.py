"""SKILL.md front matter parsing.

A skill descriptor starts with a front matter header:

    ---
    name: pdf-tools
    description: >
      Extract text and tables
      from PDF files.
    ---

Only flat ``key: value`` lines are understood. ``name`` and ``description``
are read, every other key is ignored. A ``description: >`` value is folded:
the indented lines that follow are stripped and joined with single spaces.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from skills_to_agents.core.errors import (
    InvalidInputError,
    MalformedDescriptorError,
    ValidationError,
)
from skills_to_agents.core.logging import log_skill_read
from skills_to_agents.skills.discovery import SkillCandidate, find_skills

logger = logging.getLogger(__name__)

DESCRIPTOR_FILENAME = "SKILL.md"
FRONT_MATTER_DELIMITER = "---"
REQUIRED_FIELDS = ("name", "description")

# Top-level "key: value" line; the key cannot contain a colon
KEY_LINE_PATTERN = re.compile(r"^([A-Za-z_][\w.-]*)\s*:\s*(.*)$")

# Folded block indicator, with optional chomping indicator
FOLD_INDICATORS = frozenset({">", ">-", ">+"})


@dataclass(frozen=True)
class SkillRecord:
    """Validated metadata for one skill."""
    name: str
    description: str
    link: str  # Descriptor path relative to the target document, '/' separated


def extract_front_matter(content: str, source: Union[str, Path]) -> str:
    """Return the text between the opening and closing ``---`` lines.

    Raises:
        MalformedDescriptorError: If the content does not start with a
            delimiter line or the closing delimiter line is missing.
    """
    lines = content.split("\n")
    if lines[0].rstrip("\r") != FRONT_MATTER_DELIMITER:
        raise MalformedDescriptorError(source, "front matter must start with '---'")

    for index in range(1, len(lines)):
        if lines[index].rstrip("\r") == FRONT_MATTER_DELIMITER:
            return "\n".join(line.rstrip("\r") for line in lines[1:index])

    raise MalformedDescriptorError(source, "front matter is not closed with '---'")


def _indent(line: str) -> int:
    return len(line) - len(line.lstrip(" \t"))


def parse_front_matter(header: str, source: Union[str, Path]) -> dict[str, str]:
    """Parse ``name`` and ``description`` out of a front matter header.

    Args:
        header: Text between the front matter delimiters
        source: Descriptor path, used in error messages

    Returns:
        Dict with ``name`` and ``description`` keys

    Raises:
        ValidationError: If ``name`` or ``description`` is missing or empty.
    """
    fields: dict[str, str] = {}
    folding = False
    fold_indent = 0
    folded: list[str] = []
    after_fold = False

    for raw_line in header.split("\n"):
        line = raw_line.rstrip()

        if folding:
            if line and _indent(line) > fold_indent:
                folded.append(line.strip())
                continue
            fields["description"] = " ".join(folded)
            folding = False
            after_fold = True

        if not line or line.lstrip().startswith("#"):
            continue
        # Nested values of other keys
        if _indent(line) > 0:
            if after_fold:
                logger.debug("Ignoring indented line after folded description in %s: %r", source, line.strip())
            continue
        after_fold = False

        match = KEY_LINE_PATTERN.match(line)
        if not match:
            continue

        key, value = match.group(1), match.group(2).strip()
        if key == "name":
            fields["name"] = value
        elif key == "description":
            if value in FOLD_INDICATORS:
                folding = True
                fold_indent = _indent(line)
                folded = []
            else:
                fields["description"] = value

    if folding:
        fields["description"] = " ".join(folded)

    for field in REQUIRED_FIELDS:
        if not fields.get(field):
            raise ValidationError(source, field)

    return {"name": fields["name"], "description": fields["description"]}


def skill_link(skill_file: Union[str, Path], document_dir: Union[str, Path]) -> str:
    """Path of ``skill_file`` relative to ``document_dir`` with '/' separators."""
    relative = os.path.relpath(skill_file, document_dir)
    return relative.replace(os.sep, "/")


def read_skill(
    root_dir: Union[str, Path],
    candidate: SkillCandidate,
    document_dir: Union[str, Path],
) -> SkillRecord:
    """Read and validate the SKILL.md descriptor of one skill directory.

    Args:
        root_dir: Skills root directory
        candidate: Skill directory found by discovery
        document_dir: Directory of the document the link is rendered into

    Returns:
        SkillRecord with the link relative to ``document_dir``

    Raises:
        InvalidInputError: If the directory has no SKILL.md file or it cannot be read.
        MalformedDescriptorError: If the file is not UTF-8 or the front matter
            delimiters are missing.
        ValidationError: If ``name`` or ``description`` is missing.
    """
    skill_file = Path(root_dir) / candidate.name / DESCRIPTOR_FILENAME
    if not skill_file.is_file():
        raise InvalidInputError(f"Skill '{candidate.name}' has no {DESCRIPTOR_FILENAME} file: {skill_file}", path=skill_file)

    try:
        content = skill_file.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise MalformedDescriptorError(skill_file, "not valid UTF-8") from e
    except OSError as e:
        raise InvalidInputError(f"Cannot read {skill_file}: {e.strerror or e}", path=skill_file) from e

    header = extract_front_matter(content, skill_file)
    metadata = parse_front_matter(header, skill_file)

    record = SkillRecord(
        name=metadata["name"],
        description=metadata["description"],
        link=skill_link(skill_file, document_dir),
    )
    log_skill_read(record.name, record.link)
    return record


def read_skills(root_dir: Union[str, Path], document_dir: Union[str, Path]) -> list[SkillRecord]:
    """Read every skill under ``root_dir`` in discovery order.

    The first invalid skill aborts the whole read; no partial list is returned.
    """
    return [read_skill(root_dir, candidate, document_dir) for candidate in find_skills(root_dir)]

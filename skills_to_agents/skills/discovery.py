"""Skill directory discovery."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from skills_to_agents.core.errors import InvalidInputError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SkillCandidate:
    """A directory directly under the skills root."""
    name: str  # Directory base name
    path: Path


def find_skills(root_dir: Union[str, Path]) -> list[SkillCandidate]:
    """List the immediate subdirectories of ``root_dir`` as skill candidates.

    Files and other non-directory entries are skipped. Entries are returned
    sorted by name; nested directories are not searched.

    Raises:
        InvalidInputError: If ``root_dir`` does not exist, is not a directory
            or cannot be listed.
    """
    root = Path(root_dir)
    if not root.exists():
        raise InvalidInputError(f"Skills directory not found: {root}", path=root)
    if not root.is_dir():
        raise InvalidInputError(f"Skills path is not a directory: {root}", path=root)

    try:
        entries = sorted(root.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise InvalidInputError(f"Cannot list skills directory {root}: {e.strerror or e}", path=root) from e

    candidates = [SkillCandidate(name=entry.name, path=entry) for entry in entries if entry.is_dir()]
    logger.debug("Discovered %d skill directories in %s", len(candidates), root)
    return candidates

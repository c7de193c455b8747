"""Sync runner: discovery -> parse -> render -> merge -> optional write."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from skills_to_agents.core.config import SyncConfig, read_preamble
from skills_to_agents.core.errors import InvalidInputError, MalformedDocumentError
from skills_to_agents.core.logging import log_sync_result
from skills_to_agents.skills.merger import merge_skills_block
from skills_to_agents.skills.parser import SkillRecord, read_skills
from skills_to_agents.skills.renderer import build_skills_block

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    """Outcome of one sync run."""
    agents_path: Path
    previous: str  # Document text before the run ("" if the file did not exist)
    content: str  # Merged document text
    skills: list[SkillRecord] = field(default_factory=list)
    written: bool = False

    @property
    def changed(self) -> bool:
        return self.content != self.previous


def read_document(path: Path) -> str:
    """Current text of the target document, or "" if it does not exist.

    Raises:
        MalformedDocumentError: If the document is not valid UTF-8.
        InvalidInputError: If the document exists but cannot be read.
    """
    if not path.exists():
        return ""
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise MalformedDocumentError(f"Document {path} is not valid UTF-8", path=path) from e
    except OSError as e:
        raise InvalidInputError(f"Cannot read {path}: {e.strerror or e}", path=path) from e


def sync_skills(config: SyncConfig, base_dir: Optional[Union[str, Path]] = None) -> SyncResult:
    """Regenerate the <skills> block of the target document.

    All skills are read and the document is merged before anything is
    written, so any error leaves the document untouched. The file is written
    only when ``config.write`` is set and the merged content differs.

    Args:
        config: Sync settings
        base_dir: Directory relative paths are resolved against (default: cwd)

    Returns:
        SyncResult with the previous and merged document text
    """
    base = Path(base_dir) if base_dir else Path.cwd()
    resolved = config.resolve(base)

    preamble = read_preamble(resolved, base)
    skills = read_skills(resolved.skills_dir, resolved.document_dir)
    block = build_skills_block(skills, preamble)

    previous = read_document(resolved.agents_path)
    content = merge_skills_block(previous, block, path=resolved.agents_path)

    result = SyncResult(
        agents_path=resolved.agents_path,
        previous=previous,
        content=content,
        skills=skills,
    )

    if resolved.write and result.changed:
        try:
            resolved.agents_path.parent.mkdir(parents=True, exist_ok=True)
            resolved.agents_path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise InvalidInputError(f"Cannot write {resolved.agents_path}: {e.strerror or e}", path=resolved.agents_path) from e
        result.written = True
        logger.debug("Wrote %d bytes to %s", len(content), resolved.agents_path)

    log_sync_result(resolved.agents_path, result.changed, result.written, len(skills))
    return result

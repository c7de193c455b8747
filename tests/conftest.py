"""Shared test fixtures and pytest configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

import pytest

from skills_to_agents.core.logging import reset_logger


def skill_markdown(name: Optional[str], description: Optional[str], body: str = "Body") -> str:
    """Build SKILL.md content; a None field is left out of the front matter."""
    lines = ["---"]
    if name is not None:
        lines.append(f"name: {name}")
    if description is not None:
        lines.append(f"description: {description}")
    lines.extend(["---", "", body])
    return "\n".join(lines)


@pytest.fixture(autouse=True)
def _reset_logging():
    """Each test starts with an unconfigured package logger."""
    reset_logger()
    yield
    reset_logger()


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A project root with an empty skills/ directory."""
    (tmp_path / "skills").mkdir()
    return tmp_path


@pytest.fixture
def make_skill(project_dir: Path) -> Callable[..., Path]:
    """Create skills/<folder>/SKILL.md and return the descriptor path."""

    def _make(folder: str, name: Optional[str] = None, description: Optional[str] = "A skill", content: Optional[str] = None) -> Path:
        skill_dir = project_dir / "skills" / folder
        skill_dir.mkdir(parents=True)
        skill_file = skill_dir / "SKILL.md"
        if content is None:
            content = skill_markdown(name if name is not None else folder.title(), description)
        skill_file.write_text(content, encoding="utf-8")
        return skill_file

    return _make


@pytest.fixture
def skill_text() -> Callable[..., str]:
    """The skill_markdown builder, for tests that write descriptors themselves."""
    return skill_markdown

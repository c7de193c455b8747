"""Tests for the Typer CLI."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from skills_to_agents.core.errors import EXIT_CODES, ErrorCategory
from skills_to_agents.main import OUT_OF_DATE_EXIT_CODE, app

runner = CliRunner()


def _text(result) -> str:
    """CLI output with rich line wrapping collapsed."""
    return " ".join(result.output.split())


@pytest.fixture
def in_project(project_dir: Path, monkeypatch) -> Path:
    monkeypatch.chdir(project_dir)
    return project_dir


class TestSyncCommand:
    def test_write_creates_document(self, in_project: Path, make_skill):
        make_skill("alpha", name="Alpha", description="First skill")
        result = runner.invoke(app, ["sync", "--write"])
        assert result.exit_code == 0, result.output
        assert "Updated" in _text(result)
        content = (in_project / "AGENTS.md").read_text(encoding="utf-8")
        assert "- [Alpha](skills/alpha/SKILL.md) - First skill" in content

    def test_check_mode_reports_out_of_date(self, in_project: Path, make_skill):
        make_skill("alpha")
        result = runner.invoke(app, ["sync"])
        assert result.exit_code == OUT_OF_DATE_EXIT_CODE
        assert "out of date" in _text(result)
        assert not (in_project / "AGENTS.md").exists()

    def test_check_mode_up_to_date(self, in_project: Path, make_skill):
        make_skill("alpha")
        assert runner.invoke(app, ["sync", "--write"]).exit_code == 0
        result = runner.invoke(app, ["sync"])
        assert result.exit_code == 0
        assert "up to date" in _text(result)

    def test_preamble_escape_sequences(self, in_project: Path, make_skill):
        make_skill("alpha")
        result = runner.invoke(app, ["sync", "--write", "--preamble", "Hello\\nWorld"])
        assert result.exit_code == 0, result.output
        content = (in_project / "AGENTS.md").read_text(encoding="utf-8")
        assert content.startswith("<skills>\n\nHello\nWorld\n\n- [Alpha]")

    def test_custom_paths(self, in_project: Path, skill_text):
        skill_dir = in_project / "custom-skills" / "gamma"
        skill_dir.mkdir(parents=True)
        (skill_dir / "SKILL.md").write_text(skill_text("Gamma", "Third"), encoding="utf-8")
        (in_project / "docs").mkdir()

        result = runner.invoke(app, [
            "sync", "--write",
            "--skills-dir", "custom-skills",
            "--agents-path", "docs/AGENTS.md",
        ])
        assert result.exit_code == 0, result.output
        content = (in_project / "docs" / "AGENTS.md").read_text(encoding="utf-8")
        assert "- [Gamma](../custom-skills/gamma/SKILL.md) - Third" in content

    def test_conflicting_preamble_flags(self, in_project: Path):
        result = runner.invoke(app, ["sync", "--preamble", "one", "--preamble-file", "two"])
        assert result.exit_code == EXIT_CODES[ErrorCategory.CONFIGURATION]
        assert "Cannot use preamble and preamble_file together" in _text(result)

    def test_validation_error_exit_code(self, in_project: Path, make_skill, skill_text):
        make_skill("alpha")
        make_skill("beta", content=skill_text(None, "No name"))
        (in_project / "AGENTS.md").write_text("Keep me\n", encoding="utf-8")

        result = runner.invoke(app, ["sync", "--write"])
        assert result.exit_code == EXIT_CODES[ErrorCategory.VALIDATION]
        assert "'name'" in _text(result)
        assert (in_project / "AGENTS.md").read_text(encoding="utf-8") == "Keep me\n"

    def test_descriptor_not_utf8_exit_code(self, in_project: Path, make_skill):
        make_skill("alpha")
        (in_project / "skills" / "beta").mkdir()
        (in_project / "skills" / "beta" / "SKILL.md").write_bytes(b"---\nname: Beta\ndescription: caf\xe9\n---\n")
        (in_project / "AGENTS.md").write_text("Keep me\n", encoding="utf-8")

        result = runner.invoke(app, ["sync", "--write"])
        assert result.exit_code == EXIT_CODES[ErrorCategory.MALFORMED_DESCRIPTOR]
        assert not isinstance(result.exception, UnicodeDecodeError)
        assert "not valid UTF-8" in _text(result)
        assert (in_project / "AGENTS.md").read_text(encoding="utf-8") == "Keep me\n"

    def test_unknown_config_key_exit_code(self, in_project: Path, make_skill):
        make_skill("alpha")
        (in_project / ".skills-to-agents.yaml").write_text("skill_dir: elsewhere\n", encoding="utf-8")
        result = runner.invoke(app, ["sync"])
        assert result.exit_code == EXIT_CODES[ErrorCategory.CONFIGURATION]
        assert "skill_dir" in _text(result)

    def test_missing_skills_dir(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["sync"])
        assert result.exit_code == EXIT_CODES[ErrorCategory.INVALID_INPUT]

    def test_malformed_document(self, in_project: Path, make_skill):
        make_skill("alpha")
        (in_project / "AGENTS.md").write_text("<skills>\nno end\n", encoding="utf-8")
        result = runner.invoke(app, ["sync", "--write"])
        assert result.exit_code == EXIT_CODES[ErrorCategory.MALFORMED_DOCUMENT]

    def test_uses_config_file(self, in_project: Path, make_skill):
        make_skill("alpha")
        (in_project / ".skills-to-agents.yaml").write_text(
            "agents_path: CLAUDE.md\npreamble: From config\nwrite: true\n", encoding="utf-8"
        )
        result = runner.invoke(app, ["sync"])
        assert result.exit_code == 0, result.output
        assert "From config" in (in_project / "CLAUDE.md").read_text(encoding="utf-8")


class TestOtherCommands:
    def test_render_prints_block(self, in_project: Path, make_skill):
        make_skill("alpha", name="Alpha", description="First skill")
        result = runner.invoke(app, ["render", "--preamble", "Intro line"])
        assert result.exit_code == 0, result.output
        assert result.stdout == (
            "<skills>\n\nIntro line\n\n- [Alpha](skills/alpha/SKILL.md) - First skill\n</skills>\n"
        )

    def test_list_shows_skills(self, in_project: Path, make_skill):
        make_skill("alpha", name="Alpha")
        make_skill("beta", name="Beta")
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0, result.output
        assert "Alpha" in result.output
        assert "Beta" in result.output

    def test_list_empty(self, in_project: Path):
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0
        assert "No skills found" in _text(result)

    def test_init_writes_config(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["init"])
        assert result.exit_code == 0, result.output
        assert (tmp_path / ".skills-to-agents.yaml").exists()

        again = runner.invoke(app, ["init"])
        assert again.exit_code == 1
        assert runner.invoke(app, ["init", "--force"]).exit_code == 0

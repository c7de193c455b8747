"""skills-to-agents CLI entry point using Typer."""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.markup import escape
from rich.table import Table

from skills_to_agents.core.config import ConfigManager, SyncConfig, read_preamble, unescape_preamble
from skills_to_agents.core.errors import SkillsSyncError
from skills_to_agents.core.logging import log_error, setup_logging
from skills_to_agents.core.sync import sync_skills
from skills_to_agents.skills.parser import read_skills
from skills_to_agents.skills.renderer import build_skills_block
from skills_to_agents.ui import console, error, info, success, warn

app = typer.Typer(
    name="skills-to-agents",
    help="Keep the <skills> index of AGENTS.md in sync with skill folders.",
    no_args_is_help=True,
)

# Exit code of `sync` in check mode when the document is out of date
OUT_OF_DATE_EXIT_CODE = 1


def _fail(e: SkillsSyncError) -> NoReturn:
    """Report a sync error and exit with its code."""
    log_error(e.category.value, e.message, path=e.path)
    error(escape(e.message))
    raise typer.Exit(e.exit_code)


def _load_config(config_path: Optional[Path], **overrides) -> SyncConfig:
    if overrides.get("preamble") is not None:
        overrides["preamble"] = unescape_preamble(overrides["preamble"])
    cfg = ConfigManager(config_path=config_path).merged(**overrides)
    setup_logging(log_level=cfg.log_level, logs_dir=cfg.logs_dir)
    return cfg


@app.command()
def sync(
    skills_dir: Optional[Path] = typer.Option(None, "--skills-dir", "-s", help="Skills directory (default: skills)"),
    agents_path: Optional[Path] = typer.Option(None, "--agents-path", "-a", help="Target document (default: AGENTS.md)"),
    preamble: Optional[str] = typer.Option(None, "--preamble", help="Preamble text; '\\n' starts a new line"),
    preamble_file: Optional[Path] = typer.Option(None, "--preamble-file", help="Read preamble from a file"),
    write: bool = typer.Option(False, "--write", "-w", help="Write the updated document"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file (default: .skills-to-agents.yaml)"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Log level (DEBUG, INFO, ...)"),
) -> None:
    """Regenerate the <skills> block, or check that it is up to date."""
    try:
        cfg = _load_config(
            config_path,
            skills_dir=skills_dir,
            agents_path=agents_path,
            preamble=preamble,
            preamble_file=preamble_file,
            write=write or None,
            log_level=log_level,
        )
        result = sync_skills(cfg)
    except SkillsSyncError as e:
        _fail(e)

    count = len(result.skills)
    if result.written:
        success(f"Updated {escape(str(result.agents_path))} ({count} skills)")
    elif not result.changed:
        info(f"{escape(str(result.agents_path))} is up to date ({count} skills)")
    else:
        warn(f"{escape(str(result.agents_path))} is out of date ({count} skills); run with --write to update")
        raise typer.Exit(OUT_OF_DATE_EXIT_CODE)


@app.command("list")
def list_skills(
    skills_dir: Optional[Path] = typer.Option(None, "--skills-dir", "-s", help="Skills directory (default: skills)"),
    agents_path: Optional[Path] = typer.Option(None, "--agents-path", "-a", help="Document links are relative to"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """List discovered skills."""
    try:
        cfg = _load_config(config_path, skills_dir=skills_dir, agents_path=agents_path).resolve(Path.cwd())
        skills = read_skills(cfg.skills_dir, cfg.document_dir)
    except SkillsSyncError as e:
        _fail(e)

    if not skills:
        info(f"No skills found in {escape(str(cfg.skills_dir))}")
        return

    table = Table(title="Skills")
    table.add_column("Name", style="cyan")
    table.add_column("Link", style="green")
    table.add_column("Description")
    for skill in skills:
        table.add_row(escape(skill.name), escape(skill.link), escape(skill.description))
    console.print(table)


@app.command()
def render(
    skills_dir: Optional[Path] = typer.Option(None, "--skills-dir", "-s", help="Skills directory (default: skills)"),
    agents_path: Optional[Path] = typer.Option(None, "--agents-path", "-a", help="Document links are relative to"),
    preamble: Optional[str] = typer.Option(None, "--preamble", help="Preamble text; '\\n' starts a new line"),
    preamble_file: Optional[Path] = typer.Option(None, "--preamble-file", help="Read preamble from a file"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Print the rendered <skills> block to stdout."""
    try:
        base_dir = Path.cwd()
        cfg = _load_config(
            config_path,
            skills_dir=skills_dir,
            agents_path=agents_path,
            preamble=preamble,
            preamble_file=preamble_file,
        ).resolve(base_dir)
        skills = read_skills(cfg.skills_dir, cfg.document_dir)
        block = build_skills_block(skills, read_preamble(cfg, base_dir))
    except SkillsSyncError as e:
        _fail(e)

    typer.echo(block, nl=False)


@app.command()
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing config file"),
) -> None:
    """Write a default .skills-to-agents.yaml in the current directory."""
    manager = ConfigManager()
    if manager.config_path.exists() and not force:
        warn(f"{escape(str(manager.config_path))} already exists; use --force to overwrite")
        raise typer.Exit(1)
    manager.save(SyncConfig())
    success(f"Configuration written to {escape(str(manager.config_path))}")


if __name__ == "__main__":
    app()

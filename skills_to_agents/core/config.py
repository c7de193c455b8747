"""Configuration management for skills-to-agents."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from skills_to_agents.core.errors import ConfigurationError, InvalidInputError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class SyncConfig(BaseModel):
    """Settings for one sync run."""
    skills_dir: Path = Field(default=Path("skills"), description="Directory holding one folder per skill")
    agents_path: Path = Field(default=Path("AGENTS.md"), description="Document that receives the <skills> block")
    preamble: Optional[str] = Field(default=None, description="Literal text placed above the skill list")
    preamble_file: Optional[Path] = Field(default=None, description="File whose contents are used as preamble")
    write: bool = Field(default=False, description="Write the merged document instead of only checking it")
    log_level: str = Field(default="INFO", description="Log level for the package logger")
    logs_dir: Optional[Path] = Field(default=None, description="Directory for the rotating log file (None = no file)")

    model_config = ConfigDict(extra="forbid")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return value

    @model_validator(mode="after")
    def _check_preamble_sources(self) -> "SyncConfig":
        if self.preamble is not None and self.preamble_file is not None:
            raise ValueError("Cannot use preamble and preamble_file together")
        return self

    @property
    def document_dir(self) -> Path:
        """Directory containing the target document; links are relative to it."""
        return self.agents_path.parent

    def resolve(self, base_dir: Union[str, Path]) -> "SyncConfig":
        """Return a copy with relative paths anchored at ``base_dir``."""
        base = Path(base_dir)

        def anchor(path: Optional[Path]) -> Optional[Path]:
            if path is None or path.is_absolute():
                return path
            return base / path

        return self.model_copy(update={
            "skills_dir": anchor(self.skills_dir),
            "agents_path": anchor(self.agents_path),
            "preamble_file": anchor(self.preamble_file),
            "logs_dir": anchor(self.logs_dir),
        })


def build_config(data: dict[str, Any], source: Optional[Path] = None) -> SyncConfig:
    """Validate ``data`` into a SyncConfig, raising ConfigurationError on failure."""
    try:
        return SyncConfig(**data)
    except PydanticValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" if err["loc"] else err["msg"]
            for err in e.errors()
        )
        where = f" in {source}" if source else ""
        raise ConfigurationError(f"Invalid configuration{where}: {details}", path=source) from e


class ConfigManager:
    """Loads and saves the project configuration file."""

    CONFIG_FILENAME = ".skills-to-agents.yaml"

    def __init__(self, config_path: Optional[Path] = None, base_dir: Optional[Path] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Explicit config file. Must exist when given.
            base_dir: Project directory. Defaults to the current directory.
        """
        self.base_dir = Path(base_dir) if base_dir else Path.cwd()
        self.explicit = config_path is not None
        self.config_path = Path(config_path) if config_path else self.base_dir / self.CONFIG_FILENAME
        self._config: Optional[SyncConfig] = None

    @property
    def config(self) -> SyncConfig:
        """Get the current configuration, loading if necessary."""
        if self._config is None:
            self._config = self.load()
        return self._config

    def load(self) -> SyncConfig:
        """
        Load configuration from file.

        Returns:
            SyncConfig: Loaded configuration, or defaults if the default file doesn't exist.

        Raises:
            ConfigurationError: If an explicit file is missing or the file is invalid.
        """
        if not self.config_path.exists():
            if self.explicit:
                raise ConfigurationError(f"Config file not found: {self.config_path}", path=self.config_path)
            return SyncConfig()

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Cannot read {self.config_path}: {e}", path=self.config_path) from e
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Failed to parse {self.config_path}: {e}", path=self.config_path) from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {self.config_path} must contain a mapping", path=self.config_path)

        return build_config(data, self.config_path)

    def save(self, config: Optional[SyncConfig] = None) -> None:
        """
        Save configuration to file.

        Args:
            config: Configuration to save. Uses current config if not provided.
        """
        if config is not None:
            self._config = config

        if self._config is None:
            self._config = SyncConfig()

        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        data = self._config.model_dump(exclude_none=True)
        for key, value in data.items():
            if isinstance(value, Path):
                data[key] = value.as_posix()

        with open(self.config_path, "w", encoding="utf-8") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    def merged(self, **overrides: Any) -> SyncConfig:
        """Return the file configuration with non-None ``overrides`` applied.

        A preamble source given as an override replaces the other source from
        the file, so command line flags always win.
        """
        data = self.config.model_dump()
        overrides = {k: v for k, v in overrides.items() if v is not None}
        if "preamble" in overrides:
            data["preamble_file"] = None
        if "preamble_file" in overrides:
            data["preamble"] = None
        data.update(overrides)
        return build_config(data)


def unescape_preamble(text: str) -> str:
    """Turn literal ``\\n`` sequences typed on a command line into newlines."""
    return text.replace("\\n", "\n")


def read_preamble(config: SyncConfig, base_dir: Optional[Union[str, Path]] = None) -> str:
    """Return the preamble text for ``config``.

    A preamble file is read relative to ``base_dir`` (default: current
    directory) with trailing newlines removed. Returns "" when no preamble is
    configured.

    Raises:
        InvalidInputError: If the preamble file does not exist or cannot be read.
    """
    if config.preamble is not None:
        return config.preamble

    if config.preamble_file is None:
        return ""

    path = config.preamble_file
    if not path.is_absolute():
        path = Path(base_dir or Path.cwd()) / path
    if not path.is_file():
        raise InvalidInputError(f"Preamble file not found: {path}", path=path)

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise InvalidInputError(f"Preamble file {path} is not valid UTF-8", path=path) from e
    except OSError as e:
        raise InvalidInputError(f"Cannot read preamble file {path}: {e.strerror or e}", path=path) from e
    return text.rstrip("\r\n")

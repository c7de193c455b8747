"""Core module - configuration and errors.

The sync runner lives in skills_to_agents.core.sync; it is not re-exported here
to avoid a circular import (skills -> core.errors -> core -> sync -> skills).
"""

from skills_to_agents.core.config import ConfigManager, SyncConfig, read_preamble
from skills_to_agents.core.errors import (
    ErrorCategory,
    SkillsSyncError,
    InvalidInputError,
    MalformedDescriptorError,
    ValidationError,
    MalformedDocumentError,
    ConfigurationError,
    exit_code_for,
)

__all__ = [
    "ConfigManager",
    "SyncConfig",
    "read_preamble",
    "ErrorCategory",
    "SkillsSyncError",
    "InvalidInputError",
    "MalformedDescriptorError",
    "ValidationError",
    "MalformedDocumentError",
    "ConfigurationError",
    "exit_code_for",
]

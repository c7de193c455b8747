"""Error categories and exception types for skills-to-agents.

Every failure in the sync pipeline is fatal. Errors are raised where they are
detected and propagated unchanged; only the CLI turns them into a message and
a process exit code.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Optional, Union


class ErrorCategory(Enum):
    """Categories of sync failures, each with its own exit code."""
    INVALID_INPUT = "invalid_input"                # Missing skills dir, descriptor or preamble file
    MALFORMED_DESCRIPTOR = "malformed_descriptor"  # SKILL.md without front matter delimiters
    VALIDATION = "validation"                      # Front matter lacks name/description
    MALFORMED_DOCUMENT = "malformed_document"      # Unterminated <skills> region
    CONFIGURATION = "configuration"                # Bad config file or conflicting options
    UNKNOWN = "unknown"                            # Unclassified error


# Process exit codes per category. 1 is reserved for "document out of date".
EXIT_CODES: dict[ErrorCategory, int] = {
    ErrorCategory.INVALID_INPUT: 2,
    ErrorCategory.MALFORMED_DESCRIPTOR: 3,
    ErrorCategory.VALIDATION: 4,
    ErrorCategory.MALFORMED_DOCUMENT: 5,
    ErrorCategory.CONFIGURATION: 6,
    ErrorCategory.UNKNOWN: 1,
}


class SkillsSyncError(Exception):
    """Base exception for skills-to-agents errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        path: Optional[Union[str, Path]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.path = str(path) if path is not None else None

    @property
    def exit_code(self) -> int:
        return EXIT_CODES[self.category]

    def to_dict(self) -> dict[str, Any]:
        """Serialize error for logging."""
        return {
            "type": type(self).__name__,
            "category": self.category.value,
            "message": self.message,
            "path": self.path,
        }


class InvalidInputError(SkillsSyncError):
    """A required input path is missing or has the wrong type."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message, ErrorCategory.INVALID_INPUT, path)


class MalformedDescriptorError(SkillsSyncError):
    """A SKILL.md file lacks the front matter delimiter structure."""

    def __init__(self, path: Union[str, Path], reason: str = "missing front matter"):
        super().__init__(f"Malformed skill descriptor {path}: {reason}", ErrorCategory.MALFORMED_DESCRIPTOR, path)
        self.reason = reason


class ValidationError(SkillsSyncError):
    """Front matter parsed but a required field is missing or empty."""

    def __init__(self, path: Union[str, Path], field: str):
        super().__init__(f"Skill descriptor {path} is missing required '{field}' field", ErrorCategory.VALIDATION, path)
        self.field = field


class MalformedDocumentError(SkillsSyncError):
    """The target document has an opening <skills> line with no closing line."""

    def __init__(self, message: str = "Found <skills> without a matching </skills>", path: Optional[Union[str, Path]] = None):
        super().__init__(message, ErrorCategory.MALFORMED_DOCUMENT, path)


class ConfigurationError(SkillsSyncError):
    """Configuration file or options are invalid."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message, ErrorCategory.CONFIGURATION, path)


def exit_code_for(error: BaseException) -> int:
    """Map an exception to the process exit code the CLI should use."""
    if isinstance(error, SkillsSyncError):
        return error.exit_code
    return EXIT_CODES[ErrorCategory.UNKNOWN]

from __future__ import annotations

"""
Pipeline Error Taxonomy.

Fatal-for-run failures are raised as typed exceptions. Recoverable
per-file and per-directory failures never use this hierarchy: they are
modelled as placeholder outcomes and logged warnings.
"""

from dataclasses import dataclass


@dataclass(eq=False)
class RepoPackerError(Exception):
    """Base exception for all fatal repopacker errors."""

    message: str = "Repository packing failed."

    def __str__(self) -> str:
        return self.message


@dataclass(eq=False)
class InvalidRepositoryError(RepoPackerError):
    """Raised when the repository root is missing, not a directory or unreadable."""

    path: str = ""
    message: str = "Invalid repository root."

    def __str__(self) -> str:
        return f"{self.message}: {self.path}" if self.path else self.message


@dataclass(eq=False)
class PipelineCancelledError(RepoPackerError):
    """Raised when the cancellation event is observed between files."""

    message: str = "Operation cancelled by user."


@dataclass(eq=False)
class ConfigValidationError(RepoPackerError):
    """Raised by strict configuration validation on the first violation."""

    field: str = ""
    message: str = "Invalid configuration value."

    def __str__(self) -> str:
        return f"{self.field}: {self.message}" if self.field else self.message

"""Exceptions raised by commit-it.

Only structural problems raise. Rule violations are returned as
diagnostics on the ConventionalCommit instead.
"""

from pathlib import Path
from typing import Union


class CommitItError(Exception):
    """Base class for all commit-it errors."""


class InvalidRepositoryError(CommitItError, ValueError):
    """The given location is not a readable git repository."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(f"Invalid git folder specified ({self.path})")


class CommitNotFoundError(CommitItError, LookupError):
    """No commit object exists for the requested hash."""

    def __init__(self, commit_hash: str):
        self.commit_hash = commit_hash
        super().__init__(f"Could not find commit message for hash {commit_hash}")


class ConfigError(CommitItError):
    """Options file could not be read or does not match the schema."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Invalid configuration in {self.path}: {reason}")

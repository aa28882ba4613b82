"""commit-it: parse commit messages and validate Conventional Commits."""

from commit_it.core.config import load_options
from commit_it.core.fields import extract_fields
from commit_it.core.requirements import COMMIT_RULES, validate
from commit_it.core.segmenter import segment_message
from commit_it.errors import (
    CommitItError,
    CommitNotFoundError,
    ConfigError,
    InvalidRepositoryError,
)
from commit_it.models import (
    Commit,
    Contributor,
    ConventionalCommit,
    ConventionalCommitOptions,
    Diagnostic,
    DiagnosticSeverity,
    FixItHint,
    GitSource,
    StringSource,
)

__all__ = [
    "COMMIT_RULES",
    "Commit",
    "CommitItError",
    "CommitNotFoundError",
    "ConfigError",
    "Contributor",
    "ConventionalCommit",
    "ConventionalCommitOptions",
    "Diagnostic",
    "DiagnosticSeverity",
    "FixItHint",
    "GitSource",
    "InvalidRepositoryError",
    "StringSource",
    "extract_fields",
    "load_options",
    "segment_message",
    "validate",
]

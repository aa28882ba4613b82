"""Data models for commit-it."""

from .commit import Commit, CommitAttributes
from .contributor import Contributor
from .conventional_commit import ConventionalCommit
from .diagnostic import Diagnostic, DiagnosticSeverity, FixItHint
from .options import CommitSource, ConventionalCommitOptions, GitSource, StringSource

__all__ = [
    "Commit",
    "CommitAttributes",
    "CommitSource",
    "Contributor",
    "ConventionalCommit",
    "ConventionalCommitOptions",
    "Diagnostic",
    "DiagnosticSeverity",
    "FixItHint",
    "GitSource",
    "StringSource",
]

"""Conventional Commit model."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, PrivateAttr

from commit_it.core.fields import ConventionalCommitFields, extract_fields
from commit_it.core.segmenter import BREAKING_CHANGE_KEYS

from .commit import Commit, CommitAttributes
from .contributor import Contributor
from .diagnostic import Diagnostic
from .options import ConventionalCommitOptions

logger = logging.getLogger(__name__)


class ConventionalCommit(BaseModel):
    """A Commit validated against the Conventional Commits specification.

    Validation runs once, when the instance is constructed. Rule
    violations never raise; they are exposed through ``errors`` and
    ``warnings``.
    """

    commit: Commit
    options: ConventionalCommitOptions = ConventionalCommitOptions()

    _fields: ConventionalCommitFields = PrivateAttr()
    _errors: Tuple[Diagnostic, ...] = PrivateAttr(default=())
    _warnings: Tuple[Diagnostic, ...] = PrivateAttr(default=())

    model_config = {"frozen": True, "extra": "forbid"}

    def model_post_init(self, __context: Any) -> None:
        from commit_it.core.requirements import validate

        self._fields = extract_fields(self.commit.subject)
        diagnostics = validate(self._fields, self.commit, self.options)
        logger.debug("Commit %s: %s", self.commit.hash, [d.rule_id for d in diagnostics])
        self._errors = tuple(d for d in diagnostics if d.is_error)
        self._warnings = tuple(d for d in diagnostics if not d.is_error)

    @classmethod
    def from_commit(
        cls, commit: Commit, options: Optional[ConventionalCommitOptions] = None
    ) -> "ConventionalCommit":
        """Validate ``commit`` and wrap the results."""
        return cls(commit=commit, options=options or ConventionalCommitOptions())

    @classmethod
    def from_string(
        cls,
        hash: str,
        message: str,
        author: Optional[Contributor] = None,
        committer: Optional[Contributor] = None,
        options: Optional[ConventionalCommitOptions] = None,
    ) -> "ConventionalCommit":
        commit = Commit.from_string(
            hash=hash, message=message, author=author, committer=committer
        )
        return cls.from_commit(commit, options)

    @classmethod
    def from_hash(
        cls,
        hash: str,
        root_path: Union[str, Path],
        options: Optional[ConventionalCommitOptions] = None,
    ) -> "ConventionalCommit":
        return cls.from_commit(Commit.from_hash(hash, root_path), options)

    # Commit
    @property
    def hash(self) -> str:
        return self.commit.hash

    @property
    def raw(self) -> str:
        return self.commit.raw

    @property
    def author(self) -> Optional[Contributor]:
        return self.commit.author

    @property
    def committer(self) -> Optional[Contributor]:
        return self.commit.committer

    @property
    def subject(self) -> str:
        return self.commit.subject

    @property
    def body(self) -> Optional[str]:
        return self.commit.body

    @property
    def footer(self) -> Optional[Mapping[str, str]]:
        return self.commit.footer

    @property
    def attributes(self) -> CommitAttributes:
        return self.commit.attributes

    @property
    def is_fixup_commit(self) -> bool:
        return self.commit.is_fixup_commit

    @property
    def is_merge_commit(self) -> bool:
        return self.commit.is_merge_commit

    # Conventional Commit
    @property
    def fields(self) -> ConventionalCommitFields:
        return self._fields

    @property
    def type(self) -> Optional[str]:
        value = self._fields.type.value
        return value.rstrip() if value is not None else None

    @property
    def scope(self) -> Optional[str]:
        value = self._fields.scope.value
        if value is None:
            return None
        return value.rstrip()[1:-1]

    @property
    def description(self) -> Optional[str]:
        return self._fields.description.value

    @property
    def breaking(self) -> bool:
        """``!`` in the subject or a BREAKING CHANGE trailer in the footer."""
        marker = self._fields.breaking.value
        if marker is not None and marker.rstrip() == "!":
            return True
        footer = self.footer or {}
        return any(key in footer for key in BREAKING_CHANGE_KEYS)

    # Validation
    @property
    def errors(self) -> Tuple[Diagnostic, ...]:
        return self._errors

    @property
    def warnings(self) -> Tuple[Diagnostic, ...]:
        return self._warnings

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    @property
    def diagnostics(self) -> List[Diagnostic]:
        return list(self.errors) + list(self.warnings)

    def to_dict(self) -> Dict[str, Any]:
        commit = self.commit.model_dump(mode="json")
        return {
            "hash": self.hash,
            "author": commit["author"],
            "committer": commit["committer"],
            "subject": self.subject,
            "body": self.body,
            "footer": dict(self.footer) if self.footer else None,
            "type": self.type,
            "scope": self.scope,
            "breaking": self.breaking,
            "description": self.description,
            "validation": {
                "is_valid": self.is_valid,
                "errors": [e.to_dict() for e in self.errors],
                "warnings": [w.to_dict() for w in self.warnings],
            },
            "attributes": {
                "is_fixup": self.is_fixup_commit,
                "is_merge": self.is_merge_commit,
            },
        }

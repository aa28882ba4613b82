"""Commit model: a segmented commit message plus its metadata."""

from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, model_validator

from commit_it.core.segmenter import segment_message

from .contributor import Contributor
from .options import CommitSource, GitSource, StringSource


class CommitAttributes(BaseModel):
    """Behavioral attributes derived from the subject."""

    is_fixup: bool = False
    is_merge: bool = False

    model_config = {"frozen": True}


class Commit(BaseModel):
    """Represents a single, immutable commit message."""

    hash: str
    raw: str
    author: Optional[Contributor] = None
    committer: Optional[Contributor] = None
    subject: str
    body: Optional[str] = None
    trailers: Tuple[Tuple[str, str], ...] = ()
    attributes: CommitAttributes = CommitAttributes()

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def _footer_to_trailers(cls, data: Any) -> Any:
        # Accept a footer mapping; it is stored as ordered key/value pairs.
        if isinstance(data, dict) and "footer" in data:
            data = dict(data)
            footer = data.pop("footer") or {}
            data.setdefault("trailers", tuple(footer.items()))
        return data

    @property
    def footer(self) -> Optional[Mapping[str, str]]:
        """Read-only view of the footer trailers, None without a footer."""
        if not self.trailers:
            return None
        return MappingProxyType(dict(self.trailers))

    @classmethod
    def from_string(
        cls,
        hash: str,
        message: str,
        author: Optional[Contributor] = None,
        committer: Optional[Contributor] = None,
    ) -> "Commit":
        """Create a Commit by segmenting ``message``."""
        segments = segment_message(message)
        return cls(
            hash=hash,
            raw=message,
            author=author,
            committer=committer,
            subject=segments.subject,
            body=segments.body,
            footer=segments.footer,
            attributes=CommitAttributes(
                is_fixup=segments.is_fixup, is_merge=segments.is_merge
            ),
        )

    @classmethod
    def from_hash(cls, hash: str, root_path: Union[str, Path]) -> "Commit":
        """Create a Commit from the git repository at ``root_path``.

        Raises:
            InvalidRepositoryError: ``root_path`` is not a git repository
            CommitNotFoundError: ``hash`` does not name a commit
        """
        from commit_it.core.repository import CommitRepository

        raw_commit = CommitRepository(root_path).fetch_raw_commit(hash)
        return cls.from_string(
            hash=raw_commit.hash,
            message=raw_commit.raw,
            author=raw_commit.author,
            committer=raw_commit.committer,
        )

    @classmethod
    def from_source(cls, source: CommitSource) -> "Commit":
        """Create a Commit from either input source variant."""
        if isinstance(source, StringSource):
            return cls.from_string(
                hash=source.hash,
                message=source.message,
                author=source.author,
                committer=source.committer,
            )
        if isinstance(source, GitSource):
            return cls.from_hash(hash=source.hash, root_path=source.root_path)
        raise TypeError(f"Unsupported commit source: {type(source).__name__}")

    @property
    def is_fixup_commit(self) -> bool:
        return self.attributes.is_fixup

    @property
    def is_merge_commit(self) -> bool:
        return self.attributes.is_merge

    def to_dict(self) -> Dict[str, Any]:
        data = self.model_dump(mode="json", exclude={"trailers"})
        data["footer"] = dict(self.trailers) if self.trailers else None
        return data

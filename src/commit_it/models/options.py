"""Validation options and commit input sources."""

from pathlib import Path
from typing import Annotated, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, Field, field_validator

from .contributor import Contributor

DEFAULT_TYPES: Tuple[str, ...] = ("feat", "fix")


def _unique(values: List) -> Tuple:
    seen: List[str] = []
    for value in values:
        if value not in seen:
            seen.append(value)
    return tuple(seen)


class ConventionalCommitOptions(BaseModel):
    """Organization specific vocabulary for scopes and types.

    ``types`` is always extended with ``feat`` and ``fix``; an empty
    ``scopes`` list accepts any noun shaped scope.
    """

    scopes: Tuple[str, ...] = ()
    types: Tuple[str, ...] = ()

    model_config = {"frozen": True, "extra": "forbid"}

    @field_validator("scopes", "types", mode="before")
    @classmethod
    def _deduplicate(cls, value):
        if value is None:
            return ()
        if isinstance(value, str):
            return (value,)
        if isinstance(value, (list, tuple)):
            return _unique(list(value))
        return value

    @property
    def has_custom_types(self) -> bool:
        """True if types other than feat and fix are configured."""
        return any(t not in DEFAULT_TYPES for t in self.types)

    @property
    def allowed_types(self) -> Tuple[str, ...]:
        """``feat`` and ``fix`` followed by the configured types."""
        return _unique(list(DEFAULT_TYPES) + list(self.types))


class StringSource(BaseModel):
    """Commit message supplied directly by the caller."""

    kind: Literal["string"] = "string"
    hash: str
    message: str
    author: Optional[Contributor] = None
    committer: Optional[Contributor] = None

    model_config = {"frozen": True}


class GitSource(BaseModel):
    """Commit looked up by hash in a local git repository."""

    kind: Literal["git"] = "git"
    hash: str
    root_path: Path

    model_config = {"frozen": True}


CommitSource = Annotated[Union[StringSource, GitSource], Field(discriminator="kind")]

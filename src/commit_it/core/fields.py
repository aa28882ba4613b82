"""Extracts the Conventional Commit fields from a subject line.

    <type>(<scope>)!: <description>

The extraction never fails. Every character of the first subject line
belongs to exactly one field, whitespace included (it is attributed to
the field in front of it), so that diagnostics can point at any gap.
"""

import re
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

SUBJECT_PATTERN = re.compile(
    r"^(?P<type>[^(!:]*)"
    r"(?P<scope>\([^)]*\)\s*)?"
    r"(?P<breaking>!\s*)?"
    r"(?P<separator>:\s*)?"
    r"(?P<description>.+)?$"
)

FIELD_NAMES: Tuple[str, ...] = (
    "type",
    "scope",
    "breaking",
    "separator",
    "description",
)


@dataclass(frozen=True)
class CommitField:
    """A captured field and its 1-based column within the subject line."""

    offset: int
    value: Optional[str] = None

    @property
    def present(self) -> bool:
        return bool(self.value)

    @property
    def stripped(self) -> Optional[str]:
        return self.value.strip() if self.value is not None else None

    @property
    def trailing_whitespace(self) -> int:
        if self.value is None:
            return 0
        return len(self.value) - len(self.value.rstrip())


@dataclass(frozen=True)
class ConventionalCommitFields:
    """The five positional fields of a Conventional Commit subject."""

    type: CommitField
    scope: CommitField
    breaking: CommitField
    separator: CommitField
    description: CommitField

    def __iter__(self) -> Iterator[Tuple[str, CommitField]]:
        for name in FIELD_NAMES:
            yield name, getattr(self, name)

    def preceding(self, name: str) -> Optional[CommitField]:
        """Closest non-empty field in front of ``name``."""
        previous = None
        for field_name, field in self:
            if field_name == name:
                return previous
            if field.present:
                previous = field
        raise KeyError(name)


def extract_fields(subject: str) -> ConventionalCommitFields:
    """Split the first line of ``subject`` into its positional fields.

    Offsets are chained: each field starts where the previous one ends.
    """
    first_line = subject.split("\n", 1)[0].rstrip("\r")
    match = SUBJECT_PATTERN.match(first_line)
    # The pattern matches any single line; the guard only satisfies typing.
    groups = match.groupdict() if match else {"type": first_line}

    offset = 1
    fields = {}
    for name in FIELD_NAMES:
        value = groups.get(name)
        fields[name] = CommitField(offset=offset, value=value)
        offset += len(value or "")

    return ConventionalCommitFields(**fields)

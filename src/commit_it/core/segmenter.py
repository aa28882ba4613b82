"""Splits a raw commit message into subject, body and footer.

A message is a sequence of paragraphs separated by empty lines:

    subject             first paragraph, always present
    body                every paragraph between subject and footer
    footer              last paragraph, only when it consists purely of
                        git-trailers (``Key: value`` / ``Key #value``)

Lines starting with ``#`` are comments and are dropped before anything
else happens, mirroring ``git commit --cleanup=strip``.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

# ``Key: value``, ``BREAKING CHANGE: value`` or ``Key #value``
TRAILER_PATTERN = re.compile(
    r"^(?:(?P<key>BREAKING CHANGE|[\w-]+):[ \t]?(?P<value>.*)"
    r"|(?P<ref_key>[\w-]+)[ \t]+(?P<ref_value>#.*))$",
    re.IGNORECASE,
)

CONTINUATION_PATTERN = re.compile(r"^[ \t]")

BREAKING_CHANGE_KEYS = ("BREAKING CHANGE", "BREAKING-CHANGE")

FIXUP_PATTERN = re.compile(r"^fixup!", re.IGNORECASE)

MERGE_PATTERNS = [
    # GitHub
    re.compile(r"^Merge pull request #\d+ from '?\S+'?"),
    # Bitbucket
    re.compile(r"^Merged in '?\S+'? \(pull request #\d+\)"),
    # GitLab and plain git, including remote-tracking branches
    re.compile(r"^Merge (?:remote-tracking )?branch '?\S+'? into '?\S+'?"),
]


@dataclass(frozen=True)
class MessageSegments:
    """Result of segmenting a commit message."""

    subject: str
    body: Optional[str] = None
    footer: Optional[Dict[str, str]] = None
    is_fixup: bool = False
    is_merge: bool = False


def strip_comments(message: str) -> str:
    """Remove every line starting with ``#``."""
    return "\n".join(
        line for line in message.splitlines() if not line.startswith("#")
    )


def paragraph_spans(lines: List[str]) -> List[Tuple[int, int]]:
    """Line ranges (start, stop) of the paragraphs in ``lines``.

    Paragraphs are separated by one or more empty lines.
    """
    spans: List[Tuple[int, int]] = []
    start: Optional[int] = None
    for index, line in enumerate(lines):
        if line == "":
            if start is not None:
                spans.append((start, index))
                start = None
        elif start is None:
            start = index
    if start is not None:
        spans.append((start, len(lines)))
    return spans


def match_trailer(line: str) -> Optional[re.Match]:
    return TRAILER_PATTERN.match(line)


def is_trailer_paragraph(paragraph: str) -> bool:
    """True if ``paragraph`` is made up of git-trailers only.

    The first line has to be a trailer; every following line is either a
    trailer or a continuation line indented with whitespace.
    """
    lines = paragraph.splitlines()
    if not lines or match_trailer(lines[0]) is None:
        return False
    return all(
        match_trailer(line) is not None or CONTINUATION_PATTERN.match(line)
        for line in lines[1:]
    )


def parse_trailers(paragraph: str) -> Dict[str, str]:
    """Parse a trailer paragraph into an ordered key/value mapping.

    Continuation lines are trimmed and joined to the preceding value with
    a newline. Repeated keys keep the last value.
    """
    trailers: Dict[str, str] = {}
    key: Optional[str] = None
    for line in paragraph.splitlines():
        match = match_trailer(line)
        if match is not None and not CONTINUATION_PATTERN.match(line):
            if match.group("key") is not None:
                key = match.group("key")
                trailers[key] = match.group("value").strip()
            else:
                key = match.group("ref_key")
                trailers[key] = match.group("ref_value").strip()
        elif key is not None:
            trailers[key] = f"{trailers[key]}\n{line.strip()}"
    return trailers


def is_fixup_subject(subject: str) -> bool:
    return FIXUP_PATTERN.match(subject) is not None


def is_merge_subject(subject: str) -> bool:
    first_line = subject.split("\n", 1)[0]
    return any(pattern.match(first_line) for pattern in MERGE_PATTERNS)


def segment_message(message: str) -> MessageSegments:
    """Segment ``message`` into subject, body, footer and attributes.

    Never raises; garbage in yields a best-effort segmentation.
    """
    lines = strip_comments(message).splitlines()
    spans = paragraph_spans(lines)

    def text(start: int, stop: int) -> str:
        return "\n".join(lines[start:stop])

    # Leading whitespace-only paragraphs never form the subject
    while spans and not text(*spans[0]).strip():
        spans.pop(0)

    footer: Optional[Dict[str, str]] = None
    if len(spans) > 1 and is_trailer_paragraph(text(*spans[-1])):
        footer = parse_trailers(text(*spans.pop()))

    subject = text(*spans[0]).strip() if spans else ""

    # Body keeps the blank lines between its paragraphs as written.
    body: Optional[str] = None
    if len(spans) > 1:
        body = text(spans[1][0], spans[-1][1]).strip() or None

    logger.debug(
        "Segmented message: %d paragraph(s), body=%s, footer keys=%s",
        len(spans),
        body is not None,
        list(footer) if footer else [],
    )

    return MessageSegments(
        subject=subject,
        body=body,
        footer=footer,
        is_fixup=is_fixup_subject(subject),
        is_merge=is_merge_subject(subject),
    )

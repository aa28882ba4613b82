"""Diagnostic model produced by the conventional commit rules."""

from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel


class DiagnosticSeverity(str, Enum):
    """Severity of a diagnostic."""

    ERROR = "error"
    WARNING = "warning"


class FixItHint(BaseModel):
    """Span (1-based column and length) on the diagnostic line to edit."""

    index: int
    length: int = 1

    model_config = {"frozen": True}


class Diagnostic(BaseModel):
    """A single rule violation, positioned within the commit message."""

    severity: DiagnosticSeverity
    source_id: str
    rule_id: str
    text: str
    line: int = 1
    column: int = 1
    context_lines: Tuple[str, ...] = ()
    fix_it: Optional[FixItHint] = None
    highlights: Tuple[str, ...] = ()

    model_config = {"frozen": True}

    @property
    def is_error(self) -> bool:
        return self.severity == DiagnosticSeverity.ERROR

    @property
    def context_line(self) -> Optional[str]:
        """Message line the diagnostic points at, if known."""
        if 0 < self.line <= len(self.context_lines):
            return self.context_lines[self.line - 1]
        return None

    def caret(self) -> str:
        """Marker line pointing at the fix-it span, e.g. ``    ^~~``."""
        index = self.fix_it.index if self.fix_it else self.column
        length = self.fix_it.length if self.fix_it else 1
        return " " * (index - 1) + "^" + "~" * (max(length, 1) - 1)

    def to_dict(self) -> dict:
        return self.model_dump(mode="json")

    def __str__(self) -> str:
        lines: List[str] = [
            f"{self.source_id}:{self.line}:{self.column}: "
            f"{self.severity.value}: {self.text}"
        ]
        context = self.context_line
        if context is not None:
            lines.append(context)
            lines.append(self.caret())
        return "\n".join(lines)

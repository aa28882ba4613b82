"""Conventional Commits requirements.

Each requirement checks one rule of the Conventional Commits
specification (CC-xx), an organization specific extension (EC-xx) or
emits an informational warning (WA-xx). Requirements are pure: they read
the extracted fields, the commit and the options and return diagnostics.

See https://www.conventionalcommits.org/en/v1.0.0/
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, List, NamedTuple, Optional, Sequence, Tuple, Union

from commit_it.core.fields import ConventionalCommitFields
from commit_it.core.segmenter import BREAKING_CHANGE_KEYS, match_trailer
from commit_it.models.commit import Commit
from commit_it.models.diagnostic import Diagnostic, DiagnosticSeverity, FixItHint
from commit_it.models.options import ConventionalCommitOptions

logger = logging.getLogger(__name__)

BREAKING_CHANGE_LINE = re.compile(r"^(?P<key>BREAKING[ -]CHANGE)(?=:| #)", re.IGNORECASE)

NOUN_PATTERN = re.compile(r"[A-Za-z-]*")


class RuleResult(NamedTuple):
    """Diagnostics of a single requirement and its rendered description."""

    diagnostics: List[Diagnostic]
    description: str


CheckFunction = Callable[
    ["Requirement", ConventionalCommitFields, Commit, ConventionalCommitOptions],
    RuleResult,
]


@dataclass(frozen=True)
class Requirement:
    """A single validation rule."""

    id: str
    description: str
    check: CheckFunction

    def validate(
        self,
        fields: ConventionalCommitFields,
        commit: Commit,
        options: Optional[ConventionalCommitOptions] = None,
    ) -> RuleResult:
        return self.check(self, fields, commit, options or ConventionalCommitOptions())


def is_noun(value: str) -> bool:
    """A single word made of letters (hyphenated compounds allowed)."""
    # Hyphens are accepted so that scopes such as deps-dev are nouns
    return NOUN_PATTERN.fullmatch(value.strip()) is not None


def context_lines(commit: Commit) -> Tuple[str, ...]:
    """Subject and body lines, numbered the way diagnostics address them."""
    lines = commit.subject.split("\n")
    if commit.body is not None:
        lines += [""] + commit.body.split("\n")
    return tuple(lines)


def create_diagnostic(
    rule: Requirement,
    commit: Commit,
    text: str,
    highlights: Union[str, Sequence[str]],
    *,
    column: int,
    length: int,
    line: int = 1,
    lines: Optional[Tuple[str, ...]] = None,
    severity: DiagnosticSeverity = DiagnosticSeverity.ERROR,
) -> Diagnostic:
    if isinstance(highlights, str):
        highlights = [highlights]
    return Diagnostic(
        severity=severity,
        source_id=commit.hash,
        rule_id=rule.id,
        text=text,
        line=line,
        column=column,
        context_lines=lines if lines is not None else context_lines(commit),
        fix_it=FixItHint(index=column, length=max(length, 1)),
        highlights=tuple(highlights),
    )


def field_diagnostic(
    rule: Requirement,
    fields: ConventionalCommitFields,
    commit: Commit,
    text: str,
    highlights: Union[str, Sequence[str]],
    name: str,
    whitespace: bool = False,
    severity: DiagnosticSeverity = DiagnosticSeverity.ERROR,
) -> Diagnostic:
    """Diagnostic on the subject line, pointing at field ``name``.

    With ``whitespace`` the diagnostic points at the gap between the
    preceding field's text and field ``name`` instead.
    """
    field = getattr(fields, name)
    column = field.offset
    length = len(field.value.rstrip()) if field.value is not None else 1

    if whitespace:
        previous = fields.preceding(name)
        if previous is None:
            column, length = 1, 1
        else:
            column = previous.offset + len(previous.value.rstrip())
            length = previous.trailing_whitespace

    return create_diagnostic(
        rule,
        commit,
        text,
        highlights,
        column=column,
        length=length,
        severity=severity,
    )


def _check_type_and_spacing(rule, fields, commit, options) -> RuleResult:
    """CC-01: noun type, single spacing and a terminal colon."""
    errors: List[Diagnostic] = []

    def error(highlights, name, whitespace=False):
        errors.append(
            field_diagnostic(rule, fields, commit, rule.description, highlights, name, whitespace)
        )

    type_value = fields.type.value or ""
    # Missing types are reported by EC-02
    if type_value.strip():
        if not is_noun(type_value):
            error("which consists of a noun", "type")

        if type_value.strip() != type_value:
            if fields.scope.present:
                error("followed by the OPTIONAL scope", "scope", whitespace=True)
            elif fields.breaking.present:
                error(["followed by the", "OPTIONAL !"], "breaking", whitespace=True)
            else:
                error(["followed by the", "REQUIRED terminal colon"], "separator", whitespace=True)

        if fields.scope.present and fields.scope.trailing_whitespace:
            if fields.breaking.present:
                error(["followed by the", "OPTIONAL !"], "breaking", whitespace=True)
            else:
                error(["followed by the", "REQUIRED terminal colon"], "separator", whitespace=True)

        if fields.breaking.present and fields.breaking.trailing_whitespace:
            error(["followed by the", "REQUIRED terminal colon"], "separator", whitespace=True)

    if not fields.separator.present:
        error(["followed by the", "REQUIRED terminal colon"], "separator")

    return RuleResult(errors, rule.description)


def _scope_content(value: str) -> str:
    value = value.rstrip()
    return value[1:-1]


def _check_scope_noun(rule, fields, commit, options) -> RuleResult:
    """CC-04: a scope is a noun surrounded by parenthesis."""
    if not fields.scope.present:
        return RuleResult([], rule.description)

    content = _scope_content(fields.scope.value)
    if content.strip() and is_noun(content):
        return RuleResult([], rule.description)

    return RuleResult(
        [field_diagnostic(rule, fields, commit, rule.description, "A scope MUST consist of a noun", "scope")],
        rule.description,
    )


def _check_description(rule, fields, commit, options) -> RuleResult:
    """CC-05: exactly one space between the colon and the description."""
    if not fields.separator.present:
        return RuleResult([], rule.description)

    if fields.description.present and fields.separator.trailing_whitespace == 1:
        return RuleResult([], rule.description)

    return RuleResult(
        [
            field_diagnostic(
                rule,
                fields,
                commit,
                rule.description,
                "A description MUST immediately follow the colon and space",
                "description",
                whitespace=True,
            )
        ],
        rule.description,
    )


def _check_body_separation(rule, fields, commit, options) -> RuleResult:
    """CC-06: the subject is a single line followed by a blank line."""
    subject_lines = commit.subject.split("\n")
    if len(subject_lines) < 2:
        return RuleResult([], rule.description)

    return RuleResult(
        [
            create_diagnostic(
                rule,
                commit,
                rule.description,
                "one blank line after the description",
                line=2,
                column=1,
                length=len(subject_lines[1]),
            )
        ],
        rule.description,
    )


def _check_breaking_change_case(rule, fields, commit, options) -> RuleResult:
    """CC-15: BREAKING CHANGE trailers are written in uppercase."""
    errors: List[Diagnostic] = []
    raw_lines = tuple(commit.raw.splitlines())
    for number, line in enumerate(raw_lines, start=1):
        match = BREAKING_CHANGE_LINE.match(line)
        if match is None or match.group("key") in BREAKING_CHANGE_KEYS:
            continue
        errors.append(
            create_diagnostic(
                rule,
                commit,
                rule.description,
                "with the exception of BREAKING CHANGE which MUST be uppercase",
                line=number,
                column=1,
                length=len(match.group("key")),
                lines=raw_lines,
            )
        )
    return RuleResult(errors, rule.description)


def _check_configured_scopes(rule, fields, commit, options) -> RuleResult:
    """EC-01: the scope is one of the configured scopes."""
    values = ", ".join(options.scopes) or "..."
    description = rule.description.format(values=values)

    if not options.scopes or not fields.scope.present:
        return RuleResult([], description)

    scope = fields.scope.value.strip().strip("()").strip()
    if scope in options.scopes:
        return RuleResult([], description)

    return RuleResult(
        [
            field_diagnostic(
                rule,
                fields,
                commit,
                description,
                ["A scope MUST consist of", f"({values})"],
                "scope",
            )
        ],
        description,
    )


def _check_configured_types(rule, fields, commit, options) -> RuleResult:
    """EC-02: the type is feat, fix or one of the configured types.

    Unknown types are errors when custom types are configured and
    warnings otherwise. A missing type is always an error.
    """
    allowed = options.allowed_types
    values = ", ".join(allowed)
    description = rule.description.format(values=values)

    type_value = fields.type.value or ""
    if not type_value.strip():
        return RuleResult(
            [field_diagnostic(rule, fields, commit, description, "prefixed with a type", "type")],
            description,
        )

    # Malformed types are reported by CC-01
    if not is_noun(type_value) or type_value.strip().lower() in {t.lower() for t in allowed}:
        return RuleResult([], description)

    severity = (
        DiagnosticSeverity.ERROR if options.has_custom_types else DiagnosticSeverity.WARNING
    )
    return RuleResult(
        [
            field_diagnostic(
                rule,
                fields,
                commit,
                description,
                ["prefixed with a type, which consists of", f"({values})"],
                "type",
                severity=severity,
            )
        ],
        description,
    )


def _check_trailers_in_body(rule, fields, commit, options) -> RuleResult:
    """WA-01: breaking change trailers outside of the footer are ignored."""
    if commit.body is None:
        return RuleResult([], rule.description)

    warnings: List[Diagnostic] = []
    first_body_line = len(commit.subject.split("\n")) + 2
    for index, line in enumerate(commit.body.split("\n")):
        match = match_trailer(line)
        if match is None:
            continue
        key = match.group("key") or match.group("ref_key")
        if key.upper() not in BREAKING_CHANGE_KEYS:
            continue
        warnings.append(
            create_diagnostic(
                rule,
                commit,
                rule.description,
                "git-trailer has been found in the body",
                line=first_body_line + index,
                column=1,
                length=len(key),
                severity=DiagnosticSeverity.WARNING,
            )
        )
    return RuleResult(warnings, rule.description)


COMMIT_RULES: Tuple[Requirement, ...] = (
    Requirement(
        id="CC-01",
        description=(
            "Commits MUST be prefixed with a type, which consists of a noun, feat, fix, etc., "
            "followed by the OPTIONAL scope, OPTIONAL !, and REQUIRED terminal colon and space."
        ),
        check=_check_type_and_spacing,
    ),
    Requirement(
        id="CC-04",
        description=(
            "A scope MAY be provided after a type. A scope MUST consist of a noun describing "
            "a section of the codebase surrounded by parenthesis, e.g., fix(parser):"
        ),
        check=_check_scope_noun,
    ),
    Requirement(
        id="CC-05",
        description=(
            "A description MUST immediately follow the colon and space after the type/scope "
            "prefix. The description is a short summary of the code changes, e.g., fix: array "
            "parsing issue when multiple spaces were contained in string."
        ),
        check=_check_description,
    ),
    Requirement(
        id="CC-06",
        description="The body MUST begin one blank line after the description.",
        check=_check_body_separation,
    ),
    Requirement(
        id="CC-15",
        description=(
            "The units of information that make up Conventional Commits MUST NOT be treated as "
            "case sensitive by implementors, with the exception of BREAKING CHANGE which MUST "
            "be uppercase."
        ),
        check=_check_breaking_change_case,
    ),
    Requirement(
        id="EC-01",
        description=(
            "A scope MAY be provided after a type. A scope MUST consist of one of the "
            "configured values ({values}) surrounded by parenthesis"
        ),
        check=_check_configured_scopes,
    ),
    Requirement(
        id="EC-02",
        description=(
            "Commits MUST be prefixed with a type, which consists of one of the configured "
            "values ({values})."
        ),
        check=_check_configured_types,
    ),
    Requirement(
        id="WA-01",
        description=(
            "A git-trailer has been found in the body of the commit message and will be "
            "ignored as it MUST be included in the footer."
        ),
        check=_check_trailers_in_body,
    ),
)


def validate(
    fields: ConventionalCommitFields,
    commit: Commit,
    options: Optional[ConventionalCommitOptions] = None,
) -> List[Diagnostic]:
    """Run every requirement in order and collect all diagnostics."""
    diagnostics: List[Diagnostic] = []
    for rule in COMMIT_RULES:
        result = rule.validate(fields, commit, options)
        diagnostics.extend(result.diagnostics)
    logger.debug("Validated %s: %d diagnostic(s)", commit.hash, len(diagnostics))
    return diagnostics

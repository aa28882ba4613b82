"""Tests for the Conventional Commits requirements."""

import pytest

from commit_it.core.fields import extract_fields
from commit_it.core.requirements import COMMIT_RULES, is_noun, validate
from commit_it.models import Commit, ConventionalCommit, ConventionalCommitOptions
from commit_it.models.diagnostic import DiagnosticSeverity

CC01 = (
    "Commits MUST be prefixed with a type, which consists of a noun, feat, fix, etc., "
    "followed by the OPTIONAL scope, OPTIONAL !, and REQUIRED terminal colon and space."
)
CC04 = (
    "A scope MAY be provided after a type. A scope MUST consist of a noun describing a "
    "section of the codebase surrounded by parenthesis, e.g., fix(parser):"
)
CC05 = (
    "A description MUST immediately follow the colon and space after the type/scope prefix. "
    "The description is a short summary of the code changes, e.g., fix: array parsing issue "
    "when multiple spaces were contained in string."
)
CC06 = "The body MUST begin one blank line after the description"
CC15 = (
    "The units of information that make up Conventional Commits MUST NOT be treated as case "
    "sensitive by implementors, with the exception of BREAKING CHANGE which MUST be uppercase."
)


def assert_error(message, expected, options=None):
    """Validate ``message`` and assert an error containing ``expected``."""
    commit = ConventionalCommit.from_string(hash="1234567890", message=message, options=options)

    assert not commit.is_valid, f"Expected error '{expected}', but commit is valid"
    texts = [error.text for error in commit.errors]
    assert any(expected in text for text in texts), f"'{expected}' not found in {texts}"


def diagnostics_for(message, options=None):
    commit = Commit.from_string(hash="1234567890", message=message)
    return validate(extract_fields(commit.subject), commit, options)


def test_rule_order():
    assert [rule.id for rule in COMMIT_RULES] == [
        "CC-01",
        "CC-04",
        "CC-05",
        "CC-06",
        "CC-15",
        "EC-01",
        "EC-02",
        "WA-01",
    ]


@pytest.mark.parametrize(
    "message",
    [
        "feat : additional space",
        "feat foot(scope)!: whatabout a noun",
        "feat123(scope)!: numbers arent nouns",
        "feat?#(scope): special characters arent nouns",
        "feat missing semicolon",
        "feat (scope): space between type and scope",
        "feat(scope) : space between scope and semicolon",
        "feat !: space between type and breaking change",
        "feat! : space between breaking change and semicolon",
        "feat foot (scope) ! :incorrect spaces everywhere",
        "feat  foot  (scope) ! :   incorrect spaces everywhere, part Deux",
    ],
)
def test_cc01(message):
    assert_error(message, CC01)


@pytest.mark.parametrize(
    "message",
    [
        "feat(): empty scope",
        "feat(a noun): scope with spacing",
        "feat(1234): numbers arent nouns",
        "feat(?!): special characters arent nouns",
        "feat (?!) : special characters arent nouns",
    ],
)
def test_cc04(message):
    assert_error(message, CC04)


@pytest.mark.parametrize(
    "message",
    [
        "feat:",
        "feat: ",
        "feat:    ",
        "feat:   too many spaces after terminal colon",
        "feat:missing space after semicolon",
        "feat foot (scope) ! :incorrect spaces everywhere",
    ],
)
def test_cc05(message):
    assert_error(message, CC05)


@pytest.mark.parametrize(
    "message",
    [
        "feat: add new feature\nLine 1",
        "feat: add new feature\nLine 1\nLine 2",
        "feat: add new feature\nLine 1\n\nBody",
    ],
)
def test_cc06(message):
    assert_error(message, CC06)


@pytest.mark.parametrize(
    "message",
    [
        "feat: add new feature\n\nBreAking-ChaNGe: This is incorrectly formatted!",
        "feat: add new feature\n\nbreaking change: This is incorrectly formatted!",
        "feat: add new feature\n\nbreaking-change: This is incorrectly formatted!",
    ],
)
def test_cc15(message):
    assert_error(message, CC15)


@pytest.mark.parametrize(
    "message",
    [
        "feat(wrong): unknown scope",
        "feat (wrong): spacing as prefix",
        "feat(wrong) : spacing as suffix",
        "feat ( wrong ) : spacing everywhere",
    ],
)
def test_ec01(message):
    assert_error(
        message,
        "A scope MAY be provided after a type. A scope MUST consist of one of the configured "
        "values (action, cli) surrounded by parenthesis",
        ConventionalCommitOptions(scopes=["action", "action", "cli", "cli"]),
    )


@pytest.mark.parametrize(
    "message",
    [
        "chore: unknown type",
        "docs(scope)!: unknown type",
        "(scope): missing type",
        ": missing type",
        "!: missing type",
        " !: missing type",
    ],
)
def test_ec02(message):
    assert_error(
        message,
        "Commits MUST be prefixed with a type, which consists of one of the configured values "
        "(feat, fix, build, perf)",
        ConventionalCommitOptions(
            scopes=["scope"], types=["feat", "build", "build", "perf", "perf", "fix"]
        ),
    )


def test_ec02_unknown_type_is_warning_without_custom_types():
    commit = ConventionalCommit.from_string(hash="01ab2cd3", message="chore: tidy up")

    assert commit.is_valid
    assert [w.rule_id for w in commit.warnings] == ["EC-02"]
    assert "(feat, fix)" in commit.warnings[0].text


def test_ec02_missing_type_is_always_an_error():
    commit = ConventionalCommit.from_string(hash="01ab2cd3", message=": missing type")

    assert [e.rule_id for e in commit.errors] == ["EC-02"]


def test_ec02_does_not_duplicate_cc01():
    diagnostics = diagnostics_for("no noun: wrong type")

    assert [d.rule_id for d in diagnostics] == ["CC-01"]


@pytest.mark.parametrize(
    "message",
    [
        "feat: add a new feature\n\nBREAKING CHANGE: this is a breaking change\n\nImplements #123",
        "feat: add a new feature\n\nBREAKING-CHANGE: this is a breaking change\n\nImplements #123",
        "feat: add a new feature\nwith a subject spanning multiple lines\n\n"
        "BREAKING-CHANGE: this is a breaking change\n\nImplements #123",
        "feat: add a new feature\nwith a subject spanning multiple lines\n\n"
        "Lets add more lines in the body,\njust because we can\n\n"
        "co-authored-by: Bob the Builder\nBREAKING-CHANGE: this is a breaking change\n"
        " spanning two lines\n\nImplements #123!",
    ],
)
def test_wa01(message):
    commit = ConventionalCommit.from_string(hash="1234567890", message=message)

    assert len(commit.warnings) == 1
    assert commit.warnings[0].rule_id == "WA-01"
    assert (
        "git-trailer has been found in the body of the commit message and will be ignored "
        "as it MUST be included in the footer."
    ) in commit.warnings[0].text


def test_diagnostic_points_at_type():
    (diagnostic,) = diagnostics_for("feat123: numbers arent nouns")

    assert diagnostic.rule_id == "CC-01"
    assert diagnostic.line == 1
    assert diagnostic.column == 1
    assert diagnostic.fix_it.index == 1
    assert diagnostic.fix_it.length == 7
    assert diagnostic.highlights == ("which consists of a noun",)


def test_whitespace_diagnostic_points_at_gap():
    """Test that spacing errors point at the whitespace, not the field."""
    (diagnostic,) = diagnostics_for("feat  : additional spaces")

    assert diagnostic.rule_id == "CC-01"
    assert diagnostic.column == 5
    assert diagnostic.fix_it.length == 2


def test_missing_space_after_separator_points_at_gap():
    (diagnostic,) = diagnostics_for("feat:missing space")

    assert diagnostic.rule_id == "CC-05"
    assert diagnostic.column == 6
    assert diagnostic.fix_it.length == 1


def test_missing_separator_position():
    (diagnostic,) = diagnostics_for("feat")

    assert diagnostic.rule_id == "CC-01"
    assert diagnostic.column == 5
    assert diagnostic.highlights == ("followed by the", "REQUIRED terminal colon")


def test_cc06_fix_it_removes_second_line():
    (diagnostic,) = diagnostics_for("feat: add new feature\nLine 1\n\nBody")

    assert diagnostic.rule_id == "CC-06"
    assert diagnostic.line == 2
    assert diagnostic.context_line == "Line 1"
    assert diagnostic.fix_it.index == 1
    assert diagnostic.fix_it.length == len("Line 1")


def test_cc15_points_at_raw_line():
    (diagnostic,) = diagnostics_for("feat: add new feature\n\nbreaking change: lowercase")

    assert diagnostic.rule_id == "CC-15"
    assert diagnostic.line == 3
    assert diagnostic.context_line == "breaking change: lowercase"
    assert diagnostic.fix_it.length == len("breaking change")


def test_wa01_line_number():
    diagnostics = diagnostics_for(
        "feat: x\n\nSome text\nBREAKING CHANGE: in body\n\nRefs #1"
    )
    (warning,) = [d for d in diagnostics if d.rule_id == "WA-01"]

    assert warning.severity == DiagnosticSeverity.WARNING
    assert warning.line == 4
    assert warning.context_line == "BREAKING CHANGE: in body"


def test_rules_are_pure():
    """Test that validating twice yields identical diagnostics."""
    options = ConventionalCommitOptions(scopes=["cli"], types=["docs"])
    commit = Commit.from_string(hash="01ab2cd3", message="chore(api) : Something\nextra")
    fields = extract_fields(commit.subject)

    assert validate(fields, commit, options) == validate(fields, commit, options)


def test_rule_descriptions_render_per_call():
    commit = Commit.from_string(hash="01ab2cd3", message="feat(x): y")
    fields = extract_fields(commit.subject)
    ec02 = COMMIT_RULES[6]

    first = ec02.validate(fields, commit, ConventionalCommitOptions(types=["docs"]))
    second = ec02.validate(fields, commit, ConventionalCommitOptions())

    assert "(feat, fix, docs)" in first.description
    assert "(feat, fix)" in second.description
    assert ec02.description.endswith("values ({values}).")


@pytest.mark.parametrize(
    "value, expected",
    [
        ("feat", True),
        ("FEAT", True),
        ("deps-dev", True),
        ("feat ", True),
        ("a noun", False),
        ("feat123", False),
        ("no-noun!", False),
    ],
)
def test_is_noun(value, expected):
    assert is_noun(value) is expected

"""Rich rendering of diagnostics and validation results."""

from typing import Iterable

from rich.console import Console
from rich.text import Text

from commit_it.models.conventional_commit import ConventionalCommit
from commit_it.models.diagnostic import Diagnostic, DiagnosticSeverity

SEVERITY_STYLES = {
    DiagnosticSeverity.ERROR: "bold red",
    DiagnosticSeverity.WARNING: "bold yellow",
}


def diagnostic_text(diagnostic: Diagnostic) -> Text:
    """Compiler style rendering with highlighted substrings and a caret."""
    text = Text()
    text.append(
        f"{diagnostic.source_id}:{diagnostic.line}:{diagnostic.column}: ", style="bold"
    )
    text.append(
        f"{diagnostic.severity.value}: ", style=SEVERITY_STYLES[diagnostic.severity]
    )

    message = Text(diagnostic.text)
    for highlight in diagnostic.highlights:
        message.highlight_words([highlight], style="cyan")
    text.append_text(message)
    text.append(f" [{diagnostic.rule_id}]", style="dim")

    context = diagnostic.context_line
    if context is not None:
        text.append("\n")
        text.append(context)
        text.append("\n")
        text.append(diagnostic.caret(), style="green")
    return text


def render_diagnostics(console: Console, diagnostics: Iterable[Diagnostic]) -> None:
    for diagnostic in diagnostics:
        console.print(diagnostic_text(diagnostic), highlight=False)
        console.print()


def render_result(console: Console, commit: ConventionalCommit) -> None:
    """Print the outcome of validating ``commit``."""
    short_hash = commit.hash[:8]
    first_line = commit.subject.split("\n", 1)[0]
    if commit.is_valid:
        console.print(Text.assemble(("✅ ", "green"), (f"{short_hash} ", "bold"), first_line))
    else:
        console.print(
            Text.assemble(
                ("❌ ", "red"),
                (f"{short_hash} ", "bold"),
                (f"is not a valid Conventional Commit ({len(commit.errors)} error(s))", "red"),
            )
        )
    render_diagnostics(console, commit.errors)
    render_diagnostics(console, commit.warnings)

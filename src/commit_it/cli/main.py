"""Main CLI interface for commit-it."""

import json
import logging
import sys
from pathlib import Path
from typing import List, NoReturn, Optional, Tuple

import click
from rich.console import Console
from rich.logging import RichHandler

from commit_it.cli.render import render_result
from commit_it.cli.setup_hooks import install_commit_msg_hook
from commit_it.core.config import find_config_file, load_options, merge_options
from commit_it.errors import CommitItError
from commit_it.models.conventional_commit import ConventionalCommit

console = Console()
error_console = Console(stderr=True)

EXIT_INVALID = 1
EXIT_ERROR = 2


def configure_logging(verbose: bool) -> None:
    """Route library logging through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_path=False)],
        force=True,
    )


def fail(error: Exception) -> NoReturn:
    """Print ``error`` and exit with the structural error code."""
    error_console.print(f"[red]Error: {error}[/red]", highlight=False)
    sys.exit(EXIT_ERROR)


@click.group()
@click.version_option(package_name="commit-it")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def main(verbose: bool):
    """commit-it - Conventional Commits validation."""
    configure_logging(verbose)


@main.command()
@click.argument("hashes", nargs=-1)
@click.option("--message", "-m", help="Validate this commit message instead of a hash")
@click.option(
    "--file",
    "message_file",
    type=click.Path(exists=True, dir_okay=False),
    help="Validate the message stored in this file (commit-msg hook)",
)
@click.option(
    "--repo",
    "repo_path",
    type=click.Path(file_okay=False),
    default=".",
    help="Path to the git repository",
)
@click.option("--scope", "scopes", multiple=True, help="Allowed scope (repeatable)")
@click.option("--type", "types", multiple=True, help="Allowed type besides feat and fix (repeatable)")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Options file (defaults to .commit-it.json in the repository)",
)
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON")
def check(
    hashes: Tuple[str, ...],
    message: Optional[str],
    message_file: Optional[str],
    repo_path: str,
    scopes: Tuple[str, ...],
    types: Tuple[str, ...],
    config_path: Optional[str],
    as_json: bool,
):
    """Validate commits against the Conventional Commits specification."""
    root_path = Path(repo_path).resolve()

    if message is None and message_file is None and not hashes:
        hashes = ("HEAD",)

    try:
        config_file = Path(config_path) if config_path else find_config_file(root_path)
        options = merge_options(load_options(config_file), scopes, types)

        commits: List[ConventionalCommit] = []
        if message is not None:
            commits.append(
                ConventionalCommit.from_string(hash="message", message=message, options=options)
            )
        if message_file is not None:
            text = Path(message_file).read_text(encoding="utf-8")
            commits.append(
                ConventionalCommit.from_string(hash=message_file, message=text, options=options)
            )
        for commit_hash in hashes:
            commits.append(ConventionalCommit.from_hash(commit_hash, root_path, options))
    except CommitItError as e:
        fail(e)

    if as_json:
        click.echo(json.dumps([c.to_dict() for c in commits], indent=2))
    else:
        for commit in commits:
            render_result(console, commit)

    if not all(commit.is_valid for commit in commits):
        sys.exit(EXIT_INVALID)


@main.command(name="install-hook")
@click.option(
    "--repo",
    "repo_path",
    type=click.Path(exists=True, file_okay=False),
    default=".",
    help="Path to the git repository",
)
@click.option("--force", is_flag=True, help="Replace an existing commit-msg hook")
def install_hook(repo_path: str, force: bool):
    """Install a commit-msg hook running 'commit-it check'."""
    try:
        hook_file = install_commit_msg_hook(Path(repo_path).resolve(), force=force)
    except (CommitItError, FileExistsError) as e:
        fail(e)
    console.print(f"[green]✅ Installed commit-msg hook in {hook_file}[/green]")


if __name__ == "__main__":
    main()

"""Install a git commit-msg hook that validates new commit messages."""

import stat
import sys
from pathlib import Path
from typing import Union

from commit_it.core.repository import CommitRepository

HOOK_NAME = "commit-msg"
HOOK_MARKER = "# Installed by commit-it"


def get_hooks_dir(root_path: Union[str, Path]) -> Path:
    """Get the hooks directory of the repository at ``root_path``."""
    repo = CommitRepository(root_path).repo
    return Path(repo.git_dir) / "hooks"


def create_hook_script() -> str:
    """Create the commit-msg hook script for the current interpreter."""
    return (
        "#!/bin/sh\n"
        f"{HOOK_MARKER}\n"
        f'exec "{sys.executable}" -m commit_it check --file "$1"\n'
    )


def is_commit_it_hook(hook_file: Path) -> bool:
    return hook_file.exists() and HOOK_MARKER in hook_file.read_text(errors="replace")


def install_commit_msg_hook(root_path: Union[str, Path], force: bool = False) -> Path:
    """Write the commit-msg hook and make it executable.

    An existing hook that was not written by commit-it is only replaced
    when ``force`` is set.
    """
    hooks_dir = get_hooks_dir(root_path)
    hooks_dir.mkdir(parents=True, exist_ok=True)

    hook_file = hooks_dir / HOOK_NAME
    if hook_file.exists() and not force and not is_commit_it_hook(hook_file):
        raise FileExistsError(
            f"{hook_file} already exists. Use --force to replace it."
        )

    hook_file.write_text(create_hook_script())
    hook_file.chmod(hook_file.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return hook_file

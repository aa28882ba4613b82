"""Shared fixtures."""

import tempfile
from pathlib import Path

import pytest
from git import Actor, Repo

AUTHOR = Actor("Jane Doe", "jane@example.com")
COMMITTER = Actor("Test User", "test@example.com")
# 2023-06-16 12:28:58 UTC, recorded with a +0200 offset
COMMIT_DATE = "1686918538 +0200"


def commit_file(repo: Repo, name: str, content: str, message: str) -> str:
    """Write ``name``, commit it and return the new commit's hash."""
    path = Path(repo.working_tree_dir) / name
    path.write_text(content)
    repo.index.add([name])
    commit = repo.index.commit(
        message,
        author=AUTHOR,
        committer=COMMITTER,
        author_date=COMMIT_DATE,
        commit_date=COMMIT_DATE,
    )
    return commit.hexsha


@pytest.fixture
def temp_git_project():
    """Create a temporary git project with two commits."""
    with tempfile.TemporaryDirectory() as temp_dir:
        project_path = Path(temp_dir)

        repo = Repo.init(project_path)
        with repo.config_writer() as config:
            config.set_value("user", "name", "Test User")
            config.set_value("user", "email", "test@example.com")

        commit_file(repo, "main.py", "def main():\n    pass\n", "chore: initial commit")
        commit_file(
            repo,
            "utils.py",
            "def helper():\n    return 42\n",
            "feat(utils): add helper\n\nReturns the answer.\n\nRefs #42\n",
        )

        yield project_path
        repo.close()


@pytest.fixture
def temp_dir():
    """Create a temporary directory that is not a git repository."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)

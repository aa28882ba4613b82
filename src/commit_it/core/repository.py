"""Reads commit messages from a local git repository."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

import git
from git import Repo

from commit_it.errors import CommitNotFoundError, InvalidRepositoryError
from commit_it.models.contributor import Contributor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawCommit:
    """Unparsed commit message and its contributors."""

    hash: str
    raw: str
    author: Optional[Contributor] = None
    committer: Optional[Contributor] = None


def _contributor(actor: git.Actor, epoch: int) -> Contributor:
    name = f"{actor.name} <{actor.email}>" if actor.email else actor.name
    return Contributor(name=name, date=datetime.fromtimestamp(epoch, tz=timezone.utc))


class CommitRepository:
    """Read-only access to the commit objects of a git repository.

    Both loose objects and pack files are handled by GitPython.
    """

    def __init__(self, root_path: Union[str, Path]):
        self.root_path = Path(root_path)
        self._repo: Optional[Repo] = None

    @property
    def repo(self) -> Repo:
        """Get the git repository, opening it on first use."""
        if self._repo is None:
            try:
                self._repo = Repo(self.root_path)
            except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
                raise InvalidRepositoryError(self.root_path) from e
        return self._repo

    def fetch_raw_commit(self, commit_hash: str) -> RawCommit:
        """Return the raw message, author and committer of ``commit_hash``.

        Raises:
            InvalidRepositoryError: ``root_path`` is not a git repository
            CommitNotFoundError: no commit exists for ``commit_hash``
        """
        repo = self.repo
        logger.debug("Reading commit %s from %s", commit_hash, self.root_path)
        try:
            commit = repo.commit(commit_hash)
            message = commit.message
        except (git.exc.BadName, git.exc.BadObject, ValueError) as e:
            raise CommitNotFoundError(commit_hash) from e

        if isinstance(message, bytes):
            message = message.decode(commit.encoding or "utf-8", errors="replace")

        return RawCommit(
            hash=commit.hexsha,
            raw=message,
            author=_contributor(commit.author, commit.authored_date),
            committer=_contributor(commit.committer, commit.committed_date),
        )

"""Local git operations for the freshly generated project."""

from __future__ import annotations

import logging

from constants import Constants
from runner import CommandRunner, run_checked

logger = logging.getLogger(__name__)


class GitWorkspace:
    """Drives ``git`` in one working tree through a CommandRunner.

    Every failing command raises CommandError.
    """

    def __init__(self, runner: CommandRunner, path: str):
        self.runner = runner
        self.path = path

    def _git(self, *args: str) -> None:
        run_checked(self.runner, "git", list(args), self.path)

    def init(self, branch: str = Constants.DEFAULT_BRANCH) -> None:
        self._git("init", "-b", branch)

    def add_all(self) -> None:
        self._git("add", "-A")

    def commit(self, message: str = Constants.DEFAULT_COMMIT_MESSAGE) -> None:
        self._git("commit", "-m", message)

    def add_remote(self, url: str, name: str = Constants.DEFAULT_REMOTE_NAME) -> None:
        self._git("remote", "add", name, url)

    def push(self, branch: str = Constants.DEFAULT_BRANCH, remote: str = Constants.DEFAULT_REMOTE_NAME) -> None:
        self._git("push", "-u", remote, branch)

    def initial_commit(self, branch: str, message: str) -> None:
        """Initialize the repository and commit the whole tree."""
        logger.info("Creating initial commit on '%s'", branch)
        self.init(branch)
        self.add_all()
        self.commit(message)

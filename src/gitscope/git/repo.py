"""Repository discovery, current branch and upstream divergence."""

from __future__ import annotations

import logging
import os
from typing import Tuple

from gitscope.git.errors import CommandExecutionError, NotGitRepoError
from gitscope.git.runner import CommandRunner

logger = logging.getLogger(__name__)

DETACHED_HEAD = "HEAD"


class RepoLocator:
    """Resolves the repository root for any file or directory path."""

    def __init__(self, runner: CommandRunner) -> None:
        self._runner = runner

    def find_root(self, path: str) -> str:
        """Return the absolute repository root containing *path*.

        Raises NotGitRepoError for any failure; git's own message is only logged.
        """
        check_dir = path if os.path.isdir(path) else os.path.dirname(path)
        if not os.path.isdir(check_dir):
            raise NotGitRepoError(path)
        try:
            root = self._runner.run(check_dir, "rev-parse", "--show-toplevel")
        except CommandExecutionError as exc:
            logger.debug("repository lookup failed for %s: %s", path, exc)
            raise NotGitRepoError(path) from None
        if not root:
            raise NotGitRepoError(path)
        return os.path.normpath(root)

    def current_branch(self, repo_root: str) -> str:
        """Return the checked-out branch name, ``"HEAD"`` when detached, or ``""``.

        A branch with no commits yet has no resolvable HEAD, so its name is read
        from the symbolic ref instead.
        """
        try:
            return self._runner.run(repo_root, "rev-parse", "--abbrev-ref", "HEAD")
        except CommandExecutionError:
            pass
        try:
            branch = self._runner.run(repo_root, "symbolic-ref", "--short", "HEAD")
        except CommandExecutionError:
            logger.debug("no current branch in %s", repo_root)
            return ""
        logger.debug("unborn branch %s in %s", branch, repo_root)
        return branch

    def has_commits(self, repo_root: str) -> bool:
        result = self._runner.execute(repo_root, ["rev-parse", "--verify", "--quiet", "HEAD"])
        return result.success


class AheadBehindCalculator:
    """Counts commits between a local branch and its remote-tracking branch."""

    def __init__(self, runner: CommandRunner, remote: str = "origin") -> None:
        self._runner = runner
        self.remote = remote

    def ahead_behind(self, repo_root: str, branch: str) -> Tuple[int, int]:
        """Return ``(ahead, behind)``; ``(0, 0)`` for no branch or a detached HEAD."""
        if not branch or branch == DETACHED_HEAD:
            return 0, 0
        upstream = f"{self.remote}/{branch}"
        ahead = self._count(repo_root, f"{upstream}..HEAD")
        behind = self._count(repo_root, f"HEAD..{upstream}")
        return ahead, behind

    def _count(self, repo_root: str, revision_range: str) -> int:
        try:
            out = self._runner.run(repo_root, "rev-list", "--count", revision_range)
        except CommandExecutionError as exc:
            logger.debug("rev-list %s failed: %s", revision_range, exc)
            return 0
        try:
            return max(int(out), 0)
        except ValueError:
            logger.debug("unexpected rev-list output for %s: %r", revision_range, out)
            return 0

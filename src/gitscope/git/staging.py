"""Stage / unstage mutations. Effects show up on the next status read."""

from __future__ import annotations

import logging
from typing import Optional

from gitscope.git.paths import relative_to_root, validate_path
from gitscope.git.repo import RepoLocator
from gitscope.git.runner import CommandRunner

logger = logging.getLogger(__name__)


class StagingOperations:
    """Adds paths to, and removes paths from, the index."""

    def __init__(self, runner: CommandRunner, locator: Optional[RepoLocator] = None) -> None:
        self._runner = runner
        self._locator = locator or RepoLocator(runner)

    def _resolve(self, repo_path: str, file_path: str) -> tuple[str, str]:
        validate_path(repo_path)
        validate_path(file_path)
        repo_root = self._locator.find_root(repo_path)
        return repo_root, relative_to_root(repo_root, file_path)

    def _root(self, repo_path: str) -> str:
        validate_path(repo_path)
        return self._locator.find_root(repo_path)

    def stage(self, repo_path: str, file_path: str) -> None:
        repo_root, rel_path = self._resolve(repo_path, file_path)
        self._runner.run(repo_root, "add", "--", rel_path)

    def unstage(self, repo_path: str, file_path: str) -> None:
        repo_root, rel_path = self._resolve(repo_path, file_path)
        if self._locator.has_commits(repo_root):
            self._runner.run(repo_root, "reset", "HEAD", "--", rel_path)
        else:
            # No HEAD to reset to: drop the path from the index instead
            logger.debug("unborn branch in %s, unstaging with rm --cached", repo_root)
            self._runner.run(
                repo_root, "rm", "--cached", "--quiet", "--ignore-unmatch", "--", rel_path
            )

    def stage_all(self, repo_path: str) -> None:
        repo_root = self._root(repo_path)
        self._runner.run(repo_root, "add", "-A")

    def unstage_all(self, repo_path: str) -> None:
        repo_root = self._root(repo_path)
        if self._locator.has_commits(repo_root):
            self._runner.run(repo_root, "reset", "HEAD")
        else:
            logger.debug("unborn branch in %s, unstaging with rm --cached", repo_root)
            self._runner.run(
                repo_root, "rm", "--cached", "-r", "--quiet", "--ignore-unmatch", "--", "."
            )

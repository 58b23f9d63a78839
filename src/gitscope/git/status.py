"""Directory status from porcelain v2 output, with a v1 fallback."""

from __future__ import annotations

import logging
from typing import Dict, Optional

from gitscope.git.errors import CommandExecutionError
from gitscope.git.models import DirectoryStatus, FileStatus
from gitscope.git.paths import validate_path
from gitscope.git.repo import AheadBehindCalculator, RepoLocator
from gitscope.git.runner import CommandRunner
from gitscope.git.status_parser import parse_porcelain_v1, parse_porcelain_v2

logger = logging.getLogger(__name__)

STATUS_V2_ARGS = ("status", "--porcelain=v2", "--untracked-files=all")
STATUS_V1_ARGS = ("status", "--porcelain")


class StatusReader:
    """Builds a DirectoryStatus for the repository containing a directory."""

    def __init__(
        self,
        runner: CommandRunner,
        locator: Optional[RepoLocator] = None,
        divergence: Optional[AheadBehindCalculator] = None,
    ) -> None:
        self._runner = runner
        self._locator = locator or RepoLocator(runner)
        self._divergence = divergence or AheadBehindCalculator(runner)

    def directory_status(self, dir_path: str) -> DirectoryStatus:
        """Return the status of every changed file in the repository.

        Raises PathError or NotGitRepoError before the root is known. After
        that it never fails: if no status output can be read, ``files`` is empty.
        """
        validate_path(dir_path)
        repo_root = self._locator.find_root(dir_path)
        branch = self._locator.current_branch(repo_root)
        ahead, behind = self._divergence.ahead_behind(repo_root, branch)

        return DirectoryStatus(
            repo_root=repo_root,
            branch=branch,
            files=self._read_files(repo_root),
            ahead=ahead,
            behind=behind,
        )

    def _read_files(self, repo_root: str) -> Dict[str, FileStatus]:
        try:
            output = self._runner.run_raw(repo_root, *STATUS_V2_ARGS)
        except CommandExecutionError as exc:
            logger.info("porcelain v2 status unavailable, falling back to v1: %s", exc)
        else:
            return parse_porcelain_v2(_decode(output), repo_root)

        try:
            output = self._runner.run_raw(repo_root, *STATUS_V1_ARGS)
        except CommandExecutionError as exc:
            logger.warning("git status failed in %s: %s", repo_root, exc)
            return {}
        return parse_porcelain_v1(_decode(output), repo_root)


def _decode(output: bytes) -> str:
    return output.decode("utf-8", errors="surrogateescape")

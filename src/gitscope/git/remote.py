"""Remote URL parsing and branch publishing."""

from __future__ import annotations

import logging
import re
from typing import Optional

from gitscope.git.errors import (
    CommandExecutionError,
    GitError,
    InvalidRemoteError,
    NoRemoteError,
)
from gitscope.git.models import RemoteInfo
from gitscope.git.paths import validate_path
from gitscope.git.repo import DETACHED_HEAD, RepoLocator
from gitscope.git.runner import CommandRunner

logger = logging.getLogger(__name__)

# Tried in order; first match wins
_HTTPS_RE = re.compile(r"^https?://([^/]+)/([^/]+)/([^/]+?)(?:\.git)?$")
_SSH_RE = re.compile(r"^git@([^:]+):([^/]+)/([^/]+?)(?:\.git)?$")
_SSH_URL_RE = re.compile(r"^ssh://git@([^/]+)/([^/]+)/([^/]+?)(?:\.git)?$")

_REMOTE_PATTERNS = (_HTTPS_RE, _SSH_RE, _SSH_URL_RE)


def parse_remote_url(url: str) -> RemoteInfo:
    """Split a remote URL into host, owner and repository name.

    Supported shapes::

        https://github.com/owner/repo(.git)
        git@github.com:owner/repo(.git)
        ssh://git@github.com/owner/repo(.git)
    """
    for pattern in _REMOTE_PATTERNS:
        m = pattern.match(url)
        if m:
            host, owner, repo = m.groups()
            return RemoteInfo(
                host=host,
                owner=owner,
                repo_name=repo.removesuffix(".git"),
                remote_url=url,
            )
    raise InvalidRemoteError(url)


class RemoteOperations:
    """Reads the configured remote and pushes the current branch to it."""

    def __init__(
        self,
        runner: CommandRunner,
        locator: Optional[RepoLocator] = None,
        remote: str = "origin",
    ) -> None:
        self._runner = runner
        self._locator = locator or RepoLocator(runner)
        self.remote = remote

    def remote_url(self, repo_path: str) -> str:
        validate_path(repo_path)
        repo_root = self._locator.find_root(repo_path)
        try:
            url = self._runner.run(repo_root, "config", "--get", f"remote.{self.remote}.url")
        except CommandExecutionError as exc:
            raise NoRemoteError(f"no remote {self.remote!r} configured in {repo_root}") from exc
        if not url:
            raise NoRemoteError(f"no remote {self.remote!r} configured in {repo_root}")
        return url

    def repo_info(self, repo_path: str) -> RemoteInfo:
        """Parse the remote URL of the repository containing *repo_path*."""
        return parse_remote_url(self.remote_url(repo_path))

    def push_current_branch(self, repo_path: str, *, set_upstream: bool = False) -> None:
        validate_path(repo_path)
        repo_root = self._locator.find_root(repo_path)
        branch = self._locator.current_branch(repo_root)
        if not branch or branch == DETACHED_HEAD:
            raise GitError(f"no branch checked out in {repo_root}; nothing to push")

        args = ["push", self.remote, branch]
        if set_upstream:
            args.insert(1, "-u")
        logger.info("pushing %s to %s", branch, self.remote)
        self._runner.run(repo_root, *args)

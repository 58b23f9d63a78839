"""Exception hierarchy for the git layer."""

from __future__ import annotations

from typing import Optional


class GitError(Exception):
    """Base class for every error raised by the git layer."""


class PathError(GitError):
    """Raised when a path is empty, relative, escapes its root, or holds a NUL byte."""


class NotGitRepoError(GitError):
    """Raised when a path is not inside a git repository."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Not a git repository: {path}")
        self.path = path


class CommandExecutionError(GitError):
    """Raised when git exits non-zero or cannot be spawned.

    Carries the sub-command name and the captured output for diagnostics.
    """

    def __init__(self, subcommand: str, output: str, returncode: Optional[int] = None) -> None:
        self.subcommand = subcommand
        self.output = output
        self.returncode = returncode
        if returncode is None:
            msg = f"git {subcommand} failed: {output}"
        else:
            msg = f"git {subcommand} failed (exit code {returncode})"
            if output:
                msg += f": {output}"
        super().__init__(msg)


class InvalidRemoteError(GitError):
    """Raised when a remote URL does not match any supported shape."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Could not parse remote URL: {url}")
        self.url = url


class NoRemoteError(GitError):
    """Raised when the repository has no URL configured for the remote."""

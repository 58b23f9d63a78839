"""GitClient — one entry point wiring every component to a shared runner."""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

from gitscope.git.diff import SNIFF_BYTES, DiffExtractor
from gitscope.git.models import DirectoryStatus, FileDiff, RemoteInfo
from gitscope.git.paths import validate_path
from gitscope.git.remote import RemoteOperations
from gitscope.git.repo import AheadBehindCalculator, RepoLocator
from gitscope.git.runner import CommandRunner
from gitscope.git.staging import StagingOperations
from gitscope.git.status import StatusReader


class GitClient:
    """Status, diff, staging and remote operations for any repository.

    Holds no per-repository state; every call resolves its repository from the
    paths it is given.
    """

    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        *,
        remote: str = "origin",
        extra_binary_extensions: Iterable[str] = (),
        sniff_bytes: int = SNIFF_BYTES,
    ) -> None:
        self.runner = runner or CommandRunner()
        self.locator = RepoLocator(self.runner)
        self.divergence = AheadBehindCalculator(self.runner, remote=remote)
        self.status_reader = StatusReader(self.runner, self.locator, self.divergence)
        self.diff_extractor = DiffExtractor(
            self.runner,
            self.locator,
            extra_binary_extensions=extra_binary_extensions,
            sniff_bytes=sniff_bytes,
        )
        self.staging = StagingOperations(self.runner, self.locator)
        self.remotes = RemoteOperations(self.runner, self.locator, remote=remote)

    # ---- queries ----

    def find_root(self, path: str) -> str:
        validate_path(path)
        return self.locator.find_root(path)

    def current_branch(self, repo_path: str) -> str:
        return self.locator.current_branch(self.find_root(repo_path))

    def ahead_behind(self, repo_path: str) -> Tuple[int, int]:
        repo_root = self.find_root(repo_path)
        return self.divergence.ahead_behind(repo_root, self.locator.current_branch(repo_root))

    def directory_status(self, dir_path: str) -> DirectoryStatus:
        return self.status_reader.directory_status(dir_path)

    def file_diff(self, repo_path: str, file_path: str, staged: bool = False) -> FileDiff:
        return self.diff_extractor.file_diff(repo_path, file_path, staged)

    def repo_info(self, repo_path: str) -> RemoteInfo:
        return self.remotes.repo_info(repo_path)

    # ---- mutations ----

    def stage_file(self, repo_path: str, file_path: str) -> None:
        self.staging.stage(repo_path, file_path)

    def unstage_file(self, repo_path: str, file_path: str) -> None:
        self.staging.unstage(repo_path, file_path)

    def stage_all(self, repo_path: str) -> None:
        self.staging.stage_all(repo_path)

    def unstage_all(self, repo_path: str) -> None:
        self.staging.unstage_all(repo_path)

    def push_current_branch(self, repo_path: str, *, set_upstream: bool = False) -> None:
        self.remotes.push_current_branch(repo_path, set_upstream=set_upstream)

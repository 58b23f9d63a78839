"""Single-file content extraction for side-by-side diffs, with binary detection."""

from __future__ import annotations

import logging
import os
from typing import FrozenSet, Iterable, Optional

from gitscope.git.errors import CommandExecutionError
from gitscope.git.models import FileDiff
from gitscope.git.paths import relative_to_root, validate_path
from gitscope.git.repo import RepoLocator
from gitscope.git.runner import CommandRunner

logger = logging.getLogger(__name__)

BINARY_EXTENSIONS: FrozenSet[str] = frozenset({
    # images
    ".png", ".jpg", ".jpeg", ".gif", ".ico",
    # documents / archives
    ".pdf", ".zip", ".tar", ".gz", ".7z",
    # executables / libraries
    ".exe", ".dll", ".so", ".dylib",
    # fonts
    ".woff", ".woff2", ".ttf", ".eot",
    # media
    ".mp3", ".mp4", ".avi", ".mov",
})

SNIFF_BYTES = 512


def _normalise_ext(ext: str) -> str:
    ext = ext.strip().lower()
    return ext if ext.startswith(".") else f".{ext}"


def is_binary_file(
    path: str,
    extensions: Iterable[str] = BINARY_EXTENSIONS,
    sniff_bytes: int = SNIFF_BYTES,
) -> bool:
    """Return True for block-listed extensions or a NUL byte near the start.

    An unreadable file is not considered binary.
    """
    if os.path.splitext(path)[1].lower() in extensions:
        return True
    try:
        with open(path, "rb") as f:
            head = f.read(sniff_bytes)
    except OSError:
        return False
    return b"\0" in head


class DiffExtractor:
    """Reads the two sides of a file's diff from commit, index or working tree.

    staged=True compares HEAD with the index; staged=False compares the index
    with the working tree.
    """

    def __init__(
        self,
        runner: CommandRunner,
        locator: Optional[RepoLocator] = None,
        *,
        extra_binary_extensions: Iterable[str] = (),
        sniff_bytes: int = SNIFF_BYTES,
    ) -> None:
        self._runner = runner
        self._locator = locator or RepoLocator(runner)
        self.binary_extensions = BINARY_EXTENSIONS | {
            _normalise_ext(e) for e in extra_binary_extensions if e.strip()
        }
        self.sniff_bytes = sniff_bytes

    def file_diff(self, repo_path: str, file_path: str, staged: bool) -> FileDiff:
        validate_path(repo_path)
        validate_path(file_path)
        repo_root = self._locator.find_root(repo_path)
        rel_path = relative_to_root(repo_root, file_path)

        if is_binary_file(file_path, self.binary_extensions, self.sniff_bytes):
            return FileDiff.binary(file_path)

        if staged:
            original = self._show(repo_root, f"HEAD:{rel_path}")
            modified = self._show(repo_root, f":{rel_path}")
        else:
            original = self._show(repo_root, f":{rel_path}")
            modified = self._read_worktree(file_path)

        return FileDiff(
            path=file_path,
            original=original or b"",
            modified=modified or b"",
            is_new=original is None,
            is_deleted=modified is None,
        )

    def _show(self, repo_root: str, object_spec: str) -> Optional[bytes]:
        """Return the blob at *object_spec*, or None if it does not exist there."""
        try:
            return self._runner.run_raw(repo_root, "show", object_spec)
        except CommandExecutionError as exc:
            logger.debug("no content at %s: %s", object_spec, exc)
            return None

    @staticmethod
    def _read_worktree(file_path: str) -> Optional[bytes]:
        try:
            with open(file_path, "rb") as f:
                return f.read()
        except OSError as exc:
            logger.debug("cannot read working tree file %s: %s", file_path, exc)
            return None

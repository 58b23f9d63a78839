"""Data models for status, diff and remote results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

# Status characters meaning "nothing recorded on this side"
UNCHANGED = frozenset({" ", "."})
NOT_STAGED = frozenset({" ", "?", "."})


def combined_status(index_status: str, worktree_status: str) -> str:
    """Collapse the XY pair into one character, worktree first."""
    if worktree_status not in UNCHANGED:
        return worktree_status
    if index_status not in UNCHANGED:
        return index_status
    return " "


def is_staged(index_status: str) -> bool:
    return index_status not in NOT_STAGED


@dataclass(frozen=True)
class FileStatus:
    """Status of one path in the working copy."""

    path: str  # absolute
    combined_status: str
    index_status: str
    worktree_status: str
    is_staged: bool
    old_path: Optional[str] = None  # set on renames / copies

    @classmethod
    def from_xy(
        cls,
        path: str,
        index_status: str,
        worktree_status: str,
        old_path: Optional[str] = None,
    ) -> "FileStatus":
        return cls(
            path=path,
            combined_status=combined_status(index_status, worktree_status),
            index_status=index_status,
            worktree_status=worktree_status,
            is_staged=is_staged(index_status),
            old_path=old_path,
        )


@dataclass(frozen=True)
class DirectoryStatus:
    """Status of a whole repository, keyed by absolute path."""

    repo_root: str
    branch: str = ""
    files: Dict[str, FileStatus] = field(default_factory=dict)
    ahead: int = 0
    behind: int = 0

    @property
    def staged_files(self) -> List[FileStatus]:
        return [f for f in self.files.values() if f.is_staged]

    @property
    def unstaged_files(self) -> List[FileStatus]:
        return [f for f in self.files.values() if not f.is_staged]

    @property
    def is_clean(self) -> bool:
        return not self.files


@dataclass(frozen=True)
class FileDiff:
    """Before/after content of one file.

    ``original`` and ``modified`` are ``None`` when the file is binary.
    """

    path: str
    original: Optional[bytes] = b""
    modified: Optional[bytes] = b""
    is_new: bool = False
    is_deleted: bool = False
    is_binary: bool = False

    @classmethod
    def binary(cls, path: str) -> "FileDiff":
        return cls(path=path, original=None, modified=None, is_binary=True)


@dataclass(frozen=True)
class RemoteInfo:
    """Host / owner / repository parsed from a remote URL."""

    host: str
    owner: str
    repo_name: str
    remote_url: str

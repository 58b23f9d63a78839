"""Path validation, run before any git process is spawned."""

from __future__ import annotations

import os
from pathlib import PurePath
from typing import Union

from gitscope.git.errors import PathError

PathLike = Union[str, "os.PathLike[str]"]


def validate_path(path: PathLike) -> None:
    """Raise PathError unless *path* is a safe absolute path.

    Purely lexical: the filesystem is never consulted.
    """
    raw = os.fspath(path)
    if raw == "":
        raise PathError("path cannot be empty")

    cleaned = os.path.normpath(raw)
    if ".." in PurePath(cleaned).parts:
        raise PathError(f"path traversal not allowed: {raw!r}")

    if not os.path.isabs(cleaned):
        raise PathError(f"path must be absolute: {raw!r}")

    if "\0" in raw:
        raise PathError("path contains invalid characters")


def relative_to_root(repo_root: str, path: PathLike) -> str:
    """Return *path* relative to *repo_root* in the POSIX form git expects.

    git reports the root with symlinks resolved, so a second attempt is made
    against the resolved form of both paths before giving up.
    """
    raw = os.fspath(path)
    for root, target in (
        (repo_root, raw),
        (os.path.realpath(repo_root), os.path.realpath(raw)),
    ):
        try:
            rel = os.path.relpath(target, root)
        except ValueError:
            # Different drives on Windows
            continue
        if rel != ".." and not rel.startswith(".." + os.sep):
            return PurePath(rel).as_posix()
    raise PathError(f"path is outside the repository {repo_root}: {raw!r}")

"""Porcelain status parser — v2 line types plus the v1 fallback format.

Each v2 line type has its own pure parse function that returns a FileStatus
or ``None`` when the line is too short or otherwise malformed. Bad lines are
skipped, never raised.

v2 line shapes (``git status --porcelain=v2``)::

    1 XY sub mH mI mW hH hI path
    2 XY sub mH mI mW hH hI Xscore path<TAB>origPath
    u XY sub m1 m2 m3 mW h1 h2 h3 path
    ? path
    ! path
    # branch.oid ...          (headers, only with --branch)
"""

from __future__ import annotations

import logging
import os
import re
from typing import Callable, Dict, Optional

from gitscope.git.models import FileStatus

logger = logging.getLogger(__name__)

# Minimum line lengths before the path field, for SHA-1 object names.
# "1 XY sub " + 3 modes + 2 hashes = 113; "u XY sub " + 4 modes + 3 hashes = 161.
ORDINARY_PREAMBLE = 113
UNMERGED_PREAMBLE = 161
UNTRACKED_PREAMBLE = 2
V1_PREAMBLE = 3

# Space-separated fields preceding the path, per line type
_ORDINARY_FIELDS = 8
_RENAME_FIELDS = 9
_UNMERGED_FIELDS = 10

_V1_RENAME_SEP = " -> "

_ESCAPE_RE = re.compile(r'\\([0-7]{3}|[abtnvfr"\\])')
_ESCAPES = {
    "a": b"\a",
    "b": b"\b",
    "t": b"\t",
    "n": b"\n",
    "v": b"\v",
    "f": b"\f",
    "r": b"\r",
    '"': b'"',
    "\\": b"\\",
}


def unquote_path(path: str) -> str:
    """Undo git's C-style quoting of paths with special characters.

    Unquoted paths are returned unchanged. Octal escapes are raw bytes of a
    UTF-8 name, so they are collected as bytes and decoded together.
    """
    if len(path) < 2 or not (path.startswith('"') and path.endswith('"')):
        return path

    body = path[1:-1]
    out = bytearray()
    pos = 0
    for m in _ESCAPE_RE.finditer(body):
        out += body[pos:m.start()].encode("utf-8", errors="surrogateescape")
        esc = m.group(1)
        if len(esc) == 3:
            out.append(int(esc, 8) & 0xFF)
        else:
            out += _ESCAPES[esc]
        pos = m.end()
    out += body[pos:].encode("utf-8", errors="surrogateescape")
    return out.decode("utf-8", errors="surrogateescape")


def _absolute(repo_root: str, rel_path: str) -> str:
    return os.path.normpath(os.path.join(repo_root, unquote_path(rel_path)))


def _split_fields(line: str, count: int) -> Optional[list[str]]:
    """Split off *count* leading fields; the remainder is the path field."""
    parts = line.split(" ", count)
    if len(parts) != count + 1 or not parts[count]:
        return None
    return parts


def _xy(field: str) -> Optional[tuple[str, str]]:
    if len(field) != 2:
        return None
    return field[0], field[1]


# ---- v2 line types ----


def parse_ordinary_entry(line: str, repo_root: str) -> Optional[FileStatus]:
    """Parse a ``1 ...`` line (ordinary changed entry)."""
    if len(line) <= ORDINARY_PREAMBLE:
        return None
    parts = _split_fields(line, _ORDINARY_FIELDS)
    if parts is None or (xy := _xy(parts[1])) is None:
        return None
    return FileStatus.from_xy(_absolute(repo_root, parts[-1]), *xy)


def parse_rename_entry(line: str, repo_root: str) -> Optional[FileStatus]:
    """Parse a ``2 ...`` line (renamed or copied entry)."""
    if len(line) <= ORDINARY_PREAMBLE:
        return None
    parts = _split_fields(line, _RENAME_FIELDS)
    if parts is None or (xy := _xy(parts[1])) is None:
        return None

    new_path, sep, orig_path = parts[-1].partition("\t")
    if not new_path:
        return None
    old_path = _absolute(repo_root, orig_path) if sep and orig_path else None
    return FileStatus.from_xy(_absolute(repo_root, new_path), *xy, old_path=old_path)


def parse_unmerged_entry(line: str, repo_root: str) -> Optional[FileStatus]:
    """Parse a ``u ...`` line (conflicted entry)."""
    if len(line) <= UNMERGED_PREAMBLE:
        return None
    parts = _split_fields(line, _UNMERGED_FIELDS)
    if parts is None or (xy := _xy(parts[1])) is None:
        return None
    return FileStatus.from_xy(_absolute(repo_root, parts[-1]), *xy)


def parse_untracked_entry(line: str, repo_root: str) -> Optional[FileStatus]:
    """Parse a ``? path`` line."""
    if len(line) <= UNTRACKED_PREAMBLE or line[1] != " ":
        return None
    return FileStatus.from_xy(_absolute(repo_root, line[UNTRACKED_PREAMBLE:]), "?", "?")


_V2_PARSERS: Dict[str, Callable[[str, str], Optional[FileStatus]]] = {
    "1": parse_ordinary_entry,
    "2": parse_rename_entry,
    "u": parse_unmerged_entry,
    "?": parse_untracked_entry,
}


def parse_porcelain_v2(output: str, repo_root: str) -> Dict[str, FileStatus]:
    """Parse ``--porcelain=v2`` output into a path-keyed mapping."""
    files: Dict[str, FileStatus] = {}
    for line in output.split("\n"):
        if not line:
            continue
        parser = _V2_PARSERS.get(line[0])
        if parser is None:
            # '!' ignored entries, '#' headers, unknown future tags
            continue
        entry = parser(line, repo_root)
        if entry is None:
            logger.debug("skipping malformed status line: %r", line)
            continue
        files[entry.path] = entry
    return files


# ---- v1 fallback ----


def parse_v1_line(line: str, repo_root: str) -> Optional[FileStatus]:
    """Parse one ``XY path`` / ``XY old -> new`` line."""
    if len(line) <= V1_PREAMBLE:
        return None
    index_status, worktree_status = line[0], line[1]
    path_field = line[V1_PREAMBLE:]

    old_path: Optional[str] = None
    if _V1_RENAME_SEP in path_field:
        old, new = path_field.split(_V1_RENAME_SEP, 1)
        if old and new:
            old_path = _absolute(repo_root, old)
            path_field = new

    return FileStatus.from_xy(
        _absolute(repo_root, path_field), index_status, worktree_status, old_path=old_path
    )


def parse_porcelain_v1(output: str, repo_root: str) -> Dict[str, FileStatus]:
    """Parse ``--porcelain`` (v1) output into a path-keyed mapping."""
    files: Dict[str, FileStatus] = {}
    for line in output.split("\n"):
        if not line.strip():
            continue
        entry = parse_v1_line(line, repo_root)
        if entry is None:
            logger.debug("skipping malformed status line: %r", line)
            continue
        files[entry.path] = entry
    return files

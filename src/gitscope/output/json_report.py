"""JSON serialisation of status, diff and remote results.

Keys follow the wire format used across the RPC boundary; diff content is
base64-encoded.
"""

from __future__ import annotations

import base64
import json
from typing import Any, Dict, Optional

from gitscope.git.models import DirectoryStatus, FileDiff, FileStatus, RemoteInfo


def _b64(content: Optional[bytes]) -> Optional[str]:
    if content is None:
        return None
    return base64.b64encode(content).decode("ascii")


def file_status_to_dict(status: FileStatus) -> Dict[str, Any]:
    return {
        "path": status.path,
        "status": status.combined_status,
        "indexstatus": status.index_status,
        "worktreestatus": status.worktree_status,
        "isstaged": status.is_staged,
        **({"oldpath": status.old_path} if status.old_path else {}),
    }


def directory_status_to_dict(status: DirectoryStatus) -> Dict[str, Any]:
    return {
        "reporoot": status.repo_root,
        "branch": status.branch,
        "files": {path: file_status_to_dict(f) for path, f in sorted(status.files.items())},
        "ahead": status.ahead,
        "behind": status.behind,
    }


def file_diff_to_dict(diff: FileDiff) -> Dict[str, Any]:
    return {
        "path": diff.path,
        "original": _b64(diff.original),
        "modified": _b64(diff.modified),
        "isnew": diff.is_new,
        "isdeleted": diff.is_deleted,
        "isbinary": diff.is_binary,
    }


def remote_info_to_dict(info: RemoteInfo) -> Dict[str, Any]:
    return {
        "host": info.host,
        "owner": info.owner,
        "reponame": info.repo_name,
        "remoteurl": info.remote_url,
    }


def to_dict(result: Any) -> Dict[str, Any]:
    """Convert any result model to a JSON-serialisable dict."""
    if isinstance(result, DirectoryStatus):
        return directory_status_to_dict(result)
    if isinstance(result, FileDiff):
        return file_diff_to_dict(result)
    if isinstance(result, FileStatus):
        return file_status_to_dict(result)
    if isinstance(result, RemoteInfo):
        return remote_info_to_dict(result)
    raise TypeError(f"Cannot serialise {type(result).__name__}")


def render(result: Any) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(result), indent=2)

"""Git interface layer."""

from gitscope.git.client import GitClient
from gitscope.git.diff import BINARY_EXTENSIONS, DiffExtractor, is_binary_file
from gitscope.git.errors import (
    CommandExecutionError,
    GitError,
    InvalidRemoteError,
    NoRemoteError,
    NotGitRepoError,
    PathError,
)
from gitscope.git.models import DirectoryStatus, FileDiff, FileStatus, RemoteInfo
from gitscope.git.paths import relative_to_root, validate_path
from gitscope.git.remote import RemoteOperations, parse_remote_url
from gitscope.git.repo import AheadBehindCalculator, RepoLocator
from gitscope.git.runner import CommandResult, CommandRunner
from gitscope.git.staging import StagingOperations
from gitscope.git.status import StatusReader

__all__ = [
    "AheadBehindCalculator",
    "BINARY_EXTENSIONS",
    "CommandExecutionError",
    "CommandResult",
    "CommandRunner",
    "DiffExtractor",
    "DirectoryStatus",
    "FileDiff",
    "FileStatus",
    "GitClient",
    "GitError",
    "InvalidRemoteError",
    "NoRemoteError",
    "NotGitRepoError",
    "PathError",
    "RemoteInfo",
    "RemoteOperations",
    "RepoLocator",
    "StagingOperations",
    "StatusReader",
    "is_binary_file",
    "parse_remote_url",
    "relative_to_root",
    "validate_path",
]

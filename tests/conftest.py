"""Shared test fixtures: captured porcelain output, a fake runner and temporary repos."""

from __future__ import annotations

import os
import subprocess
import textwrap
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

import pytest

from gitscope.git.runner import CommandResult, CommandRunner

# Object names as they appear in porcelain v2 output
H_BASE = "e69de29bb2d1d6434b8b29ae775ad8c2e48c5391"
H_OURS = "3b18e512dba79e4c8300dd08aeb37f8e728b8dad"
H_THEIRS = "ce013625030ba8dba906f756967f9e9ca394464a"
H_ZERO = "0" * 40

_GIT_ENV = {
    "GIT_AUTHOR_NAME": "Test",
    "GIT_AUTHOR_EMAIL": "test@test.com",
    "GIT_COMMITTER_NAME": "Test",
    "GIT_COMMITTER_EMAIL": "test@test.com",
}


# ── captured porcelain output ─────────────────────────────────────────────────


@pytest.fixture
def porcelain_v2_output() -> str:
    """``git status --porcelain=v2 --untracked-files=all`` with every line type."""
    return textwrap.dedent(f"""\
        # branch.oid {H_OURS}
        1 .M N... 100644 100644 100644 {H_BASE} {H_BASE} src/app.py
        1 A. N... 000000 100644 100644 {H_ZERO} {H_OURS} new.txt
        1 MM N... 100644 100644 100644 {H_BASE} {H_OURS} both.py
        1 D. N... 100644 000000 000000 {H_BASE} {H_ZERO} gone.txt
        2 R. N... 100644 100644 100644 {H_BASE} {H_BASE} R100 new_name.py\told_name.py
        u UU N... 100644 100644 100644 100644 {H_BASE} {H_OURS} {H_THEIRS} conflict.txt
        ? notes/todo.md
        ! build/out.o
    """)


@pytest.fixture
def porcelain_v1_output() -> str:
    """``git status --porcelain`` (v1). The first line starts with a space."""
    return (
        " M src/app.py\n"
        "A  new.txt\n"
        "MM both.py\n"
        "R  old_name.py -> new_name.py\n"
        "?? notes/todo.md\n"
    )


# ── fake runner ───────────────────────────────────────────────────────────────


class FakeRunner(CommandRunner):
    """CommandRunner returning canned results keyed by argument tuple.

    Unknown commands fail with exit code 128, like git does for bad revisions.
    """

    def __init__(self) -> None:
        super().__init__("git")
        self.responses: Dict[Tuple[str, ...], CommandResult] = {}
        self.calls: List[Tuple[str, Tuple[str, ...]]] = []

    def add(self, *args: str, stdout: str | bytes = "", returncode: int = 0, stderr: str = "") -> None:
        out = stdout.encode("utf-8") if isinstance(stdout, str) else stdout
        self.responses[args] = CommandResult(
            args=args, returncode=returncode, stdout=out, stderr=stderr.encode("utf-8")
        )

    def fail(self, *args: str, stderr: str = "fatal: failed") -> None:
        self.add(*args, returncode=128, stderr=stderr)

    def execute(self, cwd: str, args: Sequence[str]) -> CommandResult:
        key = tuple(args)
        self.calls.append((cwd, key))
        if key in self.responses:
            return self.responses[key]
        return CommandResult(args=key, returncode=128, stderr=b"fatal: unexpected command")

    def called(self, *args: str) -> bool:
        return any(call == args for _, call in self.calls)


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def fake_repo(tmp_path: Path, fake_runner: FakeRunner) -> Path:
    """A plain directory the fake runner reports as a repository root on ``main``."""
    root = tmp_path.resolve()
    fake_runner.add("rev-parse", "--show-toplevel", stdout=f"{root}\n")
    fake_runner.add("rev-parse", "--abbrev-ref", "HEAD", stdout="main\n")
    return root


# ── real repositories ─────────────────────────────────────────────────────────


def git(cwd: Path, *args: str) -> str:
    """Run git for test setup, failing the test on error."""
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        env={**os.environ, **_GIT_ENV},
    )
    assert result.returncode == 0, f"git {' '.join(args)} failed: {result.stderr}"
    return result.stdout


def _init(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    git(path, "init", "-q")
    git(path, "config", "commit.gpgsign", "false")
    return path.resolve()


def commit_file(repo: Path, name: str, content: str | bytes, message: str = "commit") -> None:
    target = repo / name
    target.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        target.write_bytes(content)
    else:
        target.write_text(content)
    git(repo, "add", name)
    git(repo, "commit", "-q", "-m", message)


@pytest.fixture
def empty_git_repo(tmp_path: Path) -> Path:
    """A freshly initialised repository with no commits."""
    return _init(tmp_path / "repo")


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """A temporary git repository with one initial commit."""
    repo = _init(tmp_path / "repo")
    commit_file(repo, "README.md", "# Test\n", "init")
    return repo


@pytest.fixture
def diverged_repo(tmp_path: Path) -> Path:
    """A clone whose branch is 3 commits ahead of and 1 behind ``origin``."""
    origin = tmp_path / "origin.git"
    origin.mkdir()
    git(origin, "init", "-q", "--bare")

    work = _init(tmp_path / "work")
    git(work, "remote", "add", "origin", str(origin))
    commit_file(work, "base.txt", "base\n", "base")
    branch = git(work, "rev-parse", "--abbrev-ref", "HEAD").strip()
    git(work, "push", "-q", "-u", "origin", branch)

    other = tmp_path / "other"
    git(tmp_path, "clone", "-q", "-b", branch, str(origin), str(other))
    git(other, "config", "commit.gpgsign", "false")
    commit_file(other, "remote.txt", "from elsewhere\n", "remote change")
    git(other, "push", "-q", "origin", f"HEAD:{branch}")

    for i in range(3):
        commit_file(work, f"local{i}.txt", f"local {i}\n", f"local {i}")
    git(work, "fetch", "-q", "origin")
    return work

"""Git subprocess wrapper.

``CommandRunner.execute`` is the only place a git process is spawned. Everything
above it works on ``CommandResult`` values, so tests substitute a runner that
returns canned output instead of invoking git.
"""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from typing import Sequence, Tuple

from gitscope.git.errors import CommandExecutionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Captured outcome of one git invocation."""

    args: Tuple[str, ...]
    returncode: int
    stdout: bytes = b""
    stderr: bytes = b""

    @property
    def success(self) -> bool:
        return self.returncode == 0

    @property
    def subcommand(self) -> str:
        return self.args[0] if self.args else ""

    @property
    def output(self) -> str:
        """Combined stdout and stderr, decoded and trimmed."""
        combined = self.stdout + self.stderr
        return combined.decode("utf-8", errors="replace").strip()


class CommandRunner:
    """Runs the git executable in a given working directory.

    Blocks until the process exits. No retries and no timeout: cancellation
    belongs to the caller.
    """

    def __init__(self, executable: str = "git") -> None:
        self.executable = executable

    def execute(self, cwd: str, args: Sequence[str]) -> CommandResult:
        """Spawn git with *args* in *cwd* and capture its output."""
        argv = (self.executable, *args)
        logger.debug("running %s (cwd=%s)", " ".join(argv), cwd)
        try:
            proc = subprocess.run(argv, cwd=cwd, capture_output=True)
        except FileNotFoundError as exc:
            subcommand = args[0] if args else ""
            if not os.path.isdir(cwd):
                raise CommandExecutionError(
                    subcommand, f"working directory does not exist: {cwd}"
                ) from exc
            raise CommandExecutionError(
                subcommand, f"{self.executable} is not installed or not on PATH"
            ) from exc
        except OSError as exc:
            raise CommandExecutionError(args[0] if args else "", str(exc)) from exc

        result = CommandResult(
            args=tuple(args),
            returncode=proc.returncode,
            stdout=proc.stdout or b"",
            stderr=proc.stderr or b"",
        )
        if not result.success:
            logger.debug(
                "git %s exited with %d: %s", result.subcommand, result.returncode, result.output
            )
        return result

    def run_raw(self, cwd: str, *args: str) -> bytes:
        """Run git and return its untouched stdout. Raises CommandExecutionError."""
        result = self.execute(cwd, args)
        if not result.success:
            raise CommandExecutionError(result.subcommand, result.output, result.returncode)
        return result.stdout

    def run(self, cwd: str, *args: str) -> str:
        """Run git and return its stdout decoded and trimmed."""
        return self.run_raw(cwd, *args).decode("utf-8", errors="replace").strip()

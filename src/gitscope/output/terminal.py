"""Rich terminal reporter — status tables and highlighted diffs."""

from __future__ import annotations

import difflib
import os
from typing import List

from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from gitscope.git.models import DirectoryStatus, FileDiff, FileStatus, RemoteInfo

_STATUS_STYLE = {
    "M": "yellow",
    "A": "green",
    "D": "red",
    "R": "cyan",
    "C": "cyan",
    "U": "bold magenta",
    "T": "yellow",
    "?": "dim",
}

_STATUS_LABEL = {
    "M": "modified",
    "A": "added",
    "D": "deleted",
    "R": "renamed",
    "C": "copied",
    "U": "conflict",
    "T": "typechange",
    "?": "untracked",
}


def _status_pill(status: str) -> Text:
    label = _STATUS_LABEL.get(status, status.strip() or "-")
    return Text(f"{status} {label}", style=_STATUS_STYLE.get(status, ""))


def _relative(path: str, repo_root: str) -> str:
    try:
        return os.path.relpath(path, repo_root)
    except ValueError:
        return path


def _files_table(title: str, files: List[FileStatus], repo_root: str, style: str) -> Table:
    table = Table(title=title, title_style=style, border_style="dim", show_lines=False)
    table.add_column("Status", min_width=14)
    table.add_column("Path", style="magenta")
    for f in sorted(files, key=lambda item: item.path):
        path = _relative(f.path, repo_root)
        if f.old_path:
            path = f"{_relative(f.old_path, repo_root)} → {path}"
        table.add_row(_status_pill(f.combined_status), path)
    return table


def render_status(
    status: DirectoryStatus,
    *,
    show_summary: bool = True,
    console: Console | None = None,
) -> None:
    """Print a DirectoryStatus the way ``git status`` groups it."""
    console = console or Console()

    branch = status.branch or "(no branch)"
    console.print(f"On branch [bold cyan]{branch}[/bold cyan]")
    if status.ahead or status.behind:
        console.print(
            f"Your branch is [green]{status.ahead}[/green] commit(s) ahead, "
            f"[red]{status.behind}[/red] commit(s) behind its upstream."
        )

    if status.is_clean:
        console.print()
        console.print("[green]Nothing to commit, working tree clean.[/green]")
        return

    staged = status.staged_files
    unstaged = status.unstaged_files
    if staged:
        console.print()
        console.print(_files_table("Changes to be committed", staged, status.repo_root, "bold green"))
    if unstaged:
        console.print()
        console.print(
            _files_table("Changes not staged for commit", unstaged, status.repo_root, "bold red")
        )

    if show_summary:
        console.print()
        console.print(f"[dim]Repo root:[/dim]  {status.repo_root}")
        console.print(f"[dim]Staged:[/dim]     {len(staged)}")
        console.print(f"[dim]Unstaged:[/dim]   {len(unstaged)}")


def unified_diff(diff: FileDiff, *, context: int = 3) -> str:
    """Return a unified diff of the two sides, or ``""`` when they match."""
    original = (diff.original or b"").decode("utf-8", errors="replace")
    modified = (diff.modified or b"").decode("utf-8", errors="replace")
    from_name = "/dev/null" if diff.is_new else f"a/{os.path.basename(diff.path)}"
    to_name = "/dev/null" if diff.is_deleted else f"b/{os.path.basename(diff.path)}"
    lines = difflib.unified_diff(
        original.splitlines(keepends=True),
        modified.splitlines(keepends=True),
        fromfile=from_name,
        tofile=to_name,
        n=context,
    )
    return "".join(line if line.endswith("\n") else line + "\n" for line in lines)


def render_diff(diff: FileDiff, *, console: Console | None = None) -> None:
    """Print a FileDiff as a highlighted unified diff."""
    console = console or Console()
    console.print(f"[bold]{diff.path}[/bold]")

    if diff.is_binary:
        console.print("[yellow]Binary file — diff not shown.[/yellow]")
        return
    if diff.is_new:
        console.print("[green]new file[/green]")
    if diff.is_deleted:
        console.print("[red]deleted file[/red]")

    text = unified_diff(diff)
    if not text:
        console.print("[dim]No differences.[/dim]")
        return
    console.print(Syntax(text, "diff", theme="ansi_dark", background_color="default"))


def render_remote(info: RemoteInfo, *, console: Console | None = None) -> None:
    console = console or Console()
    console.print(f"[dim]Host:[/dim]   {info.host}")
    console.print(f"[dim]Owner:[/dim]  {info.owner}")
    console.print(f"[dim]Repo:[/dim]   {info.repo_name}")
    console.print(f"[dim]URL:[/dim]    {info.remote_url}")

"""gitscope CLI — Typer application for status, diff, staging and remote commands."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Callable, NoReturn, Optional, Tuple

import typer
from rich.console import Console
from rich.logging import RichHandler

from gitscope import __version__
from gitscope.config.loader import ConfigError, load_config
from gitscope.config.schema import OUTPUT_FORMATS, GitScopeConfig
from gitscope.git.client import GitClient
from gitscope.git.errors import GitError, NotGitRepoError, PathError
from gitscope.git.runner import CommandRunner

app = typer.Typer(
    name="gitscope",
    help="Inspect, diff and stage changes in git repositories.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)

_CONFIG_OPT = typer.Option(None, "--config", "-c", help="Path to .gitscope.toml")
_FORMAT_OPT = typer.Option(None, "--format", "-f", help="Output format: terminal | json | yaml")
_VERBOSE_OPT = typer.Option(False, "--verbose", "-v", help="Verbose output")
_DEBUG_OPT = typer.Option(False, "--debug", help="Debug output, including every git invocation")


def _absolute(path: Optional[str]) -> str:
    """Resolve a CLI path argument against the current directory."""
    return os.path.abspath(path) if path else os.getcwd()


def _configure_logging(cfg: GitScopeConfig, verbose: bool, debug: bool) -> None:
    level = cfg.logging.level_no
    if verbose:
        level = min(level, logging.INFO)
    if debug:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _setup(
    target: str,
    config: Optional[str],
    verbose: bool,
    debug: bool,
) -> Tuple[GitScopeConfig, GitClient]:
    """Load config for *target*, configure logging and build a GitClient."""
    try:
        cfg = load_config(Path(target), config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    _configure_logging(cfg, verbose, debug)
    client = GitClient(
        CommandRunner(cfg.git.executable),
        remote=cfg.git.remote,
        extra_binary_extensions=cfg.diff.binary_extensions,
        sniff_bytes=cfg.diff.sniff_bytes,
    )
    return cfg, client


def _resolve_format(cfg: GitScopeConfig, format: Optional[str]) -> str:
    if format is None:
        return cfg.output.format
    if format not in OUTPUT_FORMATS:
        console.print(f"[bold red]Invalid format:[/bold red] {format}")
        raise typer.Exit(code=2)
    return format


def _fail(exc: GitError) -> NoReturn:
    """Report a git-layer error and exit (2 for bad input, 1 for git failures)."""
    if isinstance(exc, (PathError, NotGitRepoError)):
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc
    console.print(f"[bold red]Git error:[/bold red] {exc}")
    raise typer.Exit(code=1) from exc


def _emit(result: Any, fmt: str, terminal_render: Callable[[], None]) -> None:
    from gitscope.output import json_report, yaml_report

    if fmt == "json":
        print(json_report.render(result))
    elif fmt == "yaml":
        print(yaml_report.render(result), end="")
    else:
        terminal_render()


# ── status ────────────────────────────────────────────────────────────────────


@app.command()
def status(
    path: Optional[str] = typer.Argument(None, help="Directory inside the repository"),
    format: Optional[str] = _FORMAT_OPT,
    json_output: bool = typer.Option(False, "--json", help="Shorthand for --format json"),
    config: Optional[str] = _CONFIG_OPT,
    verbose: bool = _VERBOSE_OPT,
    debug: bool = _DEBUG_OPT,
) -> None:
    """Show staged, unstaged and untracked files plus upstream divergence."""
    from gitscope.output import terminal

    target = _absolute(path)
    cfg, client = _setup(target, config, verbose, debug)
    fmt = "json" if json_output else _resolve_format(cfg, format)

    try:
        result = client.directory_status(target)
    except GitError as exc:
        _fail(exc)

    _emit(
        result,
        fmt,
        lambda: terminal.render_status(
            result, show_summary=cfg.output.show_summary, console=Console()
        ),
    )


# ── diff ──────────────────────────────────────────────────────────────────────


@app.command()
def diff(
    file: str = typer.Argument(..., help="File to diff"),
    repo: Optional[str] = typer.Option(None, "--repo", "-r", help="Repository path (default: file's directory)"),
    staged: bool = typer.Option(False, "--staged", help="Compare HEAD with the index instead of index with working tree"),
    format: Optional[str] = _FORMAT_OPT,
    config: Optional[str] = _CONFIG_OPT,
    verbose: bool = _VERBOSE_OPT,
    debug: bool = _DEBUG_OPT,
) -> None:
    """Show the original and modified content of a single file."""
    from gitscope.output import terminal

    file_path = _absolute(file)
    repo_path = _absolute(repo) if repo else os.path.dirname(file_path)
    cfg, client = _setup(repo_path, config, verbose, debug)
    fmt = _resolve_format(cfg, format)

    try:
        result = client.file_diff(repo_path, file_path, staged=staged)
    except GitError as exc:
        _fail(exc)

    _emit(result, fmt, lambda: terminal.render_diff(result, console=Console()))


# ── stage / unstage ───────────────────────────────────────────────────────────


@app.command()
def stage(
    file: str = typer.Argument(..., help="File to stage"),
    repo: Optional[str] = typer.Option(None, "--repo", "-r", help="Repository path (default: file's directory)"),
    config: Optional[str] = _CONFIG_OPT,
    verbose: bool = _VERBOSE_OPT,
    debug: bool = _DEBUG_OPT,
) -> None:
    """Stage a file for commit."""
    file_path = _absolute(file)
    repo_path = _absolute(repo) if repo else os.path.dirname(file_path)
    _, client = _setup(repo_path, config, verbose, debug)
    try:
        client.stage_file(repo_path, file_path)
    except GitError as exc:
        _fail(exc)
    console.print(f"[green]✓[/green] Staged {file}")


@app.command()
def unstage(
    file: str = typer.Argument(..., help="File to unstage"),
    repo: Optional[str] = typer.Option(None, "--repo", "-r", help="Repository path (default: file's directory)"),
    config: Optional[str] = _CONFIG_OPT,
    verbose: bool = _VERBOSE_OPT,
    debug: bool = _DEBUG_OPT,
) -> None:
    """Remove a file's changes from the index."""
    file_path = _absolute(file)
    repo_path = _absolute(repo) if repo else os.path.dirname(file_path)
    _, client = _setup(repo_path, config, verbose, debug)
    try:
        client.unstage_file(repo_path, file_path)
    except GitError as exc:
        _fail(exc)
    console.print(f"[green]✓[/green] Unstaged {file}")


@app.command("stage-all")
def stage_all(
    path: Optional[str] = typer.Argument(None, help="Directory inside the repository"),
    config: Optional[str] = _CONFIG_OPT,
    verbose: bool = _VERBOSE_OPT,
    debug: bool = _DEBUG_OPT,
) -> None:
    """Stage every change, including untracked files."""
    target = _absolute(path)
    _, client = _setup(target, config, verbose, debug)
    try:
        client.stage_all(target)
    except GitError as exc:
        _fail(exc)
    console.print("[green]✓[/green] Staged all changes")


@app.command("unstage-all")
def unstage_all(
    path: Optional[str] = typer.Argument(None, help="Directory inside the repository"),
    config: Optional[str] = _CONFIG_OPT,
    verbose: bool = _VERBOSE_OPT,
    debug: bool = _DEBUG_OPT,
) -> None:
    """Clear the index back to the last commit."""
    target = _absolute(path)
    _, client = _setup(target, config, verbose, debug)
    try:
        client.unstage_all(target)
    except GitError as exc:
        _fail(exc)
    console.print("[green]✓[/green] Unstaged all changes")


# ── branch / remote / push ────────────────────────────────────────────────────


@app.command()
def branch(
    path: Optional[str] = typer.Argument(None, help="Directory inside the repository"),
    config: Optional[str] = _CONFIG_OPT,
    verbose: bool = _VERBOSE_OPT,
    debug: bool = _DEBUG_OPT,
) -> None:
    """Print the current branch name (empty when none)."""
    target = _absolute(path)
    _, client = _setup(target, config, verbose, debug)
    try:
        name = client.current_branch(target)
    except GitError as exc:
        _fail(exc)
    print(name)


@app.command()
def remote(
    path: Optional[str] = typer.Argument(None, help="Directory inside the repository"),
    format: Optional[str] = _FORMAT_OPT,
    config: Optional[str] = _CONFIG_OPT,
    verbose: bool = _VERBOSE_OPT,
    debug: bool = _DEBUG_OPT,
) -> None:
    """Show host, owner and repository name parsed from the remote URL."""
    from gitscope.output import terminal

    target = _absolute(path)
    cfg, client = _setup(target, config, verbose, debug)
    fmt = _resolve_format(cfg, format)
    try:
        info = client.repo_info(target)
    except GitError as exc:
        _fail(exc)

    _emit(info, fmt, lambda: terminal.render_remote(info, console=Console()))


@app.command()
def push(
    path: Optional[str] = typer.Argument(None, help="Directory inside the repository"),
    set_upstream: bool = typer.Option(False, "--set-upstream", "-u", help="Record the remote branch as upstream"),
    config: Optional[str] = _CONFIG_OPT,
    verbose: bool = _VERBOSE_OPT,
    debug: bool = _DEBUG_OPT,
) -> None:
    """Push the current branch to the configured remote."""
    target = _absolute(path)
    _, client = _setup(target, config, verbose, debug)
    try:
        client.push_current_branch(target, set_upstream=set_upstream)
    except GitError as exc:
        _fail(exc)
    console.print("[green]✓[/green] Pushed current branch")


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init(
    path: Optional[str] = typer.Argument(None, help="Directory inside the repository"),
) -> None:
    """Generate a starter .gitscope.toml in the repo root."""
    from gitscope.config.defaults import DEFAULT_TOML
    from gitscope.config.loader import CONFIG_FILENAME

    target = _absolute(path)
    try:
        repo_root = GitClient().find_root(target)
    except GitError as exc:
        _fail(exc)

    config_path = Path(repo_root) / CONFIG_FILENAME
    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"gitscope {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """gitscope — inspect, diff and stage changes in git repositories."""

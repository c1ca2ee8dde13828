# pyright: reportUnusedCallResult=false
# ruff: noqa: D415, FBT002
"""Repository lifecycle and history commands."""

import sys
from typing import Annotated

from cyclopts import Parameter
from rich.console import Console

from gitvcs.client import (
    ConfigOption,
    clone_repo,
    is_repo_exists,
    with_all,
    with_commit,
    with_mode,
)
from gitvcs.enums import ResetMode
from gitvcs.utils import decode_bytes, get_head_sha

from ._context import CLIContext, open_client
from ._shared import ExitCode, exit_with_error, handle_client_errors

__all__ = [
    "add_command",
    "clone_command",
    "commit_command",
    "dispose_command",
    "init_command",
    "log_command",
    "reset_command",
    "status_command",
]


def init_command() -> None:
    """Open the repository at --path, creating it if needed"""
    console = Console()

    with open_client() as client:
        kind = "bare repository" if client.is_bare else "repository"
        console.print(f"[green]Initialized {kind}[/green] at {client.path}")
        if client.remote_url:
            console.print(f"[dim]Remote origin: {client.remote_url}[/dim]")


def clone_command(
    url: Annotated[str, Parameter(help="URL of the repository to clone")],
    depth: Annotated[
        int,
        Parameter(name=["--depth"], help="Shallow clone depth (0 for full history)"),
    ] = 0,
    branch: Annotated[
        str | None,
        Parameter(name=["--branch", "-b"], help="Branch to check out"),
    ] = None,
) -> None:
    """Clone a remote repository into --path"""
    console = Console()
    ctx = CLIContext.get_current()
    config = ctx.settings.client

    # Credentials come from the settings; path and URL from the arguments
    options = [
        ConfigOption(name, value)
        for name, value in config.model_dump(
            exclude={"path", "remote_url", "is_bare", "is_mem"}
        ).items()
    ]

    with handle_client_errors():
        client = clone_repo(
            config.path,
            url,
            *options,
            depth=depth,
            branch=branch,
            logger=ctx.logger,
        )

    with client:
        console.print(f"[green]Cloned[/green] {url} into {client.path}")
        with handle_client_errors():
            current = client.get_current_branch()
        console.print(f"[dim]On branch {current}[/dim]")


def status_command() -> None:
    """Show uncommitted changes"""
    console = Console()

    with open_client() as client, handle_client_errors():
        status = client.get_status()

        if status.is_clean:
            console.print("[dim]No uncommitted changes[/dim]")
            return

        if status.staged:
            console.print("[bold green]Staged files:[/bold green]")
            for path in sorted(status.staged):
                console.print(f"  [green]+ {path}[/green]")

        if status.modified:
            console.print("[bold yellow]Modified files:[/bold yellow]")
            for path in sorted(status.modified):
                console.print(f"  [yellow]~ {path}[/yellow]")

        if status.untracked:
            console.print("[bold cyan]Untracked files:[/bold cyan]")
            for path in sorted(status.untracked):
                console.print(f"  [cyan]? {path}[/cyan]")

        total = len(status.staged) + len(status.modified) + len(status.untracked)
        console.print(f"\n[dim]{total} file(s) with uncommitted changes[/dim]")


def add_command(
    *paths: Annotated[str, Parameter(help="Repository-relative paths to stage")],
) -> None:
    """Stage files for the next commit"""
    console = Console()

    if not paths:
        exit_with_error("No paths given to stage", ExitCode.VALIDATION_ERROR)

    with open_client() as client, handle_client_errors():
        staged = client.stage(*paths)

    console.print(f"[green]Staged {len(staged)} file(s)[/green]")


def commit_command(
    message: Annotated[
        str,
        Parameter(name=["--message", "-m"], help="Commit message"),
    ],
    all_: Annotated[
        bool,
        Parameter(
            name=["--all", "-a"],
            help="Stage modified and deleted tracked files first",
        ),
    ] = False,
    include_untracked: Annotated[
        bool,
        Parameter(
            name=["--include-untracked", "-u"],
            help="Stage every change, including untracked files",
        ),
    ] = False,
) -> None:
    """Commit staged changes"""
    console = Console()

    with open_client() as client, handle_client_errors():
        if include_untracked:
            result = client.commit_all(message)
        else:
            result = client.commit(message, with_all(all_))

    if result.no_changes:
        console.print("[dim]Nothing to commit[/dim]")
        return

    console.print(f"[green]Committed {len(result.files)} file(s)[/green]")
    console.print(f"[dim]SHA: {result.sha}[/dim]")


def log_command(
    n: Annotated[
        int,
        Parameter(
            name=["--number", "-n"],
            help="Number of commits to show",
        ),
    ] = 10,
) -> None:
    """Show commits reachable from HEAD, branches and remotes"""
    console = Console()

    with open_client() as client, handle_client_errors():
        commits = client.get_logs()[:n]

    if not commits:
        console.print("[dim]No commits yet[/dim]")
        return

    for commit in commits:
        console.print(f"[yellow]{commit.sha[:8]}[/yellow] {commit.summary}")
        console.print(f"  [dim]{commit.author_name} <{commit.author_email}>[/dim]")
        console.print(
            f"  [dim]{commit.timestamp.strftime('%Y-%m-%d %H:%M:%S %z')}[/dim]"
        )
        console.print()


def reset_command(
    commit: Annotated[
        str | None,
        Parameter(name=["--commit", "-c"], help="Full SHA to reset to (default HEAD)"),
    ] = None,
    mode: Annotated[
        ResetMode,
        Parameter(name=["--mode"], help="How far the reset reaches"),
    ] = ResetMode.HARD,
) -> None:
    """Move the current branch and reset the index and working tree"""
    console = Console()

    with open_client() as client, handle_client_errors():
        options: list[object] = [with_mode(mode)]
        if commit is not None:
            options.append(with_commit(commit))
        client.reset(*options)
        head_sha = get_head_sha(client.repository)

    sha = decode_bytes(head_sha) if head_sha is not None else ""
    console.print(f"[green]Reset ({mode})[/green] to {sha[:8]}")


def dispose_command(
    force: Annotated[
        bool,
        Parameter(
            name=["--force", "-f"],
            help="Skip confirmation prompt",
        ),
    ] = False,
) -> None:
    """Delete the repository at --path

    Removes the directory, working tree included.
    """
    console = Console()
    ctx = CLIContext.get_current()
    path = ctx.settings.client.path

    if not is_repo_exists(path):
        exit_with_error(f"No repository at {path}", ExitCode.NOT_FOUND)

    if not force:
        console.print(
            f"[yellow]This will delete {path} and everything in it. "
            "Use --force to confirm.[/yellow]"
        )
        sys.exit(1)

    with handle_client_errors():
        ctx.client().dispose()

    console.print(f"[green]Deleted[/green] {path}")

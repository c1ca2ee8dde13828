# pyright: reportUnusedCallResult=false, reportUnusedFunction=false
# ruff: noqa: D415, FBT002
"""Remote management and synchronization commands."""

from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console

from gitvcs.client import (
    with_depth,
    with_force_pull,
    with_force_push,
    with_prune,
    with_reference_name_pull,
    with_refspecs,
    with_remote_name_pull,
    with_remote_name_push,
)
from gitvcs.constants import DEFAULT_REMOTE_NAME

from ._context import open_client
from ._shared import handle_client_errors

__all__ = ["app", "pull_command", "push_command"]

app = App(name="remote", help="Manage configured remotes", help_on_error=True)


@app.command(name="list")
def _list() -> None:
    """List remotes with their URLs"""
    console = Console()

    with open_client() as client, handle_client_errors():
        remotes = {name: client.get_remote_url(name) for name in client.list_remotes()}

    if not remotes:
        console.print("[dim]No remotes configured[/dim]")
        return

    for name, url in remotes.items():
        console.print(f"[bold]{name}[/bold]\t{url}")


@app.command(name="add")
def _add(
    name: Annotated[str, Parameter(help="Remote name")],
    url: Annotated[str, Parameter(help="Remote URL")],
) -> None:
    """Add a remote"""
    console = Console()

    with open_client() as client, handle_client_errors():
        client.create_remote(name, url)

    console.print(f"[green]Added remote[/green] {name} -> {url}")


def pull_command(
    remote: Annotated[
        str,
        Parameter(name=["--remote", "-r"], help="Remote to pull from"),
    ] = DEFAULT_REMOTE_NAME,
    branch: Annotated[
        str | None,
        Parameter(name=["--branch", "-b"], help="Remote branch to merge"),
    ] = None,
    depth: Annotated[
        int,
        Parameter(name=["--depth"], help="Fetch depth (0 for full history)"),
    ] = 0,
    force: Annotated[
        bool,
        Parameter(
            name=["--force", "-f"],
            help="Reset onto the remote branch even if histories diverged",
        ),
    ] = False,
) -> None:
    """Fetch from a remote and fast-forward the current branch"""
    console = Console()

    options: list[object] = [
        with_remote_name_pull(remote),
        with_depth(depth),
        with_force_pull(force),
    ]
    if branch is not None:
        options.append(with_reference_name_pull(branch))

    with open_client() as client, handle_client_errors():
        result = client.pull(*options)

    if result.empty_remote:
        console.print(f"[dim]Remote {remote} has no branches yet[/dim]")
    elif result.up_to_date:
        console.print("[dim]Already up to date[/dim]")
    else:
        sha = (result.sha or "")[:8]
        console.print(f"[green]Updated {result.branch}[/green] to {sha}")


def push_command(
    *refspecs: Annotated[
        str,
        Parameter(help="Refspecs to push (default: every local branch)"),
    ],
    remote: Annotated[
        str,
        Parameter(name=["--remote", "-r"], help="Remote to push to"),
    ] = DEFAULT_REMOTE_NAME,
    prune: Annotated[
        bool,
        Parameter(
            name=["--prune"],
            help="Delete remote branches that are not pushed",
        ),
    ] = False,
    force: Annotated[
        bool,
        Parameter(
            name=["--force", "-f"],
            help="Allow non-fast-forward updates",
        ),
    ] = False,
) -> None:
    """Push local branches to a remote"""
    console = Console()

    options: list[object] = [
        with_remote_name_push(remote),
        with_prune(prune),
        with_force_push(force),
    ]
    if refspecs:
        options.append(with_refspecs(*refspecs))

    with open_client() as client, handle_client_errors():
        result = client.push(*options)

    if result.up_to_date:
        console.print("[dim]Everything up to date[/dim]")
        return

    for ref, sha in sorted(result.updated_refs.items()):
        if sha is None:
            console.print(f"[red]- {ref}[/red] (deleted)")
        else:
            console.print(f"[green]+ {ref}[/green] {sha[:8]}")

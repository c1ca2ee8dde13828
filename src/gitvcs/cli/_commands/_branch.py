# pyright: reportUnusedCallResult=false
# ruff: noqa: D415, FBT002
"""Branch listing and checkout commands."""

from typing import Annotated

from cyclopts import Parameter
from rich.console import Console

from gitvcs.client import with_force_checkout
from gitvcs.exceptions import UnableToGetCurrentBranchError

from ._context import open_client
from ._shared import ExitCode, exit_with_error, handle_client_errors

__all__ = ["branches_command", "checkout_command"]


def branches_command() -> None:
    """List local branches, marking the current one"""
    console = Console()

    with open_client() as client, handle_client_errors():
        branches = client.list_branches()
        try:
            current = client.get_current_branch()
        except UnableToGetCurrentBranchError:
            current = None

    if not branches:
        console.print("[dim]No branches yet[/dim]")
        if current is not None:
            console.print(f"[dim]HEAD points to unborn branch {current}[/dim]")
        return

    for branch in branches:
        if branch == current:
            console.print(f"[green]* {branch}[/green]")
        else:
            console.print(f"  {branch}")


def checkout_command(
    branch: Annotated[
        str | None,
        Parameter(help="Branch to check out; created from HEAD if missing"),
    ] = None,
    commit: Annotated[
        str | None,
        Parameter(name=["--hash"], help="Full SHA to check out with HEAD detached"),
    ] = None,
    force: Annotated[
        bool,
        Parameter(
            name=["--force", "-f"],
            help="Overwrite uncommitted changes",
        ),
    ] = False,
) -> None:
    """Switch the working tree to a branch or commit"""
    console = Console()

    if branch is not None and commit is not None:
        exit_with_error(
            "Give either a branch or --hash, not both", ExitCode.VALIDATION_ERROR
        )

    with open_client() as client, handle_client_errors():
        if commit is not None:
            client.checkout_hash(commit, with_force_checkout(force))
            console.print(f"[green]HEAD detached at[/green] {commit[:8]}")
            return

        if branch is None:
            client.checkout(with_force_checkout(force))
        else:
            client.checkout_branch(branch, with_force_checkout(force))
        current = client.get_current_branch()
        console.print(f"[green]Switched to branch[/green] {current}")

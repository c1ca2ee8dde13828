"""gitvcs CLI commands."""
# pyright: reportUnusedCallResult=false

from typing import TYPE_CHECKING

from ._branch import branches_command, checkout_command
from ._context import CLIContext, load_settings_or_exit, open_client
from ._remote import app as remote_app
from ._remote import pull_command, push_command
from ._repo import (
    add_command,
    clone_command,
    commit_command,
    dispose_command,
    init_command,
    log_command,
    reset_command,
    status_command,
)
from ._shared import (
    ExitCode,
    error_message,
    exit_code_for,
    exit_with_error,
    get_error_console,
    handle_client_errors,
)

if TYPE_CHECKING:
    from cyclopts import App

__all__ = [
    "CLIContext",
    "ExitCode",
    "error_message",
    "exit_code_for",
    "exit_with_error",
    "get_error_console",
    "handle_client_errors",
    "load_settings_or_exit",
    "open_client",
    "register_commands",
    "remote_app",
]


def register_commands(app: "App") -> None:  # noqa: UP037
    app.command(init_command, name="init")
    app.command(clone_command, name="clone")
    app.command(status_command, name="status")
    app.command(add_command, name="add")
    app.command(commit_command, name="commit")
    app.command(log_command, name="log")
    app.command(branches_command, name="branches")
    app.command(checkout_command, name="checkout")
    app.command(pull_command, name="pull")
    app.command(push_command, name="push")
    app.command(reset_command, name="reset")
    app.command(dispose_command, name="dispose")
    app.command(remote_app)

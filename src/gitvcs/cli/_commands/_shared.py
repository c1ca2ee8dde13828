"""Shared CLI utilities for commands.

This module provides common utilities used across CLI command implementations:
- Standardized exit codes
- Mapping of client errors to exit codes
- Console utilities for error handling
"""

from collections.abc import Iterator
from contextlib import contextmanager
from enum import IntEnum
from typing import TYPE_CHECKING, Never

from dulwich.errors import GitProtocolError

from gitvcs.exceptions import (
    ConfigLoadError,
    ConfigValidationError,
    GitVcsError,
    InvalidActionsForBareRepoError,
    InvalidArgsLengthError,
    InvalidOptionsError,
    InvalidRepoPathError,
    NonFastForwardError,
    PushRejectedError,
    ReferenceNotFoundError,
    RemoteAlreadyExistsError,
    RemoteNotFoundError,
    RepoAlreadyExistsError,
    RepositoryNotInitializedError,
    UnableToGetCurrentBranchError,
    UnsupportedTypeError,
    WorktreeDirtyError,
)

if TYPE_CHECKING:
    from rich.console import Console

__all__ = [
    "ExitCode",
    "error_message",
    "exit_code_for",
    "exit_with_error",
    "get_error_console",
    "handle_client_errors",
]


class ExitCode(IntEnum):
    """Standard exit codes for gitvcs CLI commands."""

    SUCCESS = 0
    LOAD_ERROR = 1
    VALIDATION_ERROR = 2
    NOT_FOUND = 3
    IO_ERROR = 4
    INTERNAL_ERROR = 5
    CONFLICT = 6


# Checked in order; the first matching entry wins
_EXIT_CODES: tuple[tuple[tuple[type[BaseException], ...], ExitCode], ...] = (
    ((ConfigLoadError,), ExitCode.LOAD_ERROR),
    (
        (
            ConfigValidationError,
            InvalidOptionsError,
            InvalidArgsLengthError,
            UnsupportedTypeError,
            InvalidRepoPathError,
            ValueError,
        ),
        ExitCode.VALIDATION_ERROR,
    ),
    (
        (ReferenceNotFoundError, RemoteNotFoundError, RepositoryNotInitializedError),
        ExitCode.NOT_FOUND,
    ),
    (
        (
            NonFastForwardError,
            PushRejectedError,
            WorktreeDirtyError,
            RemoteAlreadyExistsError,
            RepoAlreadyExistsError,
            InvalidActionsForBareRepoError,
            UnableToGetCurrentBranchError,
        ),
        ExitCode.CONFLICT,
    ),
    ((OSError, GitProtocolError), ExitCode.IO_ERROR),
)


def exit_code_for(error: BaseException) -> ExitCode:
    """Return the exit code for an error raised by a command."""
    for error_types, code in _EXIT_CODES:
        if isinstance(error, error_types):
            return code
    return ExitCode.INTERNAL_ERROR


def error_message(error: BaseException) -> str:
    """Return the human-readable message of an error.

    KeyError subclasses quote their message in str(); the first argument is
    used instead.
    """
    if isinstance(error, KeyError) and error.args:
        return str(error.args[0])
    return str(error)


def get_error_console() -> "Console":  # noqa: UP037
    """Get a Rich console configured for error output to stderr.

    Returns:
        Console instance writing to stderr.
    """
    from rich.console import Console

    return Console(stderr=True)


def exit_with_error(
    message: str,
    code: ExitCode = ExitCode.INTERNAL_ERROR,
    *,
    console: "Console | None" = None,
) -> Never:
    """Print an error message and exit with the specified code.

    Args:
        message: The error message to display.
        code: The exit code to use (defaults to INTERNAL_ERROR).
        console: Optional Rich console for output. If not provided,
            a new stderr console will be created.

    Raises:
        SystemExit: Always raised with the specified exit code.
    """
    if console is None:
        console = get_error_console()

    console.print(f"[red]Error:[/red] {message}")
    raise SystemExit(code)


@contextmanager
def handle_client_errors(*, console: "Console | None" = None) -> Iterator[None]:
    """Turn client, transport and I/O errors into an error exit.

    Raises:
        SystemExit: With the exit code matching the error.
    """
    try:
        yield
    except (GitVcsError, GitProtocolError, OSError, ValueError) as e:
        exit_with_error(error_message(e), exit_code_for(e), console=console)

# pyright: reportUnusedCallResult=false
# ruff: noqa: TC003  # Path needed at runtime for dataclass field
"""CLI context for global state management.

This module provides thread-safe context management for CLI options and
loaded settings. The CLIContext is set once at CLI startup and made available
to all commands via contextvars.
"""

import contextvars
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from gitvcs.client import GitClient
from gitvcs.config import Settings, load_settings
from gitvcs.exceptions import ConfigError

from ._shared import (
    ExitCode,
    error_message,
    exit_code_for,
    exit_with_error,
    handle_client_errors,
)

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger


# Thread-safe context variable for CLIContext
_current_cli_context: "contextvars.ContextVar[CLIContext | None]" = (
    contextvars.ContextVar("cli_context", default=None)
)


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Global CLI context with settings and options.

    Attributes:
        settings: Loaded settings; the client section already carries the
            global command-line options.
        verbose: Enable verbose output with additional details.
        config_path: Config file given with --config, if any.
        logger: Structured logger for CLI commands.
    """

    settings: Settings = field(default_factory=Settings, repr=False)
    verbose: bool = False
    config_path: Path | None = None
    logger: "FilteringBoundLogger | None" = field(default=None, repr=False)

    @classmethod
    def get_current(cls) -> "CLIContext":
        """Get current active CLIContext, or create a default if not set.

        Returns:
            The currently active CLIContext, or a default instance if none is set.
        """
        ctx = _current_cli_context.get()
        if ctx is not None:
            return ctx
        return cls()

    @classmethod
    def set_current(cls, ctx: "CLIContext") -> None:
        """Set the current active CLIContext.

        Args:
            ctx: The CLIContext to set as current.
        """
        _current_cli_context.set(ctx)

    @classmethod
    def reset(cls) -> None:
        """Reset to default context.

        This is primarily useful for testing to ensure a clean state between tests.
        """
        _current_cli_context.set(None)

    def client(self) -> GitClient:
        """Create a client from the settings without opening the repository."""
        return GitClient(self.settings.client, logger=self.logger)


def load_settings_or_exit(
    *,
    config_path: Path | None = None,
    overrides: dict[str, Any] | None = None,  # pyright: ignore[reportExplicitAny]
) -> Settings:
    """Load settings, exiting with an error message when they are invalid.

    When config_path is provided, the file must exist (explicit user request).

    Args:
        config_path: Explicit path to config file (--config flag).
        overrides: Settings given on the command line.

    Returns:
        The loaded settings.

    Raises:
        SystemExit: If the file is missing, unreadable or invalid.
    """
    if config_path is not None and not config_path.exists():
        exit_with_error(f"Config file not found: {config_path}", ExitCode.LOAD_ERROR)

    try:
        return load_settings(config_path, overrides=overrides)
    except (ConfigError, OSError) as e:
        exit_with_error(error_message(e), exit_code_for(e))


def open_client() -> GitClient:
    """Create and open a client for the current CLI context.

    Raises:
        SystemExit: If the repository cannot be opened.
    """
    ctx = CLIContext.get_current()
    with handle_client_errors():
        return ctx.client().init()

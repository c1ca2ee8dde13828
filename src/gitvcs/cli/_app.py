"""The command-line interface for gitvcs."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import Annotated, Any

from cyclopts import App, Parameter
from rich.console import Console

from gitvcs.enums import AuthType
from gitvcs.utils import create_cli_logger

from ._commands import register_commands
from ._commands._context import CLIContext, load_settings_or_exit

_HELP = "Manage git repositories on disk or in memory."


def _build_overrides(  # noqa: PLR0913
    *,
    path: str | None,
    remote_url: str | None,
    bare: bool,
    auth_type: AuthType | None,
    username: str | None,
    password: str | None,
    private_key_path: Path | None,
    verbose: bool,
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    client: dict[str, object] = {}
    if path is not None:
        client["path"] = path
    if remote_url is not None:
        client["remote_url"] = remote_url
    if bare:
        client["is_bare"] = True
    if auth_type is not None:
        client["auth_type"] = auth_type
    if username is not None:
        client["username"] = username
    if password is not None:
        client["password"] = password
    if private_key_path is not None:
        client["private_key_path"] = str(private_key_path)

    overrides: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]
    if client:
        overrides["client"] = client
    if verbose:
        overrides["logging"] = {"level": "debug"}
    return overrides


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    """Create the CLI application.

    Global options are parsed by the meta app; invoke ``app.meta`` to run
    commands with them.
    """
    if console is None:
        console = Console()
    if error_console is None:
        error_console = Console(stderr=True)
    app = App(
        name="gitvcs",
        help=_HELP,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )

    @app.meta.default
    def _default(  # noqa: PLR0913  # pyright: ignore[reportUnusedFunction]
        *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
        path: Annotated[
            str | None,
            Parameter(
                name=["--path", "-p"],
                help="Repository directory (default: current directory)",
            ),
        ] = None,
        remote_url: Annotated[
            str | None,
            Parameter(name="--remote-url", help="URL of the origin remote"),
        ] = None,
        bare: Annotated[
            bool,
            Parameter(name="--bare", help="Create a bare repository"),
        ] = False,
        auth_type: Annotated[
            AuthType | None,
            Parameter(name="--auth-type", help="Authentication for pull and push"),
        ] = None,
        username: Annotated[
            str | None,
            Parameter(name="--username", help="HTTP username or SSH user"),
        ] = None,
        password: Annotated[
            str | None,
            Parameter(
                name="--password", help="HTTP password or SSH key passphrase"
            ),
        ] = None,
        private_key_path: Annotated[
            Path | None,
            Parameter(name="--private-key-path", help="SSH private key file"),
        ] = None,
        config: Annotated[
            Path | None, Parameter(name="--config", help="Path to config file")
        ] = None,
        verbose: Annotated[
            bool, Parameter(name=["--verbose", "-v"], help="Enable debug logging")
        ] = False,
    ) -> None:
        """Launch gitvcs with global options.

        Args:
            tokens: Command tokens to pass to subcommands.
            path: Repository directory.
            remote_url: URL of the origin remote.
            bare: Create a bare repository when none exists.
            auth_type: Authentication method for remotes.
            username: HTTP username or SSH user.
            password: HTTP password or SSH key passphrase.
            private_key_path: SSH private key file.
            config: Explicit path to config file.
            verbose: Enable debug logging.
        """
        overrides = _build_overrides(
            path=path,
            remote_url=remote_url,
            bare=bare,
            auth_type=auth_type,
            username=username,
            password=password,
            private_key_path=private_key_path,
            verbose=verbose,
        )
        settings = load_settings_or_exit(config_path=config, overrides=overrides)

        if not settings.client.path:
            client = settings.client.model_copy(update={"path": str(Path.cwd())})
            settings = settings.model_copy(update={"client": client})

        cli_logger = create_cli_logger(
            level=settings.logging.level.value,
            log_format=settings.logging.format.value,  # type: ignore[arg-type]
            log_file=settings.logging.file,
            command=tokens[0] if tokens else "",
        )

        ctx = CLIContext(
            settings=settings,
            verbose=verbose,
            config_path=config,
            logger=cli_logger,
        )
        CLIContext.set_current(ctx)

        try:
            app(tokens)
        finally:
            CLIContext.reset()

    register_commands(app)
    return app


app = create_app()


def main() -> None:
    """Default entrypoint for the `gitvcs` CLI."""
    app = create_app()
    app.meta()


if __name__ == "__main__":
    main()

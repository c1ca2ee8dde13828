# pyright: reportAny=false, reportExplicitAny=false
"""Settings loading with source precedence."""

from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from gitvcs.exceptions import ConfigValidationError

from ._loader import deep_merge, parse_env_vars, read_toml_file
from ._models import Settings

if TYPE_CHECKING:
    from collections.abc import Mapping


def load_settings(
    config_path: Path | str | None = None,
    *,
    include_env: bool = True,
    environ: "Mapping[str, str] | None" = None,
    overrides: dict[str, Any] | None = None,
) -> Settings:
    """Load settings from a TOML file, the environment and explicit overrides.

    Sources are merged from lowest to highest precedence:
    1. Model defaults
    2. The TOML file at `config_path` (must exist when given)
    3. GITVCS_* environment variables (when `include_env` is True)
    4. `overrides`

    Args:
        config_path: Optional TOML file with [client] and [logging] tables.
        include_env: Whether to read GITVCS_* environment variables.
        environ: Environment mapping to read instead of os.environ.
        overrides: Nested dictionary applied last.

    Returns:
        The validated settings.

    Raises:
        FileNotFoundError: If `config_path` does not exist.
        ConfigLoadError: If the TOML file cannot be parsed.
        ConfigValidationError: If a merged value fails validation.
    """
    merged: dict[str, Any] = {}
    source = "defaults"

    if config_path is not None:
        merged = deep_merge(merged, read_toml_file(Path(config_path)))
        source = str(config_path)

    if include_env:
        env_values = parse_env_vars(environ)
        if env_values:
            merged = deep_merge(merged, env_values)
            source = "env"

    if overrides:
        merged = deep_merge(merged, overrides)
        source = "overrides"

    try:
        return Settings.model_validate(merged)
    except ValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(part) for part in first["loc"])
        msg = f"Invalid configuration value for '{key}': {first['msg']}"
        raise ConfigValidationError(
            msg,
            key=key,
            value=first.get("input"),
            expected=first["type"],
            source=source,
        ) from e

"""Configuration models.

This module provides the Pydantic models for client settings and logging.
All models are frozen: a configuration never changes once a client holds it.
"""

from enum import StrEnum
from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from gitvcs.constants import DEFAULT_USERNAME
from gitvcs.enums import AuthType, InitType


class LogLevel(StrEnum):
    """Log level threshold values.

    Values are ordered from most verbose (debug) to least verbose (error).
    """

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log output format values."""

    JSON = "json"
    TEXT = "text"


def default_private_key_path() -> str:
    """Return the conventional SSH private key location for the current user."""
    return str(Path.home() / ".ssh" / "id_rsa")


class LoggingConfig(BaseModel):
    """Logging configuration section.

    Attributes:
        level: Log level threshold.
        format: Log output format.
        file: Path to log file (empty writes to stderr).
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = LogLevel.WARNING
    format: LogFormat = LogFormat.TEXT
    file: str = ""


class GitClientConfig(BaseModel):
    """Settings for a single repository client.

    Attributes:
        path: Repository directory, or the registry key for in-memory clients.
        remote_url: URL of the default remote; empty for local-only use.
        is_bare: Create a bare repository when none exists at the path.
        is_mem: Keep the repository in process memory instead of on disk.
        auth_type: Authentication method for pull and push.
        username: HTTP username, or the SSH user when the URL has none.
        password: HTTP password, or the passphrase of the SSH private key.
        private_key: SSH private key content; takes precedence over the path.
        private_key_path: File holding the SSH private key.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    path: str = ""
    remote_url: str = ""
    is_bare: bool = False
    is_mem: bool = False
    auth_type: AuthType = AuthType.NONE
    username: str = DEFAULT_USERNAME
    password: str = Field(default="", repr=False)
    private_key: str = Field(default="", repr=False)
    private_key_path: str = Field(default_factory=default_private_key_path)

    @property
    def init_type(self) -> InitType:
        """Storage backend selected by the memory flag."""
        return InitType.MEM if self.is_mem else InitType.FS


class Settings(BaseModel):
    """Top-level settings as read from a config file and the environment.

    Attributes:
        client: Repository client settings.
        logging: Logging settings.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    client: GitClientConfig = Field(default_factory=GitClientConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

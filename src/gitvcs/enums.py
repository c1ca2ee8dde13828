"""Enumeration types for gitvcs."""

from enum import StrEnum


class AuthType(StrEnum):
    """Authentication method used for remote transports."""

    NONE = "none"
    HTTP = "http"
    SSH = "ssh"


class InitType(StrEnum):
    """Storage backend of a client."""

    FS = "fs"
    MEM = "mem"


class ResetMode(StrEnum):
    """How far a reset reaches.

    SOFT moves the branch only, MIXED also rebuilds the index, and HARD also
    rewrites the working tree.
    """

    SOFT = "soft"
    MIXED = "mixed"
    HARD = "hard"

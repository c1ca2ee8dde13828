"""Transport authentication.

Translates the configured auth type into keyword arguments for
``dulwich.client.get_transport_and_path``. HTTP credentials only apply to
http(s) URLs and SSH keys only to SSH URLs; local paths never take
credentials.
"""

import io
import re
from pathlib import Path
from typing import Any, Final

import paramiko
from dulwich.contrib.paramiko_vendor import ParamikoSSHVendor

from gitvcs.config import GitClientConfig
from gitvcs.enums import AuthType
from gitvcs.exceptions import AuthError, InvalidAuthTypeError

# user@host:path, as accepted by scp
_SCP_LIKE_URL: Final = re.compile(r"^(?:[^@/:]+@)?[^@/:]{2,}:(?!//)")

# Key classes tried in order when parsing a private key
_KEY_TYPES: Final = (paramiko.Ed25519Key, paramiko.ECDSAKey, paramiko.RSAKey)


def url_transport(url: str) -> AuthType:
    """Classify a remote URL by the credentials it can take.

    Returns:
        AuthType.HTTP for http(s) URLs, AuthType.SSH for ssh:// and scp-like
        URLs, and AuthType.NONE for local paths and other schemes.
    """
    lowered = url.lower()
    if lowered.startswith(("http://", "https://")):
        return AuthType.HTTP
    if lowered.startswith(("ssh://", "git+ssh://", "ssh+git://")):
        return AuthType.SSH
    if "://" not in url and _SCP_LIKE_URL.match(url):
        return AuthType.SSH
    return AuthType.NONE


def load_private_key(data: str, passphrase: str = "") -> paramiko.PKey:
    """Parse an OpenSSH or PEM private key.

    Args:
        data: Private key content.
        passphrase: Passphrase for encrypted keys; empty for none.

    Returns:
        The parsed key.

    Raises:
        AuthError: If the key cannot be parsed as Ed25519, ECDSA or RSA.
    """
    errors: list[str] = []
    for key_type in _KEY_TYPES:
        try:
            return key_type.from_private_key(
                io.StringIO(data), password=passphrase or None
            )
        except (paramiko.SSHException, ValueError) as e:
            errors.append(f"{key_type.__name__}: {e}")
    msg = f"Unable to parse SSH private key ({'; '.join(errors)})"
    raise AuthError(msg)


def _read_private_key(config: GitClientConfig) -> str | None:
    if config.private_key:
        return config.private_key
    if config.private_key_path:
        # A missing key file is an error, not a fallback to anonymous access
        return Path(config.private_key_path).expanduser().read_text()
    return None


def resolve_transport_kwargs(
    config: GitClientConfig, url: str
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Build transport keyword arguments for a remote URL.

    Args:
        config: Client configuration holding the auth type and credentials.
        url: Remote URL the transport is opened for.

    Returns:
        Keyword arguments for get_transport_and_path: ``username`` and
        ``password`` for HTTP, a paramiko ``vendor`` for SSH, or nothing.

    Raises:
        InvalidAuthTypeError: If the auth type is not supported.
        AuthError: If the SSH private key cannot be parsed.
        OSError: If the SSH private key file cannot be read.
    """
    auth_type = config.auth_type
    if auth_type not in set(AuthType):
        msg = f"Unsupported auth type: {auth_type!r}"
        raise InvalidAuthTypeError(msg)

    transport = url_transport(url)
    if auth_type == AuthType.NONE or auth_type != transport:
        return {}

    if auth_type == AuthType.HTTP:
        return {"username": config.username, "password": config.password}

    key_data = _read_private_key(config)
    if key_data is None:
        return {}
    pkey = load_private_key(key_data, config.password)
    vendor = ParamikoSSHVendor(
        pkey=pkey,
        username=config.username,
        look_for_keys=False,
        allow_agent=False,
    )
    return {"vendor": vendor}

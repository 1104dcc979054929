"""
Kinto client configuration.

A ClientConfig is built once and shared by reference with every resource
derived from the same client; it is frozen and never mutated.
"""

from __future__ import annotations
import base64
import os
from dataclasses import dataclass, field
from typing import Dict, Optional

__version__ = "0.4.0"

# Well-known endpoints
ENDPOINTS = {
    "local": "http://localhost:8888/v1",
    "dev": "https://kinto.dev.mozaws.net/v1",
}


@dataclass(frozen=True)
class BasicAuth:
    """HTTP basic credentials."""

    username: str
    password: str = field(default="", repr=False)

    def header(self) -> str:
        """Value of the Authorization header for these credentials."""
        token = base64.b64encode(f"{self.username}:{self.password}".encode("utf-8"))
        return "Basic " + token.decode("ascii")

    @classmethod
    def parse(cls, value: str) -> "BasicAuth":
        """Parse ``user:password`` (password may be empty)."""
        username, _, password = value.partition(":")
        if not username:
            raise ValueError("Basic auth requires a username")
        return cls(username, password)


@dataclass(frozen=True)
class ClientConfig:
    """Configuration for the Kinto client."""

    server_url: str
    auth: Optional[BasicAuth] = None
    timeout: float = 30.0
    verify_ssl: bool = True
    user_agent: str = f"kinto-resource-client/{__version__}"
    debug: bool = False

    def __post_init__(self):
        """Resolve well-known endpoints and normalize the server URL."""
        if not self.server_url:
            raise ValueError("server_url must not be empty")
        url = ENDPOINTS.get(self.server_url.lower(), self.server_url)
        # frozen dataclass: assign through object.__setattr__
        object.__setattr__(self, "server_url", url.rstrip("/"))
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")

    def auth_headers(self) -> Dict[str, str]:
        """Headers added to every request sent with this configuration."""
        headers = {"User-Agent": self.user_agent}
        if self.auth is not None:
            headers["Authorization"] = self.auth.header()
        return headers

    @classmethod
    def from_env(cls, prefix: str = "KINTO_") -> "ClientConfig":
        """
        Build a configuration from environment variables.

        Reads ``<prefix>SERVER_URL`` (required), ``<prefix>AUTH``
        (``user:password``), ``<prefix>TIMEOUT``, ``<prefix>VERIFY_SSL`` and
        ``<prefix>DEBUG``.

        Raises:
            ValueError: If the server URL is missing or a value is malformed
        """
        server_url = os.environ.get(prefix + "SERVER_URL")
        if not server_url:
            raise ValueError(f"{prefix}SERVER_URL is not set")

        auth_value = os.environ.get(prefix + "AUTH")
        auth = BasicAuth.parse(auth_value) if auth_value else None

        kwargs = {}
        timeout = os.environ.get(prefix + "TIMEOUT")
        if timeout:
            kwargs["timeout"] = float(timeout)
        verify = os.environ.get(prefix + "VERIFY_SSL")
        if verify:
            kwargs["verify_ssl"] = _as_bool(verify)
        debug = os.environ.get(prefix + "DEBUG")
        if debug:
            kwargs["debug"] = _as_bool(debug)

        return cls(server_url=server_url, auth=auth, **kwargs)


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


__all__ = ["ENDPOINTS", "BasicAuth", "ClientConfig"]

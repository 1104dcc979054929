"""
HTTP transport for the Kinto client.

Performs one synchronous HTTP exchange over a requests.Session and hands
back status, headers and body text. Every requests failure is re-raised as
TransportError.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional

import requests
from requests.structures import CaseInsensitiveDict

from ..runtime.errors import ErrorCode, TransportError


logger = logging.getLogger(__name__)


@dataclass
class TransportResponse:
    """Raw result of one HTTP exchange."""
    status: int
    headers: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)
    text: str = ""


class RequestsTransport:
    """
    Transport backed by requests.

    Example:
        ```python
        transport = RequestsTransport()
        response = transport.send("GET", "http://localhost:8888/v1/", {})
        ```
    """

    def __init__(self, session: Optional[requests.Session] = None):
        """
        Initialize the transport.

        Args:
            session: Optional requests.Session for connection pooling
        """
        self._session = session or requests.Session()
        self._owns_session = session is None

    @property
    def session(self) -> requests.Session:
        return self._session

    def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        data: str = "",
        timeout: Optional[float] = None,
        verify: bool = True,
    ) -> TransportResponse:
        """
        Perform one HTTP exchange.

        Args:
            method: HTTP method
            url: Absolute URL
            headers: Request headers
            data: Encoded request body (empty for none)
            timeout: Request timeout in seconds
            verify: Whether to verify TLS certificates

        Returns:
            TransportResponse

        Raises:
            TransportError: On any connection, TLS or timeout failure
        """
        try:
            response = self._session.request(
                method,
                url,
                headers=dict(headers),
                data=data.encode("utf-8") if data else None,
                timeout=timeout,
                verify=verify,
            )
        except requests.exceptions.SSLError as e:
            raise TransportError(f"TLS failure: {e}", code=ErrorCode.TLS_ERROR, cause=e)
        except requests.exceptions.Timeout as e:
            raise TransportError(f"Request timed out: {e}", code=ErrorCode.TIMEOUT, cause=e)
        except requests.exceptions.ConnectionError as e:
            raise TransportError(f"Connection failed: {e}", code=ErrorCode.CONNECTION_FAILED, cause=e)
        except requests.exceptions.RequestException as e:
            raise TransportError(f"HTTP request failed: {e}", cause=e)

        return TransportResponse(
            status=response.status_code,
            headers=CaseInsensitiveDict(response.headers),
            text=response.text,
        )

    def close(self) -> None:
        """Close the HTTP session if owned by this transport."""
        if self._owns_session:
            self._session.close()


__all__ = ["TransportResponse", "RequestsTransport"]

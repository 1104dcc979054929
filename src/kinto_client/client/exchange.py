"""
Exchange protocol: run one RequestDescriptor against the server.
"""

from __future__ import annotations
import logging
from typing import Any

from requests.structures import CaseInsensitiveDict

from ..config import ClientConfig
from ..runtime.codec import encode_json, loads
from ..runtime.errors import SerializationError, error_for_status
from .requests import RequestDescriptor
from .response import ResponseEnvelope


logger = logging.getLogger(__name__)


def build_url(config: ClientConfig, descriptor: RequestDescriptor) -> str:
    """Concatenate base URL, path and (if any) query string."""
    url = config.server_url + descriptor.path
    query = descriptor.query_string
    if query:
        separator = "&" if "?" in descriptor.path else "?"
        url = url + separator + query
    return url


def send(descriptor: RequestDescriptor, config: ClientConfig, transport: Any) -> ResponseEnvelope:
    """
    Execute a descriptor and classify the response.

    Args:
        descriptor: Request to perform
        config: Owning client configuration (base URL and credentials)
        transport: Object with a ``send(method, url, headers, data, timeout, verify)``
            method returning a TransportResponse

    Returns:
        ResponseEnvelope for a 2xx response

    Raises:
        NotModified: On HTTP 304
        PreconditionFailed: On HTTP 412
        TransportError: On any other non-2xx status or network failure
        SerializationError: If the body cannot be encoded or the response parsed
    """
    url = build_url(config, descriptor)
    headers = dict(descriptor.headers)
    headers.update(config.auth_headers())
    payload = encode_json(descriptor.body)

    logger.debug("%s %s", descriptor.method, url)
    response = transport.send(
        descriptor.method,
        url,
        headers,
        payload,
        timeout=config.timeout,
        verify=config.verify_ssl,
    )
    logger.debug("%s %s -> %s", descriptor.method, url, response.status)

    if not 200 <= response.status < 300:
        # Error bodies are informative only; an unparseable one must not hide the status.
        try:
            error_body = loads(response.text)
        except SerializationError:
            error_body = None
        raise error_for_status(response.status, error_body, descriptor.path)

    return ResponseEnvelope(
        status=response.status,
        path=descriptor.path,
        body=loads(response.text),
        headers=CaseInsensitiveDict(response.headers),
    )


__all__ = ["build_url", "send"]

"""
Pagination support for plural endpoints.

Kinto paginates listings (and plural deletes) and points at the next page
through the ``Next-Page`` response header. ``iter_pages`` follows those
cursors one request at a time; ``paginate`` merges every page into one
envelope.
"""

from __future__ import annotations
import logging
from typing import Callable, Iterator
from urllib.parse import parse_qsl, urlsplit

from ..runtime.errors import UnsupportedOperation
from .requests import RequestDescriptor, GET, DELETE
from .response import ResponseEnvelope


logger = logging.getLogger(__name__)

Sender = Callable[[RequestDescriptor], ResponseEnvelope]


def cursor_to_path(cursor: str, server_url: str) -> str:
    """
    Strip the server base URL from a Next-Page cursor.

    Absolute cursors lose the whole base URL; host-relative cursors lose the
    base URL's path prefix (e.g. ``/v1``). The query string is kept in the
    returned path.
    """
    if cursor.startswith(server_url):
        path = cursor[len(server_url):]
        return path if path.startswith("/") else "/" + path

    parts = urlsplit(cursor)
    path = parts.path
    base_path = urlsplit(server_url).path.rstrip("/")
    if base_path and (path == base_path or path.startswith(base_path + "/")):
        path = path[len(base_path):] or "/"
    if parts.query:
        path = f"{path}?{parts.query}"
    return path


def follow_cursor(descriptor: RequestDescriptor, cursor: str, server_url: str) -> RequestDescriptor:
    """
    Descriptor of the page a cursor points at.

    The cursor query replaces the original query, so envelope paths stay
    free of query strings.
    """
    parts = urlsplit(cursor_to_path(cursor, server_url))
    return descriptor.copy(path=parts.path, query=dict(parse_qsl(parts.query, keep_blank_values=True)))


def iter_pages(send: Sender, descriptor: RequestDescriptor, server_url: str) -> Iterator[ResponseEnvelope]:
    """
    Yield the envelope of every page, first page first.

    Args:
        send: Callable performing one exchange
        descriptor: Initial GET or DELETE on a plural endpoint
        server_url: Base URL stripped from the cursors

    Raises:
        UnsupportedOperation: If the descriptor cannot be paginated
        KintoError: Whatever the failing page raised
    """
    if descriptor.method not in (GET, DELETE):
        raise UnsupportedOperation(
            f"Cannot paginate {descriptor.method} requests",
            details={"path": descriptor.path},
        )

    envelope = send(descriptor)
    yield envelope

    while envelope.next_page:
        next_request = follow_cursor(descriptor, envelope.next_page, server_url)
        logger.debug("Following next page %s?%s", next_request.path, next_request.query_string)
        envelope = send(next_request)
        yield envelope


def paginate(send: Sender, descriptor: RequestDescriptor, server_url: str) -> ResponseEnvelope:
    """
    Follow every page and merge their ``data`` lists, in order.

    The first page's envelope is returned with the merged data; any failing
    page aborts the whole operation.
    """
    pages = iter_pages(send, descriptor, server_url)
    first = next(pages)
    merged = list(first.data or [])
    count = 1
    for page in pages:
        merged.extend(page.data or [])
        count += 1

    if count > 1:
        logger.debug("Merged %d pages (%d entries) from %s", count, len(merged), descriptor.path)
    return first.with_data(merged)


__all__ = ["cursor_to_path", "follow_cursor", "iter_pages", "paginate"]

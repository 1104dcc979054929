"""
Response envelopes for the Kinto client.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Optional, List

from requests.structures import CaseInsensitiveDict

from ..runtime.errors import KintoError, error_for_status

NEXT_PAGE_HEADER = "Next-Page"


@dataclass(frozen=True)
class ResponseEnvelope:
    """Read-only snapshot of one completed exchange."""
    status: int
    path: str
    body: Any = None
    headers: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)

    @property
    def data(self) -> Any:
        """The ``data`` member of the body, if any."""
        if isinstance(self.body, dict):
            return self.body.get("data")
        return None

    @property
    def next_page(self) -> Optional[str]:
        """Pagination cursor of a plural response, if more pages exist."""
        return self.headers.get(NEXT_PAGE_HEADER) or None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def error(self) -> Optional[KintoError]:
        """
        The error this envelope's status stands for, or None on success.

        Batch sub-responses are not raised on; check them through this.
        """
        return error_for_status(self.status, self.body, self.path)

    def raise_for_status(self) -> None:
        """Raise the error this envelope's status stands for, if any."""
        error = self.error
        if error is not None:
            raise error

    def with_data(self, data: List[Any]) -> "ResponseEnvelope":
        """Copy of this envelope whose body ``data`` is replaced."""
        body = dict(self.body) if isinstance(self.body, dict) else {}
        body["data"] = data
        return ResponseEnvelope(
            status=self.status,
            path=self.path,
            body=body,
            headers=CaseInsensitiveDict(self.headers),
        )


__all__ = ["NEXT_PAGE_HEADER", "ResponseEnvelope"]

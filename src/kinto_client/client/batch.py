"""
Request batching through the Kinto ``/batch`` endpoint.

Several pending descriptors are bundled into one POST; the aggregate reply is
split back into one ResponseEnvelope per sub-request, in request order.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError
from requests.structures import CaseInsensitiveDict

from ..runtime.errors import ErrorCode, KintoError, SerializationError, UnsupportedOperation
from ..runtime.paths import Paths, strip_version
from .requests import RequestDescriptor, create_record
from .response import ResponseEnvelope


logger = logging.getLogger(__name__)


class BatchSubResponse(BaseModel):
    """One entry of a batch reply."""
    status: int
    path: str
    body: Any = None
    headers: Dict[str, str] = Field(default_factory=dict)

    model_config = {"extra": "ignore"}


class BatchReply(BaseModel):
    """Body of a batch reply."""
    responses: List[BatchSubResponse]

    model_config = {"extra": "ignore"}


@dataclass
class BatchResponse:
    """Aggregate batch reply with its sub-responses in request order."""
    status: int
    headers: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)
    responses: List[ResponseEnvelope] = field(default_factory=list)

    @property
    def errors(self) -> List[Optional[KintoError]]:
        """Per sub-response error (None where it succeeded)."""
        return [response.error for response in self.responses]

    @classmethod
    def from_envelope(cls, envelope: ResponseEnvelope) -> "BatchResponse":
        """
        Decompose the reply of a batch request.

        Raises:
            SerializationError: If the body is not a batch reply
        """
        try:
            reply = BatchReply.model_validate(envelope.body)
        except ValidationError as e:
            raise SerializationError("Invalid batch response", ErrorCode.UNEXPECTED_SHAPE, cause=e)

        responses = [
            ResponseEnvelope(
                status=entry.status,
                # Sub-response paths echo the request query; envelope paths carry none.
                path=strip_version(entry.path.partition("?")[0]),
                body=entry.body,
                headers=CaseInsensitiveDict(entry.headers),
            )
            for entry in reply.responses
        ]
        return cls(status=envelope.status, headers=CaseInsensitiveDict(envelope.headers), responses=responses)


class BatchRequest:
    """
    Bundle of descriptors sent as one request.

    Example:
        ```python
        batch = client.batch()
        batch.add_request(bucket.update_request())
        batch.add_request(bucket.delete_request())
        result = batch.send()
        ```
    """

    def __init__(self, send: Callable[[RequestDescriptor], ResponseEnvelope]):
        """
        Initialize a batch.

        Args:
            send: Callable performing one exchange (usually ``KintoClient.send``)
        """
        self._send = send
        self.requests: List[RequestDescriptor] = []

    def __len__(self) -> int:
        return len(self.requests)

    def add_request(self, descriptor: RequestDescriptor) -> "BatchRequest":
        """
        Queue a descriptor. A copy is stored, so later changes do not leak in.

        Raises:
            UnsupportedOperation: If the descriptor targets the batch endpoint
        """
        if descriptor.path == Paths.BATCH:
            raise UnsupportedOperation("Batch requests cannot be nested")
        self.requests.append(descriptor.copy())
        return self

    def request(self) -> RequestDescriptor:
        """The descriptor of the batch POST itself."""
        body = {"requests": [descriptor.to_dict() for descriptor in self.requests]}
        return create_record(Paths.batch()).with_body(body)

    def send(self) -> BatchResponse:
        """
        Send every queued request in one exchange.

        Raises:
            KintoError: If the batch request itself fails
        """
        logger.debug("Sending batch of %d requests", len(self.requests))
        envelope = self._send(self.request())
        return BatchResponse.from_envelope(envelope)


__all__ = ["BatchSubResponse", "BatchReply", "BatchResponse", "BatchRequest"]

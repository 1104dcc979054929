"""
Kinto Client Error Model

This module provides the error taxonomy for the Kinto client. Every failure
surfaced by the library is one of the classes below; raw transport or JSON
exceptions are always wrapped and attached as ``cause``.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Kinto client error codes."""

    # Success
    OK = 0

    # General errors (1-99)
    UNKNOWN = 1
    UNDEFINED_IDENTITY = 2
    UNSUPPORTED_OPERATION = 3

    # Encoding errors (100-199)
    SERIALIZATION_ERROR = 100
    INVALID_JSON = 101
    UNEXPECTED_SHAPE = 102

    # Network errors (200-299)
    TRANSPORT_ERROR = 200
    CONNECTION_FAILED = 201
    TIMEOUT = 202
    TLS_ERROR = 203
    HTTP_ERROR = 204

    # Synchronisation outcomes (300-399)
    NOT_MODIFIED = 304
    PRECONDITION_FAILED = 312


class KintoError(Exception):
    """
    Root of every failure raised by the Kinto client.

    Catch this to handle any client failure at once; catch a subclass to
    react to one outcome (for instance a lost concurrency race). The
    ``details`` mapping carries request context such as the path, and
    ``cause`` keeps the wrapped ``requests`` or ``json`` exception.
    """

    default_code = ErrorCode.UNKNOWN

    def __init__(self, message: str, code: Optional[ErrorCode] = None,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Args:
            message: Human-readable summary
            code: Overrides the class ``default_code``
            details: Request context (path, server errno, ...)
            cause: Wrapped transport or decoding exception
        """
        super().__init__(message)
        self.message = message
        self.code = code if code is not None else self.default_code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form, suitable for structured logs."""
        result: Dict[str, Any] = {
            "error": type(self).__name__,
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = dict(self.details)
        if self.cause is not None:
            result["cause"] = repr(self.cause)
        return result


class TransportError(KintoError):
    """Network failure or unexpected non-success HTTP status."""

    default_code = ErrorCode.TRANSPORT_ERROR

    def __init__(self, message: str, status: Optional[int] = None, code: Optional[ErrorCode] = None,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)
        self.status = status


class NotModified(KintoError):
    """The conditional read found no change (HTTP 304)."""

    default_code = ErrorCode.NOT_MODIFIED

    def __init__(self, message: str = "Not modified",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, None, details, cause)
        self.status = 304


class PreconditionFailed(KintoError):
    """A conditional write lost an optimistic-concurrency race (HTTP 412)."""

    default_code = ErrorCode.PRECONDITION_FAILED

    def __init__(self, message: str = "Precondition failed",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, None, details, cause)
        self.status = 412


class UndefinedIdentity(KintoError):
    """An operation needing an identifier was invoked before one was known."""

    default_code = ErrorCode.UNDEFINED_IDENTITY

    def __init__(self, message: str = "Resource has no identifier",
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, None, details)


class UnsupportedOperation(KintoError):
    """The operation is not available for this resource kind or request."""

    default_code = ErrorCode.UNSUPPORTED_OPERATION

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, None, details)


class SerializationError(KintoError):
    """Malformed or unexpected document shape."""

    default_code = ErrorCode.SERIALIZATION_ERROR


def error_for_status(status: int, body: Any = None, path: Optional[str] = None) -> Optional[KintoError]:
    """
    Map an HTTP status to the error it stands for.

    Args:
        status: HTTP status code
        body: Parsed response body, used for the server error message
        path: Request path, recorded in the error details

    Returns:
        Appropriate error instance or None for a success status
    """
    if 200 <= status < 300:
        return None

    details: Dict[str, Any] = {}
    if path is not None:
        details["path"] = path

    if status == 304:
        return NotModified(details=details)
    if status == 412:
        return PreconditionFailed(details=details)

    message = f"HTTP {status}"
    if isinstance(body, dict):
        if body.get("message"):
            message = f"HTTP {status}: {body['message']}"
        if body.get("errno") is not None:
            details["errno"] = body["errno"]
    return TransportError(message, status=status, code=ErrorCode.HTTP_ERROR, details=details)


__all__ = [
    "ErrorCode",
    "KintoError",
    "TransportError",
    "NotModified",
    "PreconditionFailed",
    "UndefinedIdentity",
    "UnsupportedOperation",
    "SerializationError",
    "error_for_status",
]

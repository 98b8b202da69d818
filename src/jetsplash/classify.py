"""Fault classification: any exception in, exactly one NetworkError out.

Precedence is fixed and evaluated top to bottom; the first match wins:

1. TLS / certificate fault        -> UntrustedConnection
2. I/O fault without a status     -> Network
3. HTTP fault, status 404         -> NotFound
4. HTTP fault, status 500         -> ServerError(500)
5. HTTP fault, any other status   -> ErrorBody(status, decoded) or Unknown(-1)
6. decode fault on a success body -> ResponseSerialization
7. anything else                  -> Unknown(-1)
"""

from __future__ import annotations

import asyncio
import json
import logging
import ssl
from typing import TYPE_CHECKING

import httpx
import pydantic

from jetsplash.errors import (
    HTTPFault,
    NetworkFault,
    ResponseDecodeFault,
    UntrustedConnectionFault,
    walk_exception_chain,
)
from jetsplash.network_error import (
    ErrorBody,
    Network,
    NotFound,
    ResponseSerialization,
    ServerError,
    Unknown,
    UntrustedConnection,
)

if TYPE_CHECKING:
    from jetsplash.error_mapper import ErrorDecoder
    from jetsplash.network_error import NetworkError

logger = logging.getLogger(__name__)


def _is_untrusted(exc: BaseException) -> bool:
    return any(
        isinstance(e, (UntrustedConnectionFault, ssl.SSLError))
        for e in walk_exception_chain(exc)
    )


def _is_io_fault(exc: BaseException) -> bool:
    # httpx.TransportError covers timeouts and connection errors; OSError
    # covers raw sockets (ssl.SSLError is an OSError, so order matters).
    return isinstance(exc, (NetworkFault, httpx.TransportError, OSError))


def _http_status(exc: BaseException) -> tuple[int, bytes | None] | None:
    if isinstance(exc, HTTPFault):
        return exc.status_code, exc.body
    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        try:
            body: bytes | None = response.content
        except httpx.ResponseNotRead:
            body = None
        return response.status_code, body
    return None


def _is_none_dereference(exc: BaseException) -> bool:
    if isinstance(exc, AttributeError):
        return exc.name is not None and exc.obj is None
    # "'NoneType' object is not subscriptable", "... is not iterable", ...
    return isinstance(exc, TypeError) and "'NoneType'" in str(exc)


def _is_decode_fault(exc: BaseException) -> bool:
    return isinstance(
        exc, (ResponseDecodeFault, pydantic.ValidationError, json.JSONDecodeError)
    ) or _is_none_dereference(exc)


def decode_error_body[E](
    body: bytes | None, decoder: ErrorDecoder[E]
) -> E | None:
    """Decode *body* with *decoder*, returning None when that is impossible."""
    if not body:
        return None
    try:
        return decoder(body)
    except Exception as exc:
        logger.debug("Could not decode error body: %s", exc)
        return None


def classify_error[E](
    exc: BaseException, decoder: ErrorDecoder[E]
) -> NetworkError[E]:
    """Map *exc* onto exactly one NetworkError variant.

    *decoder* is only consulted for HTTP faults whose status is neither 404
    nor 500. Cancellation is not a fault and is re-raised.
    """
    if isinstance(exc, asyncio.CancelledError):
        raise exc

    if _is_untrusted(exc):
        logger.debug("Untrusted connection: %s", exc)
        return UntrustedConnection(exc)

    status = _http_status(exc)
    if status is None and _is_io_fault(exc):
        logger.debug("Network failure: %s", exc)
        return Network(exc)

    if status is not None:
        code, body = status
        if code == 404:
            return NotFound(exc)
        if code == 500:
            logger.warning("Internal server error (status=500): %s", exc)
            return ServerError(code, exc)
        decoded = decode_error_body(body, decoder)
        if decoded is None:
            logger.debug("Unreadable error body for status=%s", code)
            return Unknown(exception=exc)
        return ErrorBody(code, decoded, exc)

    if _is_decode_fault(exc):
        logger.warning("Unexpected response shape: %s", exc)
        return ResponseSerialization(exc)

    logger.warning("Unclassified remote failure: %r", exc)
    return Unknown(exception=exc)

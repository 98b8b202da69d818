"""Exception hierarchy for jetsplash.

Remote faults are the three shapes the classifier recognises (plus a decode
fault for successful responses). Transport adapters raise them; the request
handler turns them into typed results.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


class JetsplashError(Exception):
    """Base exception for all jetsplash errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ConfigurationError(JetsplashError):
    """Configuration validation or resolution failed."""


class WriteThroughError(JetsplashError):
    """Persisting a fresh remote value into the local store failed."""


class RemoteFault(JetsplashError):
    """A remote call did not produce a usable value."""


class NetworkFault(RemoteFault):
    """I/O-level failure: no connectivity, timeout, connection reset."""


class UntrustedConnectionFault(RemoteFault):
    """Certificate or TLS negotiation failure."""


class HTTPFault(RemoteFault):
    """The remote answered with an error status.

    ``body`` holds the raw response bytes so an error-body decoder can turn
    them into a typed payload later.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        body: bytes | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.status_code = status_code
        self.body = body


class ResponseDecodeFault(RemoteFault):
    """A successful response did not match the expected shape."""


def walk_exception_chain(exc: BaseException) -> Iterator[BaseException]:
    """Yield *exc* and its ``__cause__``/``__context__`` chain, with cycle protection."""
    seen: set[int] = set()
    stack: list[BaseException] = [exc]
    while stack:
        cur = stack.pop()
        if id(cur) in seen:
            continue
        seen.add(id(cur))
        yield cur

        cause = cur.__cause__
        if isinstance(cause, BaseException):
            stack.append(cause)
        context = cur.__context__
        if isinstance(context, BaseException):
            stack.append(context)

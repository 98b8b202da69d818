"""NetworkError: the closed taxonomy of remote-call failures.

Each variant carries a status ``code`` (``-1`` when none applies) and the raw
exception it was classified from. The raw exception is kept for logging only:
it never takes part in equality, so classifying the same fault twice yields
equal values.

The render layer resolves a variant to display text with
:func:`error_description` and to an icon hint with :func:`icon`.
"""

from __future__ import annotations

import dataclasses
from typing import Final, assert_never

from jetsplash.error_mapper import ErrorMapper

_NO_CODE: Final[int] = -1


def _raw() -> dataclasses.Field[BaseException | None]:
    return dataclasses.field(default=None, compare=False, repr=False)


@dataclasses.dataclass(frozen=True, slots=True)
class UntrustedConnection:
    """Certificate or TLS failure (client-side)."""

    exception: BaseException | None = _raw()
    code: int = dataclasses.field(default=_NO_CODE, init=False)


@dataclasses.dataclass(frozen=True, slots=True)
class Network:
    """No connectivity, timeout or reset connection (client-side)."""

    exception: BaseException | None = _raw()
    code: int = dataclasses.field(default=_NO_CODE, init=False)


@dataclasses.dataclass(frozen=True, slots=True)
class NotFound:
    """The requested resource does not exist (server-side)."""

    exception: BaseException | None = _raw()
    code: int = dataclasses.field(default=404, init=False)


@dataclasses.dataclass(frozen=True, slots=True)
class ServerError:
    """The server reported an internal fault."""

    code: int
    exception: BaseException | None = _raw()


@dataclasses.dataclass(frozen=True, slots=True)
class ErrorBody[E]:
    """A client-side fault status whose body decoded into ``E``."""

    code: int
    error: E
    exception: BaseException | None = _raw()


@dataclasses.dataclass(frozen=True, slots=True)
class ResponseSerialization:
    """The response could not be decoded into the expected shape."""

    exception: BaseException | None = _raw()
    code: int = dataclasses.field(default=_NO_CODE, init=False)


@dataclasses.dataclass(frozen=True, slots=True)
class Unknown:
    """Nothing else matched."""

    code: int = _NO_CODE
    exception: BaseException | None = _raw()


type NetworkError[E] = (
    UntrustedConnection
    | Network
    | NotFound
    | ServerError
    | ErrorBody[E]
    | ResponseSerialization
    | Unknown
)

NETWORK_ERROR_TYPES: Final = (
    UntrustedConnection,
    Network,
    NotFound,
    ServerError,
    ErrorBody,
    ResponseSerialization,
    Unknown,
)

# Description keys mirror the string resources of the mobile client.
REQUEST_NETWORK_UNTRUSTED: Final[str] = "request_network_untrusted"
REQUEST_NETWORK_ERROR: Final[str] = "request_network_error"
REQUEST_NOT_FOUND: Final[str] = "request_not_found"
REQUEST_SERVER_ERROR: Final[str] = "request_server_error"
REQUEST_SERIALIZATION_ERROR: Final[str] = "request_serialization_error"
REQUEST_UNKNOWN_ERROR: Final[str] = "request_unknown_error"

DEFAULT_DESCRIPTIONS: Final[dict[str, str]] = {
    REQUEST_NETWORK_UNTRUSTED: "The connection to the server is not secure.",
    REQUEST_NETWORK_ERROR: "Check your internet connection and try again.",
    REQUEST_NOT_FOUND: "The requested content was not found.",
    REQUEST_SERVER_ERROR: "The server is having trouble. Try again later.",
    REQUEST_SERIALIZATION_ERROR: "The server sent an unexpected response.",
    REQUEST_UNKNOWN_ERROR: "Something went wrong. Try again later.",
}


def description_key(error: NetworkError[object]) -> str:
    """Return the default-description key for *error*'s variant."""
    match error:
        case ErrorBody():
            return REQUEST_UNKNOWN_ERROR
        case Network():
            return REQUEST_NETWORK_ERROR
        case NotFound():
            return REQUEST_NOT_FOUND
        case ResponseSerialization():
            return REQUEST_SERIALIZATION_ERROR
        case ServerError():
            return REQUEST_SERVER_ERROR
        case Unknown():
            return REQUEST_UNKNOWN_ERROR
        case UntrustedConnection():
            return REQUEST_NETWORK_UNTRUSTED
        case _:
            assert_never(error)


def icon(error: NetworkError[object]) -> str:
    """Return the icon hint for *error*'s variant (Material icon names)."""
    match error:
        case Network():
            return "cloud_off"
        case NotFound():
            return "link_off"
        case UntrustedConnection():
            return "no_encryption_gmailerrorred"
        case ErrorBody() | ResponseSerialization() | ServerError() | Unknown():
            return "error_outline"
        case _:
            assert_never(error)


def error_description(
    error: NetworkError[object],
    *,
    descriptions: dict[str, str] = DEFAULT_DESCRIPTIONS,
) -> str:
    """Resolve *error* into display text.

    An ``ErrorBody`` whose payload implements ``map_error()`` and returns
    non-blank text wins; everything else uses the per-variant default.
    """
    if isinstance(error, ErrorBody) and isinstance(error.error, ErrorMapper):
        custom = error.error.map_error()
        if custom and custom.strip():
            return custom
    key = description_key(error)
    return descriptions.get(key, DEFAULT_DESCRIPTIONS[key])

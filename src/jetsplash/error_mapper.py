"""Error-body capability and decoders.

Any decoded error-body type exposes ``map_error()``, the hook by which an
``ErrorBody`` failure produces its own user-facing message. Decoders are plain
callables from raw response bytes to that type, injected into the request
handler rather than baked into it.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, TypeAdapter

if TYPE_CHECKING:
    from collections.abc import Callable

type ErrorDecoder[E] = Callable[[bytes], E]


@runtime_checkable
class ErrorMapper(Protocol):
    """A decoded error body that can describe itself to the user."""

    def map_error(self) -> str | None:
        """Return a display message, or None to use the default description."""
        ...


class BasicError(BaseModel):
    """Error body returned by the Unsplash API: ``{"errors": ["..."]}``."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    errors: list[str]

    def map_error(self) -> str | None:
        text = ", ".join(self.errors)
        return text if text.strip() else None


def _unwrap_envelope(body: bytes) -> Any:
    payload = json.loads(body)
    if not isinstance(payload, dict) or not payload:
        raise ValueError("Enveloped body must be a non-empty JSON object")
    # Only the outermost field is skipped; its value is the payload.
    return next(iter(payload.values()))


def model_decoder[E](model: type[E], *, enveloped: bool = False) -> ErrorDecoder[E]:
    """Build a decoder turning raw JSON bytes into *model*.

    With ``enveloped=True`` the body is expected to wrap the payload in a
    single outer object (``{"error": {...}}``) and only the inner value is
    validated.
    """
    adapter: TypeAdapter[E] = TypeAdapter(model)

    def decode(body: bytes) -> E:
        if enveloped:
            return adapter.validate_python(_unwrap_envelope(body))
        return adapter.validate_json(body)

    return decode


basic_error_decoder: ErrorDecoder[BasicError] = model_decoder(BasicError)

"""httpx adapter: the remote caller for the Unsplash endpoint.

Concrete transport exceptions are mapped onto the fault shapes in
:mod:`jetsplash.errors` here, so classification never depends on httpx
internals beyond a fallback.
"""

from __future__ import annotations

import logging
import ssl
from typing import TYPE_CHECKING, Any

import httpx
import pydantic

from jetsplash.errors import (
    HTTPFault,
    NetworkFault,
    ResponseDecodeFault,
    UntrustedConnectionFault,
    walk_exception_chain,
)
from jetsplash.models import UnsplashPhoto

if TYPE_CHECKING:
    from jetsplash.config import Config

logger = logging.getLogger(__name__)

RANDOM_PHOTO_PATH = "photos/random"


def build_client(
    config: Config, *, transport: httpx.AsyncBaseTransport | None = None
) -> httpx.AsyncClient:
    """Create the shared HTTP client for *config*."""
    headers = {"User-Agent": config.user_agent, "Accept-Version": "v1"}
    if config.access_key:
        headers["Authorization"] = f"Client-ID {config.access_key}"
    return httpx.AsyncClient(
        base_url=config.base_url or "",
        headers=headers,
        timeout=config.timeout_s,
        follow_redirects=True,
        transport=transport,
    )


class UnsplashEndpoint:
    """Thin async wrapper over the endpoints the app uses."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def fetch(self, path: str, params: dict[str, Any] | None = None) -> bytes:
        """GET *path* and return the raw body of a successful response.

        Raises:
            UntrustedConnectionFault: TLS negotiation or certificate failure.
            NetworkFault: Any other transport failure, timeouts included.
            HTTPFault: The server answered with status >= 400.
        """
        try:
            response = await self._client.get(path, params=params)
        except httpx.ConnectError as exc:
            if any(isinstance(e, ssl.SSLError) for e in walk_exception_chain(exc)):
                raise UntrustedConnectionFault(f"GET {path}: untrusted connection") from exc
            raise NetworkFault(f"GET {path} failed: {exc}") from exc
        except httpx.TransportError as exc:
            raise NetworkFault(f"GET {path} failed: {exc}") from exc

        logger.debug("GET %s -> %s", path, response.status_code)
        if response.status_code >= 400:
            raise HTTPFault(
                f"GET {path} returned {response.status_code}",
                status_code=response.status_code,
                body=response.content,
            )
        return response.content

    async def get_random_photo(self) -> UnsplashPhoto:
        body = await self.fetch(RANDOM_PHOTO_PATH)
        try:
            return UnsplashPhoto.model_validate_json(body)
        except pydantic.ValidationError as exc:
            raise ResponseDecodeFault(
                f"{RANDOM_PHOTO_PATH} returned an unexpected payload"
            ) from exc

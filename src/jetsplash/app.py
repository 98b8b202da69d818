"""Composition root: builds the client, handler, store and repository explicitly."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
import logging
from typing import TYPE_CHECKING

from jetsplash.error_mapper import BasicError, basic_error_decoder, model_decoder
from jetsplash.handler import RequestHandler
from jetsplash.repository import UnsplashRepository
from jetsplash.store import MemoryStore
from jetsplash.transport import UnsplashEndpoint, build_client

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    import httpx

    from jetsplash.config import Config
    from jetsplash.models import UnsplashPhoto

logger = logging.getLogger(__name__)


@asynccontextmanager
async def open_repository(
    config: Config, *, transport: httpx.AsyncBaseTransport | None = None
) -> AsyncIterator[UnsplashRepository]:
    """Yield a ready repository; the HTTP client is closed on exit.

    Example:
        async with open_repository(Config()) as repository:
            batch = await repository.get_random_photos(5)
    """
    decoder = (
        model_decoder(BasicError, enveloped=True)
        if config.enveloped_errors
        else basic_error_decoder
    )
    client = build_client(config, transport=transport)
    store: MemoryStore[UnsplashPhoto] = MemoryStore(ttl_seconds=config.cache_ttl_seconds)
    repository = UnsplashRepository(
        RequestHandler(default_decoder=decoder),
        UnsplashEndpoint(client),
        store=store,
        retry=config.retry,
        decoder=decoder,
    )
    try:
        yield repository
    finally:
        try:
            await client.aclose()
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            # Cleanup should never mask the primary failure.
            logger.warning("HTTP client cleanup failed: %s", exc)

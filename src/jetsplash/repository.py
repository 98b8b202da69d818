"""Photo repository: the typed API the app layer talks to."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING

from jetsplash.error_mapper import BasicError, basic_error_decoder
from jetsplash.errors import ConfigurationError
from jetsplash.result import Error, Success
from jetsplash.retry import retry_result

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from jetsplash.error_mapper import ErrorDecoder
    from jetsplash.handler import RequestHandler
    from jetsplash.models import UnsplashPhoto
    from jetsplash.network_error import NetworkError
    from jetsplash.result import CachedResult, NetworkResult
    from jetsplash.retry import RetryPolicy
    from jetsplash.store import MemoryStore
    from jetsplash.transport import UnsplashEndpoint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PhotoBatch:
    """Outcome of a fan-out load: every photo that arrived, plus the first failure."""

    photos: tuple[UnsplashPhoto, ...]
    error: NetworkError[BasicError] | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class UnsplashRepository:
    """Random-photo access through a :class:`RequestHandler`.

    Args:
        handler: Classifies every remote call.
        endpoint: Remote caller for the Unsplash API.
        store: Local snapshot used by :meth:`random_photo_with_cache`.
        retry: Optional caller-side retry policy for single calls.
        decoder: Error-body decoder for non-404/500 statuses.
    """

    def __init__(
        self,
        handler: RequestHandler,
        endpoint: UnsplashEndpoint,
        *,
        store: MemoryStore[UnsplashPhoto] | None = None,
        retry: RetryPolicy | None = None,
        decoder: ErrorDecoder[BasicError] = basic_error_decoder,
    ) -> None:
        self._handler = handler
        self._endpoint = endpoint
        self._store = store
        self._retry = retry
        self._decoder = decoder

    async def get_random_photo(self) -> NetworkResult[UnsplashPhoto, BasicError]:
        async def attempt() -> NetworkResult[UnsplashPhoto, BasicError]:
            return await self._handler.handle(
                self._endpoint.get_random_photo, self._decoder
            )

        if self._retry is None or self._retry.max_attempts <= 1:
            return await attempt()
        return await retry_result(attempt, policy=self._retry)

    async def get_random_photos(self, count: int) -> PhotoBatch:
        """Load *count* random photos concurrently and join on all of them.

        Photos are kept in arrival order. The reported error is the first
        failure in request order, if any.
        """
        if count < 1:
            raise ValueError("count must be >= 1")

        photos: list[UnsplashPhoto] = []

        async def load_one() -> NetworkResult[UnsplashPhoto, BasicError]:
            result = await self.get_random_photo()
            if isinstance(result, Success):
                photos.append(result.value)
            return result

        results = await asyncio.gather(*(load_one() for _ in range(count)))
        error = next((r.error for r in results if isinstance(r, Error)), None)
        if error is not None:
            failed = sum(1 for r in results if isinstance(r, Error))
            logger.info("%d of %d photo requests failed", failed, count)
        return PhotoBatch(tuple(photos), error)

    def random_photo_with_cache(
        self,
    ) -> AsyncIterator[CachedResult[UnsplashPhoto, BasicError]]:
        """Stream the cached photo, refreshing it from the API when stale."""
        store = self._store
        if store is None:
            raise ConfigurationError(
                "random_photo_with_cache requires a local store",
                hint="Pass UnsplashRepository(store=MemoryStore(...)).",
            )
        return self._handler.handle_with_cache(
            self._decoder,
            store.observe,
            self._endpoint.get_random_photo,
            should_fetch_from_remote=lambda _local: store.is_stale(),
            save_remote_data=store.write,
        )

"""Request handler: run a remote call and hand back a typed result.

The handler is stateless. Remote calls and local-store accessors are borrowed
for the duration of one operation; nothing is retained across calls and no
retry happens here (see :mod:`jetsplash.retry` for caller-side policy).

Coroutine functions run on the caller's event loop. Plain callables are
treated as blocking I/O and run on the shared worker pool through
``asyncio.to_thread``, so the caller is never blocked synchronously.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterable
from contextlib import aclosing
import inspect
import logging
from typing import TYPE_CHECKING, Any

from jetsplash.classify import classify_error
from jetsplash.error_mapper import basic_error_decoder
from jetsplash.errors import WriteThroughError
from jetsplash.result import CachedError, CachedSuccess, Error, Loading, Success

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Awaitable, Callable, Iterable

    from jetsplash.error_mapper import ErrorDecoder
    from jetsplash.result import CachedResult, NetworkResult

    type RemoteCall[T] = Callable[[], Awaitable[T]] | Callable[[], T]
    type LocalSource[T] = Callable[[], AsyncIterable[T] | Iterable[T]]
    type SaveCallback[T] = Callable[[T], Awaitable[None]] | Callable[[T], None]

logger = logging.getLogger(__name__)


def _always(_: object) -> bool:
    return True


async def _invoke(fn: Callable[..., Any], *args: Any) -> Any:
    if inspect.iscoroutinefunction(fn):
        return await fn(*args)
    value = await asyncio.to_thread(fn, *args)
    # Lambdas wrapping a coroutine call hand back an awaitable.
    if inspect.isawaitable(value):
        return await value
    return value


async def _open_local[T](fetch_from_local: LocalSource[T]) -> AsyncIterable[T] | Iterable[T]:
    if inspect.isasyncgenfunction(fetch_from_local):
        return fetch_from_local()
    # Plain sources may open files or databases.
    return await asyncio.to_thread(fetch_from_local)


async def _local_values[T](fetch_from_local: LocalSource[T]) -> AsyncIterator[T]:
    source = await _open_local(fetch_from_local)
    async with aclosing(_iterate(source)) as values:
        async for item in values:
            yield item


async def _iterate[T](source: AsyncIterable[T] | Iterable[T]) -> AsyncIterator[T]:
    if isinstance(source, AsyncIterable):
        iterator = aiter(source)
        try:
            async for item in iterator:
                yield item
        finally:
            aclose = getattr(iterator, "aclose", None)
            if aclose is not None:
                await aclose()
    else:
        for item in await asyncio.to_thread(list, source):
            yield item


async def _first_local[T](fetch_from_local: LocalSource[T]) -> T | None:
    source = await _open_local(fetch_from_local)
    if isinstance(source, AsyncIterable):
        async with aclosing(_iterate(source)) as values:
            async for item in values:
                return item
        return None

    return await asyncio.to_thread(next, iter(source), None)


class RequestHandler:
    """Turns remote calls into ``NetworkResult`` and cache-fused ``CachedResult`` streams.

    Args:
        default_decoder: Error-body decoder used when an operation is not
            given its own.
    """

    def __init__(self, *, default_decoder: ErrorDecoder[Any] = basic_error_decoder) -> None:
        self._default_decoder = default_decoder

    async def handle[T, E](
        self,
        call: RemoteCall[T],
        decoder: ErrorDecoder[E] | None = None,
    ) -> NetworkResult[T, E]:
        """Invoke *call* exactly once and classify the outcome.

        Never raises for remote faults; cancellation propagates.
        """
        try:
            value = await _invoke(call)
        except Exception as exc:
            logger.debug("Remote call failed", exc_info=exc)
            return Error(classify_error(exc, decoder or self._default_decoder))
        return Success(value)

    async def handle_as_flow[T, E](
        self,
        call: RemoteCall[T],
        decoder: ErrorDecoder[E] | None = None,
    ) -> AsyncIterator[NetworkResult[T, E]]:
        """Yield the single result of :meth:`handle`, computed on first consumption."""
        yield await self.handle(call, decoder)

    async def handle_with_cache[T, M, E](
        self,
        decoder: ErrorDecoder[E] | None,
        fetch_from_local: LocalSource[T],
        remote_call: RemoteCall[M],
        *,
        should_fetch_from_remote: Callable[[T | None], bool] = _always,
        save_remote_data: SaveCallback[M] | None = None,
    ) -> AsyncIterator[CachedResult[T, E]]:
        """Fuse one remote call with reads of a local store.

        Emits ``Loading(None)``, then reads the first local value. When
        *should_fetch_from_remote* declines, every value of a fresh
        *fetch_from_local()* sequence is emitted as ``CachedSuccess``.
        Otherwise ``Loading(local)`` is emitted, the remote call runs once,
        a successful value is written through *save_remote_data*, and the
        local sequence is re-read: each value becomes ``CachedSuccess`` on
        success or ``CachedError`` paired with the failure.

        Raises:
            WriteThroughError: *save_remote_data* failed. Local-store read
                faults propagate unchanged.

        Cancelling the consumer cancels an in-flight coroutine call or write.
        A plain (sync) *save_remote_data* already running on a worker thread
        cannot be interrupted; it finishes in the background and its outcome
        is discarded.
        """
        yield Loading(None)
        local = await _first_local(fetch_from_local)

        if not should_fetch_from_remote(local):
            async with aclosing(_local_values(fetch_from_local)) as values:
                async for item in values:
                    yield CachedSuccess(item)
            return

        yield Loading(local)
        response: NetworkResult[M, E] = await self.handle(remote_call, decoder)

        match response:
            case Success(value=value):
                if value is not None and save_remote_data is not None:
                    await self._write_through(save_remote_data, value)
                async with aclosing(_local_values(fetch_from_local)) as values:
                    async for item in values:
                        yield CachedSuccess(item)
            case Error(error=error):
                async with aclosing(_local_values(fetch_from_local)) as values:
                    async for item in values:
                        yield CachedError(item, error)

    @staticmethod
    async def _write_through[M](save_remote_data: SaveCallback[M], value: M) -> None:
        try:
            await _invoke(save_remote_data, value)
        except Exception as exc:
            logger.error("Write-through to the local store failed: %s", exc)
            raise WriteThroughError(
                "Saving remote data to the local store failed",
                hint="The remote call succeeded; the local store rejected the value.",
            ) from exc

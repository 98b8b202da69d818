"""Local store capability and an in-memory reference store.

The request handler only needs "read latest", "read stream" and "write one
value". Real persistence lives outside this package; :class:`MemoryStore`
backs the composition root and the tests.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
import time
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import AsyncIterator


@runtime_checkable
class LocalStore[T](Protocol):
    """Minimal local store protocol: latest, observe, write."""

    def latest(self) -> T | None:
        """Return the current value, or None when nothing is stored."""
        ...

    def observe(self) -> AsyncIterator[T]:
        """Return a lazy sequence of the stored value(s)."""
        ...

    async def write(self, value: T) -> None:
        """Replace the stored value."""
        ...


@dataclass
class MemoryStore[T]:
    """Single-slot store with optional expiry.

    ``observe()`` yields the current value (if any) and ends. With
    ``follow=True`` it keeps yielding after every write until :meth:`close`.
    Writes are serialised; readers never see a partially applied write.
    """

    ttl_seconds: int | None = None
    _value: T | None = field(default=None, init=False, repr=False)
    _written_at: float | None = field(default=None, init=False, repr=False)
    _version: int = field(default=0, init=False, repr=False)
    _closed: bool = field(default=False, init=False, repr=False)
    _changed: asyncio.Condition = field(
        default_factory=asyncio.Condition, init=False, repr=False
    )

    def __post_init__(self) -> None:
        if self.ttl_seconds is not None and self.ttl_seconds < 0:
            raise ValueError("MemoryStore.ttl_seconds must be >= 0 or None")

    def latest(self) -> T | None:
        return self._value

    def is_stale(self) -> bool:
        """True when nothing is stored or the stored value has expired."""
        if self._value is None or self._written_at is None:
            return True
        if self.ttl_seconds is None:
            return False
        return time.time() - self._written_at >= self.ttl_seconds

    async def write(self, value: T) -> None:
        async with self._changed:
            self._value = value
            self._written_at = time.time()
            self._version += 1
            self._changed.notify_all()

    async def clear(self) -> None:
        async with self._changed:
            self._value = None
            self._written_at = None
            self._version += 1
            self._changed.notify_all()

    async def close(self) -> None:
        """Stop all following observers after their current value."""
        async with self._changed:
            self._closed = True
            self._changed.notify_all()

    async def observe(self, *, follow: bool = False) -> AsyncIterator[T]:
        async with self._changed:
            version = self._version
            value = self._value
        if value is not None:
            yield value

        while follow:
            async with self._changed:
                await self._changed.wait_for(
                    lambda: self._closed or self._version != version
                )
                if self._version == version:
                    return
                version = self._version
                value = self._value
            if value is not None:
                yield value

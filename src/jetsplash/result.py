"""Typed outcomes of remote calls.

``NetworkResult`` is the outcome of exactly one call attempt. ``CachedResult``
is one state of a cache-fused read and always carries the best-known local
snapshot alongside it.
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, TypeIs

if TYPE_CHECKING:
    from jetsplash.network_error import NetworkError


@dataclasses.dataclass(frozen=True, slots=True)
class Success[T]:
    """The remote call returned a value."""

    value: T


@dataclasses.dataclass(frozen=True, slots=True)
class Error[E]:
    """The remote call failed; ``error`` says how."""

    error: NetworkError[E]


type NetworkResult[T, E] = Success[T] | Error[E]


def is_success[T, E](result: NetworkResult[T, E]) -> TypeIs[Success[T]]:
    return isinstance(result, Success)


@dataclasses.dataclass(frozen=True, slots=True)
class Loading[T]:
    """Emitted before the remote call resolves, with whatever is cached."""

    data: T | None


@dataclasses.dataclass(frozen=True, slots=True)
class CachedSuccess[T]:
    """Fresh local state after a successful refresh (or no refresh needed)."""

    data: T


@dataclasses.dataclass(frozen=True, slots=True)
class CachedError[T, E]:
    """The refresh failed; ``data`` is the latest local snapshot."""

    data: T | None
    error: NetworkError[E]


type CachedResult[T, E] = Loading[T] | CachedSuccess[T] | CachedError[T, E]

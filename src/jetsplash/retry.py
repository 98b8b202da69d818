"""Caller-side retry over typed results.

The request handler performs each call exactly once. Callers that want a
retry policy wrap ``handler.handle`` with :func:`retry_result`, which decides
from the classified ``NetworkError`` rather than from raw exceptions.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
import random
import time
from typing import TYPE_CHECKING

from jetsplash.network_error import Network, ServerError
from jetsplash.result import Error

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from jetsplash.result import NetworkResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    """How many times to re-issue a call, and how long to wait in between.

    Waits grow exponentially from ``initial_delay_s`` up to ``max_delay_s``.
    With ``jitter`` each wait is drawn uniformly from ``[0, wait]``.
    ``max_elapsed_s`` caps the total time spent across attempts.
    """

    # Retrying is opt-in.
    max_attempts: int = 1
    initial_delay_s: float = 0.5
    backoff_multiplier: float = 2.0
    max_delay_s: float = 5.0
    jitter: bool = True
    max_elapsed_s: float | None = 15.0

    def __post_init__(self) -> None:
        problems = []
        if self.max_attempts < 1:
            problems.append("max_attempts must be >= 1")
        if self.initial_delay_s < 0:
            problems.append("initial_delay_s must be >= 0")
        if self.backoff_multiplier <= 0:
            problems.append("backoff_multiplier must be > 0")
        if self.max_delay_s < 0:
            problems.append("max_delay_s must be >= 0")
        if self.max_elapsed_s is not None and self.max_elapsed_s < 0:
            problems.append("max_elapsed_s must be >= 0 or None")
        if problems:
            raise ValueError(f"Invalid RetryPolicy: {'; '.join(problems)}")

    def wait_before(self, retry_number: int) -> float:
        """Seconds to sleep before retry *retry_number* (1 for the first retry)."""
        ceiling = min(
            self.max_delay_s,
            self.initial_delay_s * self.backoff_multiplier ** (retry_number - 1),
        )
        if ceiling <= 0:
            return 0.0
        return random.uniform(0, ceiling) if self.jitter else ceiling  # noqa: S311


def is_transient(result: NetworkResult[object, object]) -> bool:
    """True for failures worth another attempt: connectivity and server faults."""
    return isinstance(result, Error) and isinstance(result.error, (Network, ServerError))


async def retry_result[T, E](
    factory: Callable[[], Awaitable[NetworkResult[T, E]]],
    *,
    policy: RetryPolicy,
    should_retry: Callable[[NetworkResult[T, E]], bool] = is_transient,
) -> NetworkResult[T, E]:
    """Await *factory* until it yields a result *should_retry* rejects.

    The last result is returned once attempts or elapsed time run out.
    """
    deadline = (
        None
        if policy.max_elapsed_s is None
        else time.monotonic() + policy.max_elapsed_s
    )
    result = await factory()
    retries = 0

    while retries + 1 < policy.max_attempts and should_retry(result):
        retries += 1
        wait = policy.wait_before(retries)
        if deadline is not None:
            left = deadline - time.monotonic()
            if left <= 0:
                logger.debug("Retry budget exhausted after %d attempt(s)", retries)
                break
            wait = min(wait, left)

        logger.debug("Attempt %d failed transiently; retrying in %.2fs", retries, wait)
        if wait > 0:
            await asyncio.sleep(wait)
        result = await factory()

    return result

"""Configuration: frozen Config resolved from arguments and the environment."""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from urllib.parse import urlparse

from dotenv import load_dotenv

from jetsplash.errors import ConfigurationError
from jetsplash.retry import RetryPolicy

load_dotenv()

DEFAULT_BASE_URL = "https://unsplash.com/napi/"
DEFAULT_USER_AGENT = "jetsplash/0.1"

_BASE_URL_ENV_VAR = "UNSPLASH_BASE_URL"
_ACCESS_KEY_ENV_VAR = "UNSPLASH_ACCESS_KEY"


@dataclass(frozen=True)
class Config:
    """Immutable configuration for the photo client.

    The base URL and access key are auto-resolved from ``UNSPLASH_BASE_URL``
    and ``UNSPLASH_ACCESS_KEY`` when not passed. The public ``napi`` endpoint
    works without a key.

    Example:
        config = Config(parallel_requests=5)
    """

    base_url: str | None = None
    access_key: str | None = None
    timeout_s: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    #: How many random photos the parallel screen loads at once.
    parallel_requests: int = 21
    cache_ttl_seconds: int = 3600
    #: Error bodies arrive wrapped in a single outer JSON field.
    enveloped_errors: bool = False
    retry: RetryPolicy = field(default_factory=RetryPolicy)

    def __post_init__(self) -> None:
        """Auto-resolve environment values and validate configuration."""
        if self.base_url is None:
            resolved = os.environ.get(_BASE_URL_ENV_VAR) or DEFAULT_BASE_URL
            object.__setattr__(self, "base_url", resolved)
        if self.access_key is None:
            object.__setattr__(self, "access_key", os.environ.get(_ACCESS_KEY_ENV_VAR))

        parsed = urlparse(self.base_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigurationError(
                f"base_url must be an absolute http(s) URL, got {self.base_url!r}",
                hint=f"Set {_BASE_URL_ENV_VAR} or pass Config(base_url=...).",
            )
        if not self.base_url.endswith("/"):
            object.__setattr__(self, "base_url", f"{self.base_url}/")

        if self.timeout_s <= 0:
            raise ConfigurationError(
                f"timeout_s must be > 0, got {self.timeout_s}",
                hint="Transport timeouts surface as network errors.",
            )
        if self.parallel_requests < 1:
            raise ConfigurationError(
                f"parallel_requests must be ≥ 1, got {self.parallel_requests}",
                hint="This controls how many photo requests run concurrently.",
            )
        if self.cache_ttl_seconds < 0:
            raise ConfigurationError(
                f"cache_ttl_seconds must be ≥ 0, got {self.cache_ttl_seconds}",
                hint="This controls how long a cached photo stays fresh.",
            )

    def __str__(self) -> str:
        """Return a redacted, developer-friendly representation."""
        return (
            f"Config(base_url={self.base_url!r}, "
            f"access_key={'[REDACTED]' if self.access_key else None}, "
            f"timeout_s={self.timeout_s})"
        )

    __repr__ = __str__

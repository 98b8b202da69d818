"""Config boundary tests: defaults, environment resolution and validation."""

from __future__ import annotations

import pytest

from jetsplash.config import DEFAULT_BASE_URL, Config
from jetsplash.errors import ConfigurationError
from jetsplash.retry import RetryPolicy

pytestmark = pytest.mark.unit


def test_defaults() -> None:
    config = Config()

    assert config.base_url == DEFAULT_BASE_URL
    assert config.access_key is None
    assert config.parallel_requests == 21
    assert config.retry == RetryPolicy()


def test_environment_values_are_resolved(monkeypatch) -> None:
    monkeypatch.setenv("UNSPLASH_BASE_URL", "https://api.unsplash.com")
    monkeypatch.setenv("UNSPLASH_ACCESS_KEY", "secret-key")

    config = Config()

    assert config.base_url == "https://api.unsplash.com/"
    assert config.access_key == "secret-key"


def test_explicit_values_win_over_environment(monkeypatch) -> None:
    monkeypatch.setenv("UNSPLASH_ACCESS_KEY", "from-env")
    assert Config(access_key="explicit").access_key == "explicit"


@pytest.mark.parametrize(
    ("kwargs", "fragment"),
    [
        ({"base_url": "ftp://example.com"}, "base_url"),
        ({"base_url": "not a url"}, "base_url"),
        ({"timeout_s": 0}, "timeout_s"),
        ({"parallel_requests": 0}, "parallel_requests"),
        ({"cache_ttl_seconds": -5}, "cache_ttl_seconds"),
    ],
)
def test_invalid_values_raise_with_hint(kwargs, fragment: str) -> None:
    with pytest.raises(ConfigurationError) as exc:
        Config(**kwargs)

    assert fragment in str(exc.value)
    assert exc.value.hint


def test_repr_redacts_access_key() -> None:
    config = Config(access_key="super-secret")

    assert "super-secret" not in repr(config)
    assert "[REDACTED]" in str(config)


def test_config_is_frozen() -> None:
    config = Config()
    with pytest.raises(AttributeError):
        config.timeout_s = 1  # type: ignore[misc]

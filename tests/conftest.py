"""Pytest configuration and fixtures.

Provides environment isolation, logging configuration and small test
doubles. All fixtures here are autouse unless noted.
"""

from __future__ import annotations

from contextlib import suppress
from dataclasses import dataclass, field
import logging
import os
from typing import Any

import pytest

from jetsplash.models import UnsplashPhoto
from tests.helpers import photo_payload

# =============================================================================
# Test Doubles
# =============================================================================


@dataclass
class ScriptedEndpoint:
    """Endpoint test double returning a scripted sequence of photos/exceptions.

    Once the script runs out, every call returns a fresh default photo.
    """

    script: list[UnsplashPhoto | BaseException] = field(default_factory=list)
    calls: int = 0

    async def get_random_photo(self) -> UnsplashPhoto:
        self.calls += 1
        if not self.script:
            return UnsplashPhoto.model_validate(photo_payload(f"auto-{self.calls}"))
        item = self.script.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    with suppress(Exception):
        monkeypatch.setattr(
            "dotenv.load_dotenv", lambda *_args, **_kwargs: False, raising=False
        )


@pytest.fixture(autouse=True)
def isolate_unsplash_env(request, monkeypatch):
    """Ensure a clean UNSPLASH_* environment for each test.

    Opt-out: @pytest.mark.allow_env_pollution
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        return
    for key in list(os.environ.keys()):
        if key.startswith("UNSPLASH_"):
            monkeypatch.delenv(key, raising=False)


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def quiet_noisy_libraries():
    """Suppress noisy third-party loggers."""
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


# =============================================================================
# Shared fixtures (opt-in)
# =============================================================================


@pytest.fixture
def photo() -> UnsplashPhoto:
    """A valid photo model."""
    return UnsplashPhoto.model_validate(photo_payload("abc123"))


@pytest.fixture
def scripted_endpoint() -> ScriptedEndpoint:
    return ScriptedEndpoint()


def make_photo(photo_id: str, **overrides: Any) -> UnsplashPhoto:
    return UnsplashPhoto.model_validate(photo_payload(photo_id, **overrides))

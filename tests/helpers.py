"""Test helpers (small, reusable builders).

Keep this file tiny and purpose-built: payload builders and an httpx mock
transport factory shared by transport, repository and CLI tests.
"""

from __future__ import annotations

from collections.abc import Callable
import json
from typing import Any

import httpx


def photo_payload(photo_id: str = "abc123", **overrides: Any) -> dict[str, Any]:
    """Return a JSON-ready ``photos/random`` payload."""
    links = {
        "portfolio": None,
        "photos": "https://api.unsplash.com/users/jane/photos",
        "download": f"https://unsplash.com/photos/{photo_id}/download",
        "download_location": None,
    }
    payload: dict[str, Any] = {
        "id": photo_id,
        "color": "#0c2626",
        "created_at": "2022-05-01T10:00:00Z",
        "description": None,
        "alt_description": "green leaves",
        "width": 4000,
        "height": 6000,
        "views": 1200,
        "blur_hash": "LKO2?U%2Tw=w]~RBVZRi};RPxuwH",
        "urls": {
            "small": f"https://images.unsplash.com/{photo_id}?w=400",
            "small_s3": f"https://s3.amazonaws.com/{photo_id}",
            "thumb": f"https://images.unsplash.com/{photo_id}?w=200",
            "raw": f"https://images.unsplash.com/{photo_id}",
            "regular": f"https://images.unsplash.com/{photo_id}?w=1080",
            "full": f"https://images.unsplash.com/{photo_id}?q=85",
        },
        "links": links,
        "user": {
            "id": "u1",
            "username": "jane",
            "name": "Jane Doe",
            "first_name": "Jane",
            "total_photos": 10,
            "total_likes": 3,
            "total_collections": 1,
            "links": links,
            "bio": None,
            "portfolio_url": None,
            "profile_image": None,
            "twitter_username": None,
            "instagram_username": None,
        },
    }
    payload.update(overrides)
    return payload


def json_response(status_code: int, payload: Any) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(payload).encode())


def mock_transport(
    handler: Callable[[httpx.Request], httpx.Response],
) -> httpx.MockTransport:
    """Wrap *handler* in an httpx mock transport, recording requests on it."""
    seen: list[httpx.Request] = []

    def _record(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    transport = httpx.MockTransport(_record)
    transport.requests = seen  # type: ignore[attr-defined]
    return transport

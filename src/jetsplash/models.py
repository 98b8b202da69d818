"""Unsplash photo payloads, with the API's JSON field names."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class _ApiModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class Urls(_ApiModel):
    small: str
    small_s3: str
    thumb: str
    raw: str
    regular: str
    full: str


class ProfileImage(_ApiModel):
    small: str
    medium: str
    large: str


class Links(_ApiModel):
    portfolio: str | None = None
    photos: str | None = None
    download: str | None = None
    download_location: str | None = None


class User(_ApiModel):
    id: str
    username: str
    name: str
    first_name: str
    total_photos: int
    total_likes: int
    total_collections: int
    links: Links
    bio: str | None = None
    portfolio_url: str | None = None
    profile_image: ProfileImage | None = None
    twitter_username: str | None = None
    instagram_username: str | None = None


class UnsplashPhoto(_ApiModel):
    """A photo as returned by ``GET photos/random``."""

    id: str
    color: str
    created_at: str
    width: int
    height: int
    views: int
    urls: Urls
    links: Links
    user: User
    description: str | None = None
    alt_description: str | None = None
    blur_hash: str | None = None

    @property
    def caption(self) -> str:
        """Best available one-line caption for display."""
        text = self.description or self.alt_description or ""
        return text.strip() or f"Photo by {self.user.name}"

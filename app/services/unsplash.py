"""Unsplash photo search client."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import aiohttp
from pydantic import BaseModel, Field, ValidationError

from app.core.config import settings

logger = logging.getLogger(__name__)

PLACEHOLDER_KEY = "YOUR_UNSPLASH_ACCESS_KEY_HERE"


class UnsplashURLs(BaseModel):
    raw: str
    full: str
    regular: str
    small: str
    thumb: str


class UnsplashUserLinks(BaseModel):
    html: str


class UnsplashUser(BaseModel):
    name: str
    username: str
    links: UnsplashUserLinks


class UnsplashLinks(BaseModel):
    html: str


class UnsplashPhoto(BaseModel):
    id: str
    width: int
    height: int
    blur_hash: Optional[str] = None
    urls: UnsplashURLs
    user: UnsplashUser
    links: UnsplashLinks


class UnsplashSearchResponse(BaseModel):
    total: int
    total_pages: int
    results: list[UnsplashPhoto] = Field(default_factory=list)


class UnsplashError(Exception):
    """Base class for Unsplash failures."""


class InvalidAPIKeyError(UnsplashError):
    def __init__(self) -> None:
        super().__init__("Invalid Unsplash API key")


class RateLimitExceededError(UnsplashError):
    def __init__(self) -> None:
        super().__init__("Unsplash API rate limit exceeded")


class UnsplashNetworkError(UnsplashError):
    def __init__(self, message: str) -> None:
        super().__init__(f"Network error: {message}")


class UnsplashDecodingError(UnsplashError):
    def __init__(self, message: str) -> None:
        super().__init__(f"Decoding error: {message}")


def parse_search_response(status: int, payload: Any) -> UnsplashPhoto | None:
    """Turn an HTTP status + decoded JSON body into the first photo (or an error)."""
    if status == 200:
        try:
            response = UnsplashSearchResponse.model_validate(payload)
        except ValidationError as exc:
            raise UnsplashDecodingError(str(exc)) from exc
        logger.info("Unsplash found %d photos", response.total)
        return response.results[0] if response.results else None
    if status == 401:
        raise InvalidAPIKeyError()
    if status == 403:
        raise RateLimitExceededError()
    raise UnsplashNetworkError(f"HTTP {status}")


class UnsplashService:
    """Searches Unsplash for representative city and country photos."""

    def __init__(
        self,
        access_key: str | None = None,
        base_url: str | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        self._access_key = access_key if access_key is not None else settings.unsplash_access_key
        self._base_url = (base_url or settings.unsplash_base_url).rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds or settings.unsplash_timeout_seconds)

    async def search_city_photo(self, city_name: str, country: str | None = None) -> UnsplashPhoto | None:
        """Return the top landscape photo for a city, or None if nothing matched."""
        query = city_name
        if country:
            query += f" {country}"
        return await self._search(f"{query} cityscape")

    async def search_country_photo(self, country_name: str) -> UnsplashPhoto | None:
        return await self._search(f"{country_name} landscape")

    async def _search(self, query: str) -> UnsplashPhoto | None:
        if not self._access_key or self._access_key == PLACEHOLDER_KEY:
            logger.error("Unsplash access key is missing")
            raise InvalidAPIKeyError()

        url = f"{self._base_url}/search/photos"
        params = {"query": query, "orientation": "landscape", "per_page": "1"}
        headers = {
            "Authorization": f"Client-ID {self._access_key}",
            "Accept-Version": "v1",
        }
        logger.info("Unsplash search query=%r", query)

        try:
            async with aiohttp.ClientSession(timeout=self._timeout) as session:
                async with session.get(url, params=params, headers=headers) as response:
                    logger.info("Unsplash response status=%d", response.status)
                    payload = None
                    if response.status == 200:
                        payload = await response.json()
                    else:
                        body = await response.text()
                        logger.warning("Unsplash error status=%d body=%s", response.status, body[:200])
                    return parse_search_response(response.status, payload)
        except UnsplashError:
            raise
        except (aiohttp.ContentTypeError, ValueError) as exc:
            raise UnsplashDecodingError(str(exc)) from exc
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise UnsplashNetworkError(str(exc)) from exc


_unsplash_service_instance: UnsplashService | None = None


def get_unsplash_service() -> UnsplashService:
    """Lazy initialization of the Unsplash client."""
    global _unsplash_service_instance
    if _unsplash_service_instance is None:
        _unsplash_service_instance = UnsplashService()
    return _unsplash_service_instance

"""Unsplash banner photos for cities and countries.

Lookup order: in-process cache, then the city_photos/country_photos table,
then an Unsplash search whose result is written back to the table.
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.banner_photo import CityPhoto, CountryPhoto
from app.models.city import City
from app.models.country import Country
from app.schemas.photo import BannerPhotoOut
from app.services.unsplash import UnsplashPhoto, UnsplashService

logger = logging.getLogger(__name__)


def banner_fields(photo: UnsplashPhoto) -> dict:
    """Columns of a banner row built from an Unsplash search hit."""
    return {
        "unsplash_id": photo.id,
        "photo_url_regular": photo.urls.regular,
        "photo_url_small": photo.urls.small,
        "blur_hash": photo.blur_hash,
        "photographer_name": photo.user.name,
        "photographer_username": photo.user.username,
        "unsplash_url": photo.links.html,
    }


class BannerCache:
    """Per-process memo of banners already resolved this session."""

    def __init__(self) -> None:
        self._cities: dict[int, BannerPhotoOut] = {}
        self._countries: dict[int, BannerPhotoOut] = {}

    def clear(self) -> None:
        self._cities.clear()
        self._countries.clear()

    def forget_city(self, city_id: int) -> None:
        self._cities.pop(city_id, None)

    async def city_banner(self, db: Session, city: City, unsplash: UnsplashService) -> BannerPhotoOut | None:
        cached = self._cities.get(city.id)
        if cached is not None:
            return cached

        row = db.execute(select(CityPhoto).where(CityPhoto.city_id == city.id)).scalar_one_or_none()
        if row is None:
            found = await unsplash.search_city_photo(city.name, city.country.name if city.country else None)
            if found is None:
                # 사진이 없는 것은 오류가 아님 (배너 없이 표시)
                logger.info("No Unsplash photo for city id=%s", city.id)
                return None
            row = _save(db, CityPhoto(city_id=city.id, **banner_fields(found)))

        banner = BannerPhotoOut.model_validate(row)
        self._cities[city.id] = banner
        return banner

    async def country_banner(
        self, db: Session, country: Country, unsplash: UnsplashService
    ) -> BannerPhotoOut | None:
        cached = self._countries.get(country.id)
        if cached is not None:
            return cached

        row = db.execute(
            select(CountryPhoto).where(CountryPhoto.country_id == country.id)
        ).scalar_one_or_none()
        if row is None:
            found = await unsplash.search_country_photo(country.name)
            if found is None:
                logger.info("No Unsplash photo for country id=%s", country.id)
                return None
            row = _save(db, CountryPhoto(country_id=country.id, **banner_fields(found)))

        banner = BannerPhotoOut.model_validate(row)
        self._countries[country.id] = banner
        return banner


def _save(db: Session, row):
    try:
        db.add(row)
        db.commit()
        db.refresh(row)
        return row
    except Exception:
        db.rollback()
        raise


banner_cache = BannerCache()

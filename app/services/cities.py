"""Countries, cities and city ratings."""

from __future__ import annotations

import logging
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.city import City
from app.models.country import Country
from app.services.banners import banner_cache
from app.services.comparison import Comparison, RatedCity, RatingStep, next_step
from app.services.rating import RatingCategory

logger = logging.getLogger(__name__)

CONTINENTS = ("Africa", "Asia", "Europe", "North America", "Oceania", "South America")

CITY_FIELDS = ("latitude", "longitude", "bucket_list", "is_visited")


class NotFoundError(Exception):
    """Raised when a row does not exist or is not visible to the user."""


def upsert_country(db: Session, data: dict) -> Country:
    """Insert or update a country."""
    if data["continent"] not in CONTINENTS:
        raise ValueError(f"Unknown continent: {data['continent']}")
    try:
        country = db.get(Country, data["id"])
        if country:
            country.name = data["name"]
            country.continent = data["continent"]
        else:
            country = Country(**data)
            db.add(country)
        db.commit()
        db.refresh(country)
        return country
    except Exception:
        db.rollback()
        raise


def list_countries(db: Session, continent: str | None = None) -> list[Country]:
    stmt = select(Country).order_by(Country.name)
    if continent:
        stmt = stmt.where(Country.continent == continent)
    return list(db.execute(stmt).scalars().all())


def get_country(db: Session, country_id: int) -> Country:
    country = db.get(Country, country_id)
    if country is None:
        raise NotFoundError(f"Country {country_id} not found")
    return country


def upsert_city(db: Session, user_id: str, data: dict) -> City:
    """Insert a city for the user, or update the one with the same name/admin/country."""
    get_country(db, data["country_id"])
    try:
        city = db.execute(
            select(City).where(
                City.user_id == user_id,
                City.name == data["name"],
                City.admin == data["admin"],
                City.country_id == data["country_id"],
            )
        ).scalar_one_or_none()
        if city:
            for field in CITY_FIELDS:
                setattr(city, field, data[field])
        else:
            city = City(user_id=user_id, **data)
            db.add(city)
        db.commit()
        db.refresh(city)
        return city
    except Exception:
        db.rollback()
        raise


def list_cities(
    db: Session,
    user_id: str,
    visited: bool | None = None,
    bucket_list: bool | None = None,
) -> list[City]:
    stmt = select(City).where(City.user_id == user_id)
    if visited is not None:
        stmt = stmt.where(City.is_visited == visited)
    if bucket_list is not None:
        stmt = stmt.where(City.bucket_list == bucket_list)
    stmt = stmt.order_by(City.rating.is_(None), City.rating.desc(), City.name)
    return list(db.execute(stmt).scalars().all())


def get_city(db: Session, user_id: str, city_id: int) -> City:
    city = db.get(City, city_id)
    if city is None or city.user_id != user_id:
        raise NotFoundError(f"City {city_id} not found")
    return city


def update_city(db: Session, city: City, changes: dict) -> City:
    try:
        for field, value in changes.items():
            setattr(city, field, value)
        db.commit()
        db.refresh(city)
        return city
    except Exception:
        db.rollback()
        raise


def delete_city(db: Session, city: City) -> None:
    """Delete a city together with its places, photos and banner."""
    city_id = city.id
    try:
        db.delete(city)
        db.commit()
    except Exception:
        db.rollback()
        raise
    # SQLite는 삭제된 id를 재사용하므로 메모리 캐시에서도 제거
    banner_cache.forget_city(city_id)


def rated_cities(db: Session, user_id: str, exclude_id: int | None = None) -> list[City]:
    """Visited cities of the user that already carry a rating."""
    stmt = select(City).where(
        City.user_id == user_id,
        City.is_visited.is_(True),
        City.rating.is_not(None),
    )
    if exclude_id is not None:
        stmt = stmt.where(City.id != exclude_id)
    return list(db.execute(stmt).scalars().all())


def rating_step(
    db: Session,
    city: City,
    category: RatingCategory,
    comparisons: Iterable[Comparison],
) -> tuple[RatingStep, City | None]:
    """Run one step of the comparison flow; persist the rating when it finishes.

    Returns the step and, while comparisons remain, the opponent's City row.
    """
    others = {c.id: c for c in rated_cities(db, city.user_id, exclude_id=city.id)}
    step = next_step(
        category,
        [RatedCity(id=c.id, rating=c.rating) for c in others.values()],
        list(comparisons),
    )
    if not step.done:
        return step, others[step.opponent.id]

    try:
        for other_id, new_rating in step.adjusted.items():
            others[other_id].rating = new_rating
        city.rating = step.rating
        city.is_visited = True
        db.commit()
        db.refresh(city)
    except Exception:
        db.rollback()
        raise
    logger.info(
        "Rated city id=%s rating=%.3f (%d other cities adjusted)",
        city.id,
        step.rating,
        len(step.adjusted),
    )
    return step, None


def set_rating(db: Session, city: City, rating: float) -> City:
    """Store an explicit rating on a city and mark it visited."""
    if not 0 < rating <= 10:
        raise ValueError("Rating must be in (0, 10]")
    return update_city(db, city, {"rating": rating, "is_visited": True})

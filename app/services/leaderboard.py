"""Community leaderboards over visited, rated cities."""

from __future__ import annotations

import enum

from sqlalchemy import distinct, func, select
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.city import City
from app.models.country import Country
from app.models.profile import Profile
from app.schemas.leaderboard import (
    CityLeaderboardEntry,
    CountryLeaderboardEntry,
    PeopleLeaderboardEntry,
)
from app.services.cities import CONTINENTS
from app.services.profiles import display_name


class PeopleRankType(str, enum.Enum):
    CITIES = "cities"
    COUNTRIES = "countries"


def _check_continent(continent: str | None) -> None:
    if continent is not None and continent not in CONTINENTS:
        raise ValueError(f"Unknown continent: {continent}")


def _rated_visits():
    return (City.is_visited.is_(True), City.rating.is_not(None))


def top_cities(db: Session, limit: int | None = None, continent: str | None = None) -> list[CityLeaderboardEntry]:
    """Cities ranked by the average rating users gave them."""
    _check_continent(continent)
    limit = limit or settings.leaderboard_limit

    average = func.avg(City.rating).label("average_rating")
    count = func.count(City.id).label("rating_count")
    stmt = (
        select(City.name, City.admin, Country.name, average, count)
        .join(Country, City.country_id == Country.id)
        .where(*_rated_visits())
        .group_by(City.name, City.admin, Country.name)
        .order_by(average.desc(), count.desc(), City.name)
        .limit(limit)
    )
    if continent:
        stmt = stmt.where(Country.continent == continent)

    return [
        CityLeaderboardEntry(
            display_name=name,
            admin=admin,
            country=country,
            average_rating=round(float(avg), 2),
            rating_count=int(n),
            rank=index,
        )
        for index, (name, admin, country, avg, n) in enumerate(db.execute(stmt).all(), start=1)
    ]


def top_countries(
    db: Session, limit: int | None = None, continent: str | None = None
) -> list[CountryLeaderboardEntry]:
    """Countries ranked by the average rating of their cities."""
    _check_continent(continent)
    limit = limit or settings.leaderboard_limit

    average = func.avg(City.rating).label("average_rating")
    stmt = (
        select(Country.id, Country.name, Country.continent, average)
        .join(City, City.country_id == Country.id)
        .where(*_rated_visits())
        .group_by(Country.id, Country.name, Country.continent)
        .order_by(average.desc(), Country.name)
        .limit(limit)
    )
    if continent:
        stmt = stmt.where(Country.continent == continent)

    return [
        CountryLeaderboardEntry(
            id=country_id,
            name=name,
            continent=country_continent,
            average_rating=round(float(avg), 2),
            rank=index,
        )
        for index, (country_id, name, country_continent, avg) in enumerate(db.execute(stmt).all(), start=1)
    ]


def top_people(
    db: Session,
    rank_by: PeopleRankType = PeopleRankType.CITIES,
    limit: int | None = None,
) -> list[PeopleLeaderboardEntry]:
    """Travelers ranked by how many cities or countries they visited."""
    limit = limit or settings.leaderboard_limit

    cities_count = func.count(City.id).label("cities_count")
    countries_count = func.count(distinct(City.country_id)).label("countries_count")
    if rank_by is PeopleRankType.CITIES:
        ordering = (cities_count.desc(), countries_count.desc())
    else:
        ordering = (countries_count.desc(), cities_count.desc())

    stmt = (
        select(Profile, cities_count, countries_count)
        .join(City, City.user_id == Profile.id)
        .where(City.is_visited.is_(True))
        .group_by(Profile.id)
        .order_by(*ordering, Profile.id)
        .limit(limit)
    )

    return [
        PeopleLeaderboardEntry(
            id=profile.id,
            username=profile.username,
            full_name=profile.full_name,
            avatar_url=profile.avatar_url,
            display_name=display_name(profile.full_name, profile.username),
            visited_cities_count=int(n_cities),
            visited_countries_count=int(n_countries),
            rank=index,
        )
        for index, (profile, n_cities, n_countries) in enumerate(db.execute(stmt).all(), start=1)
    ]

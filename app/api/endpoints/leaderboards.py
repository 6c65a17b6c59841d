"""Leaderboard endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.schemas.leaderboard import (
    CityLeaderboardEntry,
    CountryLeaderboardEntry,
    PeopleLeaderboardEntry,
)
from app.services.leaderboard import PeopleRankType, top_cities, top_countries, top_people

router = APIRouter(prefix="/leaderboards", tags=["leaderboards"])


@router.get("/cities", response_model=list[CityLeaderboardEntry])
def city_leaderboard(
    continent: str | None = None,
    limit: int | None = Query(None, ge=1, le=200),
    db: Session = Depends(get_db),
) -> list[CityLeaderboardEntry]:
    """Top-rated cities across all users."""
    try:
        return top_cities(db, limit=limit, continent=continent)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.get("/countries", response_model=list[CountryLeaderboardEntry])
def country_leaderboard(
    continent: str | None = None,
    limit: int | None = Query(None, ge=1, le=200),
    db: Session = Depends(get_db),
) -> list[CountryLeaderboardEntry]:
    try:
        return top_countries(db, limit=limit, continent=continent)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.get("/people", response_model=list[PeopleLeaderboardEntry])
def people_leaderboard(
    rank_by: PeopleRankType = PeopleRankType.CITIES,
    limit: int | None = Query(None, ge=1, le=200),
    db: Session = Depends(get_db),
) -> list[PeopleLeaderboardEntry]:
    """Most traveled users by city or country count."""
    return top_people(db, rank_by=rank_by, limit=limit)

"""Schemas for leaderboards."""

from typing import Optional

from pydantic import BaseModel


class CityLeaderboardEntry(BaseModel):
    display_name: str
    admin: str
    country: str
    average_rating: float
    rating_count: int
    rank: Optional[int] = None


class CountryLeaderboardEntry(BaseModel):
    id: int
    name: str
    continent: str
    average_rating: float
    rank: Optional[int] = None


class PeopleLeaderboardEntry(BaseModel):
    id: str
    username: Optional[str] = None
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    display_name: str
    visited_cities_count: int
    visited_countries_count: int
    rank: Optional[int] = None

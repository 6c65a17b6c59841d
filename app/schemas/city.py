"""Pydantic schemas for countries and cities."""

from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.rating import RatingCategoryOut


class CountryCreate(BaseModel):
    id: int
    name: str
    continent: str


class CountryOut(CountryCreate):
    model_config = {"from_attributes": True}


class CityCreate(BaseModel):
    name: str
    admin: str
    country_id: int
    latitude: float
    longitude: float
    bucket_list: bool = False
    is_visited: bool = False


class CityUpdate(BaseModel):
    notes: Optional[str] = None
    bucket_list: Optional[bool] = None
    is_visited: Optional[bool] = None


class CityOut(BaseModel):
    id: int
    name: str
    admin: str
    country_id: int
    latitude: float
    longitude: float
    bucket_list: bool
    is_visited: bool
    rating: Optional[float] = Field(None, description="0 < rating <= 10")
    notes: Optional[str] = None
    category: Optional[RatingCategoryOut] = None

    model_config = {"from_attributes": True}

"""Pydantic schemas for places."""

from typing import Optional

from pydantic import BaseModel

from app.models.place import PlaceCategory


class PlaceCreate(BaseModel):
    name: str
    latitude: float
    longitude: float
    category: PlaceCategory
    liked: Optional[bool] = None


class PlaceUpdate(BaseModel):
    liked: Optional[bool] = None


class PlaceOut(BaseModel):
    id: int
    city_id: int
    name: str
    latitude: float
    longitude: float
    category: PlaceCategory
    liked: Optional[bool] = None

    model_config = {"from_attributes": True}

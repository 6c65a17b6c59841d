"""Schemas for profiles and usernames."""

from typing import Optional

from pydantic import BaseModel


class ProfileCreate(BaseModel):
    id: str
    username: Optional[str] = None
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None


class ProfileOut(ProfileCreate):
    display_name: str

    model_config = {"from_attributes": True}


class UsernameAvailability(BaseModel):
    available: bool
    error: Optional[str] = None
    message: str


class UsernameUpdateRequest(BaseModel):
    username: str

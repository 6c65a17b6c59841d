"""Schemas for user photos and Unsplash banners."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class PhotoCreate(BaseModel):
    image_base64: str = Field(..., description="Base64 인코딩된 JPEG 이미지")


class PhotoOut(BaseModel):
    id: int
    city_id: int
    date_added: datetime
    size_bytes: int

    model_config = {"from_attributes": True}


class BannerPhotoOut(BaseModel):
    unsplash_id: str
    photo_url_regular: str
    photo_url_small: str
    blur_hash: Optional[str] = None
    photographer_name: str
    photographer_username: str
    unsplash_url: str
    attribution_text: str
    photographer_url: str
    photo_page_url: str

    model_config = {"from_attributes": True}

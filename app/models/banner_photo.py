"""Cached Unsplash banner photos for cities and countries."""

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.db.base import Base


class BannerPhotoMixin:
    """Columns shared by every cached Unsplash photo."""

    unsplash_id = Column(String(64), nullable=False)
    photo_url_regular = Column(Text, nullable=False)
    photo_url_small = Column(Text, nullable=False)
    blur_hash = Column(String(64))
    photographer_name = Column(String(255), nullable=False)
    photographer_username = Column(String(255), nullable=False)
    unsplash_url = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.now)

    @property
    def attribution_text(self) -> str:
        return f"Photo by {self.photographer_name} on Unsplash"

    @property
    def photographer_url(self) -> str:
        return f"https://unsplash.com/@{self.photographer_username}?utm_source=safar&utm_medium=referral"

    @property
    def photo_page_url(self) -> str:
        return f"{self.unsplash_url}?utm_source=safar&utm_medium=referral"


class CityPhoto(BannerPhotoMixin, Base):
    __tablename__ = "city_photos"

    id = Column(Integer, primary_key=True, index=True)
    city_id = Column(Integer, ForeignKey("cities.id", ondelete="CASCADE"), nullable=False, unique=True)

    city = relationship("City", back_populates="banner")


class CountryPhoto(BannerPhotoMixin, Base):
    __tablename__ = "country_photos"

    id = Column(Integer, primary_key=True, index=True)
    country_id = Column(Integer, ForeignKey("countries.id", ondelete="CASCADE"), nullable=False, unique=True)

    country = relationship("Country", back_populates="banner")

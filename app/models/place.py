"""Place model."""

import enum

from sqlalchemy import Boolean, Column, Enum, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.db.base import Base


class PlaceCategory(str, enum.Enum):
    RESTAURANT = "restaurant"
    HOTEL = "hotel"
    ACTIVITY = "activity"
    SHOP = "shop"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def plural_display_name(self) -> str:
        if self is PlaceCategory.ACTIVITY:
            return "Activities"
        return f"{self.display_name}s"


class Place(Base):
    """A place the user saved inside one of their cities."""

    __tablename__ = "places"

    id = Column(Integer, primary_key=True, index=True)
    city_id = Column(Integer, ForeignKey("cities.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    category = Column(
        Enum(PlaceCategory, values_callable=lambda e: [m.value for m in e], name="place_category"),
        nullable=False,
    )
    liked = Column(Boolean)  # None = 아직 평가 안 함

    city = relationship("City", back_populates="places")

"""City model."""

from sqlalchemy import Boolean, Column, Float, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from app.db.base import Base


class City(Base):
    """A city on a user's map, either visited or on the bucket list."""

    __tablename__ = "cities"
    __table_args__ = (
        UniqueConstraint("user_id", "name", "admin", "country_id", name="uq_user_city"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    admin = Column(String(255), nullable=False)  # 주/도 등 행정구역
    country_id = Column(Integer, ForeignKey("countries.id"), nullable=False, index=True)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    bucket_list = Column(Boolean, nullable=False, default=False)
    is_visited = Column(Boolean, nullable=False, default=False)
    rating = Column(Float)  # 0 < rating <= 10
    notes = Column(Text)

    user = relationship("Profile", back_populates="cities")
    country = relationship("Country", back_populates="cities")
    photos = relationship("Photo", back_populates="city", cascade="all, delete-orphan")
    places = relationship("Place", back_populates="city", cascade="all, delete-orphan")
    banner = relationship(
        "CityPhoto", back_populates="city", uselist=False, cascade="all, delete-orphan"
    )

    @property
    def unique_key(self) -> str:
        return f"{self.name}-{self.longitude}-{self.latitude}"

"""Country model."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from app.db.base import Base


class Country(Base):
    """Country with the continent it belongs to."""

    __tablename__ = "countries"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, unique=True)
    continent = Column(String(50), nullable=False, index=True)

    cities = relationship("City", back_populates="country")
    banner = relationship(
        "CountryPhoto", back_populates="country", uselist=False, cascade="all, delete-orphan"
    )

"""Photo model."""

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, LargeBinary
from sqlalchemy.orm import relationship

from app.db.base import Base


class Photo(Base):
    """A photo the user attached to a city."""

    __tablename__ = "photos"

    id = Column(Integer, primary_key=True, index=True)
    city_id = Column(Integer, ForeignKey("cities.id", ondelete="CASCADE"), nullable=False, index=True)
    image_data = Column(LargeBinary, nullable=False)
    date_added = Column(DateTime, nullable=False, default=datetime.now)

    city = relationship("City", back_populates="photos")

    @property
    def size_bytes(self) -> int:
        return len(self.image_data or b"")

"""Profile model."""

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship

from app.db.base import Base


class Profile(Base):
    """A Safar user."""

    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True)  # uuid
    username = Column(String(20), unique=True, index=True)
    full_name = Column(String(255))
    avatar_url = Column(String(1024))
    username_changed_at = Column(DateTime)  # 마지막 username 변경 시점

    cities = relationship("City", back_populates="user", cascade="all, delete-orphan")

"""Places and photos attached to a user's city."""

from __future__ import annotations

import base64
import binascii
import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.city import City
from app.models.photo import Photo
from app.models.place import Place, PlaceCategory
from app.services.cities import NotFoundError

logger = logging.getLogger(__name__)


def add_place(db: Session, city: City, data: dict) -> Place:
    try:
        place = Place(city_id=city.id, **data)
        db.add(place)
        db.commit()
        db.refresh(place)
        return place
    except Exception:
        db.rollback()
        raise


def list_places(db: Session, city: City, category: PlaceCategory | None = None) -> list[Place]:
    stmt = select(Place).where(Place.city_id == city.id)
    if category is not None:
        stmt = stmt.where(Place.category == category)
    return list(db.execute(stmt.order_by(Place.category, Place.name)).scalars().all())


def get_place(db: Session, user_id: str, place_id: int) -> Place:
    place = db.get(Place, place_id)
    if place is None or place.city.user_id != user_id:
        raise NotFoundError(f"Place {place_id} not found")
    return place


def set_liked(db: Session, place: Place, liked: bool | None) -> Place:
    try:
        place.liked = liked
        db.commit()
        db.refresh(place)
        return place
    except Exception:
        db.rollback()
        raise


def delete_place(db: Session, place: Place) -> None:
    try:
        db.delete(place)
        db.commit()
    except Exception:
        db.rollback()
        raise


def decode_image(image_base64: str) -> bytes:
    """Decode a base64 payload; data-URL prefixes are accepted."""
    if "," in image_base64 and image_base64.startswith("data:"):
        image_base64 = image_base64.split(",", 1)[1]
    try:
        data = base64.b64decode(image_base64, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError("Invalid base64 image data") from exc
    if not data:
        raise ValueError("Empty image")
    return data


def add_photo(db: Session, city: City, image_data: bytes) -> Photo:
    try:
        photo = Photo(city_id=city.id, image_data=image_data, date_added=datetime.now())
        db.add(photo)
        db.commit()
        db.refresh(photo)
        logger.info("Stored photo id=%s for city id=%s (%d bytes)", photo.id, city.id, len(image_data))
        return photo
    except Exception:
        db.rollback()
        raise


def list_photos(db: Session, city: City) -> list[Photo]:
    stmt = select(Photo).where(Photo.city_id == city.id).order_by(Photo.date_added.desc(), Photo.id.desc())
    return list(db.execute(stmt).scalars().all())


def get_photo(db: Session, user_id: str, photo_id: int) -> Photo:
    photo = db.get(Photo, photo_id)
    if photo is None or photo.city.user_id != user_id:
        raise NotFoundError(f"Photo {photo_id} not found")
    return photo


def delete_photo(db: Session, photo: Photo) -> None:
    try:
        db.delete(photo)
        db.commit()
    except Exception:
        db.rollback()
        raise

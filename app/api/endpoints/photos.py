"""Photo endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.db.session import get_db
from app.models.profile import Profile
from app.services import places as place_service
from app.services.cities import NotFoundError

router = APIRouter(prefix="/photos", tags=["photos"])


@router.get("/{photo_id}/image")
def get_photo_image(
    photo_id: int,
    db: Session = Depends(get_db),
    user: Profile = Depends(get_current_user),
) -> Response:
    """Return the raw JPEG bytes."""
    try:
        photo = place_service.get_photo(db, user.id, photo_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return Response(content=photo.image_data, media_type="image/jpeg")


@router.delete("/{photo_id}", status_code=204)
def delete_photo(photo_id: int, db: Session = Depends(get_db), user: Profile = Depends(get_current_user)) -> None:
    try:
        photo = place_service.get_photo(db, user.id, photo_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    place_service.delete_photo(db, photo)

"""Place endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.db.session import get_db
from app.models.profile import Profile
from app.schemas.place import PlaceOut, PlaceUpdate
from app.services import places as place_service
from app.services.cities import NotFoundError

router = APIRouter(prefix="/places", tags=["places"])


@router.patch("/{place_id}", response_model=PlaceOut)
def update_place(
    place_id: int,
    payload: PlaceUpdate,
    db: Session = Depends(get_db),
    user: Profile = Depends(get_current_user),
) -> PlaceOut:
    """Mark a place as liked / disliked (null clears it)."""
    try:
        place = place_service.get_place(db, user.id, place_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return PlaceOut.model_validate(place_service.set_liked(db, place, payload.liked))


@router.delete("/{place_id}", status_code=204)
def delete_place(place_id: int, db: Session = Depends(get_db), user: Profile = Depends(get_current_user)) -> None:
    try:
        place = place_service.get_place(db, user.id, place_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    place_service.delete_place(db, place)

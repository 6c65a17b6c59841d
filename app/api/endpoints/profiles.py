"""Profile and username endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.db.session import get_db
from app.models.profile import Profile
from app.schemas.profile import ProfileCreate, ProfileOut, UsernameAvailability, UsernameUpdateRequest
from app.services import profiles as profile_service
from app.services.profiles import UsernameError, UsernameErrorCode

router = APIRouter(prefix="/profiles", tags=["profiles"])


def to_profile_out(profile: Profile) -> ProfileOut:
    return ProfileOut(
        id=profile.id,
        username=profile.username,
        full_name=profile.full_name,
        avatar_url=profile.avatar_url,
        display_name=profile_service.display_name(profile.full_name, profile.username),
    )


def _username_http_error(exc: UsernameError) -> HTTPException:
    status = 409 if exc.code in (UsernameErrorCode.TAKEN, UsernameErrorCode.COOLDOWN) else 400
    detail = {"error": exc.code.value, "message": exc.message}
    if exc.days_remaining is not None:
        detail["days_remaining"] = exc.days_remaining
    return HTTPException(status_code=status, detail=detail)


@router.post("", response_model=ProfileOut)
def create_profile(payload: ProfileCreate, db: Session = Depends(get_db)) -> ProfileOut:
    if db.get(Profile, payload.id) is not None:
        raise HTTPException(status_code=409, detail="Profile already exists")
    try:
        profile = profile_service.create_profile(db, payload.model_dump())
    except UsernameError as exc:
        raise _username_http_error(exc) from exc
    return to_profile_out(profile)


@router.get("/me", response_model=ProfileOut)
def get_me(user: Profile = Depends(get_current_user)) -> ProfileOut:
    return to_profile_out(user)


@router.get("/username-availability", response_model=UsernameAvailability)
def username_availability(username: str, db: Session = Depends(get_db)) -> UsernameAvailability:
    """Check format and uniqueness of a username."""
    try:
        profile_service.check_username_availability(db, username)
    except UsernameError as exc:
        return UsernameAvailability(available=False, error=exc.code.value, message=exc.message)
    return UsernameAvailability(available=True, message="Username is available")


@router.put("/me/username", response_model=ProfileOut)
def change_username(
    payload: UsernameUpdateRequest,
    db: Session = Depends(get_db),
    user: Profile = Depends(get_current_user),
) -> ProfileOut:
    try:
        profile = profile_service.update_username(db, user, payload.username)
    except UsernameError as exc:
        raise _username_http_error(exc) from exc
    return to_profile_out(profile)

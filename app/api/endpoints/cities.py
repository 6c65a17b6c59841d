"""City endpoints, scoped to the calling user."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.db.session import get_db
from app.models.city import City
from app.models.place import PlaceCategory
from app.models.profile import Profile
from app.schemas.city import CityCreate, CityOut, CityUpdate
from app.schemas.photo import BannerPhotoOut, PhotoCreate, PhotoOut
from app.schemas.place import PlaceCreate, PlaceOut
from app.schemas.rating import (
    OpponentOut,
    RatingCategoryOut,
    RatingStepRequest,
    RatingStepResponse,
    RatingUpdate,
)
from app.services import cities as city_service
from app.services import places as place_service
from app.services.banners import banner_cache
from app.services.cities import NotFoundError
from app.services.comparison import Comparison, RatingComparisonError
from app.services.rating import category_from_key, classify
from app.services.unsplash import RateLimitExceededError, UnsplashError, get_unsplash_service

router = APIRouter(prefix="/cities", tags=["cities"])


def to_city_out(city: City) -> CityOut:
    out = CityOut.model_validate(city)
    if city.rating is not None:
        out.category = RatingCategoryOut.from_category(classify(city.rating))
    return out


def _load_city(db: Session, user: Profile, city_id: int) -> City:
    try:
        return city_service.get_city(db, user.id, city_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.post("", response_model=CityOut)
def create_city(
    payload: CityCreate,
    db: Session = Depends(get_db),
    user: Profile = Depends(get_current_user),
) -> CityOut:
    """Add a city to the user's map (or update the existing entry)."""
    try:
        city = city_service.upsert_city(db, user.id, payload.model_dump())
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return to_city_out(city)


@router.get("", response_model=list[CityOut])
def list_cities(
    visited: bool | None = None,
    bucket_list: bool | None = None,
    db: Session = Depends(get_db),
    user: Profile = Depends(get_current_user),
) -> list[CityOut]:
    """Return the user's cities, best rated first."""
    cities = city_service.list_cities(db, user.id, visited=visited, bucket_list=bucket_list)
    return [to_city_out(c) for c in cities]


@router.get("/{city_id}", response_model=CityOut)
def get_city(city_id: int, db: Session = Depends(get_db), user: Profile = Depends(get_current_user)) -> CityOut:
    return to_city_out(_load_city(db, user, city_id))


@router.patch("/{city_id}", response_model=CityOut)
def update_city(
    city_id: int,
    payload: CityUpdate,
    db: Session = Depends(get_db),
    user: Profile = Depends(get_current_user),
) -> CityOut:
    city = _load_city(db, user, city_id)
    city = city_service.update_city(db, city, payload.model_dump(exclude_unset=True))
    return to_city_out(city)


@router.delete("/{city_id}", status_code=204)
def delete_city(city_id: int, db: Session = Depends(get_db), user: Profile = Depends(get_current_user)) -> None:
    city_service.delete_city(db, _load_city(db, user, city_id))


@router.post("/{city_id}/rating/steps", response_model=RatingStepResponse)
def rating_step(
    city_id: int,
    payload: RatingStepRequest,
    db: Session = Depends(get_db),
    user: Profile = Depends(get_current_user),
) -> RatingStepResponse:
    """Advance the comparison flow: next opponent, or the final rating once done."""
    city = _load_city(db, user, city_id)
    try:
        category = category_from_key(payload.category)
        comparisons = [Comparison(c.opponent_id, c.new_city_wins) for c in payload.comparisons]
        step, opponent = city_service.rating_step(db, city, category, comparisons)
    except (ValueError, RatingComparisonError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    if not step.done:
        return RatingStepResponse(
            done=False,
            opponent=OpponentOut(id=opponent.id, name=opponent.name, rating=opponent.rating),
        )
    return RatingStepResponse(
        done=True,
        rating=step.rating,
        category=RatingCategoryOut.from_category(classify(step.rating)),
    )


@router.put("/{city_id}/rating", response_model=CityOut)
def set_rating(
    city_id: int,
    payload: RatingUpdate,
    db: Session = Depends(get_db),
    user: Profile = Depends(get_current_user),
) -> CityOut:
    """Set a rating directly, or from a category's base rating."""
    city = _load_city(db, user, city_id)
    try:
        rating = payload.rating
        if rating is None:
            rating = category_from_key(payload.category).base_rating
        city = city_service.set_rating(db, city, rating)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return to_city_out(city)


@router.get("/{city_id}/banner", response_model=BannerPhotoOut)
async def city_banner(
    city_id: int,
    db: Session = Depends(get_db),
    user: Profile = Depends(get_current_user),
) -> BannerPhotoOut:
    """Representative Unsplash photo for a city."""
    city = _load_city(db, user, city_id)
    try:
        banner = await banner_cache.city_banner(db, city, get_unsplash_service())
    except RateLimitExceededError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    except UnsplashError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    if banner is None:
        raise HTTPException(status_code=404, detail="No photo found for this city")
    return banner


@router.post("/{city_id}/places", response_model=PlaceOut)
def add_place(
    city_id: int,
    payload: PlaceCreate,
    db: Session = Depends(get_db),
    user: Profile = Depends(get_current_user),
) -> PlaceOut:
    city = _load_city(db, user, city_id)
    return PlaceOut.model_validate(place_service.add_place(db, city, payload.model_dump()))


@router.get("/{city_id}/places", response_model=list[PlaceOut])
def list_places(
    city_id: int,
    category: PlaceCategory | None = None,
    db: Session = Depends(get_db),
    user: Profile = Depends(get_current_user),
) -> list[PlaceOut]:
    city = _load_city(db, user, city_id)
    return [PlaceOut.model_validate(p) for p in place_service.list_places(db, city, category)]


@router.post("/{city_id}/photos", response_model=PhotoOut)
def add_photo(
    city_id: int,
    payload: PhotoCreate,
    db: Session = Depends(get_db),
    user: Profile = Depends(get_current_user),
) -> PhotoOut:
    city = _load_city(db, user, city_id)
    try:
        image_data = place_service.decode_image(payload.image_base64)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return PhotoOut.model_validate(place_service.add_photo(db, city, image_data))


@router.get("/{city_id}/photos", response_model=list[PhotoOut])
def list_photos(
    city_id: int,
    db: Session = Depends(get_db),
    user: Profile = Depends(get_current_user),
) -> list[PhotoOut]:
    city = _load_city(db, user, city_id)
    return [PhotoOut.model_validate(p) for p in place_service.list_photos(db, city)]

"""Country endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.schemas.city import CountryCreate, CountryOut
from app.schemas.photo import BannerPhotoOut
from app.services.banners import banner_cache
from app.services.cities import NotFoundError, get_country, list_countries, upsert_country
from app.services.unsplash import RateLimitExceededError, UnsplashError, get_unsplash_service

router = APIRouter(prefix="/countries", tags=["countries"])


@router.post("", response_model=CountryOut)
def create_country(payload: CountryCreate, db: Session = Depends(get_db)) -> CountryOut:
    """Create or update a country."""
    try:
        country = upsert_country(db, payload.model_dump())
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return CountryOut.model_validate(country)


@router.get("", response_model=list[CountryOut])
def get_countries(continent: str | None = None, db: Session = Depends(get_db)) -> list[CountryOut]:
    return [CountryOut.model_validate(c) for c in list_countries(db, continent)]


@router.get("/{country_id}/banner", response_model=BannerPhotoOut)
async def country_banner(country_id: int, db: Session = Depends(get_db)) -> BannerPhotoOut:
    """Representative Unsplash photo for a country."""
    try:
        country = get_country(db, country_id)
        banner = await banner_cache.country_banner(db, country, get_unsplash_service())
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except RateLimitExceededError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    except UnsplashError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    if banner is None:
        raise HTTPException(status_code=404, detail="No photo found for this country")
    return banner

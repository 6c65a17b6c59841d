"""Rating category endpoints."""

from fastapi import APIRouter, Query

from app.schemas.rating import RatingCategoryOut
from app.services.rating import RatingCategory, classify

router = APIRouter(prefix="/ratings", tags=["ratings"])


@router.get("/categories", response_model=list[RatingCategoryOut])
def list_categories() -> list[RatingCategoryOut]:
    """Return all rating categories, best first."""
    return [RatingCategoryOut.from_category(c) for c in RatingCategory]


@router.get("/classify", response_model=RatingCategoryOut)
def classify_rating(rating: float = Query(..., description="0~10 평점")) -> RatingCategoryOut:
    """Classify a numeric rating into its category."""
    return RatingCategoryOut.from_category(classify(rating))

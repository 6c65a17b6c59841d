"""Root API router."""

from fastapi import APIRouter

from app.api.endpoints import cities, countries, leaderboards, photos, places, profiles, ratings

router = APIRouter()


@router.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Simple health check endpoint."""
    return {"status": "ok"}


router.include_router(ratings.router)
router.include_router(profiles.router)
router.include_router(countries.router)
router.include_router(cities.router)
router.include_router(places.router)
router.include_router(photos.router)
router.include_router(leaderboards.router)

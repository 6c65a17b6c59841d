"""Expose schemas for easier import."""

from app.schemas.city import CityCreate, CityOut, CityUpdate, CountryCreate, CountryOut  # noqa: F401
from app.schemas.leaderboard import (  # noqa: F401
    CityLeaderboardEntry,
    CountryLeaderboardEntry,
    PeopleLeaderboardEntry,
)
from app.schemas.photo import BannerPhotoOut, PhotoCreate, PhotoOut  # noqa: F401
from app.schemas.place import PlaceCreate, PlaceOut, PlaceUpdate  # noqa: F401
from app.schemas.profile import ProfileCreate, ProfileOut, UsernameAvailability  # noqa: F401
from app.schemas.rating import RatingCategoryOut, RatingStepRequest, RatingStepResponse  # noqa: F401

"""Import all models so that Base.metadata sees every table."""

from app.models.banner_photo import CityPhoto, CountryPhoto  # noqa: F401
from app.models.city import City  # noqa: F401
from app.models.country import Country  # noqa: F401
from app.models.photo import Photo  # noqa: F401
from app.models.place import Place, PlaceCategory  # noqa: F401
from app.models.profile import Profile  # noqa: F401

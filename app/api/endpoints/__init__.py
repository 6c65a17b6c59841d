"""Expose API endpoint routers."""

from app.api.endpoints import cities, countries, leaderboards, photos, places, profiles, ratings

__all__ = ["cities", "countries", "leaderboards", "photos", "places", "profiles", "ratings"]

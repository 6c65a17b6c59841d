"""Rating categories for subjective city reviews.

A city rating is a float in (0, 10]. Users pick one of five categories when
they rate a city; the category supplies a seed rating and the range of
ratings it claims. Thresholds are 9.0 / 7.5 / 5.0 / 2.5.
"""

from __future__ import annotations

import enum
from typing import NamedTuple


class RatingRange(NamedTuple):
    low: float
    high: float
    low_inclusive: bool = True
    high_inclusive: bool = False

    def contains(self, rating: float) -> bool:
        above = rating >= self.low if self.low_inclusive else rating > self.low
        below = rating <= self.high if self.high_inclusive else rating < self.high
        return above and below


class RatingCategory(enum.Enum):
    LOVED = (
        "Absolutely Loved It",
        9.5,
        RatingRange(9.0, 10.0, high_inclusive=True),
        "One of your favorite places",
    )
    ENJOYED = (
        "Really Enjoyed It",
        8.25,
        RatingRange(7.5, 9.0),
        "Had a great time overall",
    )
    DECENT = (
        "It Was Decent",
        6.25,
        RatingRange(5.0, 7.5),
        "Nice enough, nothing special",
    )
    DISAPPOINTED = (
        "A Bit Disappointed",
        3.25,
        RatingRange(2.5, 5.0),
        "Expected more from it",
    )
    DISLIKED = (
        "Didn't Like It",
        1.25,
        RatingRange(0.0, 2.5, low_inclusive=False),
        "Wouldn't recommend or return",
    )

    def __init__(self, label: str, base_rating: float, accept_range: RatingRange, description: str) -> None:
        self.label = label
        self.base_rating = base_rating
        self.accept_range = accept_range
        self.description = description

    @property
    def range(self) -> tuple[float, float]:
        return self.accept_range.low, self.accept_range.high

    @classmethod
    def from_rating(cls, rating: float) -> "RatingCategory":
        return classify(rating)


# 높은 기준부터 검사 (first match wins)
_DESCENDING = (
    RatingCategory.LOVED,
    RatingCategory.ENJOYED,
    RatingCategory.DECENT,
    RatingCategory.DISAPPOINTED,
)


def classify(rating: float) -> RatingCategory:
    """Map a numeric rating to its category.

    Never raises: anything that no range claims (<= 0, > 10, NaN) is DISLIKED.
    """
    for category in _DESCENDING:
        if category.accept_range.contains(rating):
            return category
    return RatingCategory.DISLIKED


def base_rating(category: RatingCategory) -> float:
    return category.base_rating


def rating_range(category: RatingCategory) -> tuple[float, float]:
    return category.range


def category_from_key(key: str) -> RatingCategory:
    """Look a category up by its lowercase key ("loved", "enjoyed", ...)."""
    try:
        return RatingCategory[key.strip().upper()]
    except KeyError as exc:
        raise ValueError(f"Unknown rating category: {key}") from exc

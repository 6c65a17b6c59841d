"""Pairwise comparison rating.

A new city is rated by picking a category and then answering "did you like
it more than X?" against the user's other rated cities. The engine is
stateless: callers pass the comparisons answered so far and get back either
the next opponent or the final rating.

With fewer than ``MINIMUM_CITIES_FOR_RATING`` rated cities the user is still
calibrating: a fixed set of opponents is played and the rating is derived
from the win percentage. After that, every answer halves the window of
ratings the new city can take (binary search over the sorted ratings).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from app.services.rating import RatingCategory

MINIMUM_CITIES_FOR_RATING = 5
MAX_CALIBRATION_COMPARISONS = 5
MIN_RATING = 1.0
MAX_RATING = 10.0
UNIQUE_STEP = 0.1
UNIQUE_MAX_ATTEMPTS = 20
MIN_GAP = 0.1
# 이분 탐색 초기 구간 (양 끝 도시도 후보에 포함되도록 살짝 넓힘)
SEARCH_LOWER_BOUND = 0.0000001
SEARCH_UPPER_BOUND = 10.0000001


class RatingComparisonError(Exception):
    """Raised when submitted comparisons do not match the rated cities."""


@dataclass(frozen=True)
class RatedCity:
    id: int
    rating: float


@dataclass(frozen=True)
class Comparison:
    opponent_id: int
    new_city_wins: bool


@dataclass
class RatingStep:
    """Either the next opponent to compare against or the final rating."""

    opponent: RatedCity | None = None
    rating: float | None = None
    adjusted: dict[int, float] = field(default_factory=dict)

    @property
    def done(self) -> bool:
        return self.rating is not None


def next_step(
    category: RatingCategory,
    rated: Sequence[RatedCity],
    comparisons: Sequence[Comparison] = (),
) -> RatingStep:
    """Advance the rating flow for a new city by one step."""
    by_id = {city.id: city for city in rated}
    for comparison in comparisons:
        if comparison.opponent_id not in by_id:
            raise RatingComparisonError(f"Unknown opponent city: {comparison.opponent_id}")

    if not rated:
        return RatingStep(rating=category.base_rating)
    if len(rated) < MINIMUM_CITIES_FOR_RATING:
        return _calibration_step(category, rated, comparisons, by_id)
    return _search_step(category, rated, comparisons, by_id)


def calibration_opponents(category: RatingCategory, rated: Sequence[RatedCity]) -> list[RatedCity]:
    """Cities played during calibration, same-category cities first."""
    low, high = category.range
    pool = [city for city in rated if low <= city.rating <= high] or list(rated)
    pool.sort(key=lambda c: (-c.rating, c.id))
    return pool[: min(len(rated), MAX_CALIBRATION_COMPARISONS)]


def _calibration_step(
    category: RatingCategory,
    rated: Sequence[RatedCity],
    comparisons: Sequence[Comparison],
    by_id: dict[int, RatedCity],
) -> RatingStep:
    opponents = calibration_opponents(category, rated)
    answered = [c.opponent_id for c in comparisons]
    if answered != [c.id for c in opponents][: len(answered)] or len(answered) > len(opponents):
        raise RatingComparisonError("Comparisons do not follow the calibration order")
    if len(comparisons) < len(opponents):
        return RatingStep(opponent=opponents[len(comparisons)])

    rating = win_rate_rating(category, [(by_id[c.opponent_id].rating, c.new_city_wins) for c in comparisons])
    rating = make_unique(rating, [city.rating for city in rated], wrap_step=UNIQUE_STEP)

    adjusted: dict[int, float] = {}
    if len(rated) + 1 == MINIMUM_CITIES_FOR_RATING:
        rating, adjusted = reveal_ratings(rating, rated)
    return RatingStep(rating=rating, adjusted=adjusted)


def _search_step(
    category: RatingCategory,
    rated: Sequence[RatedCity],
    comparisons: Sequence[Comparison],
    by_id: dict[int, RatedCity],
) -> RatingStep:
    if not comparisons:
        seed = min(rated, key=lambda c: (abs(c.rating - category.base_rating), c.id))
        return RatingStep(opponent=seed)

    lower, upper = SEARCH_LOWER_BOUND, SEARCH_UPPER_BOUND
    for comparison in comparisons:
        opponent_rating = by_id[comparison.opponent_id].rating
        if comparison.new_city_wins:
            lower = max(lower, opponent_rating)
        else:
            upper = min(upper, opponent_rating)

    candidates = sorted(
        (city for city in rated if lower < city.rating < upper),
        key=lambda c: (c.rating, c.id),
    )
    if candidates:
        return RatingStep(opponent=candidates[len(candidates) // 2])
    # 10점 도시를 이기면 중간값이 10을 넘으므로 상한으로 자름
    return RatingStep(rating=min(MAX_RATING, (lower + upper) / 2))


def win_rate_rating(category: RatingCategory, results: Sequence[tuple[float, bool]]) -> float:
    """Rating from (opponent_rating, new_city_wins) pairs, clamped to [1, 10]."""
    if not results:
        return category.base_rating
    wins = sum(1 for _, won in results if won)
    win_percentage = wins / len(results)
    average_opponent = sum(rating for rating, _ in results) / len(results)

    base = category.base_rating
    rating = base + (win_percentage - 0.5) * 2.0 + (average_opponent - base) * 0.3
    return _clamp(rating)


def make_unique(rating: float, existing: Sequence[float], wrap_step: float = UNIQUE_STEP) -> float:
    """Nudge ``rating`` upward by 0.1 until no other city has it."""
    taken = {round(value, 6) for value in existing}
    if round(rating, 6) not in taken:
        return rating

    adjusted = rating
    attempts = 0
    while round(adjusted, 6) in taken and attempts < UNIQUE_MAX_ATTEMPTS:
        adjusted += UNIQUE_STEP
        if adjusted > MAX_RATING:
            adjusted = rating - wrap_step
        attempts += 1
    return _clamp(adjusted)


def reveal_ratings(rating: float, rated: Sequence[RatedCity]) -> tuple[float, dict[int, float]]:
    """Finish calibration: stretch the best city to 10 and spread the rest.

    Returns the new city's rating and the adjusted ratings of the others.
    """
    ratings: dict[int | None, float] = {city.id: city.rating for city in rated}
    ratings[None] = rating

    highest = max(ratings.values())
    if 0 < highest < MAX_RATING:
        scale = MAX_RATING / highest
        ratings = {key: min(MAX_RATING, value * scale) for key, value in ratings.items()}

    ordered = sorted(ratings.items(), key=lambda item: item[1])
    for index in range(1, len(ordered)):
        key, current = ordered[index]
        previous = ordered[index - 1][1]
        if current - previous < MIN_GAP:
            current = min(MAX_RATING, current + (MIN_GAP - (current - previous)))
            ordered[index] = (key, current)
    ratings = dict(ordered)

    new_rating = ratings.pop(None)
    original = {city.id: city.rating for city in rated}
    adjusted = {city_id: value for city_id, value in ratings.items() if value != original[city_id]}
    return new_rating, adjusted


def _clamp(rating: float) -> float:
    return max(MIN_RATING, min(MAX_RATING, rating))

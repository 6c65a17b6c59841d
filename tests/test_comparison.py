"""
Unit tests for the pairwise comparison rating flow.
"""

import pytest

from app.services.comparison import (
    Comparison,
    RatedCity,
    RatingComparisonError,
    calibration_opponents,
    make_unique,
    next_step,
    reveal_ratings,
    win_rate_rating,
)
from app.services.rating import RatingCategory, classify


@pytest.fixture
def established():
    """Five rated cities: enough to skip calibration."""
    return [
        RatedCity(1, 9.0),
        RatedCity(2, 8.0),
        RatedCity(3, 6.5),
        RatedCity(4, 5.0),
        RatedCity(5, 3.0),
    ]


def test_first_city_gets_base_rating():
    step = next_step(RatingCategory.ENJOYED, [])
    assert step.done
    assert step.rating == RatingCategory.ENJOYED.base_rating
    assert step.adjusted == {}


def test_calibration_prefers_same_category_opponents():
    rated = [RatedCity(1, 8.0), RatedCity(2, 6.0), RatedCity(3, 9.0)]
    opponents = calibration_opponents(RatingCategory.ENJOYED, rated)
    assert [c.id for c in opponents] == [3, 1]


def test_calibration_falls_back_to_all_cities():
    rated = [RatedCity(1, 8.0), RatedCity(2, 6.0)]
    opponents = calibration_opponents(RatingCategory.DISLIKED, rated)
    assert [c.id for c in opponents] == [1, 2]


def test_calibration_walks_through_opponents():
    rated = [RatedCity(1, 8.0), RatedCity(2, 6.0), RatedCity(3, 9.0)]

    step = next_step(RatingCategory.ENJOYED, rated)
    assert not step.done
    assert step.opponent.id == 3

    step = next_step(RatingCategory.ENJOYED, rated, [Comparison(3, True)])
    assert step.opponent.id == 1

    step = next_step(RatingCategory.ENJOYED, rated, [Comparison(3, True), Comparison(1, False)])
    assert step.done
    # 8.25 + (0.5 - 0.5) * 2 + (8.5 - 8.25) * 0.3
    assert step.rating == pytest.approx(8.325)
    assert step.adjusted == {}


def test_fifth_city_reveals_scaled_ratings():
    rated = [RatedCity(1, 8.0), RatedCity(2, 6.0), RatedCity(3, 4.0), RatedCity(4, 2.0)]

    step = next_step(RatingCategory.DECENT, rated)
    assert step.opponent.id == 2

    step = next_step(RatingCategory.DECENT, rated, [Comparison(2, True)])
    assert step.done
    # 7.175 before the best city is stretched to 10 (x1.25)
    assert step.rating == pytest.approx(8.96875)
    assert step.adjusted == pytest.approx({1: 10.0, 2: 7.5, 3: 5.0, 4: 2.5})


def test_win_rate_rating_is_clamped():
    assert win_rate_rating(RatingCategory.DISLIKED, [(1.0, False)]) == 1.0
    assert win_rate_rating(RatingCategory.LOVED, [(10.0, True), (10.0, True)]) == 10.0
    assert win_rate_rating(RatingCategory.DECENT, []) == RatingCategory.DECENT.base_rating


def test_make_unique():
    assert make_unique(7.0, [8.0]) == 7.0
    assert make_unique(8.0, [8.0, 8.1]) == pytest.approx(8.2)
    assert make_unique(10.0, [10.0]) == pytest.approx(9.9)


def test_reveal_ratings_spreads_close_ratings():
    rating, adjusted = reveal_ratings(5.02, [RatedCity(1, 10.0), RatedCity(2, 5.0)])
    assert rating == pytest.approx(5.1)
    assert adjusted == {}


def test_reveal_ratings_scales_best_to_ten():
    rating, adjusted = reveal_ratings(5.0, [RatedCity(1, 8.0), RatedCity(2, 6.0), RatedCity(3, 4.0), RatedCity(4, 2.0)])
    assert rating == pytest.approx(6.25)
    assert adjusted == pytest.approx({1: 10.0, 2: 7.5, 3: 5.0, 4: 2.5})


def test_search_seeds_with_closest_to_base(established):
    step = next_step(RatingCategory.DECENT, established)
    assert step.opponent.id == 3


def test_search_narrows_to_midpoint(established):
    category = RatingCategory.DECENT
    history = [Comparison(3, True)]
    assert next_step(category, established, history).opponent.id == 1

    history.append(Comparison(1, False))
    assert next_step(category, established, history).opponent.id == 2

    history.append(Comparison(2, False))
    step = next_step(category, established, history)
    assert step.done
    assert step.rating == pytest.approx(7.25)
    assert step.adjusted == {}


def test_search_losing_everything_lands_near_bottom(established):
    category = RatingCategory.DECENT
    history = [Comparison(3, False)]
    assert next_step(category, established, history).opponent.id == 4
    history.append(Comparison(4, False))
    assert next_step(category, established, history).opponent.id == 5
    history.append(Comparison(5, False))
    step = next_step(category, established, history)
    assert step.done
    assert 0 < step.rating < 3.0
    assert step.rating == pytest.approx(1.5, abs=1e-6)


def test_unknown_opponent_rejected(established):
    with pytest.raises(RatingComparisonError):
        next_step(RatingCategory.LOVED, established, [Comparison(99, True)])


def test_search_beating_the_top_city_stays_in_range():
    """Winning against a 10.0 city caps the rating at 10 instead of overflowing."""
    rated = [
        RatedCity(1, 10.0),
        RatedCity(2, 9.0),
        RatedCity(3, 8.0),
        RatedCity(4, 6.5),
        RatedCity(5, 5.0),
    ]
    assert next_step(RatingCategory.LOVED, rated).opponent.id == 1

    step = next_step(RatingCategory.LOVED, rated, [Comparison(1, True)])
    assert step.done
    assert 0 < step.rating <= 10
    assert classify(step.rating) is RatingCategory.LOVED


@pytest.mark.parametrize(
    "history",
    [
        [Comparison(1, True)],
        [Comparison(3, True), Comparison(3, False)],
        [Comparison(3, True), Comparison(1, True), Comparison(2, True)],
    ],
)
def test_calibration_rejects_out_of_order_history(history):
    rated = [RatedCity(1, 8.0), RatedCity(2, 6.0), RatedCity(3, 9.0)]
    with pytest.raises(RatingComparisonError):
        next_step(RatingCategory.ENJOYED, rated, history)

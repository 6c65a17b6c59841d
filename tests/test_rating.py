"""
Unit tests for rating categories.
"""

import math

import pytest

from app.services.rating import (
    RatingCategory,
    base_rating,
    category_from_key,
    classify,
    rating_range,
)


@pytest.mark.parametrize(
    "rating, expected",
    [
        (9.5, RatingCategory.LOVED),
        (8.0, RatingCategory.ENJOYED),
        (6.0, RatingCategory.DECENT),
        (3.0, RatingCategory.DISAPPOINTED),
        (1.0, RatingCategory.DISLIKED),
        (0.0, RatingCategory.DISLIKED),
    ],
)
def test_classify_scenarios(rating, expected):
    assert classify(rating) is expected


@pytest.mark.parametrize(
    "rating, expected",
    [
        (10.0, RatingCategory.LOVED),
        (9.0, RatingCategory.LOVED),
        (7.5, RatingCategory.ENJOYED),
        (5.0, RatingCategory.DECENT),
        (2.5, RatingCategory.DISAPPOINTED),
        (2.4999, RatingCategory.DISLIKED),
    ],
)
def test_boundaries_resolve_to_higher_category(rating, expected):
    """Test that a rating exactly on a threshold belongs to the upper category."""
    assert classify(rating) is expected


@pytest.mark.parametrize("rating", [-5.0, -0.0001, 10.0001, 42.0, math.inf, -math.inf, math.nan])
def test_classify_is_total(rating):
    """Test that out-of-domain values never raise and fall through to DISLIKED."""
    assert classify(rating) is RatingCategory.DISLIKED


@pytest.mark.parametrize("category", list(RatingCategory))
def test_base_rating_classifies_back(category):
    assert classify(base_rating(category)) is category


@pytest.mark.parametrize("category", list(RatingCategory))
def test_base_rating_inside_own_range(category):
    assert category.accept_range.contains(category.base_rating)


def test_ranges_partition_domain():
    """Test that ranges are contiguous from 0 to 10 in ascending category order."""
    ascending = list(reversed(list(RatingCategory)))
    assert rating_range(ascending[0])[0] == 0.0
    assert rating_range(ascending[-1])[1] == 10.0
    for lower, upper in zip(ascending, ascending[1:]):
        assert rating_range(lower)[1] == rating_range(upper)[0]


def test_each_rating_claimed_by_exactly_one_range():
    for step in range(1, 1001):
        rating = step / 100
        claimed = [c for c in RatingCategory if c.accept_range.contains(rating)]
        assert claimed == [classify(rating)]


def test_zero_not_claimed_by_any_range():
    assert not any(c.accept_range.contains(0.0) for c in RatingCategory)


def test_category_data():
    loved = RatingCategory.LOVED
    assert loved.label == "Absolutely Loved It"
    assert loved.description == "One of your favorite places"
    assert loved.range == (9.0, 10.0)
    assert RatingCategory.DISLIKED.label == "Didn't Like It"
    assert RatingCategory.from_rating(8.3) is RatingCategory.ENJOYED


def test_category_from_key():
    assert category_from_key("loved") is RatingCategory.LOVED
    assert category_from_key(" Disappointed ") is RatingCategory.DISAPPOINTED
    with pytest.raises(ValueError):
        category_from_key("meh")

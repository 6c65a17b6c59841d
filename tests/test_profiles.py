"""
Tests for display names and username rules.
"""

from datetime import datetime, timedelta

import pytest

from app.services.profiles import (
    UsernameError,
    UsernameErrorCode,
    check_username_availability,
    cooldown_days_remaining,
    display_name,
    update_username,
    validate_username_format,
)


@pytest.mark.parametrize(
    "full_name, username, expected",
    [
        ("Jane Doe", "jane", "Jane Doe"),
        (None, "jane", "jane"),
        ("", "jane", "jane"),
        ("   ", "jane", "jane"),
        (None, None, "Unknown"),
        ("", "", "Unknown"),
    ],
)
def test_display_name_fallback(full_name, username, expected):
    assert display_name(full_name, username) == expected


@pytest.mark.parametrize(
    "username, code",
    [
        ("ab", UsernameErrorCode.TOO_SHORT),
        ("  ab  ", UsernameErrorCode.TOO_SHORT),
        ("a" * 21, UsernameErrorCode.TOO_LONG),
        ("hello world", UsernameErrorCode.INVALID_CHARS),
        ("bad-name", UsernameErrorCode.INVALID_CHARS),
        ("émoji🙂", UsernameErrorCode.INVALID_CHARS),
    ],
)
def test_invalid_usernames(username, code):
    with pytest.raises(UsernameError) as exc_info:
        validate_username_format(username)
    assert exc_info.value.code is code


def test_valid_username_is_trimmed():
    assert validate_username_format("  city_hopper_42 ") == "city_hopper_42"


def test_error_messages():
    assert UsernameError(UsernameErrorCode.TOO_SHORT).message == "Username must be at least 3 characters"
    assert UsernameError(UsernameErrorCode.COOLDOWN, days_remaining=12).message == (
        "You can change your username in 12 days"
    )


def test_availability_is_case_insensitive(db, user):
    with pytest.raises(UsernameError) as exc_info:
        check_username_availability(db, "TRAVELER")
    assert exc_info.value.code is UsernameErrorCode.TAKEN
    assert check_username_availability(db, "explorer") == "explorer"


def test_update_username(db, user):
    now = datetime(2025, 8, 1, 12, 0)
    profile = update_username(db, user, "globetrotter", now=now)
    assert profile.username == "globetrotter"
    assert profile.username_changed_at == now


def test_update_username_rejects_same(db, user):
    with pytest.raises(UsernameError) as exc_info:
        update_username(db, user, "traveler")
    assert exc_info.value.code is UsernameErrorCode.SAME_USERNAME


def test_update_username_rejects_taken(db, user, other_user):
    with pytest.raises(UsernameError) as exc_info:
        update_username(db, user, "Nomad")
    assert exc_info.value.code is UsernameErrorCode.TAKEN


def test_update_username_cooldown(db, user):
    changed = datetime(2025, 8, 1, 12, 0)
    update_username(db, user, "globetrotter", now=changed)

    with pytest.raises(UsernameError) as exc_info:
        update_username(db, user, "wanderer", now=changed + timedelta(days=10))
    assert exc_info.value.code is UsernameErrorCode.COOLDOWN
    assert exc_info.value.days_remaining == 20

    profile = update_username(db, user, "wanderer", now=changed + timedelta(days=30))
    assert profile.username == "wanderer"


def test_cooldown_rounds_partial_days_up(user):
    user.username_changed_at = datetime(2025, 8, 1, 12, 0)
    assert cooldown_days_remaining(user, now=datetime(2025, 8, 30, 13, 0)) == 1
    assert cooldown_days_remaining(user, now=datetime(2025, 8, 31, 12, 0)) == 0

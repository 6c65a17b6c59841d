"""Profiles, display names and username rules."""

from __future__ import annotations

import enum
import logging
import re
from datetime import datetime, timedelta

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.profile import Profile
from app.services.cities import NotFoundError

logger = logging.getLogger(__name__)

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20
_USERNAME_PATTERN = re.compile(r"^\w+$")


def display_name(full_name: str | None, username: str | None) -> str:
    """Full name, then username, then "Unknown"."""
    if full_name and full_name.strip():
        return full_name
    if username and username.strip():
        return username
    return "Unknown"


class UsernameErrorCode(str, enum.Enum):
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    INVALID_CHARS = "invalid_chars"
    TAKEN = "taken"
    COOLDOWN = "cooldown"
    SAME_USERNAME = "same_username"


class UsernameError(Exception):
    def __init__(self, code: UsernameErrorCode, days_remaining: int | None = None) -> None:
        self.code = code
        self.days_remaining = days_remaining
        super().__init__(self.message)

    @property
    def message(self) -> str:
        if self.code is UsernameErrorCode.TOO_SHORT:
            return f"Username must be at least {USERNAME_MIN_LENGTH} characters"
        if self.code is UsernameErrorCode.TOO_LONG:
            return f"Username must be {USERNAME_MAX_LENGTH} characters or less"
        if self.code is UsernameErrorCode.INVALID_CHARS:
            return "Username can only contain letters, numbers, and underscores"
        if self.code is UsernameErrorCode.TAKEN:
            return "This username is already taken"
        if self.code is UsernameErrorCode.COOLDOWN:
            return f"You can change your username in {self.days_remaining} days"
        return "This is already your username"


def validate_username_format(username: str) -> str:
    """Return the trimmed username or raise UsernameError."""
    trimmed = username.strip()
    if len(trimmed) < USERNAME_MIN_LENGTH:
        raise UsernameError(UsernameErrorCode.TOO_SHORT)
    if len(trimmed) > USERNAME_MAX_LENGTH:
        raise UsernameError(UsernameErrorCode.TOO_LONG)
    # \w는 유니코드 문자/숫자 + "_"
    if not _USERNAME_PATTERN.match(trimmed):
        raise UsernameError(UsernameErrorCode.INVALID_CHARS)
    return trimmed


def username_taken(db: Session, username: str, exclude_id: str | None = None) -> bool:
    stmt = select(Profile.id).where(func.lower(Profile.username) == username.lower())
    if exclude_id is not None:
        stmt = stmt.where(Profile.id != exclude_id)
    return db.execute(stmt.limit(1)).first() is not None


def check_username_availability(db: Session, username: str) -> str:
    """Return the normalized username if it is free, else raise UsernameError."""
    trimmed = validate_username_format(username)
    if username_taken(db, trimmed):
        raise UsernameError(UsernameErrorCode.TAKEN)
    return trimmed


def create_profile(db: Session, data: dict) -> Profile:
    if data.get("username"):
        data["username"] = check_username_availability(db, data["username"])
    try:
        profile = Profile(**data)
        db.add(profile)
        db.commit()
        db.refresh(profile)
        return profile
    except Exception:
        db.rollback()
        raise


def get_profile(db: Session, user_id: str) -> Profile:
    profile = db.get(Profile, user_id)
    if profile is None:
        raise NotFoundError(f"Profile {user_id} not found")
    return profile


def cooldown_days_remaining(profile: Profile, now: datetime | None = None) -> int:
    if profile.username_changed_at is None:
        return 0
    now = now or datetime.now()
    next_change = profile.username_changed_at + timedelta(days=settings.username_cooldown_days)
    if now >= next_change:
        return 0
    remaining = next_change - now
    # 남은 시간이 하루 미만이어도 1일로 표시
    return remaining.days + (1 if remaining.seconds or remaining.microseconds else 0)


def update_username(db: Session, profile: Profile, new_username: str, now: datetime | None = None) -> Profile:
    trimmed = validate_username_format(new_username)
    if profile.username and trimmed == profile.username:
        raise UsernameError(UsernameErrorCode.SAME_USERNAME)
    days = cooldown_days_remaining(profile, now)
    if days > 0:
        raise UsernameError(UsernameErrorCode.COOLDOWN, days_remaining=days)
    if username_taken(db, trimmed, exclude_id=profile.id):
        raise UsernameError(UsernameErrorCode.TAKEN)

    try:
        profile.username = trimmed
        profile.username_changed_at = now or datetime.now()
        db.commit()
        db.refresh(profile)
    except Exception:
        db.rollback()
        raise
    logger.info("Profile id=%s changed username", profile.id)
    return profile

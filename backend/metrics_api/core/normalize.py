"""Normalization Rules: canonical forms shared by every domain entity.

Invariants:
    - All functions are PURE: no IO, no clock reads except utc_now()
    - Emails are compared and stored trimmed + lowercased
    - Alias collections keep first-seen order, drop blanks and duplicates
    - Datetimes leaving this module are timezone-aware UTC

Design Decisions:
    - One email pattern for users and contributors (same rule in both aggregates)
    - ensure_utc treats naive datetimes as UTC: SQLite drops tzinfo on round-trip
"""

import re
from datetime import datetime, timezone
from enum import Enum
from typing import Iterable, TypeVar

from metrics_api.core.errors import ValidationError

EnumT = TypeVar("EnumT", bound=Enum)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime; naive input is assumed to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email))


def normalize_email(email: str) -> str:
    return email.strip().lower()


def require_text(value: str | None, message: str, field: str) -> str:
    """Trim value; raise ValidationError when nothing is left."""
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationError(message, field=field)
    return cleaned


def require_email(value: str | None, field: str, label: str = "Email") -> str:
    """Trim, check non-empty and format, return the lowercase form."""
    cleaned = require_text(value, f"{label} cannot be empty", field)
    if not is_valid_email(cleaned):
        raise ValidationError("Invalid email format", field=field)
    return cleaned.lower()


def optional_text(value: str | None) -> str | None:
    """Trim optional text; blank becomes None."""
    if value is None:
        return None
    return value.strip() or None


def coerce_enum(enum_type: type[EnumT], value: EnumT | str, field: str) -> EnumT:
    """Accept an enum member or its value; reject anything else."""
    try:
        return enum_type(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_type)
        raise ValidationError(
            f"Invalid {field} '{value}'. Allowed values: {allowed}", field=field,
        ) from None


def merge_unique(*groups: Iterable[str]) -> tuple[str, ...]:
    """Concatenate groups keeping first occurrence of each value."""
    return tuple(dict.fromkeys(value for group in groups for value in group))


def clean_aliases(values: Iterable[str]) -> tuple[str, ...]:
    """Trim, drop blanks, dedupe."""
    return merge_unique(v.strip() for v in values if v and v.strip())


def clean_email_aliases(values: Iterable[str], field: str) -> tuple[str, ...]:
    """Validate every non-blank email, then lowercase, trim and dedupe."""
    cleaned = [v.strip() for v in values if v and v.strip()]
    for email in cleaned:
        if not is_valid_email(email):
            raise ValidationError(f"Invalid email format: {email}", field=field)
    return merge_unique(email.lower() for email in cleaned)

"""Normalization Rules: email format, trimming, enum coercion, alias cleaning."""

from datetime import datetime, timedelta, timezone

import pytest

from metrics_api.core.errors import ValidationError
from metrics_api.core.normalize import (
    clean_aliases,
    clean_email_aliases,
    coerce_enum,
    ensure_utc,
    is_valid_email,
    merge_unique,
    normalize_email,
    optional_text,
    require_email,
)
from metrics_api.core.domain_types import RoleType


@pytest.mark.parametrize("email", ["a@b.co", "first.last@example.com", "x+tag@sub.domain.org"])
def test_valid_emails(email):
    assert is_valid_email(email)


@pytest.mark.parametrize("email", ["", "plain", "a@b", "@b.com", "a b@c.com", "a@b .com"])
def test_invalid_emails(email):
    assert not is_valid_email(email)


def test_normalize_email_trims_and_lowercases():
    assert normalize_email("  Dev@Example.COM ") == "dev@example.com"


def test_require_email_reports_empty_before_format():
    with pytest.raises(ValidationError, match="Email cannot be empty"):
        require_email("   ", "email")
    with pytest.raises(ValidationError, match="Invalid email format"):
        require_email("nope", "email")


def test_require_email_uses_label():
    with pytest.raises(ValidationError, match="Current email cannot be empty"):
        require_email("", "current_email", label="Current email")


def test_optional_text_blank_becomes_none():
    assert optional_text("   ") is None
    assert optional_text(None) is None
    assert optional_text("  Acme ") == "Acme"


def test_coerce_enum_accepts_member_or_value():
    assert coerce_enum(RoleType, "MG", "role_type") is RoleType.MG
    assert coerce_enum(RoleType, RoleType.IC, "role_type") is RoleType.IC


def test_coerce_enum_lists_allowed_values():
    with pytest.raises(ValidationError, match="Allowed values: IC, MG") as exc_info:
        coerce_enum(RoleType, "CEO", "role_type")
    assert exc_info.value.field == "role_type"


def test_merge_unique_keeps_first_seen_order():
    assert merge_unique(["b", "a"], ["a", "c", "b"]) == ("b", "a", "c")


def test_clean_aliases_drops_blanks_and_duplicates():
    assert clean_aliases([" alice ", "", "   ", "alice", "bob"]) == ("alice", "bob")


def test_clean_email_aliases_lowercases_and_dedupes():
    assert clean_email_aliases(["A@x.com", "a@x.com ", "", "b@x.com"], "emails") == (
        "a@x.com", "b@x.com",
    )


def test_clean_email_aliases_names_the_bad_value():
    with pytest.raises(ValidationError, match="Invalid email format: broken"):
        clean_email_aliases(["ok@x.com", "broken"], "emails")


def test_ensure_utc_treats_naive_as_utc():
    naive = datetime(2030, 1, 1, 12, 0)
    assert ensure_utc(naive) == datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc)


def test_ensure_utc_converts_offsets():
    plus_two = datetime(2030, 1, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))
    assert ensure_utc(plus_two).hour == 12
    assert ensure_utc(plus_two).tzinfo == timezone.utc

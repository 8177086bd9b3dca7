"""GitHubContributor Aggregate: identity reconciliation for a GitHub-identified contributor.

Invariants:
    - current_username / current_email / current_name are non-empty and trimmed
    - current_email and every known email match EMAIL_PATTERN and are lowercase
    - all_known_* tuples hold no blanks and no duplicates, in first-seen order
    - update_current_info never drops an identity fact: a superseded current
      value is appended to the matching known collection
    - Every mutation returns a NEW instance with a fresh updated_at

Design Decisions:
    - Frozen dataclass + dataclasses.replace: no aliasing, equality for free
    - Validate everything before building the new instance (all-or-nothing)
    - A value may appear both as current and in history (a -> b -> a keeps "a"
      in history); history records what was ever superseded
"""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Iterable
from uuid import UUID

from metrics_api.core.domain_types import ContributorId, ContributorStatus, UserId
from metrics_api.core.errors import ValidationError
from metrics_api.core.normalize import (
    clean_aliases,
    clean_email_aliases,
    coerce_enum,
    ensure_utc,
    merge_unique,
    normalize_email,
    require_email,
    require_text,
    utc_now,
)


@dataclass(frozen=True)
class GitHubContributor:
    """A GitHub identity and its alias history, optionally linked to a User."""

    id: ContributorId
    current_username: str
    current_email: str
    current_name: str
    all_known_usernames: tuple[str, ...]
    all_known_emails: tuple[str, ...]
    all_known_names: tuple[str, ...]
    user_id: UserId | None
    last_active_date: datetime | None
    status: ContributorStatus
    created_at: datetime
    updated_at: datetime

    @classmethod
    def create(
        cls,
        id: UUID,
        current_username: str,
        current_email: str,
        current_name: str,
        user_id: UUID | None = None,
        all_known_usernames: Iterable[str] = (),
        all_known_emails: Iterable[str] = (),
        all_known_names: Iterable[str] = (),
        last_active_date: datetime | None = None,
        status: ContributorStatus | str = ContributorStatus.ACTIVE,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> "GitHubContributor":
        username = require_text(
            current_username, "Current username cannot be empty", "current_username",
        )
        email = require_email(current_email, "current_email", label="Current email")
        name = require_text(current_name, "Current name cannot be empty", "current_name")
        known_emails = clean_email_aliases(all_known_emails, "all_known_emails")
        now = utc_now()
        return cls(
            id=ContributorId(id),
            current_username=username,
            current_email=email,
            current_name=name,
            all_known_usernames=clean_aliases(all_known_usernames),
            all_known_emails=known_emails,
            all_known_names=clean_aliases(all_known_names),
            user_id=UserId(user_id) if user_id is not None else None,
            last_active_date=(
                ensure_utc(last_active_date) if last_active_date else None
            ),
            status=coerce_enum(ContributorStatus, status, "status"),
            created_at=ensure_utc(created_at) if created_at else now,
            updated_at=ensure_utc(updated_at) if updated_at else now,
        )

    # ─── Mutations (each returns a new instance) ─────────────────

    def update_current_info(
        self, username: str, email: str, name: str,
    ) -> "GitHubContributor":
        """Replace current identity; superseded values move into history."""
        new_username = require_text(username, "Username cannot be empty", "username")
        new_email = require_email(email, "email")
        new_name = require_text(name, "Name cannot be empty", "name")

        return replace(
            self,
            current_username=new_username,
            current_email=new_email,
            current_name=new_name,
            all_known_usernames=_demote(
                self.all_known_usernames, self.current_username, new_username,
            ),
            all_known_emails=_demote(
                self.all_known_emails, self.current_email, new_email,
            ),
            all_known_names=_demote(
                self.all_known_names, self.current_name, new_name,
            ),
            updated_at=utc_now(),
        )

    def add_all_known_data(
        self,
        usernames: Iterable[str] = (),
        emails: Iterable[str] = (),
        names: Iterable[str] = (),
    ) -> "GitHubContributor":
        """Union extra aliases into history. Current fields are untouched."""
        new_emails = clean_email_aliases(emails, "emails")
        return replace(
            self,
            all_known_usernames=merge_unique(
                self.all_known_usernames, clean_aliases(usernames),
            ),
            all_known_emails=merge_unique(self.all_known_emails, new_emails),
            all_known_names=merge_unique(self.all_known_names, clean_aliases(names)),
            updated_at=utc_now(),
        )

    def link_to_user(self, user_id: UUID | None) -> "GitHubContributor":
        if user_id is None or not str(user_id).strip():
            raise ValidationError("User ID cannot be empty", field="user_id")
        return replace(self, user_id=UserId(user_id), updated_at=utc_now())

    def unlink_from_user(self) -> "GitHubContributor":
        return replace(self, user_id=None, updated_at=utc_now())

    def update_status(self, status: ContributorStatus | str) -> "GitHubContributor":
        return replace(
            self,
            status=coerce_enum(ContributorStatus, status, "status"),
            updated_at=utc_now(),
        )

    def update_last_active_date(self, when: datetime) -> "GitHubContributor":
        if when is None:
            raise ValidationError(
                "Last active date cannot be empty", field="last_active_date",
            )
        return replace(self, last_active_date=ensure_utc(when), updated_at=utc_now())

    # ─── Queries ─────────────────────────────────────────────────

    def has_used_username(self, username: str) -> bool:
        candidate = username.strip()
        return (
            candidate == self.current_username
            or candidate in self.all_known_usernames
        )

    def has_used_email(self, email: str) -> bool:
        candidate = normalize_email(email)
        return candidate == self.current_email or candidate in self.all_known_emails

    def has_used_name(self, name: str) -> bool:
        candidate = name.strip()
        return candidate == self.current_name or candidate in self.all_known_names

    def get_all_usernames(self) -> list[str]:
        return [self.current_username, *self.all_known_usernames]

    def get_all_emails(self) -> list[str]:
        return [self.current_email, *self.all_known_emails]

    def get_all_names(self) -> list[str]:
        return [self.current_name, *self.all_known_names]

    @property
    def is_active(self) -> bool:
        return self.status == ContributorStatus.ACTIVE

    @property
    def is_linked(self) -> bool:
        return self.user_id is not None


def _demote(history: tuple[str, ...], old: str, new: str) -> tuple[str, ...]:
    """Append old to history when it is being replaced."""
    if old == new:
        return history
    return merge_unique(history, (old,))

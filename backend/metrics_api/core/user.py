"""User Aggregate: internal employee with organizational metadata and manager hierarchy.

Invariants:
    - email matches EMAIL_PATTERN and is stored trimmed + lowercase
    - name is non-empty (trimmed)
    - manager_id != id (no self-management)
    - Optional text fields are trimmed; blank becomes None
    - update_profile never touches email; update_email is the only email path

Design Decisions:
    - update_profile takes keyword updates: an absent key keeps the prior value,
      an explicit None clears a nullable field
"""

from dataclasses import dataclass, replace
from datetime import datetime
from uuid import UUID

from metrics_api.core.domain_types import (
    AppAccessRole, OrgFunction, Role, RoleType, UserId,
)
from metrics_api.core.errors import ValidationError
from metrics_api.core.normalize import (
    coerce_enum, ensure_utc, optional_text, require_email, require_text, utc_now,
)

_OPTIONAL_TEXT_FIELDS = (
    "company", "growth_level", "pillar", "tribe", "squad", "job_title",
)
_PROFILE_FIELDS = frozenset({
    "name", "role", "role_type", "org_function", "manager_id",
    "app_access_role", *_OPTIONAL_TEXT_FIELDS,
})


@dataclass(frozen=True)
class User:
    """An employee tracked by the metrics system."""

    id: UserId
    email: str
    name: str
    company: str | None
    role: Role
    role_type: RoleType
    growth_level: str | None
    org_function: OrgFunction | None
    pillar: str | None
    tribe: str | None
    squad: str | None
    job_title: str | None
    manager_id: UserId | None
    app_access_role: AppAccessRole
    created_at: datetime
    updated_at: datetime

    @classmethod
    def create(
        cls,
        id: UUID,
        email: str,
        name: str,
        company: str | None = None,
        role: Role | str = Role.PRODUCT_ENGINEER,
        role_type: RoleType | str = RoleType.IC,
        growth_level: str | None = None,
        org_function: OrgFunction | str | None = None,
        pillar: str | None = None,
        tribe: str | None = None,
        squad: str | None = None,
        job_title: str | None = None,
        manager_id: UUID | None = None,
        app_access_role: AppAccessRole | str = AppAccessRole.IC,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> "User":
        clean_email = require_email(email, "email")
        clean_name = require_text(name, "Name cannot be empty", "name")
        _check_not_own_manager(id, manager_id)
        now = utc_now()
        return cls(
            id=UserId(id),
            email=clean_email,
            name=clean_name,
            company=optional_text(company),
            role=coerce_enum(Role, role, "role"),
            role_type=coerce_enum(RoleType, role_type, "role_type"),
            growth_level=optional_text(growth_level),
            org_function=(
                coerce_enum(OrgFunction, org_function, "org_function")
                if org_function is not None else None
            ),
            pillar=optional_text(pillar),
            tribe=optional_text(tribe),
            squad=optional_text(squad),
            job_title=optional_text(job_title),
            manager_id=UserId(manager_id) if manager_id is not None else None,
            app_access_role=coerce_enum(AppAccessRole, app_access_role, "app_access_role"),
            created_at=ensure_utc(created_at) if created_at else now,
            updated_at=ensure_utc(updated_at) if updated_at else now,
        )

    def update_profile(self, **updates) -> "User":
        """Apply only the supplied fields. Email is not accepted here."""
        unknown = set(updates) - _PROFILE_FIELDS
        if unknown:
            raise ValidationError(
                f"Fields cannot be updated through profile update: {', '.join(sorted(unknown))}",
            )

        changes: dict = {}
        if "name" in updates:
            changes["name"] = require_text(updates["name"], "Name cannot be empty", "name")
        for field_name in _OPTIONAL_TEXT_FIELDS:
            if field_name in updates:
                changes[field_name] = optional_text(updates[field_name])
        if updates.get("role") is not None:
            changes["role"] = coerce_enum(Role, updates["role"], "role")
        if updates.get("role_type") is not None:
            changes["role_type"] = coerce_enum(RoleType, updates["role_type"], "role_type")
        if updates.get("app_access_role") is not None:
            changes["app_access_role"] = coerce_enum(
                AppAccessRole, updates["app_access_role"], "app_access_role",
            )
        if "org_function" in updates:
            value = updates["org_function"]
            changes["org_function"] = (
                coerce_enum(OrgFunction, value, "org_function") if value is not None else None
            )
        if "manager_id" in updates:
            manager_id = updates["manager_id"]
            _check_not_own_manager(self.id, manager_id)
            changes["manager_id"] = UserId(manager_id) if manager_id is not None else None

        return replace(self, **changes, updated_at=utc_now())

    def update_email(self, new_email: str) -> "User":
        return replace(
            self, email=require_email(new_email, "email"), updated_at=utc_now(),
        )

    def is_manager(self) -> bool:
        return self.role_type == RoleType.MG

    def is_individual_contributor(self) -> bool:
        return self.role_type == RoleType.IC

    def has_admin_access(self) -> bool:
        return self.app_access_role == AppAccessRole.ADMINISTRATOR


def _check_not_own_manager(user_id: UUID, manager_id: UUID | None) -> None:
    if manager_id is not None and manager_id == user_id:
        raise ValidationError("User cannot be their own manager", field="manager_id")

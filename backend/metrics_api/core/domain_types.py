"""Domain Types: identity wrappers and closed string enums for the metrics domain.

Invariants:
    - UserId, OrganizationId, ContributorId wrap UUIDs
    - Every enum value is the exact string persisted in the database and
      exchanged over the API

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
OrganizationId = NewType("OrganizationId", UUID)
ContributorId = NewType("ContributorId", UUID)


# ─── User Enums ──────────────────────────────────────────────────

class Role(str, Enum):
    """Job role within the company."""
    PRODUCT_ENGINEER = "Product Engineer"
    WORDPRESS_PRODUCT_ENGINEER = "Wordpress Product Engineer"
    ARCHITECT_PRINCIPLE = "Architect/Principle"
    CONTENT_EDITOR = "Content Editor"
    DATA_ENGINEER = "Data Engineer"
    DATA_ANALYTICS = "Data Analytics"
    DWP_ENGINEER = "DWP Engineer"
    MANAGER = "Manager"
    SRE_ENGINEER = "SRE Engineer"


class RoleType(str, Enum):
    """Career track: individual contributor or manager."""
    IC = "IC"
    MG = "MG"


class OrgFunction(str, Enum):
    """Organizational function / department."""
    ENGINEERING = "Engineering"
    CONTENT = "Content"
    DESIGN = "Design"
    DATA = "Data"


class AppAccessRole(str, Enum):
    """Access level inside this application."""
    ADMINISTRATOR = "administrator"
    HO = "HO"
    EM = "EM"
    IC = "IC"


# ─── Contributor Enums ───────────────────────────────────────────

class ContributorStatus(str, Enum):
    """Binary activity flag; no transition graph beyond set-status."""
    ACTIVE = "active"
    INACTIVE = "inactive"

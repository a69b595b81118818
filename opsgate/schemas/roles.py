"""Role, membership and partition vocabularies.

Each partition has its own role enum. Ranks are only comparable inside one
enum; a core role and a service role never compare equal.
"""

from enum import Enum


class Partition(str, Enum):
    """Which credential table an identity lives in."""

    CORE = "core"
    SERVICE = "service"


class _RankedRole(str, Enum):
    """Role enum whose declaration order is its privilege order (lowest first)."""

    @property
    def rank(self) -> int:
        return list(type(self)).index(self)


class CoreRole(_RankedRole):
    PENDING = "pending"
    STANDARD = "standard"
    ADMIN = "admin"
    SUPERADMIN = "superadmin"


class ServiceRole(_RankedRole):
    REQUEST_ONLY = "service-request-only"
    STANDARD = "service-standard"
    ADMIN = "service-admin"


class Membership(str, Enum):
    NONE = "none"
    STANDARD = "standard"
    PLATINUM = "platinum"
    VIP = "vip"


# Page slug granting every page.
ALL_PAGES = "all"

# Pages every new service account can open.
DEFAULT_SERVICE_PAGES = ("laundry_request", "laundry_staff")

# Used when no membership_configs row exists for a level.
DEFAULT_MEMBERSHIP_CONFIGS: dict[Membership, tuple[list[str], float]] = {
    Membership.STANDARD: (["staff_roster", "budget_tracker"], 10.0),
    Membership.PLATINUM: (["staff_roster", "asset_tracker"], 30.0),
    Membership.VIP: ([ALL_PAGES], 50.0),
}

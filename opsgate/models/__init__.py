"""SQLAlchemy ORM models."""

from opsgate.models.base import Base
from opsgate.models.membership_config import MembershipConfig
from opsgate.models.service_user import ServiceUser, StaffAccess
from opsgate.models.user import User

__all__ = ["Base", "MembershipConfig", "ServiceUser", "StaffAccess", "User"]

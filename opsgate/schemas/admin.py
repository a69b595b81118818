"""Schemas for the core admin panel: user approval, roles, memberships, admin creation."""

from datetime import datetime

from pydantic import BaseModel, Field

from opsgate.models import User
from opsgate.schemas.auth import RegisterRequest
from opsgate.schemas.roles import CoreRole, Membership


class UserSummary(BaseModel):
    """User entry for admin lists (no password)."""

    model_config = {"populate_by_name": True}

    id: int
    username: str
    email: str
    role: CoreRole
    membership: Membership
    page_access: list[str] = Field(default_factory=list, alias="pageAccess")
    created_at: datetime | None = Field(default=None, alias="createdAt")

    @classmethod
    def from_record(cls, user: User) -> "UserSummary":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            role=CoreRole(user.role),
            membership=Membership(user.membership),
            page_access=list(user.page_access or []),
            created_at=user.created_at,
        )


class RoleUpdateRequest(BaseModel):
    role: CoreRole


class MembershipUpdateRequest(BaseModel):
    membership: Membership


class PageAccessUpdateRequest(BaseModel):
    model_config = {"populate_by_name": True}

    page_access: list[str] = Field(..., alias="pageAccess", max_length=100)


class CreateAdminRequest(RegisterRequest):
    """Same fields as registration; the account starts as an admin."""


class MembershipConfigItem(BaseModel):
    model_config = {"populate_by_name": True}

    level: Membership
    pages: list[str]
    monthly_price: float = Field(..., alias="monthlyPrice")


class MembershipConfigUpdate(BaseModel):
    model_config = {"populate_by_name": True}

    pages: list[str] = Field(default_factory=list, max_length=100)
    monthly_price: float = Field(..., ge=0, alias="monthlyPrice")

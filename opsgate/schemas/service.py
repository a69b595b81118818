"""Schemas for service staff login and the service admin endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field

from opsgate.models import StaffAccess
from opsgate.schemas.roles import ServiceRole
from opsgate.services.identity import ServiceIdentity


class ServiceLoginRequest(BaseModel):
    model_config = {"populate_by_name": True}

    employee_id: str = Field(..., min_length=1, max_length=255, alias="employeeId")
    password: str = Field(..., min_length=1, max_length=128)


class ServiceLoginResponse(BaseModel):
    model_config = {"populate_by_name": True}

    success: bool = True
    message: str = "Login successful!"
    token: str
    token_type: str = Field(default="bearer", alias="tokenType")
    expires_at: datetime = Field(..., alias="expiresAt")
    username: str
    role: ServiceRole
    department: str
    page_access: list[str] = Field(default_factory=list, alias="pageAccess")


class ServiceIdentityOut(BaseModel):
    model_config = {"populate_by_name": True}

    id: int
    username: str
    role: ServiceRole
    department: str
    page_access: list[str] = Field(default_factory=list, alias="pageAccess")

    @classmethod
    def from_identity(cls, identity: ServiceIdentity) -> "ServiceIdentityOut":
        return cls(
            id=identity.id,
            username=identity.username,
            role=identity.role,
            department=identity.department,
            page_access=list(identity.page_access),
        )


class CreateStaffRequest(BaseModel):
    model_config = {"populate_by_name": True}

    name: str = Field(..., min_length=1, max_length=255)
    employee_id: str = Field(..., min_length=1, max_length=255, alias="employeeId")
    password: str = Field(..., min_length=8, max_length=128)
    department: str = Field(..., min_length=1, max_length=255)
    role: ServiceRole = ServiceRole.STANDARD


class UpdateStaffRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    department: str = Field(..., min_length=1, max_length=255)
    role: ServiceRole
    # Blank or missing leaves the password unchanged
    password: str | None = Field(default=None, max_length=128)


class StaffItem(BaseModel):
    model_config = {"populate_by_name": True}

    id: int
    name: str
    employee_id: str = Field(..., alias="employeeId")
    department: str
    scope: str
    username: str
    role: ServiceRole

    @classmethod
    def from_record(cls, staff: StaffAccess) -> "StaffItem":
        return cls(
            id=staff.id,
            name=staff.name,
            employee_id=staff.employee_id,
            department=staff.department,
            scope=staff.scope,
            username=staff.service_user.username,
            role=ServiceRole(staff.service_user.role),
        )

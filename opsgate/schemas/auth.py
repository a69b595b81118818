"""Request/response schemas for core registration, login and profile endpoints."""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, Field, field_validator

from opsgate.schemas.roles import CoreRole, Membership
from opsgate.services.identity import CoreIdentity


def _validate_email(value: str) -> str:
    value = value.strip().lower()
    local, _, domain = value.partition("@")
    if not local or "." not in domain or " " in value:
        raise ValueError("email must be a valid address")
    return value


class RegisterRequest(BaseModel):
    """New core account; always created pending."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    email: str = Field(..., min_length=3, max_length=320, description="Email address")
    password: str = Field(..., min_length=8, max_length=128, description="Password")

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("username must be non-empty")
        return v.strip()

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        return _validate_email(v)


class LoginRequest(BaseModel):
    """Credentials for login. identifier is a username or an email."""

    identifier: str = Field(
        ...,
        min_length=1,
        max_length=320,
        validation_alias=AliasChoices("identifier", "email", "username"),
        description="Username or email",
    )
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class IdentityOut(BaseModel):
    """Core identity as resolved by the access gate."""

    model_config = {"populate_by_name": True}

    id: int
    username: str
    email: str
    role: CoreRole
    membership: Membership
    page_access: list[str] = Field(default_factory=list, alias="pageAccess")

    @classmethod
    def from_identity(cls, identity: CoreIdentity) -> "IdentityOut":
        return cls(
            id=identity.id,
            username=identity.username,
            email=identity.email,
            role=identity.role,
            membership=identity.membership,
            page_access=list(identity.page_access),
        )


class LoginResponse(BaseModel):
    """Token plus the identity it was issued for."""

    model_config = {"populate_by_name": True}

    success: bool = True
    message: str = "Login successful!"
    token: str = Field(..., description="JWT access token; send as Authorization: Bearer <token>")
    token_type: str = Field(default="bearer", alias="tokenType")
    expires_at: datetime = Field(..., alias="expiresAt")
    username: str
    role: str
    membership: str | None = None
    page_access: list[str] = Field(default_factory=list, alias="pageAccess")

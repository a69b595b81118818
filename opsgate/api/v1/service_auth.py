"""Service staff login and profile. Separate from core auth: core tokens never pass here."""

from typing import Annotated

from fastapi import APIRouter, Depends

from opsgate.api.v1.deps import get_token_issuer, require_any_role
from opsgate.schemas.envelope import Envelope
from opsgate.schemas.roles import ServiceRole
from opsgate.schemas.service import ServiceIdentityOut, ServiceLoginRequest, ServiceLoginResponse
from opsgate.services.identity import ServiceIdentity
from opsgate.services.token_issuer import TokenIssuer

router = APIRouter()

# Every service role may read its own profile.
any_service_staff = require_any_role(
    ServiceRole.REQUEST_ONLY, ServiceRole.STANDARD, ServiceRole.ADMIN
)


@router.post("/login", response_model=ServiceLoginResponse)
def service_login(
    body: ServiceLoginRequest,
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> ServiceLoginResponse:
    """Authenticate with employee id and password; returns a service-partition token."""
    issued = issuer.service_login(body.employee_id, body.password)
    identity = issued.identity
    return ServiceLoginResponse(
        token=issued.token,
        expires_at=issued.expires_at,
        username=identity.username,
        role=identity.role,
        department=identity.department,
        page_access=list(identity.page_access),
    )


@router.get("/me", response_model=Envelope[ServiceIdentityOut])
def get_service_me(
    identity: Annotated[ServiceIdentity, Depends(any_service_staff)],
) -> Envelope[ServiceIdentityOut]:
    return Envelope(data=ServiceIdentityOut.from_identity(identity))

"""Auth dependencies: store/issuer/gate wiring and the role and page guards."""

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from opsgate.core.config import get_settings
from opsgate.core.database import get_db
from opsgate.schemas.roles import CoreRole, ServiceRole
from opsgate.services.access_gate import AccessGate, extract_bearer
from opsgate.services.authorization import Role, check_any_role, check_page_access, check_role
from opsgate.services.credential_store import CredentialStore
from opsgate.services.identity import CoreIdentity, Identity, ServiceIdentity
from opsgate.services.token_issuer import TokenCodec, TokenIssuer

# Registered for the OpenAPI security scheme; the raw header is parsed by extract_bearer.
security = HTTPBearer(auto_error=False)


def get_credential_store(db: Annotated[Session, Depends(get_db)]) -> CredentialStore:
    return CredentialStore(db)


def get_token_codec() -> TokenCodec:
    return TokenCodec.from_settings(get_settings())


def get_token_issuer(
    store: Annotated[CredentialStore, Depends(get_credential_store)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> TokenIssuer:
    return TokenIssuer(store, codec)


def get_access_gate(
    store: Annotated[CredentialStore, Depends(get_credential_store)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> AccessGate:
    return AccessGate(store, codec)


def get_bearer_token(
    request: Request,
    _credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> str:
    """Dependency: raw bearer token from the Authorization header. Raises MissingToken."""
    return extract_bearer(request.headers.get("Authorization"))


def get_current_identity(
    token: Annotated[str, Depends(get_bearer_token)],
    gate: Annotated[AccessGate, Depends(get_access_gate)],
) -> CoreIdentity:
    """Dependency: require a valid core-user token and return the live identity."""
    return gate.authenticate(token)


def get_service_identity(
    token: Annotated[str, Depends(get_bearer_token)],
    gate: Annotated[AccessGate, Depends(get_access_gate)],
) -> ServiceIdentity:
    """Dependency: require a valid service-staff token. Core tokens are rejected."""
    return gate.authenticate_service(token)


def _gate_for(roles: tuple[Role, ...]) -> Callable[..., Identity]:
    kinds = {type(r) for r in roles}
    if len(kinds) != 1:
        raise ValueError("roles must all come from one partition's role enum")
    kind = kinds.pop()
    if kind is CoreRole:
        return get_current_identity
    if kind is ServiceRole:
        return get_service_identity
    raise ValueError(f"not a role enum: {kind!r}")


def require_role(min_role: Role) -> Callable[..., Identity]:
    """Guard factory: identity at min_role or above, resolved through that role's partition gate."""
    gate_dependency = _gate_for((min_role,))

    def dependency(identity: Annotated[Identity, Depends(gate_dependency)]) -> Identity:
        check_role(identity, min_role)
        return identity

    return dependency


def require_any_role(*roles: Role) -> Callable[..., Identity]:
    """Guard factory: identity.role must be one of roles (same partition)."""
    gate_dependency = _gate_for(roles)

    def dependency(identity: Annotated[Identity, Depends(gate_dependency)]) -> Identity:
        check_any_role(identity, roles)
        return identity

    return dependency


def require_page_access(slug: str, service: bool = False) -> Callable[..., Identity]:
    """Guard factory: slug (or 'all') must be in the identity's page allowlist."""
    gate_dependency = get_service_identity if service else get_current_identity

    def dependency(identity: Annotated[Identity, Depends(gate_dependency)]) -> Identity:
        check_page_access(identity, slug)
        return identity

    return dependency


require_admin = require_role(CoreRole.ADMIN)
require_superadmin = require_role(CoreRole.SUPERADMIN)
require_service_admin = require_role(ServiceRole.ADMIN)

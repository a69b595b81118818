"""Core registration and login."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from opsgate.api.v1.deps import get_credential_store, get_token_issuer
from opsgate.schemas.auth import LoginRequest, LoginResponse, RegisterRequest
from opsgate.schemas.envelope import Envelope
from opsgate.services.credential_store import CredentialStore
from opsgate.services.token_issuer import TokenIssuer

router = APIRouter()


@router.post(
    "/register",
    response_model=Envelope[None],
    status_code=status.HTTP_201_CREATED,
)
def register(
    body: RegisterRequest,
    store: Annotated[CredentialStore, Depends(get_credential_store)],
) -> Envelope[None]:
    """
    Create a core account. New accounts are pending and cannot log in
    until an admin approves them.
    """
    store.create_user(body.username, body.email, body.password)
    return Envelope(message="Account created! Awaiting admin approval.")


@router.post("/login", response_model=LoginResponse, response_model_by_alias=True)
def login(
    body: LoginRequest,
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> LoginResponse:
    """
    Authenticate with username or email and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <token>
    """
    issued = issuer.login(body.identifier, body.password)
    identity = issued.identity
    return LoginResponse(
        token=issued.token,
        expires_at=issued.expires_at,
        username=identity.username,
        role=identity.role.value,
        membership=identity.membership.value,
        page_access=list(identity.page_access),
    )

"""Endpoints for the signed-in core user."""

from typing import Annotated

from fastapi import APIRouter, Depends

from opsgate.api.v1.deps import get_current_identity
from opsgate.schemas.auth import IdentityOut
from opsgate.schemas.envelope import Envelope
from opsgate.services.authorization import check_page_access
from opsgate.services.identity import CoreIdentity

router = APIRouter()


@router.get("/me", response_model=Envelope[IdentityOut])
def get_me(
    identity: Annotated[CoreIdentity, Depends(get_current_identity)],
) -> Envelope[IdentityOut]:
    """Current user as stored now (role and pages may differ from the token's claims)."""
    return Envelope(data=IdentityOut.from_identity(identity))


@router.get("/me/access/{slug}", response_model=Envelope[None])
def check_my_page_access(
    slug: str,
    identity: Annotated[CoreIdentity, Depends(get_current_identity)],
) -> Envelope[None]:
    """200 if the current user may open page `slug`, 403 otherwise. Used by the frontend page guard."""
    check_page_access(identity, slug)
    return Envelope(message=f"Access to '{slug}' granted.")

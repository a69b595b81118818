"""Core admin panel: approve users, change roles, memberships and page access, create admins."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from opsgate.api.v1.deps import get_credential_store, require_admin, require_superadmin
from opsgate.models import User
from opsgate.schemas.admin import (
    CreateAdminRequest,
    MembershipConfigItem,
    MembershipConfigUpdate,
    MembershipUpdateRequest,
    PageAccessUpdateRequest,
    RoleUpdateRequest,
    UserSummary,
)
from opsgate.schemas.envelope import Envelope
from opsgate.schemas.roles import ALL_PAGES, CoreRole, Membership
from opsgate.services.authorization import check_can_assign_role, check_can_manage_user
from opsgate.services.credential_store import CredentialStore
from opsgate.services.errors import Forbidden, NotFound
from opsgate.services.identity import CoreIdentity

logger = logging.getLogger(__name__)
router = APIRouter()

ACTIVE_ROLES = (CoreRole.STANDARD, CoreRole.ADMIN, CoreRole.SUPERADMIN)


def _get_user(store: CredentialStore, user_id: int) -> User:
    user = store.find_by_id(user_id)
    if user is None:
        raise NotFound("User not found.")
    return user


@router.get("/users/pending", response_model=Envelope[list[UserSummary]])
def list_pending_users(
    _admin: Annotated[CoreIdentity, Depends(require_admin)],
    store: Annotated[CredentialStore, Depends(get_credential_store)],
) -> Envelope[list[UserSummary]]:
    """Users waiting for approval, oldest first."""
    users = store.list_users([CoreRole.PENDING])
    return Envelope(data=[UserSummary.from_record(u) for u in users])


@router.put("/users/{user_id}/approve", response_model=Envelope[UserSummary])
def approve_user(
    user_id: int,
    admin: Annotated[CoreIdentity, Depends(require_admin)],
    store: Annotated[CredentialStore, Depends(get_credential_store)],
) -> Envelope[UserSummary]:
    """Promote a pending user to standard, with no membership and no pages."""
    user = _get_user(store, user_id)
    if user.role != CoreRole.PENDING.value:
        raise Forbidden("Only pending users can be approved.")
    store.approve(user)
    logger.info("User id=%s approved by admin id=%s", user.id, admin.id)
    return Envelope(message="User approved.", data=UserSummary.from_record(user))


@router.get("/users", response_model=Envelope[list[UserSummary]])
def list_active_users(
    _admin: Annotated[CoreIdentity, Depends(require_admin)],
    store: Annotated[CredentialStore, Depends(get_credential_store)],
) -> Envelope[list[UserSummary]]:
    """All approved users (standard, admin, superadmin)."""
    users = store.list_users(ACTIVE_ROLES)
    return Envelope(data=[UserSummary.from_record(u) for u in users])


@router.put("/users/{user_id}/role", response_model=Envelope[UserSummary])
def update_role(
    user_id: int,
    body: RoleUpdateRequest,
    admin: Annotated[CoreIdentity, Depends(require_admin)],
    store: Annotated[CredentialStore, Depends(get_credential_store)],
) -> Envelope[UserSummary]:
    """
    Change a user's role. Admins move users between pending, standard and admin;
    only a superadmin may grant or revoke superadmin.
    """
    user = _get_user(store, user_id)
    check_can_assign_role(admin, CoreRole(user.role), body.role)
    previous = user.role
    store.set_role(user, body.role)
    logger.info(
        "User id=%s role %s -> %s by admin id=%s", user.id, previous, user.role, admin.id
    )
    return Envelope(message="Role updated.", data=UserSummary.from_record(user))


@router.put("/users/{user_id}/membership", response_model=Envelope[UserSummary])
def update_membership(
    user_id: int,
    body: MembershipUpdateRequest,
    admin: Annotated[CoreIdentity, Depends(require_admin)],
    store: Annotated[CredentialStore, Depends(get_credential_store)],
) -> Envelope[UserSummary]:
    """Set membership; page access is replaced by the pages that tier unlocks."""
    user = _get_user(store, user_id)
    check_can_manage_user(admin, CoreRole(user.role))
    pages = store.pages_for_membership(body.membership)
    store.set_membership(user, body.membership, pages)
    return Envelope(message="Membership updated.", data=UserSummary.from_record(user))


@router.put("/users/{user_id}/page-access", response_model=Envelope[UserSummary])
def update_page_access(
    user_id: int,
    body: PageAccessUpdateRequest,
    admin: Annotated[CoreIdentity, Depends(require_admin)],
    store: Annotated[CredentialStore, Depends(get_credential_store)],
) -> Envelope[UserSummary]:
    user = _get_user(store, user_id)
    check_can_manage_user(admin, CoreRole(user.role))
    store.set_page_access(user, [p.strip() for p in body.page_access if p.strip()])
    return Envelope(message="Page access updated.", data=UserSummary.from_record(user))


@router.post("/create", response_model=Envelope[UserSummary], status_code=status.HTTP_201_CREATED)
def create_admin(
    body: CreateAdminRequest,
    superadmin: Annotated[CoreIdentity, Depends(require_superadmin)],
    store: Annotated[CredentialStore, Depends(get_credential_store)],
) -> Envelope[UserSummary]:
    """Create an admin account directly (superadmin only): vip membership, every page."""
    user = store.create_user(
        body.username,
        body.email,
        body.password,
        role=CoreRole.ADMIN,
        membership=Membership.VIP,
        page_access=[ALL_PAGES],
    )
    logger.info("Admin id=%s created by superadmin id=%s", user.id, superadmin.id)
    return Envelope(
        message=f"Admin user {user.username} created successfully.",
        data=UserSummary.from_record(user),
    )


@router.get("/membership-config", response_model=Envelope[list[MembershipConfigItem]])
def get_membership_config(
    _admin: Annotated[CoreIdentity, Depends(require_admin)],
    store: Annotated[CredentialStore, Depends(get_credential_store)],
) -> Envelope[list[MembershipConfigItem]]:
    configs = store.get_membership_configs()
    return Envelope(
        data=[
            MembershipConfigItem(level=level, pages=pages, monthly_price=price)
            for level, (pages, price) in configs.items()
        ]
    )


@router.put("/membership-config/{level}", response_model=Envelope[MembershipConfigItem])
def put_membership_config(
    level: Membership,
    body: MembershipConfigUpdate,
    _admin: Annotated[CoreIdentity, Depends(require_admin)],
    store: Annotated[CredentialStore, Depends(get_credential_store)],
) -> Envelope[MembershipConfigItem]:
    if level == Membership.NONE:
        raise NotFound("Membership level 'none' has no configuration.")
    row = store.upsert_membership_config(level, body.pages, body.monthly_price)
    return Envelope(
        message="Membership config saved.",
        data=MembershipConfigItem(level=row.level, pages=row.pages, monthly_price=row.monthly_price),
    )

"""Authorization policy: role hierarchy, role sets, page allowlists and role assignment."""

from collections.abc import Iterable

from opsgate.schemas.roles import CoreRole, ServiceRole
from opsgate.services.errors import Forbidden
from opsgate.services.identity import CoreIdentity, Identity

Role = CoreRole | ServiceRole

# Roles an admin (but not a superadmin) may hand out.
ADMIN_ASSIGNABLE_ROLES = frozenset({CoreRole.PENDING, CoreRole.STANDARD, CoreRole.ADMIN})


def _same_vocabulary(identity: Identity, role: Role) -> bool:
    return type(identity.role) is type(role)


def has_role(identity: Identity, min_role: Role) -> bool:
    """True if identity.role is min_role or above, within the same partition's enum."""
    return _same_vocabulary(identity, min_role) and identity.role.rank >= min_role.rank


def check_role(identity: Identity, min_role: Role) -> None:
    if not has_role(identity, min_role):
        raise Forbidden(f"Forbidden: Requires {min_role.value} privileges.")


def check_any_role(identity: Identity, roles: Iterable[Role]) -> None:
    """Forbidden unless identity.role is one of roles, compared as enum members."""
    allowed = [r for r in roles if _same_vocabulary(identity, r)]
    if identity.role not in allowed:
        raise Forbidden("Access denied. Staff role required.")


def check_page_access(identity: Identity, slug: str) -> None:
    if not identity.has_page(slug):
        raise Forbidden(f"Forbidden: No access to page '{slug}'.")


def can_manage_user(actor: CoreIdentity, target_role: CoreRole) -> bool:
    """Admins manage anyone below superadmin; superadmins manage everyone."""
    if actor.role == CoreRole.SUPERADMIN:
        return True
    return actor.role == CoreRole.ADMIN and target_role != CoreRole.SUPERADMIN


def check_can_manage_user(actor: CoreIdentity, target_role: CoreRole) -> None:
    if not can_manage_user(actor, target_role):
        raise Forbidden(f"Forbidden: {actor.role.value} cannot modify a {target_role.value}.")


def can_assign_role(actor: CoreIdentity, target_role: CoreRole, new_role: CoreRole) -> bool:
    """
    Role transitions: superadmins may assign anything; admins may move users
    between pending, standard and admin but never touch a superadmin.
    """
    if not can_manage_user(actor, target_role):
        return False
    return actor.role == CoreRole.SUPERADMIN or new_role in ADMIN_ASSIGNABLE_ROLES


def check_can_assign_role(actor: CoreIdentity, target_role: CoreRole, new_role: CoreRole) -> None:
    if not can_assign_role(actor, target_role, new_role):
        raise Forbidden(
            f"Forbidden: {actor.role.value} cannot change a {target_role.value} to {new_role.value}."
        )

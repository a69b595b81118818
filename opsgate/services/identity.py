"""Resolved identities attached to a request after the access gate."""

from dataclasses import dataclass, field

from opsgate.models import ServiceUser, User
from opsgate.schemas.roles import ALL_PAGES, CoreRole, Membership, Partition, ServiceRole


@dataclass(frozen=True)
class CoreIdentity:
    id: int
    username: str
    email: str
    role: CoreRole
    membership: Membership
    page_access: tuple[str, ...] = field(default_factory=tuple)

    partition = Partition.CORE

    @classmethod
    def from_record(cls, user: User) -> "CoreIdentity":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            role=CoreRole(user.role),
            membership=Membership(user.membership),
            page_access=tuple(user.page_access or ()),
        )

    def has_page(self, slug: str) -> bool:
        return ALL_PAGES in self.page_access or slug in self.page_access


@dataclass(frozen=True)
class ServiceIdentity:
    id: int
    username: str
    role: ServiceRole
    department: str
    page_access: tuple[str, ...] = field(default_factory=tuple)

    partition = Partition.SERVICE

    @classmethod
    def from_record(cls, user: ServiceUser) -> "ServiceIdentity":
        return cls(
            id=user.id,
            username=user.username,
            role=ServiceRole(user.role),
            department=user.department,
            page_access=tuple(user.page_access or ()),
        )

    def has_page(self, slug: str) -> bool:
        return ALL_PAGES in self.page_access or slug in self.page_access


Identity = CoreIdentity | ServiceIdentity

"""Credential store: persistence and lookup of core and service identities.

Constructed per request around a SQLAlchemy session and handed to the token
issuer and access gate; nothing here resolves models or sessions globally.
"""

import logging
from collections.abc import Iterable, Sequence

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from opsgate.core.security import hash_password, password_problem, username_problem
from opsgate.models import MembershipConfig, ServiceUser, StaffAccess, User
from opsgate.schemas.roles import (
    DEFAULT_MEMBERSHIP_CONFIGS,
    DEFAULT_SERVICE_PAGES,
    CoreRole,
    Membership,
    ServiceRole,
)
from opsgate.services.errors import DuplicateIdentity, WeakPassword

logger = logging.getLogger(__name__)

SERVICE_EMAIL_DOMAIN = "nixtz.service.temp"


def normalize_email(email: str) -> str:
    return email.strip().lower()


def service_placeholder_email(employee_id: str) -> str:
    """Generated address for a service login; service staff have no real email."""
    return f"{employee_id.strip().lower()}@{SERVICE_EMAIL_DOMAIN}"


def _check_password(password: str) -> None:
    problem = password_problem(password)
    if problem:
        raise WeakPassword(problem)


class CredentialStore:
    """Reads and writes users, service users, staff records and membership configs."""

    def __init__(self, session: Session) -> None:
        self.session = session

    # -- core partition ---------------------------------------------------

    def create_user(
        self,
        username: str,
        email: str,
        password: str,
        role: CoreRole = CoreRole.PENDING,
        membership: Membership = Membership.NONE,
        page_access: Sequence[str] = (),
    ) -> User:
        """
        Insert a core user. Raises DuplicateIdentity if the username or the
        (case-insensitive) email is already taken, WeakPassword on policy failure.
        """
        username = username.strip()
        email = normalize_email(email)
        problem = username_problem(username)
        if problem:
            raise WeakPassword(problem)
        _check_password(password)

        existing = (
            self.session.query(User.id)
            .filter(or_(User.username == username, func.lower(User.email) == email))
            .first()
        )
        if existing is not None:
            raise DuplicateIdentity()

        user = User(
            username=username,
            email=email,
            password_hash=hash_password(password),
            role=CoreRole(role).value,
            membership=Membership(membership).value,
            page_access=list(page_access),
        )
        self.session.add(user)
        self._commit_unique()
        self.session.refresh(user)
        logger.info("Created user id=%s username=%s role=%s", user.id, user.username, user.role)
        return user

    def find_by_login_identifier(self, value: str) -> User | None:
        """Look up by username or by email, as the login form accepts either."""
        value = value.strip()
        if not value:
            return None
        return (
            self.session.query(User)
            .filter(or_(User.username == value, User.email == normalize_email(value)))
            .first()
        )

    def find_by_id(self, user_id: int) -> User | None:
        return self.session.get(User, user_id)

    def list_users(self, roles: Iterable[CoreRole]) -> list[User]:
        values = [CoreRole(r).value for r in roles]
        return (
            self.session.query(User)
            .filter(User.role.in_(values))
            .order_by(User.created_at, User.id)
            .all()
        )

    def set_role(self, user: User, role: CoreRole) -> User:
        user.role = CoreRole(role).value
        self.session.commit()
        self.session.refresh(user)
        return user

    def set_membership(self, user: User, membership: Membership, page_access: Sequence[str]) -> User:
        user.membership = Membership(membership).value
        user.page_access = list(page_access)
        self.session.commit()
        self.session.refresh(user)
        return user

    def approve(self, user: User) -> User:
        """pending -> standard with no membership and no pages, in one commit."""
        user.role = CoreRole.STANDARD.value
        user.membership = Membership.NONE.value
        user.page_access = []
        self.session.commit()
        self.session.refresh(user)
        return user

    def set_page_access(self, user: User, page_access: Sequence[str]) -> User:
        # Dedupe, keep order
        user.page_access = list(dict.fromkeys(page_access))
        self.session.commit()
        self.session.refresh(user)
        return user

    # -- service partition ------------------------------------------------

    def create_service_user(
        self,
        name: str,
        employee_id: str,
        password: str,
        department: str,
        role: ServiceRole = ServiceRole.STANDARD,
    ) -> StaffAccess:
        """
        Create a service login (username = employee id) and its linked staff record
        in one transaction. Returns the staff record.
        """
        employee_id = employee_id.strip()
        problem = username_problem(employee_id)
        if problem:
            raise WeakPassword(problem)
        _check_password(password)
        email = service_placeholder_email(employee_id)

        clash = (
            self.session.query(ServiceUser.id)
            .filter(or_(ServiceUser.username == employee_id, ServiceUser.email == email))
            .first()
        )
        if clash is not None:
            raise DuplicateIdentity("Employee ID is already registered as a service user.")
        if self.session.query(StaffAccess.id).filter(StaffAccess.employee_id == employee_id).first():
            raise DuplicateIdentity("Employee ID already exists in service staff records.")

        service_user = ServiceUser(
            username=employee_id,
            email=email,
            password_hash=hash_password(password),
            role=ServiceRole(role).value,
            department=department.strip(),
            page_access=list(DEFAULT_SERVICE_PAGES),
        )
        staff = StaffAccess(
            service_user=service_user,
            name=name.strip(),
            employee_id=employee_id,
            department=department.strip(),
        )
        self.session.add_all([service_user, staff])
        self._commit_unique("Employee ID or related user ID already exists.")
        self.session.refresh(staff)
        logger.info(
            "Created service user id=%s employee_id=%s role=%s",
            service_user.id,
            employee_id,
            service_user.role,
        )
        return staff

    def find_service_user_by_username(self, username: str) -> ServiceUser | None:
        username = username.strip()
        if not username:
            return None
        return self.session.query(ServiceUser).filter(ServiceUser.username == username).first()

    def find_service_user_by_id(self, service_user_id: int) -> ServiceUser | None:
        return self.session.get(ServiceUser, service_user_id)

    def list_staff(self) -> list[StaffAccess]:
        return self.session.query(StaffAccess).order_by(StaffAccess.id).all()

    def find_staff(self, staff_id: int) -> StaffAccess | None:
        return self.session.get(StaffAccess, staff_id)

    def update_staff(
        self,
        staff: StaffAccess,
        name: str,
        department: str,
        role: ServiceRole,
        password: str | None = None,
    ) -> StaffAccess:
        """Update staff details and the linked login's role; password only when given."""
        if password is not None and password.strip():
            _check_password(password)
            staff.service_user.password_hash = hash_password(password)
        staff.name = name.strip()
        staff.department = department.strip()
        staff.service_user.department = staff.department
        staff.service_user.role = ServiceRole(role).value
        self.session.commit()
        self.session.refresh(staff)
        return staff

    # -- membership configuration ----------------------------------------

    def get_membership_configs(self) -> dict[Membership, tuple[list[str], float]]:
        """Configured pages/price per paid level, falling back to built-in defaults."""
        configs = dict(DEFAULT_MEMBERSHIP_CONFIGS)
        for row in self.session.query(MembershipConfig).all():
            configs[Membership(row.level)] = (list(row.pages or []), row.monthly_price)
        return configs

    def upsert_membership_config(
        self, level: Membership, pages: Sequence[str], monthly_price: float
    ) -> MembershipConfig:
        """Save a level's pages and price, and push the pages to every user already on it."""
        level = Membership(level)
        if level == Membership.NONE:
            raise ValueError("membership level 'none' has no configuration")
        row = self.session.query(MembershipConfig).filter(MembershipConfig.level == level.value).first()
        if row is None:
            row = MembershipConfig(level=level.value)
            self.session.add(row)
        row.pages = list(dict.fromkeys(pages))
        row.monthly_price = monthly_price
        members = self.session.query(User).filter(User.membership == level.value).all()
        for user in members:
            user.page_access = list(row.pages)
        self.session.commit()
        logger.info(
            "Membership config %s saved; page access refreshed for %d users", level.value, len(members)
        )
        self.session.refresh(row)
        return row

    def pages_for_membership(self, membership: Membership) -> list[str]:
        membership = Membership(membership)
        if membership == Membership.NONE:
            return []
        pages, _price = self.get_membership_configs()[membership]
        return list(pages)

    # -- helpers ------------------------------------------------------------

    def _commit_unique(self, message: str | None = None) -> None:
        """Commit, mapping a unique-constraint race to DuplicateIdentity."""
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            logger.info("Unique constraint rejected insert: %s", e.orig)
            raise DuplicateIdentity(message) from e

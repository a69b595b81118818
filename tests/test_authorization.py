"""Unit tests for the authorization policy: hierarchy, role sets, pages, role assignment."""

import unittest

from opsgate.schemas.roles import CoreRole, Membership, ServiceRole
from opsgate.services.authorization import (
    can_assign_role,
    can_manage_user,
    check_any_role,
    check_can_assign_role,
    check_can_manage_user,
    check_page_access,
    check_role,
    has_role,
)
from opsgate.services.errors import Forbidden
from opsgate.services.identity import CoreIdentity, ServiceIdentity


def _core(role: CoreRole, pages: tuple[str, ...] = ()) -> CoreIdentity:
    return CoreIdentity(
        id=1,
        username="alice",
        email="alice@x.com",
        role=role,
        membership=Membership.NONE,
        page_access=pages,
    )


def _service(role: ServiceRole, pages: tuple[str, ...] = ("laundry_request", "laundry_staff")) -> ServiceIdentity:
    return ServiceIdentity(id=1, username="EMP001", role=role, department="Housekeeping", page_access=pages)


class TestRoleHierarchy(unittest.TestCase):
    def test_order(self) -> None:
        ranks = [r.rank for r in (CoreRole.PENDING, CoreRole.STANDARD, CoreRole.ADMIN, CoreRole.SUPERADMIN)]
        self.assertEqual(ranks, sorted(ranks))
        self.assertLess(ServiceRole.STANDARD.rank, ServiceRole.ADMIN.rank)

    def test_standard_passes_standard_but_not_admin(self) -> None:
        alice = _core(CoreRole.STANDARD)
        check_role(alice, CoreRole.STANDARD)
        check_role(alice, CoreRole.PENDING)
        with self.assertRaises(Forbidden):
            check_role(alice, CoreRole.ADMIN)

    def test_superadmin_passes_everything_in_core(self) -> None:
        root = _core(CoreRole.SUPERADMIN)
        for role in CoreRole:
            with self.subTest(role=role):
                check_role(root, role)

    def test_pending_fails_standard(self) -> None:
        with self.assertRaises(Forbidden):
            check_role(_core(CoreRole.PENDING), CoreRole.STANDARD)

    def test_roles_do_not_compare_across_partitions(self) -> None:
        self.assertFalse(has_role(_core(CoreRole.SUPERADMIN), ServiceRole.REQUEST_ONLY))
        self.assertFalse(has_role(_service(ServiceRole.ADMIN), CoreRole.PENDING))
        self.assertNotEqual(CoreRole.STANDARD, ServiceRole.STANDARD)
        self.assertNotEqual(CoreRole.ADMIN, ServiceRole.ADMIN)


class TestAnyRole(unittest.TestCase):
    CORE_STAFF = (CoreRole.STANDARD, CoreRole.ADMIN, CoreRole.SUPERADMIN)

    def test_core_staff_roles(self) -> None:
        for role in self.CORE_STAFF:
            with self.subTest(role=role):
                check_any_role(_core(role), self.CORE_STAFF)
        with self.assertRaises(Forbidden):
            check_any_role(_core(CoreRole.PENDING), self.CORE_STAFF)

    def test_service_role_never_matches_core_vocabulary(self) -> None:
        for role in ServiceRole:
            with self.subTest(role=role):
                with self.assertRaises(Forbidden):
                    check_any_role(_service(role), self.CORE_STAFF)

    def test_service_vocabulary(self) -> None:
        allowed = (ServiceRole.STANDARD, ServiceRole.ADMIN)
        check_any_role(_service(ServiceRole.STANDARD), allowed)
        with self.assertRaises(Forbidden):
            check_any_role(_service(ServiceRole.REQUEST_ONLY), allowed)
        with self.assertRaises(Forbidden):
            check_any_role(_core(CoreRole.STANDARD), allowed)


class TestPageAccess(unittest.TestCase):
    def test_listed_page(self) -> None:
        check_page_access(_core(CoreRole.STANDARD, ("watchlist",)), "watchlist")

    def test_unlisted_page(self) -> None:
        with self.assertRaises(Forbidden):
            check_page_access(_core(CoreRole.STANDARD, ("watchlist",)), "budget_tracker")

    def test_wildcard(self) -> None:
        check_page_access(_core(CoreRole.STANDARD, ("all",)), "anything")

    def test_role_does_not_imply_pages(self) -> None:
        with self.assertRaises(Forbidden):
            check_page_access(_core(CoreRole.SUPERADMIN), "watchlist")

    def test_service_pages(self) -> None:
        check_page_access(_service(ServiceRole.STANDARD), "laundry_staff")
        with self.assertRaises(Forbidden):
            check_page_access(_service(ServiceRole.STANDARD), "service_admin")


class TestRoleAssignment(unittest.TestCase):
    def test_admin_promotes_up_to_admin(self) -> None:
        admin = _core(CoreRole.ADMIN)
        self.assertTrue(can_assign_role(admin, CoreRole.PENDING, CoreRole.STANDARD))
        self.assertTrue(can_assign_role(admin, CoreRole.STANDARD, CoreRole.ADMIN))
        self.assertTrue(can_assign_role(admin, CoreRole.ADMIN, CoreRole.STANDARD))

    def test_admin_cannot_grant_or_touch_superadmin(self) -> None:
        admin = _core(CoreRole.ADMIN)
        self.assertFalse(can_assign_role(admin, CoreRole.ADMIN, CoreRole.SUPERADMIN))
        self.assertFalse(can_assign_role(admin, CoreRole.SUPERADMIN, CoreRole.STANDARD))
        with self.assertRaises(Forbidden):
            check_can_assign_role(admin, CoreRole.ADMIN, CoreRole.SUPERADMIN)

    def test_superadmin_assigns_anything(self) -> None:
        root = _core(CoreRole.SUPERADMIN)
        self.assertTrue(can_assign_role(root, CoreRole.ADMIN, CoreRole.SUPERADMIN))
        self.assertTrue(can_assign_role(root, CoreRole.SUPERADMIN, CoreRole.ADMIN))

    def test_standard_assigns_nothing(self) -> None:
        self.assertFalse(can_assign_role(_core(CoreRole.STANDARD), CoreRole.PENDING, CoreRole.STANDARD))

    def test_only_superadmin_manages_superadmin(self) -> None:
        self.assertFalse(can_manage_user(_core(CoreRole.ADMIN), CoreRole.SUPERADMIN))
        self.assertTrue(can_manage_user(_core(CoreRole.ADMIN), CoreRole.STANDARD))
        self.assertTrue(can_manage_user(_core(CoreRole.SUPERADMIN), CoreRole.SUPERADMIN))
        self.assertFalse(can_manage_user(_core(CoreRole.STANDARD), CoreRole.PENDING))
        with self.assertRaises(Forbidden):
            check_can_manage_user(_core(CoreRole.ADMIN), CoreRole.SUPERADMIN)


if __name__ == "__main__":
    unittest.main()

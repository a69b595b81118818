"""Tests for the access gate: bearer parsing, verification and partition isolation."""

import unittest
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from opsgate.models import Base
from opsgate.schemas.roles import CoreRole, Membership, ServiceRole
from opsgate.services.access_gate import AccessGate, extract_bearer
from opsgate.services.credential_store import CredentialStore
from opsgate.services.errors import (
    AuthServiceUnavailable,
    InvalidToken,
    MissingToken,
    NotServiceStaff,
    StaleIdentity,
    TokenExpired,
)
from opsgate.services.identity import CoreIdentity, ServiceIdentity
from opsgate.services.token_issuer import TokenCodec, TokenIssuer

SECRET = "gate-test-secret"


def _session() -> Session:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, autoflush=False)()


class TestExtractBearer(unittest.TestCase):
    def test_valid_header(self) -> None:
        self.assertEqual(extract_bearer("Bearer abc.def.ghi"), "abc.def.ghi")

    def test_scheme_is_case_insensitive(self) -> None:
        self.assertEqual(extract_bearer("bearer abc"), "abc")

    def test_missing_or_blank(self) -> None:
        for value in (None, "", "   "):
            with self.subTest(value=value):
                with self.assertRaises(MissingToken):
                    extract_bearer(value)

    def test_wrong_scheme_or_no_token(self) -> None:
        for value in ("Basic dXNlcjpwYXNz", "Bearer", "Bearer    ", "abc.def.ghi"):
            with self.subTest(value=value):
                with self.assertRaises(MissingToken):
                    extract_bearer(value)


class _GateTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.db = _session()
        self.store = CredentialStore(self.db)
        self.codec = TokenCodec(SECRET)
        self.issuer = TokenIssuer(self.store, self.codec)
        self.gate = AccessGate(self.store, self.codec)

    def tearDown(self) -> None:
        self.db.close()

    def core_user(self, username: str, role: CoreRole):
        user = self.store.create_user(username, f"{username}@x.com", "longsecret1")
        return self.store.set_role(user, role)


class TestCoreGate(_GateTestCase):
    def test_round_trip_resolves_same_identity(self) -> None:
        user = self.core_user("alice", CoreRole.STANDARD)
        issued = self.issuer.login("alice", "longsecret1")
        identity = self.gate.authenticate(issued.token)
        self.assertIsInstance(identity, CoreIdentity)
        self.assertEqual(identity.id, user.id)
        self.assertEqual(identity.username, "alice")
        self.assertEqual(identity, issued.identity)

    def test_store_is_ground_truth_for_role_and_pages(self) -> None:
        user = self.core_user("alice", CoreRole.STANDARD)
        token = self.issuer.login("alice", "longsecret1").token
        self.store.set_role(user, CoreRole.ADMIN)
        self.store.set_membership(user, Membership.VIP, ["all"])
        identity = self.gate.authenticate(token)
        self.assertEqual(identity.role, CoreRole.ADMIN)
        self.assertEqual(identity.membership, Membership.VIP)
        self.assertEqual(identity.page_access, ("all",))

    def test_deleted_user_is_stale(self) -> None:
        user = self.core_user("alice", CoreRole.STANDARD)
        token = self.issuer.login("alice", "longsecret1").token
        self.db.delete(user)
        self.db.commit()
        with self.assertRaises(StaleIdentity):
            self.gate.authenticate(token)

    def test_service_token_rejected_by_core_gate(self) -> None:
        self.core_user("alice", CoreRole.SUPERADMIN)
        self.store.create_service_user("Nok", "EMP001", "laundry123", "Housekeeping")
        token = self.issuer.service_login("EMP001", "laundry123").token
        # Both partitions have a row with id 1; the partition claim keeps them apart
        with self.assertRaises(StaleIdentity):
            self.gate.authenticate(token)

    def test_expired_token(self) -> None:
        user = self.core_user("alice", CoreRole.STANDARD)
        token, _ = TokenCodec(SECRET, expire_minutes=1).encode(
            {"sub": str(user.id), "partition": "core"},
            now=datetime.now(UTC) - timedelta(minutes=10),
        )
        with self.assertRaises(TokenExpired):
            self.gate.authenticate(token)

    def test_forged_token_fails_closed_whatever_the_role(self) -> None:
        user = self.core_user("alice", CoreRole.STANDARD)
        for role in CoreRole:
            with self.subTest(role=role):
                token, _ = TokenCodec("attacker-secret").encode(
                    {"sub": str(user.id), "partition": "core", "role": role.value}
                )
                with self.assertRaises(InvalidToken):
                    self.gate.authenticate(token)

    def test_non_integer_subject(self) -> None:
        token, _ = self.codec.encode({"sub": "alice", "partition": "core"})
        with self.assertRaises(InvalidToken):
            self.gate.authenticate(token)

    def test_missing_partition_claim(self) -> None:
        user = self.core_user("alice", CoreRole.STANDARD)
        token, _ = self.codec.encode({"sub": str(user.id)})
        with self.assertRaises(StaleIdentity):
            self.gate.authenticate(token)

    def test_store_failure_fails_closed(self) -> None:
        store = MagicMock()
        store.find_by_id.side_effect = OperationalError("SELECT", {}, Exception("timeout"))
        gate = AccessGate(store, self.codec)
        token, _ = self.codec.encode({"sub": "1", "partition": "core"})
        with self.assertRaises(AuthServiceUnavailable):
            gate.authenticate(token)


class TestServiceGate(_GateTestCase):
    def test_service_token_resolves(self) -> None:
        staff = self.store.create_service_user("Nok", "EMP001", "laundry123", "Housekeeping")
        token = self.issuer.service_login("EMP001", "laundry123").token
        identity = self.gate.authenticate_service(token)
        self.assertIsInstance(identity, ServiceIdentity)
        self.assertEqual(identity.id, staff.service_user_id)
        self.assertEqual(identity.role, ServiceRole.STANDARD)
        self.assertEqual(identity.department, "Housekeeping")

    def test_core_tokens_never_pass_for_any_role(self) -> None:
        # A service row with the same id exists, so only the partition check can stop these
        self.store.create_service_user("Nok", "EMP001", "laundry123", "Housekeeping")
        for role in (CoreRole.STANDARD, CoreRole.ADMIN, CoreRole.SUPERADMIN):
            with self.subTest(role=role):
                self.core_user(f"user_{role.value}", role)
                token = self.issuer.login(f"user_{role.value}", "longsecret1").token
                with self.assertRaises(NotServiceStaff):
                    self.gate.authenticate_service(token)

    def test_removed_service_user(self) -> None:
        staff = self.store.create_service_user("Nok", "EMP001", "laundry123", "Housekeeping")
        token = self.issuer.service_login("EMP001", "laundry123").token
        self.db.delete(staff)
        self.db.delete(self.store.find_service_user_by_id(staff.service_user_id))
        self.db.commit()
        with self.assertRaises(NotServiceStaff):
            self.gate.authenticate_service(token)

    def test_store_failure_fails_closed(self) -> None:
        store = MagicMock()
        store.find_service_user_by_id.side_effect = OperationalError("SELECT", {}, Exception("timeout"))
        gate = AccessGate(store, self.codec)
        token, _ = self.codec.encode({"sub": "1", "partition": "service"})
        with self.assertRaises(AuthServiceUnavailable):
            gate.authenticate_service(token)


if __name__ == "__main__":
    unittest.main()

"""
Create a privileged core user (e.g. the first superadmin). Run from project root:
  python -m opsgate.scripts.create_admin USERNAME EMAIL PASSWORD [--role superadmin|admin]
Example:
  python -m opsgate.scripts.create_admin SuperAdmin admin@nixtz.com 'your-secure-password1'
"""
import argparse
import logging
import sys
from collections.abc import Callable, Sequence

from sqlalchemy.orm import Session

from opsgate.schemas.roles import ALL_PAGES, CoreRole, Membership
from opsgate.services.credential_store import CredentialStore
from opsgate.services.errors import DuplicateIdentity, WeakPassword


def _default_session() -> Session:
    from opsgate.core.database import SessionLocal

    return SessionLocal()


def main(
    argv: Sequence[str] | None = None,
    session_factory: Callable[[], Session] = _default_session,
) -> int:
    parser = argparse.ArgumentParser(description="Create an OpsGate admin (no registration approval needed).")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help="Password (8-128 chars, letters plus a digit or symbol)")
    parser.add_argument(
        "--role",
        default=CoreRole.SUPERADMIN.value,
        choices=[CoreRole.ADMIN.value, CoreRole.SUPERADMIN.value],
    )
    args = parser.parse_args(argv)

    db = session_factory()
    try:
        store = CredentialStore(db)
        try:
            user = store.create_user(
                args.username,
                args.email,
                args.password,
                role=CoreRole(args.role),
                membership=Membership.VIP,
                page_access=[ALL_PAGES],
            )
        except DuplicateIdentity:
            print(f"User '{args.username}' or email '{args.email}' already exists.", file=sys.stderr)
            return 1
        except WeakPassword as e:
            print(e.message, file=sys.stderr)
            return 1
        print(f"Created user '{user.username}' with role '{user.role}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    sys.exit(main())

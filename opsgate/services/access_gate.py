"""Access gate: verify a bearer token and resolve it to a live identity.

The token only locates the subject (sub + partition). Role, membership and
page access always come from the store at request time.
"""

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from opsgate.schemas.roles import Partition
from opsgate.services.credential_store import CredentialStore
from opsgate.services.errors import (
    AuthServiceUnavailable,
    InvalidToken,
    MissingToken,
    NotServiceStaff,
    StaleIdentity,
)
from opsgate.services.identity import CoreIdentity, ServiceIdentity
from opsgate.services.token_issuer import TokenCodec

logger = logging.getLogger(__name__)


def extract_bearer(authorization: str | None) -> str:
    """Return the token from an 'Authorization: Bearer <token>' value; MissingToken otherwise."""
    if not authorization or not authorization.strip():
        raise MissingToken()
    scheme, _, token = authorization.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise MissingToken()
    return token


def _subject(payload: dict[str, Any]) -> tuple[int, Partition | None]:
    sub = payload.get("sub")
    try:
        subject_id = int(sub)
    except (TypeError, ValueError):
        raise InvalidToken("Invalid token payload.")
    try:
        partition = Partition(payload.get("partition"))
    except ValueError:
        partition = None
    return subject_id, partition


class AccessGate:
    """Verifies tokens against one codec and resolves subjects through one store."""

    def __init__(self, store: CredentialStore, codec: TokenCodec) -> None:
        self.store = store
        self.codec = codec

    def authenticate(self, token: str) -> CoreIdentity:
        """
        Resolve a core-partition token.
        Raises InvalidToken, TokenExpired, StaleIdentity or AuthServiceUnavailable.
        """
        subject_id, partition = _subject(self.codec.decode(token))
        if partition is not Partition.CORE:
            logger.warning("Core gate rejected %s token for id=%s", partition, subject_id)
            raise StaleIdentity()
        try:
            user = self.store.find_by_id(subject_id)
        except SQLAlchemyError as e:
            logger.exception("Core identity lookup failed for id=%s", subject_id)
            raise AuthServiceUnavailable() from e
        if user is None:
            logger.warning("Core gate: user id=%s no longer exists", subject_id)
            raise StaleIdentity()
        return CoreIdentity.from_record(user)

    def authenticate_service(self, token: str) -> ServiceIdentity:
        """
        Resolve a service-partition token. A token for a core user is rejected
        with NotServiceStaff whatever its role.
        """
        subject_id, partition = _subject(self.codec.decode(token))
        if partition is not Partition.SERVICE:
            logger.warning("Service gate rejected %s token for id=%s", partition, subject_id)
            raise NotServiceStaff()
        try:
            user = self.store.find_service_user_by_id(subject_id)
        except SQLAlchemyError as e:
            logger.exception("Service identity lookup failed for id=%s", subject_id)
            raise AuthServiceUnavailable() from e
        if user is None:
            logger.warning("Service gate: service user id=%s not found", subject_id)
            raise NotServiceStaff()
        return ServiceIdentity.from_record(user)

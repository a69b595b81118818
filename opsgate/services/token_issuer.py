"""JWT encoding/decoding and login (token issuance) for both partitions."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import jwt

from opsgate.core.security import burn_password_check, verify_password
from opsgate.schemas.roles import CoreRole
from opsgate.services.credential_store import CredentialStore
from opsgate.services.errors import AccountPending, InvalidCredentials, InvalidToken, TokenExpired
from opsgate.services.identity import CoreIdentity, Identity, ServiceIdentity

if TYPE_CHECKING:
    from opsgate.core.config import Settings

logger = logging.getLogger(__name__)


class TokenCodec:
    """Signs and verifies access tokens with one secret and algorithm."""

    def __init__(self, secret: str, algorithm: str = "HS256", expire_minutes: int = 7200) -> None:
        self.secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    @classmethod
    def from_settings(cls, settings: "Settings") -> "TokenCodec":
        return cls(
            secret=settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
            expire_minutes=settings.JWT_EXPIRE_MINUTES,
        )

    def encode(self, claims: dict[str, Any], now: datetime | None = None) -> tuple[str, datetime]:
        """Sign claims with iat/exp added. Returns (token, expires_at)."""
        now = now or datetime.now(UTC)
        expires_at = now + timedelta(minutes=self.expire_minutes)
        payload = {**claims, "iat": now, "exp": expires_at}
        return jwt.encode(payload, self.secret, algorithm=self.algorithm), expires_at

    def decode(self, token: str) -> dict[str, Any]:
        """
        Verify signature and expiry and return the payload.
        Raises TokenExpired or InvalidToken.
        """
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat", "sub"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpired() from e
        except jwt.PyJWTError as e:
            raise InvalidToken() from e


@dataclass(frozen=True)
class IssuedToken:
    token: str
    expires_at: datetime
    identity: Identity


def identity_claims(identity: Identity) -> dict[str, Any]:
    """Claims embedded at issuance. Only sub and partition are trusted when verifying."""
    claims: dict[str, Any] = {
        "sub": str(identity.id),
        "partition": identity.partition.value,
        "username": identity.username,
        "role": identity.role.value,
        "page_access": list(identity.page_access),
    }
    if isinstance(identity, CoreIdentity):
        claims["membership"] = identity.membership.value
    return claims


class TokenIssuer:
    """Authenticates login attempts and mints tokens."""

    def __init__(self, store: CredentialStore, codec: TokenCodec) -> None:
        self.store = store
        self.codec = codec

    def login(self, identifier: str, password: str) -> IssuedToken:
        """
        Core login by username or email.

        Unknown identifier and wrong password raise the same InvalidCredentials.
        A pending account raises AccountPending, but only once the password matched.
        """
        user = self.store.find_by_login_identifier(identifier)
        if user is None:
            burn_password_check(password)
            logger.info("Login failed: unknown identifier")
            raise InvalidCredentials()
        if not verify_password(password, user.password_hash):
            logger.info("Login failed: bad password for user id=%s", user.id)
            raise InvalidCredentials()
        if user.role == CoreRole.PENDING.value:
            logger.info("Login refused: user id=%s is pending approval", user.id)
            raise AccountPending()
        return self._issue(CoreIdentity.from_record(user))

    def service_login(self, employee_id: str, password: str) -> IssuedToken:
        """Service staff login by employee id."""
        user = self.store.find_service_user_by_username(employee_id)
        if user is None:
            burn_password_check(password)
            logger.info("Service login failed: unknown employee id")
            raise InvalidCredentials()
        if not verify_password(password, user.password_hash):
            logger.info("Service login failed: bad password for service user id=%s", user.id)
            raise InvalidCredentials()
        return self._issue(ServiceIdentity.from_record(user))

    def _issue(self, identity: Identity) -> IssuedToken:
        token, expires_at = self.codec.encode(identity_claims(identity))
        logger.info(
            "Issued %s token for id=%s username=%s",
            identity.partition.value,
            identity.id,
            identity.username,
        )
        return IssuedToken(token=token, expires_at=expires_at, identity=identity)


"""Unit tests for TokenCodec: signing, expiry and tamper detection."""

import base64
import json
import unittest
from datetime import UTC, datetime, timedelta

import jwt

from opsgate.services.errors import InvalidToken, TokenExpired
from opsgate.services.token_issuer import TokenCodec

SECRET = "test-secret-for-codec"


def _b64(data: dict) -> str:
    raw = json.dumps(data, separators=(",", ":")).encode("utf-8")
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


class TestEncodeDecode(unittest.TestCase):
    def test_claims_survive(self) -> None:
        codec = TokenCodec(SECRET)
        token, _ = codec.encode({"sub": "7", "partition": "core", "role": "standard"})
        payload = codec.decode(token)
        self.assertEqual(payload["sub"], "7")
        self.assertEqual(payload["partition"], "core")
        self.assertEqual(payload["role"], "standard")
        self.assertIn("iat", payload)
        self.assertIn("exp", payload)

    def test_default_expiry_is_five_days(self) -> None:
        codec = TokenCodec(SECRET)
        now = datetime.now(UTC)
        token, expires_at = codec.encode({"sub": "1"}, now=now)
        self.assertEqual(expires_at - now, timedelta(days=5))
        payload = codec.decode(token)
        self.assertEqual(payload["exp"] - payload["iat"], 5 * 24 * 60 * 60)

    def test_from_settings(self) -> None:
        from opsgate.core.config import get_settings

        settings = get_settings()
        codec = TokenCodec.from_settings(settings)
        self.assertEqual(codec.algorithm, settings.JWT_ALGORITHM)
        self.assertEqual(codec.expire_minutes, settings.JWT_EXPIRE_MINUTES)


class TestDecodeFailures(unittest.TestCase):
    def test_expired_token(self) -> None:
        codec = TokenCodec(SECRET, expire_minutes=1)
        token, _ = codec.encode({"sub": "1"}, now=datetime.now(UTC) - timedelta(minutes=5))
        with self.assertRaises(TokenExpired):
            codec.decode(token)

    def test_wrong_secret(self) -> None:
        token, _ = TokenCodec("some-other-secret").encode({"sub": "1", "role": "superadmin"})
        with self.assertRaises(InvalidToken):
            TokenCodec(SECRET).decode(token)

    def test_tampered_payload(self) -> None:
        codec = TokenCodec(SECRET)
        token, _ = codec.encode({"sub": "1", "role": "standard"})
        header, payload, signature = token.split(".")
        claims = codec.decode(token)
        claims["role"] = "superadmin"
        forged = ".".join([header, _b64(claims), signature])
        with self.assertRaises(InvalidToken):
            codec.decode(forged)

    def test_unsigned_token(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {"sub": "1", "iat": now, "exp": now + timedelta(hours=1)},
            key=None,
            algorithm="none",
        )
        with self.assertRaises(InvalidToken):
            TokenCodec(SECRET).decode(token)

    def test_missing_subject(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode({"iat": now, "exp": now + timedelta(hours=1)}, SECRET, algorithm="HS256")
        with self.assertRaises(InvalidToken):
            TokenCodec(SECRET).decode(token)

    def test_garbage(self) -> None:
        with self.assertRaises(InvalidToken):
            TokenCodec(SECRET).decode("not.a.jwt")


if __name__ == "__main__":
    unittest.main()

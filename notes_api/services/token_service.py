"""
Notes API — Token Service (Bearer Token Issuer/Verifier)
==========================================================

What:  Issues and verifies signed, time-limited JWTs carrying a user id.
How:   python-jose signs with a shared HMAC secret loaded from settings at
       startup. Verification is pure: no store lookups, no revocation.

Claims:
    sub: user id (string, as JWT requires)
    iat: issued-at, epoch seconds
    exp: expires-at, epoch seconds (iat + expire_seconds)

Verification outcomes:
    TokenMalformedError         → not three segments, undecodable header or
                                  claims, unusable sub/exp/iat
    TokenSignatureInvalidError  → signature mismatch, wrong key or algorithm,
                                  non-canonical signature encoding
    TokenExpiredError           → signature valid, but now >= exp
    user id (int)               → valid
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from jose import JWTError, jwt
from jose.exceptions import JWTClaimsError
from jose.utils import base64url_decode, base64url_encode

from notes_api.config import Settings
from notes_api.exceptions import (
    TokenExpiredError,
    TokenMalformedError,
    TokenSignatureInvalidError,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_clock() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """
    Signs and verifies bearer tokens.

    One instance is created by the lifespan and stored on `app.state`.
    The clock is injectable so tests can move time forward.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_seconds: int = 3600,
        clock: Optional[Clock] = None,
    ):
        if not secret_key:
            raise ValueError("TokenService requires a non-empty secret key")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expire_seconds = expire_seconds
        self._clock = clock or utc_clock

    @classmethod
    def from_settings(cls, settings: Settings, clock: Optional[Clock] = None) -> "TokenService":
        return cls(
            secret_key=settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
            expire_seconds=settings.jwt_expire_seconds,
            clock=clock,
        )

    def issue(self, user_id: int) -> str:
        """Return a signed token for `user_id`, expiring expire_seconds from now."""
        issued_at = int(self._clock().timestamp())
        claims = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self.expire_seconds,
        }
        token = jwt.encode(claims, self._secret_key, algorithm=self.algorithm)
        logger.debug("Issued token for user %s (exp=%d)", user_id, claims["exp"])
        return token

    def verify(self, token: str) -> int:
        """
        Verify `token` and return the user id it carries.

        Raises:
            TokenMalformedError, TokenSignatureInvalidError, TokenExpiredError
        """
        self._check_structure(token)
        self._check_signature_encoding(token.rsplit(".", 1)[1])

        try:
            # Expiry is compared below against the injected clock
            claims = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
        except JWTClaimsError as e:
            raise TokenMalformedError(context={"detail": str(e)})
        except JWTError as e:
            raise TokenSignatureInvalidError(context={"detail": str(e)})

        user_id = self._user_id(claims)
        expires_at = claims.get("exp")
        if isinstance(expires_at, bool) or not isinstance(expires_at, (int, float)):
            raise TokenMalformedError(context={"detail": "exp claim missing or not numeric"})

        now = self._clock().timestamp()
        if now >= expires_at:
            raise TokenExpiredError(
                context={"user_id": user_id, "expired_at": expires_at},
            )
        return user_id

    @staticmethod
    def _check_structure(token: str) -> None:
        """Header and claims segments must decode to JSON objects."""
        if not isinstance(token, str):
            raise TokenMalformedError(context={"detail": "token is not a string"})
        segments = token.split(".")
        if len(segments) != 3 or not segments[0] or not segments[1]:
            raise TokenMalformedError(context={"detail": "expected three dot-separated segments"})
        for name, segment in zip(("header", "claims"), segments[:2]):
            try:
                decoded: Any = json.loads(base64url_decode(segment.encode("ascii")))
            except (TypeError, ValueError):
                raise TokenMalformedError(context={"detail": f"undecodable {name} segment"})
            if not isinstance(decoded, dict):
                raise TokenMalformedError(context={"detail": f"{name} is not a JSON object"})

    @staticmethod
    def _check_signature_encoding(signature: str) -> None:
        """
        The signature segment must be the canonical base64url form of its bytes.

        The decoder ignores the unused low bits of the final character, so
        several spellings map to the same digest; only the one we would have
        produced is accepted.
        """
        try:
            raw = signature.encode("ascii")
            canonical = base64url_encode(base64url_decode(raw))
        except (TypeError, ValueError):
            raise TokenSignatureInvalidError(context={"detail": "undecodable signature segment"})
        if canonical != raw:
            raise TokenSignatureInvalidError(context={"detail": "non-canonical signature encoding"})

    @staticmethod
    def _user_id(claims: Dict[str, Any]) -> int:
        try:
            return int(claims["sub"])
        except (KeyError, TypeError, ValueError):
            raise TokenMalformedError(context={"detail": "sub claim missing or not a user id"})

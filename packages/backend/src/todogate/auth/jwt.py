"""JWT token issuance and validation.

Learn: JWT (JSON Web Token) provides stateless authentication.
The token carries the user's id and name plus issuer, audience and
expiry claims, signed with one process-wide HMAC key.

There is no revocation list: a token stays valid until it expires,
so a leaked token can only be contained by waiting it out (or by
rotating the key, which requires a restart and logs everyone out).
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable

import jwt

REQUIRED_CLAIMS = ["sub", "iss", "aud", "exp", "iat"]


class TokenError(Exception):
    """Raised when a presented token is rejected."""


@dataclass(frozen=True)
class TokenConfig:
    """Signing parameters, loaded once at startup and never mutated."""

    secret: str
    algorithm: str = "HS256"
    issuer: str = "todogate"
    audience: str = "todogate-clients"
    expire_minutes: int = 60


@dataclass(frozen=True)
class Claims:
    """Decoded identity claims of an accepted token."""

    user_id: int
    name: str
    issuer: str
    audience: str
    expires_at: datetime


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """Issues and validates bearer tokens for one TokenConfig."""

    def __init__(
        self,
        config: TokenConfig,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.config = config
        self._clock = clock

    def issue(self, user) -> str:
        """Create a signed access token for an authenticated user.

        `user` is anything with `id` and `name` attributes (normally the
        stored User row). The store is never consulted here.
        """
        now = self._clock()
        expires = now + timedelta(minutes=self.config.expire_minutes)
        payload = {
            "sub": str(user.id),
            "name": user.name,
            "iss": self.config.issuer,
            "aud": self.config.audience,
            "iat": now,
            "exp": expires,
        }
        return jwt.encode(payload, self.config.secret, algorithm=self.config.algorithm)

    def validate(self, token: str) -> Claims:
        """Verify signature, issuer, audience and lifetime.

        Every failure raises the same TokenError so callers can't tell
        which check failed.
        """
        try:
            payload = jwt.decode(
                token,
                self.config.secret,
                algorithms=[self.config.algorithm],
                issuer=self.config.issuer,
                audience=self.config.audience,
                options={"require": REQUIRED_CLAIMS},
            )
            return Claims(
                user_id=int(payload["sub"]),
                name=payload.get("name", ""),
                issuer=payload["iss"],
                audience=payload["aud"],
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except (jwt.InvalidTokenError, ValueError, TypeError):
            raise TokenError("Invalid token")

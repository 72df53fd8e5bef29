"""
App-scoped tokens signed by this service.

An app token lets a player's game client report analytics for exactly one
listing. The listing is encoded in the audience as ``app:<listing id>``.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable
from uuid import UUID

import jwt

from pincast_expo.domain.clock import utcnow
from pincast_expo.domain.exceptions import UnauthenticatedError
from pincast_expo.infra.config.settings import Settings

_AUDIENCE_RE = re.compile(r"^app:([a-f0-9-]+)$", re.IGNORECASE)


@dataclass(frozen=True)
class AppTokenClaims:
    listing_id: UUID
    user_id: UUID


def app_audience(listing_id: UUID) -> str:
    return f"app:{listing_id}"


class AppTokenIssuer:
    """Signs and verifies app tokens."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expires_minutes: int = 60,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_minutes = expires_minutes
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppTokenIssuer":
        return cls(
            secret_key=settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
            expires_minutes=settings.app_token_expires_minutes,
        )

    @property
    def expires_in_seconds(self) -> int:
        return self.expires_minutes * 60

    def issue(self, user_id: UUID, listing_id: UUID) -> str:
        now = self._clock()
        payload = {
            "sub": str(user_id),
            "appId": str(listing_id),
            "aud": app_audience(listing_id),
            "role": "player",
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(minutes=self.expires_minutes)).timestamp()),
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> AppTokenClaims:
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": ["exp", "sub", "aud"], "verify_aud": False},
            )
        except jwt.ExpiredSignatureError:
            raise UnauthenticatedError("Invalid or expired token")
        except jwt.InvalidTokenError:
            raise UnauthenticatedError("Invalid or expired token")

        audience = payload.get("aud")
        if isinstance(audience, (list, tuple)):
            audience = audience[0] if audience else None
        if not isinstance(audience, str):
            raise UnauthenticatedError("Invalid token audience")

        match = _AUDIENCE_RE.match(audience)
        if not match:
            raise UnauthenticatedError("Token not authorized for app access")

        try:
            return AppTokenClaims(
                listing_id=UUID(match.group(1)), user_id=UUID(str(payload["sub"]))
            )
        except ValueError:
            raise UnauthenticatedError("Invalid token subject or audience")

"""
Token-scoped access gate.

Verifies bearer credentials through an identity verifier, resolves the
token subject to a marketplace user and enforces role or scope requirements.
"""

import re
from dataclasses import dataclass
from typing import Optional

from pincast_expo.application.ports import (
    IdentityVerifierPort,
    TokenClaims,
    UserRepositoryPort,
)
from pincast_expo.domain.entities.user import User
from pincast_expo.domain.exceptions import ForbiddenError, UnauthenticatedError
from pincast_expo.domain.value_objects.user_role import UserRole
from pincast_expo.infra.config.logging_config import get_logger

_BEARER_RE = re.compile(r"^Bearer\s+(.+)$", re.IGNORECASE)

DEVELOPER_API_SCOPE = "developer:api"


@dataclass(frozen=True)
class Identity:
    user: User
    claims: TokenClaims

    @property
    def user_id(self):
        return self.user.id

    @property
    def role(self) -> UserRole:
        return self.user.role


def extract_bearer_token(header: Optional[str]) -> Optional[str]:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not header:
        return None
    match = _BEARER_RE.match(header.strip())
    if not match:
        return None
    return match.group(1).strip() or None


class AccessGate:
    def __init__(self, verifier: IdentityVerifierPort, user_repo: UserRepositoryPort):
        self.verifier = verifier
        self.user_repo = user_repo
        self._log = get_logger("auth.gate")

    async def verify_header(self, authorization: Optional[str]) -> TokenClaims:
        token = extract_bearer_token(authorization)
        if not token:
            self._log.info("auth.missing_token")
            raise UnauthenticatedError("Authentication required")
        return await self.verifier.verify(token)

    async def require_role(
        self, authorization: Optional[str], required: UserRole
    ) -> Identity:
        """Authenticate and require ``required`` or a role above it."""
        claims = await self.verify_header(authorization)
        user = await self.user_repo.get_by_subject(claims.subject_id)

        if user is None or not user.has_role(required):
            self._log.info(
                "auth.forbidden",
                subject=claims.subject_id,
                required_role=required.value,
                role=user.role.value if user else None,
            )
            raise ForbiddenError(f"{required.value.capitalize()} access required")

        self._log.info("auth.ok", user_id=str(user.id), role=user.role.value)
        return Identity(user=user, claims=claims)

    async def require_scope(self, authorization: Optional[str], scope: str) -> Identity:
        """Authenticate, require a token scope and a known user account."""
        claims = await self.verify_header(authorization)
        if not claims.has_scope(scope):
            self._log.info("auth.missing_scope", subject=claims.subject_id, scope=scope)
            raise ForbiddenError(f"Scope '{scope}' required")

        user = await self.user_repo.get_by_subject(claims.subject_id)
        if user is None:
            raise ForbiddenError("Account not found")

        self._log.info("auth.ok", user_id=str(user.id), scope=scope)
        return Identity(user=user, claims=claims)

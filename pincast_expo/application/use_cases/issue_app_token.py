"""
Use Case: Issue App Token

Exchanges a verified identity token for a short-lived token scoped to one
published listing (``aud=app:<listing id>``). Games use it to report
analytics through the ingestion endpoint.
"""

from dataclasses import dataclass
from uuid import UUID

from pincast_expo.application.ports import IdentityVerifierPort
from pincast_expo.application.unit_of_work import UnitOfWork
from pincast_expo.domain.exceptions import ForbiddenError, NotFoundError
from pincast_expo.infra.auth.app_tokens import AppTokenIssuer
from pincast_expo.infra.config.logging_config import get_logger


@dataclass(frozen=True)
class IssuedAppToken:
    token: str
    expires_in: int


class IssueAppTokenUseCase:
    def __init__(
        self,
        uow: UnitOfWork,
        verifier: IdentityVerifierPort,
        issuer: AppTokenIssuer,
    ):
        self.uow = uow
        self.verifier = verifier
        self.issuer = issuer
        self._log = get_logger("usecase.issue_app_token")

    async def execute(self, id_token: str, listing_id: UUID) -> IssuedAppToken:
        claims = await self.verifier.verify(id_token)

        async with self.uow:
            player = await self.uow.user_repo.get_by_subject(claims.subject_id)
            if player is None:
                raise ForbiddenError("Player account not found")

            listing = await self.uow.listing_repo.get_by_id(listing_id)
            if listing is None:
                raise NotFoundError("App not found")
            if not listing.is_discoverable():
                raise ForbiddenError("App is not published")

        token = self.issuer.issue(user_id=player.id, listing_id=listing.id)
        self._log.info(
            "app_token.issued", user_id=str(player.id), listing_id=str(listing.id)
        )
        return IssuedAppToken(token=token, expires_in=self.issuer.expires_in_seconds)

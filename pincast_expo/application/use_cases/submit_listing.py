"""
Use Case: Submit Listing

Developer submission from CI or the CLI deploy command:
1. Create the listing in ``pending`` state, or reuse the caller's existing
   listing with the same slug
2. Create a new immutable version; without an explicit version string the
   latest version's patch number is incremented
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID, uuid4

from pincast_expo.application.unit_of_work import UnitOfWork
from pincast_expo.domain.entities.listing import Listing
from pincast_expo.domain.entities.user import User
from pincast_expo.domain.entities.version import Version
from pincast_expo.domain.exceptions import ConflictError, InvalidArgumentError
from pincast_expo.domain.value_objects.geo_point import GeoPoint
from pincast_expo.domain.value_objects.listing_state import ListingState
from pincast_expo.domain.value_objects.semver import INITIAL_SEMVER, SemVer
from pincast_expo.infra.config.logging_config import bind_context, get_logger


@dataclass(frozen=True)
class SubmissionResult:
    listing: Listing
    version: Version
    created: bool


class SubmitListingUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self._log = get_logger("usecase.submit_listing")

    async def execute(
        self,
        developer: User,
        title: str,
        slug: str,
        center: GeoPoint,
        radius_meters: float,
        build_url: str,
        hero_url: Optional[str] = None,
        sdk_version: Optional[str] = None,
    ) -> SubmissionResult:
        bind_context(user_id=str(developer.id), slug=slug)
        self._log.info("usecase.start", action="submit_listing")

        if not center.is_valid():
            raise InvalidArgumentError("Geo center must be a valid longitude/latitude")
        if sdk_version is not None and not SemVer.is_valid(sdk_version):
            raise InvalidArgumentError(
                "Version must be a semantic version (major.minor.patch)"
            )

        async with self.uow:
            listing = await self.uow.listing_repo.get_by_slug(slug)
            created = False

            if listing is not None and not listing.is_owned_by(developer.id):
                raise ConflictError(f"App with slug '{slug}' already exists")

            if listing is None:
                listing = await self.uow.listing_repo.create(
                    Listing(
                        id=uuid4(),
                        owner_id=developer.id,
                        title=title,
                        slug=slug,
                        state=ListingState.PENDING,
                        center=center,
                        radius_meters=radius_meters,
                        hero_url=hero_url,
                    )
                )
                created = True

            existing_versions = await self.uow.version_repo.list_for_listing(listing.id)
            semver = self._next_semver(existing_versions, sdk_version)

            version = await self.uow.version_repo.create(
                Version(
                    id=uuid4(),
                    listing_id=listing.id,
                    semver=semver,
                    deploy_url=build_url,
                )
            )
            await self.uow.commit()

        self._log.info(
            "usecase.success",
            listing_id=str(listing.id),
            version_id=str(version.id),
            semver=semver,
            created=created,
        )
        return SubmissionResult(listing=listing, version=version, created=created)

    @staticmethod
    def _next_semver(existing_versions, requested: Optional[str]) -> str:
        if requested:
            return requested
        if not existing_versions:
            return INITIAL_SEMVER
        return str(existing_versions[0].parsed_semver().bump_patch())


def listing_dashboard_url(base_url: str, listing_id: UUID) -> str:
    return f"{base_url.rstrip('/')}/dashboard/apps/{listing_id}"

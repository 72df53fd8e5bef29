"""
Version repository. Versions are immutable once written.
"""

from datetime import datetime
from typing import Dict, Iterable, List
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from pincast_expo.application.ports import VersionRepositoryPort
from pincast_expo.data.models.version_model import VersionModel
from pincast_expo.data.repositories.base import storage_errors
from pincast_expo.domain.clock import ensure_utc
from pincast_expo.domain.entities.version import Version
from pincast_expo.infra.config.logging_config import get_logger


class VersionRepository(VersionRepositoryPort):
    def __init__(self, session: AsyncSession):
        self.session = session
        self._log = get_logger("repo.version")

    @storage_errors("version.create")
    async def create(self, version: Version) -> Version:
        version_model = VersionModel(
            id=version.id,
            listing_id=version.listing_id,
            semver=version.semver,
            changelog=version.changelog,
            quality_score=version.quality_score,
            repo_url=version.repo_url,
            deploy_url=version.deploy_url,
            created_at=version.created_at,
        )
        self.session.add(version_model)
        await self.session.flush()
        self._log.info(
            "version.create",
            version_id=str(version.id),
            listing_id=str(version.listing_id),
            semver=version.semver,
        )
        return version

    @storage_errors("version.list")
    async def list_for_listing(self, listing_id: UUID) -> List[Version]:
        """Get all versions for a listing, newest first."""
        result = await self.session.execute(
            select(VersionModel)
            .where(VersionModel.listing_id == listing_id)
            .order_by(VersionModel.created_at.desc(), VersionModel.id.desc())
        )
        items = [self._to_entity(model) for model in result.scalars().all()]
        self._log.info("version.list", listing_id=str(listing_id), count=len(items))
        return items

    @storage_errors("version.latest")
    async def latest_created_at(
        self, listing_ids: Iterable[UUID]
    ) -> Dict[UUID, datetime]:
        ids = list(listing_ids)
        if not ids:
            return {}
        result = await self.session.execute(
            select(VersionModel.listing_id, func.max(VersionModel.created_at))
            .where(VersionModel.listing_id.in_(ids))
            .group_by(VersionModel.listing_id)
        )
        return {
            listing_id: ensure_utc(created_at)
            for listing_id, created_at in result.all()
            if created_at is not None
        }

    def _to_entity(self, model: VersionModel) -> Version:
        return Version(
            id=model.id,
            listing_id=model.listing_id,
            semver=model.semver,
            changelog=model.changelog,
            quality_score=model.quality_score,
            repo_url=model.repo_url,
            deploy_url=model.deploy_url,
            created_at=ensure_utc(model.created_at),
        )

"""
Version domain entity - an immutable deployment record.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import UUID

from pincast_expo.domain.clock import utcnow
from pincast_expo.domain.value_objects.semver import SemVer


@dataclass(frozen=True)
class Version:
    id: UUID
    listing_id: UUID
    semver: str
    changelog: Optional[str] = None
    quality_score: Optional[int] = None
    repo_url: Optional[str] = None
    deploy_url: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        if not SemVer.is_valid(self.semver):
            raise ValueError(f"Invalid semantic version: {self.semver!r}")

    def parsed_semver(self) -> SemVer:
        return SemVer.parse(self.semver)

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "listingId": str(self.listing_id),
            "semver": self.semver,
            "changelog": self.changelog,
            "qualityScore": self.quality_score,
            "repoUrl": self.repo_url,
            "deployUrl": self.deploy_url,
            "createdAt": self.created_at.isoformat(),
        }

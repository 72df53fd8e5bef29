from .event_repository import EventRepository
from .listing_repository import ListingRepository
from .user_repository import UserRepository
from .version_repository import VersionRepository

__all__ = ["EventRepository", "ListingRepository", "UserRepository", "VersionRepository"]

"""SQLAlchemy models. Importing this package registers every table on ``Base``."""

from .base import Base
from .user_model import UserModel
from .listing_model import ListingModel
from .version_model import VersionModel
from .analytics_model import AnalyticsEventModel

__all__ = [
    "Base",
    "UserModel",
    "ListingModel",
    "VersionModel",
    "AnalyticsEventModel",
]

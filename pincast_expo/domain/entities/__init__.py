"""Domain entities exports."""

from .analytics_event import AnalyticsEvent
from .listing import Listing
from .user import User
from .version import Version

__all__ = ["AnalyticsEvent", "Listing", "User", "Version"]

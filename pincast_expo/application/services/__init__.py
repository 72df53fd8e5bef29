"""Application services exports."""

from .access_gate import AccessGate, Identity, extract_bearer_token
from .analytics_aggregator import AnalyticsAggregator, SessionCountCache

__all__ = [
    "AccessGate",
    "AnalyticsAggregator",
    "Identity",
    "SessionCountCache",
    "extract_bearer_token",
]

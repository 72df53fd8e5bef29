"""
Application layer - Use cases and business orchestration.

This package contains the use cases, application services and ports that
coordinate domain logic with persistence and identity providers.
"""

from .services.access_gate import AccessGate
from .services.analytics_aggregator import AnalyticsAggregator, SessionCountCache
from .unit_of_work import UnitOfWork
from .use_cases.change_listing_state import ChangeListingStateUseCase
from .use_cases.query_catalog import QueryCatalogUseCase
from .use_cases.rollback_listing_version import RollbackListingVersionUseCase

__all__ = [
    "AccessGate",
    "AnalyticsAggregator",
    "ChangeListingStateUseCase",
    "QueryCatalogUseCase",
    "RollbackListingVersionUseCase",
    "SessionCountCache",
    "UnitOfWork",
]

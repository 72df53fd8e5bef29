"""
API dependencies for dependency injection.

This module provides FastAPI dependency functions for database sessions,
the unit of work, authentication and use case construction. Process-wide
objects (caches, verifier, token issuer) are read from ``app.state``.
"""

from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from pincast_expo.application.ports import IdentityVerifierPort
from pincast_expo.application.services.access_gate import (
    DEVELOPER_API_SCOPE,
    AccessGate,
    Identity,
    extract_bearer_token,
)
from pincast_expo.application.services.analytics_aggregator import (
    AnalyticsAggregator,
    SessionCountCache,
)
from pincast_expo.application.unit_of_work import UnitOfWork
from pincast_expo.application.use_cases.change_listing_state import (
    ChangeListingStateUseCase,
)
from pincast_expo.application.use_cases.ingest_event import IngestEventUseCase
from pincast_expo.application.use_cases.issue_app_token import IssueAppTokenUseCase
from pincast_expo.application.use_cases.query_catalog import QueryCatalogUseCase
from pincast_expo.application.use_cases.rollback_listing_version import (
    RollbackListingVersionUseCase,
)
from pincast_expo.application.use_cases.submit_listing import SubmitListingUseCase
from pincast_expo.data.queries.listing_queries import ListingQueries
from pincast_expo.data.repositories import (
    EventRepository,
    ListingRepository,
    UserRepository,
    VersionRepository,
)
from pincast_expo.domain.exceptions import UnauthenticatedError
from pincast_expo.domain.value_objects.user_role import UserRole
from pincast_expo.infra.auth.app_tokens import AppTokenClaims, AppTokenIssuer
from pincast_expo.infra.config.database import get_db_session
from pincast_expo.infra.config.settings import Settings, get_settings


# Process-wide objects
def get_identity_verifier(request: Request) -> IdentityVerifierPort:
    return request.app.state.identity_verifier


def get_app_token_issuer(request: Request) -> AppTokenIssuer:
    return request.app.state.app_token_issuer


def get_session_count_cache(request: Request) -> Optional[SessionCountCache]:
    return request.app.state.session_count_cache


# Persistence
async def get_unit_of_work(
    session: AsyncSession = Depends(get_db_session),
) -> UnitOfWork:
    """Create a Unit of Work sharing the request's database session."""
    return UnitOfWork(
        session=session,
        listing_repo=ListingRepository(session),
        version_repo=VersionRepository(session),
        event_repo=EventRepository(session),
        user_repo=UserRepository(session),
    )


async def get_listing_queries(
    session: AsyncSession = Depends(get_db_session),
) -> ListingQueries:
    return ListingQueries(session)


async def get_analytics_aggregator(
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: Optional[SessionCountCache] = Depends(get_session_count_cache),
) -> AnalyticsAggregator:
    return AnalyticsAggregator(uow=uow, cache=cache)


# Authentication
async def get_access_gate(
    uow: UnitOfWork = Depends(get_unit_of_work),
    verifier: IdentityVerifierPort = Depends(get_identity_verifier),
) -> AccessGate:
    return AccessGate(verifier=verifier, user_repo=uow.user_repo)


async def require_staff(
    authorization: Optional[str] = Header(None),
    gate: AccessGate = Depends(get_access_gate),
) -> Identity:
    """Bearer token resolving to a staff account."""
    return await gate.require_role(authorization, UserRole.STAFF)


async def require_developer_scope(
    authorization: Optional[str] = Header(None),
    gate: AccessGate = Depends(get_access_gate),
) -> Identity:
    """Bearer token carrying the ``developer:api`` scope."""
    return await gate.require_scope(authorization, DEVELOPER_API_SCOPE)


async def require_app_token(
    authorization: Optional[str] = Header(None),
    issuer: AppTokenIssuer = Depends(get_app_token_issuer),
) -> AppTokenClaims:
    """Bearer app token (``aud=app:<listing id>``) issued by this service."""
    token = extract_bearer_token(authorization)
    if not token:
        raise UnauthenticatedError("Authentication token is required")
    return issuer.verify(token)


# Use Case Dependencies
async def get_query_catalog_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
    aggregator: AnalyticsAggregator = Depends(get_analytics_aggregator),
    settings: Settings = Depends(get_settings),
) -> QueryCatalogUseCase:
    return QueryCatalogUseCase(
        uow=uow,
        aggregator=aggregator,
        default_radius=settings.catalog_default_radius_meters,
        max_radius=settings.catalog_max_radius_meters,
    )


async def get_change_listing_state_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
    aggregator: AnalyticsAggregator = Depends(get_analytics_aggregator),
) -> ChangeListingStateUseCase:
    return ChangeListingStateUseCase(uow=uow, aggregator=aggregator)


async def get_rollback_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
    aggregator: AnalyticsAggregator = Depends(get_analytics_aggregator),
) -> RollbackListingVersionUseCase:
    return RollbackListingVersionUseCase(uow=uow, aggregator=aggregator)


async def get_submit_listing_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> SubmitListingUseCase:
    return SubmitListingUseCase(uow=uow)


async def get_issue_app_token_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
    verifier: IdentityVerifierPort = Depends(get_identity_verifier),
    issuer: AppTokenIssuer = Depends(get_app_token_issuer),
) -> IssueAppTokenUseCase:
    return IssueAppTokenUseCase(uow=uow, verifier=verifier, issuer=issuer)


async def get_ingest_event_use_case(
    aggregator: AnalyticsAggregator = Depends(get_analytics_aggregator),
) -> IngestEventUseCase:
    return IngestEventUseCase(aggregator=aggregator)

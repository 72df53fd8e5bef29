"""
Unit of Work pattern implementation for transaction boundaries.

The Unit of Work holds the repositories that share one database session and
coordinates committing or discarding their changes.
"""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pincast_expo.application.ports import (
    EventRepositoryPort,
    ListingRepositoryPort,
    UserRepositoryPort,
    VersionRepositoryPort,
)
from pincast_expo.domain.exceptions import StorageError


class UnitOfWork:
    """Listing, version, event and user repositories bound to one session.

    Leaving the context without a successful commit rolls the session back.
    """

    def __init__(
        self,
        session: AsyncSession,
        listing_repo: ListingRepositoryPort,
        version_repo: VersionRepositoryPort,
        event_repo: EventRepositoryPort,
        user_repo: UserRepositoryPort,
    ):
        self.session = session
        self.listing_repo = listing_repo
        self.version_repo = version_repo
        self.event_repo = event_repo
        self.user_repo = user_repo
        self._committed = False

    async def __aenter__(self):
        self._committed = False
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit transaction context, discarding anything left uncommitted."""
        if exc_type is not None or not self._committed:
            await self.rollback()

    async def commit(self):
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to commit transaction: {e}") from e
        self._committed = True

    async def rollback(self):
        await self.session.rollback()

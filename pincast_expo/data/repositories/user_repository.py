"""
User repository. Accounts are provisioned elsewhere; this service reads them.
"""

from typing import Dict, Iterable, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pincast_expo.application.ports import UserRepositoryPort
from pincast_expo.data.models.user_model import UserModel
from pincast_expo.data.repositories.base import storage_errors
from pincast_expo.domain.entities.user import User
from pincast_expo.domain.value_objects.user_role import UserRole
from pincast_expo.infra.config.logging_config import get_logger


class UserRepository(UserRepositoryPort):
    def __init__(self, session: AsyncSession):
        self.session = session
        self._log = get_logger("repo.user")

    @storage_errors("user.create")
    async def create(self, user: User) -> User:
        self.session.add(
            UserModel(
                id=user.id,
                identity_subject=user.identity_subject,
                role=user.role.value,
                email=user.email,
                display_name=user.display_name,
            )
        )
        await self.session.flush()
        self._log.info("user.create", user_id=str(user.id), role=user.role.value)
        return user

    @storage_errors("user.get")
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        result = await self.session.execute(
            select(UserModel).where(UserModel.id == user_id)
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    @storage_errors("user.get_by_subject")
    async def get_by_subject(self, subject_id: str) -> Optional[User]:
        result = await self.session.execute(
            select(UserModel).where(UserModel.identity_subject == subject_id)
        )
        model = result.scalar_one_or_none()
        if not model:
            self._log.info("user.get_by_subject.not_found")
            return None
        return self._to_entity(model)

    @storage_errors("user.get_many")
    async def get_many(self, user_ids: Iterable[UUID]) -> Dict[UUID, User]:
        ids = list(set(user_ids))
        if not ids:
            return {}
        result = await self.session.execute(
            select(UserModel).where(UserModel.id.in_(ids))
        )
        return {model.id: self._to_entity(model) for model in result.scalars().all()}

    def _to_entity(self, model: UserModel) -> User:
        return User(
            id=model.id,
            identity_subject=model.identity_subject,
            role=UserRole(model.role),
            email=model.email,
            display_name=model.display_name,
        )

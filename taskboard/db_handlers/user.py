from __future__ import annotations

from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.db_handlers.base import BaseDBHandler, check_local_db
from taskboard.models.user import User
from taskboard.utils.logger import setup_logger

logger = setup_logger("db_handlers.user")


class UserDBHandler(BaseDBHandler[User]):
    def __init__(self):
        super().__init__(User)

    @check_local_db
    async def create_user(
        self, obj_dict: dict[str, Any], *, db: AsyncSession = None
    ) -> User:
        return await super().create(obj_dict, db=db)

    @check_local_db
    async def get_user_by_email(
        self, email: str, *, db: AsyncSession = None
    ) -> User | None:
        """Get the first user registered with ``email``."""
        try:
            return await self.get_by_attributes(email=email, db=db)
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving user by email '{email}': {e}")
            raise

    @check_local_db
    async def get_user(self, user_id: int, *, db: AsyncSession = None) -> User | None:
        return await self.get(user_id, db=db)

    @check_local_db
    async def upgrade_password(
        self, user_id: int, new_hashed_password: str, *, db: AsyncSession = None
    ) -> None:
        """Store a re-hashed password for an existing user."""
        user = await self.get(user_id, db=db)
        if user is None:
            logger.warning(f"User {user_id} vanished before its password upgrade")
            return
        await self.update(user, {"password": new_hashed_password}, db=db)

from __future__ import annotations

import asyncio
from functools import wraps
from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.config import settings
from taskboard.db import AppAsyncSessionLocal
from taskboard.exceptions import StorageUnavailableError
from taskboard.models.base import Base
from taskboard.utils.logger import setup_logger
from taskboard.utils.retry_utils import is_retryable_db_error

logger = setup_logger("db_handlers")


ModelType = TypeVar("ModelType", bound=Base)


async def _commit(db: AsyncSession, func_name: str) -> None:
    """Commit the unit of work; a connection lost here is never retried."""
    try:
        await db.commit()
    except Exception as e:
        await db.rollback()
        if is_retryable_db_error(e):
            logger.error(f"Connection lost while committing {func_name}: {e}")
            raise StorageUnavailableError(settings.db_unavailable_hint) from e
        logger.error(f"Commit failed in {func_name}: {e}", exc_info=True)
        raise


def check_local_db(func):
    """Database session decorator with transaction management and retry logic."""

    @wraps(func)
    async def wrapper(*args, **kwargs):
        # Nested call: the outermost caller owns the session and the transaction.
        if kwargs.get("db"):
            return await func(*args, **kwargs)

        attempts = settings.db_retry_attempts
        delay = settings.db_retry_delay_seconds
        last_exception = None
        for attempt in range(1, attempts + 1):
            async with AppAsyncSessionLocal() as db:
                kwargs["db"] = db
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    await db.rollback()
                    if not is_retryable_db_error(e):
                        logger.error(
                            f"Transaction failed in {func.__name__}: {e}",
                            exc_info=True,
                        )
                        raise
                    last_exception = e
                    logger.warning(
                        f"Connection error in {func.__name__} "
                        f"(attempt {attempt}/{attempts}): {e}"
                    )
                else:
                    await _commit(db, func.__name__)
                    return result

            if attempt < attempts:
                await asyncio.sleep(delay)
                delay *= 2

        logger.error(
            f"All retries failed for {func.__name__}. Last error: {last_exception}"
        )
        raise StorageUnavailableError(settings.db_unavailable_hint) from last_exception

    return wrapper


class BaseDBHandler(Generic[ModelType]):
    """Generic handler for database operations with basic CRUD methods."""

    def __init__(self, model: type[ModelType]):
        self.model = model

    @check_local_db
    async def create(
        self, obj_dict: dict[str, Any], *, db: AsyncSession = None
    ) -> ModelType:
        """Create a new record; ``id`` is populated once this returns."""
        db_obj = self.model(**obj_dict)
        try:
            db.add(db_obj)
            await db.flush()
            await db.refresh(db_obj)
            return db_obj
        except SQLAlchemyError as e:
            logger.error(f"Error creating {self.model.__name__}: {e}", exc_info=True)
            raise

    @check_local_db
    async def get(self, id: Any, *, db: AsyncSession = None) -> ModelType | None:
        """Get a single record by its primary key."""
        stmt = select(self.model).where(self.model.id == id)
        result = await db.execute(stmt)
        return result.scalars().first()

    @check_local_db
    async def get_by_attributes(
        self, *, db: AsyncSession = None, **kwargs
    ) -> ModelType | None:
        """Get the oldest record matching a set of attributes."""
        stmt = select(self.model).filter_by(**kwargs).order_by(self.model.id)
        result = await db.execute(stmt)
        return result.scalars().first()

    @check_local_db
    async def update(
        self,
        db_obj: ModelType,
        update_data: dict[str, Any],
        *,
        db: AsyncSession = None,
    ) -> ModelType:
        """Overwrite fields of an existing record."""
        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        try:
            db.add(db_obj)
            await db.flush()
            await db.refresh(db_obj)
            return db_obj
        except SQLAlchemyError as e:
            logger.error(
                f"Error updating {self.model.__name__} with id {db_obj.id}: {e}",
                exc_info=True,
            )
            raise

    @check_local_db
    async def remove(self, id: Any, *, db: AsyncSession = None) -> ModelType | None:
        """Remove a record by its primary key. Returns None when it does not exist."""
        obj = await self.get(id, db=db)
        if obj is None:
            return None
        try:
            await db.delete(obj)
            await db.flush()
            return obj
        except SQLAlchemyError as e:
            logger.error(
                f"Error removing {self.model.__name__} with id {id}: {e}",
                exc_info=True,
            )
            raise

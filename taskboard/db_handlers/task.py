from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.db_handlers.base import BaseDBHandler, check_local_db
from taskboard.models.task import Task
from taskboard.utils.logger import setup_logger

logger = setup_logger("task_db_handler")


class TaskDBHandler(BaseDBHandler[Task]):
    def __init__(self):
        super().__init__(Task)

    @check_local_db
    async def list_tasks(self, *, db: AsyncSession = None) -> list[dict[str, Any]]:
        """All tasks projected to id, title and description, in insertion order."""
        stmt = select(Task.id, Task.title, Task.description).order_by(Task.id)
        result = await db.execute(stmt)
        return [dict(row._mapping) for row in result]

    @check_local_db
    async def create_task(
        self, obj_dict: dict[str, Any], *, db: AsyncSession = None
    ) -> dict[str, Any]:
        """Create a new task and return as dict."""
        task = await super().create(obj_dict, db=db)
        return task.to_dict()

    @check_local_db
    async def update_task(
        self, task_id: int, update_data: dict[str, Any], *, db: AsyncSession = None
    ) -> dict[str, Any] | None:
        """Overwrite title and description in place; None when the id is unknown."""
        task = await self.get(task_id, db=db)
        if task is None:
            logger.warning(f"Task {task_id} not found for update")
            return None
        task = await self.update(task, update_data, db=db)
        return task.to_dict()

    @check_local_db
    async def delete_task(self, task_id: int, *, db: AsyncSession = None) -> bool:
        removed = await self.remove(task_id, db=db)
        return removed is not None

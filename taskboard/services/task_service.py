"""
Task service: payload validation in front of the task store.
"""

from typing import Any

from pydantic import ValidationError

from taskboard.exceptions import NotFoundError, ValidationFailedError
from taskboard.schemas import TaskPayload
from taskboard.services.stores import TaskStore
from taskboard.utils.logger import setup_logger

logger = setup_logger("task_service")


def parse_task_payload(payload: Any) -> TaskPayload:
    """Validate a decoded JSON body, raising ValidationFailedError on rejection."""
    if not isinstance(payload, dict):
        raise ValidationFailedError(
            [{"field": "body", "message": "Request body must be a JSON object"}]
        )
    try:
        return TaskPayload.model_validate(payload)
    except ValidationError as e:
        raise ValidationFailedError.from_pydantic_errors(e.errors()) from e


class TaskService:
    def __init__(self, store: TaskStore):
        self.store = store

    async def list_tasks(self) -> list[dict[str, Any]]:
        return await self.store.list_tasks()

    async def create_task(self, payload: Any) -> dict[str, Any]:
        task_data = parse_task_payload(payload)
        task = await self.store.create_task(task_data.model_dump())
        logger.info(f"Created task {task['id']}")
        return task

    async def update_task(self, task_id: int, payload: Any) -> dict[str, Any]:
        task_data = parse_task_payload(payload)
        task = await self.store.update_task(task_id, task_data.model_dump())
        if task is None:
            raise NotFoundError("task", task_id)
        logger.info(f"Updated task {task_id}")
        return task

    async def delete_task(self, task_id: int) -> None:
        if not await self.store.delete_task(task_id):
            raise NotFoundError("task", task_id)
        logger.info(f"Deleted task {task_id}")

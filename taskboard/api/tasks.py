"""
Task API routes: list, create, update and delete task records.

Validation, not-found and storage failures are raised by the service as
domain errors and turned into responses by the handlers in ``main.py``.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends

from taskboard.dependencies import get_task_service
from taskboard.schemas import (
    MessageResponse,
    TaskCreatedResponse,
    TaskOut,
    ValidationErrorResponse,
)
from taskboard.services import TaskService

router = APIRouter(tags=["Tasks"])

_validation_response = {400: {"model": ValidationErrorResponse}}
_not_found_response = {404: {"model": MessageResponse}}


@router.get("/", response_model=list[TaskOut])
async def list_tasks(task_service: TaskService = Depends(get_task_service)):
    """List every task as id, title and description."""
    tasks = await task_service.list_tasks()
    return [TaskOut.model_validate(task) for task in tasks]


@router.post(
    "/creation", response_model=TaskCreatedResponse, responses=_validation_response
)
async def create_task(
    payload: Any = Body(..., examples=[{"title": "Buy milk", "description": "2%"}]),
    task_service: TaskService = Depends(get_task_service),
):
    task = await task_service.create_task(payload)
    return TaskCreatedResponse(message="task created", id=task["id"])


@router.put(
    "/modifier/{task_id}",
    response_model=MessageResponse,
    responses={**_validation_response, **_not_found_response},
)
async def update_task(
    task_id: int,
    payload: Any = Body(...),
    task_service: TaskService = Depends(get_task_service),
):
    """Replace the title and description of an existing task."""
    await task_service.update_task(task_id, payload)
    return MessageResponse(message="task updated")


@router.delete(
    "/supprimer/{task_id}",
    response_model=MessageResponse,
    responses=_not_found_response,
)
async def delete_task(
    task_id: int,
    task_service: TaskService = Depends(get_task_service),
):
    await task_service.delete_task(task_id)
    return MessageResponse(message="task deleted")

"""
Task service behaviour against the in-memory task store.
"""

import pytest

from taskboard.exceptions import NotFoundError, ValidationFailedError
from taskboard.services import TaskService


@pytest.fixture
def service(task_store) -> TaskService:
    return TaskService(task_store)


@pytest.mark.asyncio
async def test_created_task_is_listed(service):
    created = await service.create_task({"title": "Buy milk", "description": "2%"})

    tasks = await service.list_tasks()
    assert tasks == [{"id": created["id"], "title": "Buy milk", "description": "2%"}]


@pytest.mark.asyncio
async def test_list_keeps_insertion_order(service):
    for title in ("first", "second", "third"):
        await service.create_task({"title": title})

    assert [t["title"] for t in await service.list_tasks()] == [
        "first",
        "second",
        "third",
    ]


@pytest.mark.asyncio
async def test_description_defaults_to_empty_string(service):
    created = await service.create_task({"title": "No details"})
    assert created["description"] == ""

    created = await service.create_task({"title": "Null details", "description": None})
    assert created["description"] == ""


@pytest.mark.asyncio
async def test_title_is_stored_as_submitted(service):
    created = await service.create_task({"title": "  Pay rent  ", "description": " x "})

    assert created["title"] == "  Pay rent  "
    assert await service.list_tasks() == [
        {"id": created["id"], "title": "  Pay rent  ", "description": " x "}
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"title": "", "description": "x"},
        {"title": "   ", "description": "x"},
        {"description": "x"},
        {"title": None},
        {"title": 42},
        {"title": "t" * 256},
    ],
)
async def test_invalid_title_is_rejected_and_nothing_stored(service, payload):
    with pytest.raises(ValidationFailedError) as exc_info:
        await service.create_task(payload)

    assert any(err["field"] == "title" for err in exc_info.value.errors)
    assert await service.list_tasks() == []


@pytest.mark.asyncio
async def test_non_object_payload_is_rejected(service):
    with pytest.raises(ValidationFailedError) as exc_info:
        await service.create_task(["Buy milk"])

    assert exc_info.value.errors[0]["field"] == "body"


@pytest.mark.asyncio
async def test_update_overwrites_title_and_description(service):
    created = await service.create_task({"title": "Draft", "description": "old"})

    updated = await service.update_task(
        created["id"], {"title": "Final", "description": "new"}
    )

    assert updated == {"id": created["id"], "title": "Final", "description": "new"}
    assert await service.list_tasks() == [updated]


@pytest.mark.asyncio
async def test_update_unknown_task_raises_not_found(service):
    with pytest.raises(NotFoundError) as exc_info:
        await service.update_task(404, {"title": "Ghost", "description": ""})

    assert exc_info.value.message == "task not found"
    assert exc_info.value.resource_id == 404


@pytest.mark.asyncio
async def test_update_with_blank_title_leaves_task_untouched(service):
    created = await service.create_task({"title": "Keep me", "description": "d"})

    with pytest.raises(ValidationFailedError):
        await service.update_task(created["id"], {"title": " ", "description": "x"})

    assert await service.list_tasks() == [
        {"id": created["id"], "title": "Keep me", "description": "d"}
    ]


@pytest.mark.asyncio
async def test_delete_removes_exactly_one_task(service):
    keep = await service.create_task({"title": "keep"})
    drop = await service.create_task({"title": "drop"})

    await service.delete_task(drop["id"])

    tasks = await service.list_tasks()
    assert [t["id"] for t in tasks] == [keep["id"]]


@pytest.mark.asyncio
async def test_delete_unknown_task_raises_not_found(service):
    await service.create_task({"title": "only"})

    with pytest.raises(NotFoundError):
        await service.delete_task(999)

    assert len(await service.list_tasks()) == 1

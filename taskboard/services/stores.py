"""
Capabilities the services depend on.

The SQLAlchemy DB handlers, ``BcryptPasswordHasher`` and ``CsrfTokenManager``
satisfy these structurally; tests substitute in-memory versions.
"""

from typing import Any, Protocol

from taskboard.models.user import User


class TaskStore(Protocol):
    async def list_tasks(self) -> list[dict[str, Any]]: ...

    async def create_task(self, obj_dict: dict[str, Any]) -> dict[str, Any]: ...

    async def update_task(
        self, task_id: int, update_data: dict[str, Any]
    ) -> dict[str, Any] | None: ...

    async def delete_task(self, task_id: int) -> bool: ...


class UserStore(Protocol):
    async def create_user(self, obj_dict: dict[str, Any]) -> User: ...

    async def get_user_by_email(self, email: str) -> User | None: ...

    async def get_user(self, user_id: int) -> User | None: ...

    async def upgrade_password(self, user_id: int, new_hashed_password: str) -> None: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...

    def verify(self, password: str, hashed_password: str) -> bool: ...

    def needs_rehash(self, hashed_password: str) -> bool: ...

    @property
    def dummy_hash(self) -> str: ...


class CsrfValidator(Protocol):
    def validate(self, token_id: str, token: str | None) -> bool: ...

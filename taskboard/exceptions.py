"""
Domain errors raised by the service and persistence layers.

The HTTP boundary maps each type to a status code in ``main.create_app``;
services never build HTTP responses themselves.
"""

from collections.abc import Sequence
from typing import Any


class TaskboardError(Exception):
    """Base class for errors that carry a client-safe message."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(TaskboardError):
    def __init__(self, resource: str, resource_id: Any):
        super().__init__(f"{resource} not found")
        self.resource = resource
        self.resource_id = resource_id


class ValidationFailedError(TaskboardError):
    """Payload rejected; ``errors`` is a list of ``{"field", "message"}`` dicts."""

    def __init__(self, errors: list[dict[str, str]]):
        super().__init__("validation failed")
        self.errors = errors

    @classmethod
    def from_pydantic_errors(cls, errors: Sequence[Any]) -> "ValidationFailedError":
        """Build from pydantic / FastAPI ``errors()`` output."""
        items = []
        for err in errors:
            loc = [str(part) for part in err.get("loc", ()) if part != "body"]
            items.append(
                {"field": ".".join(loc) or "body", "message": err.get("msg", "invalid")}
            )
        return cls(items)


class StorageUnavailableError(TaskboardError):
    """The database could not be reached after the configured retries."""

from taskboard.services.auth_service import AuthOutcome, AuthService
from taskboard.services.task_service import TaskService

__all__ = [
    "AuthOutcome",
    "AuthService",
    "TaskService",
]

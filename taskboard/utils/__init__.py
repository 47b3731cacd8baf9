"""
Common utilities for Taskboard: logging and database error classification.

Authentication helpers live in ``taskboard.utils.auth`` and read
``taskboard.config``, which itself imports the logger from this package,
so they are not re-exported here.
"""

from taskboard.utils.logger import setup_logger
from taskboard.utils.retry_utils import is_retryable_db_error

__all__ = [
    # Logging utilities
    "setup_logger",
    # Retry utilities
    "is_retryable_db_error",
]

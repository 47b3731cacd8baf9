"""
Classification of database errors for the session retry loop.

Only failures caused by a lost or refused connection are worth retrying;
everything else (constraint violations, bad SQL) fails the same way twice.
"""

import errno

from asyncpg.exceptions import ConnectionDoesNotExistError
from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError

from taskboard.utils.logger import setup_logger

logger = setup_logger("retry_utils")

RETRYABLE_ERRNOS = {
    errno.ETIMEDOUT,
    errno.ECONNREFUSED,
    errno.ECONNRESET,
    errno.EHOSTUNREACH,
    errno.ENETUNREACH,
}


def is_retryable_db_error(e: BaseException) -> bool:
    """Return True when ``e`` means the database connection went away."""
    if isinstance(e, DBAPIError):
        if e.connection_invalidated:
            return True
        orig = getattr(e, "orig", None)
        # The asyncpg adapter keeps the driver exception as __cause__
        for candidate in (orig, getattr(orig, "__cause__", None)):
            if isinstance(candidate, ConnectionDoesNotExistError):
                logger.info("ConnectionDoesNotExistError detected as retryable.")
                return True
            if isinstance(candidate, OSError):
                return is_retryable_db_error(candidate)
        return isinstance(e, OperationalError | InterfaceError)

    if isinstance(e, ConnectionError):
        return True

    if isinstance(e, OSError):
        # Windows "semaphore timeout"
        if getattr(e, "winerror", None) == 121:
            return True
        return e.errno in RETRYABLE_ERRNOS

    return False

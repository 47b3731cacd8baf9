"""
Declarative base shared by the Taskboard models.
"""

from datetime import datetime

from sqlalchemy import inspect
from sqlalchemy.orm import declarative_base

from taskboard.config import settings


class CustomBase:
    """
    Custom base class for SQLAlchemy models with dictionary serialization.
    """

    # Columns left out of to_dict()
    __private_columns__: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        d = {}
        for column in inspect(self).mapper.column_attrs:
            if column.key in self.__private_columns__:
                continue
            value = getattr(self, column.key)
            if isinstance(value, datetime):
                d[column.key] = value.isoformat()
            else:
                d[column.key] = value
        return d


Base = declarative_base(cls=CustomBase)

SCHEMA_NAME = settings.schema_name

__all__ = ["Base", "SCHEMA_NAME"]

"""
Task model: a to-do item with a title and a description.

Tasks are independent of users; nothing links a task to its author.
"""

from sqlalchemy import Column, Integer, String

from taskboard.models.base import SCHEMA_NAME, Base

TITLE_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 255


class Task(Base):
    """A to-do item. ``id`` is assigned by the database and never changes."""

    __tablename__ = "task"
    __table_args__ = {"schema": SCHEMA_NAME}

    id = Column(Integer, primary_key=True, autoincrement=True)

    title = Column(
        String(TITLE_MAX_LENGTH),
        nullable=False,
        comment="Short title, never blank",
    )

    description = Column(
        String(DESCRIPTION_MAX_LENGTH),
        nullable=False,
        default="",
        comment="Free-form description, empty string when omitted",
    )

    def __repr__(self):
        return f"<Task(id={self.id}, title='{self.title}')>"

"""
User model for registration and login.

Key Features:
    - bcrypt password hashes only; the plaintext is never stored
    - e-mail used as the login identifier (not unique at the database level)
"""

from sqlalchemy import Column, Index, Integer, String

from taskboard.models.base import SCHEMA_NAME, Base


class User(Base):
    """Registered account able to sign in through the login form."""

    __tablename__ = "user"
    __table_args__ = (
        Index("ix_user_email", "email"),
        {"schema": SCHEMA_NAME},
    )
    __private_columns__ = ("password",)

    id = Column(Integer, primary_key=True, autoincrement=True)

    first_name = Column(String(255), nullable=False, default="")

    last_name = Column(String(255), nullable=False, default="")

    email = Column(
        String(180),
        nullable=False,
        comment="Login identifier",
    )

    password = Column(
        String(255),
        nullable=False,
        comment="bcrypt hash of the user's password",
    )

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}')>"

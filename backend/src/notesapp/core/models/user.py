"""
User model for authentication.
"""

from sqlalchemy import CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20
PASSWORD_MIN_LENGTH = 6


class User(BaseModel):
    """User account; username and email are globally unique."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(USERNAME_MAX_LENGTH), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (
        CheckConstraint(
            f"length(username) >= {USERNAME_MIN_LENGTH} AND length(username) <= {USERNAME_MAX_LENGTH}",
            name="ck_users_username_len",
        ),
        CheckConstraint("email = lower(email)", name="ck_users_email_lowercase"),
    )

    def __repr__(self) -> str:
        return f"<User(username='{self.username}')>"

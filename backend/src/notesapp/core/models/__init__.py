"""
Database models.

SQLAlchemy ORM models for the notes application:
    - User: account with unique username and email
    - Note: note content owned by one user, optionally public
    - NoteTag: ordered tag entries of a note
"""

from .base import BaseModel
from .note import Note, NoteTag
from .user import User

__all__ = [
    "BaseModel",
    "User",
    "Note",
    "NoteTag",
]

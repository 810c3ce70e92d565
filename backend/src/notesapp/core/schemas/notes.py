"""
Note management schemas.

Request bodies are deliberately loose (types only): field rules such as
required/length are enforced by ``core.validation`` inside the service, after
ownership has been checked. Responses use camelCase keys.
"""

import uuid
from datetime import datetime
from typing import Any, List, Optional

from pydantic import ConfigDict, Field

from .common import CamelModel


class NoteCreate(CamelModel):
    """Note creation request schema."""

    title: Optional[str] = Field(default=None, description="Note title (max 100 chars)")
    content: Optional[str] = Field(default=None, description="Note content (max 5000 chars)")
    tags: Any = Field(default=None, description="List of tags")
    is_public: Optional[bool] = Field(default=None, description="Whether note is publicly visible")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Grocery List",
                "content": "Milk, eggs, bread",
                "tags": ["home", "shopping"],
                "isPublic": False,
            }
        }
    )


class NoteUpdate(CamelModel):
    """Partial update; only fields present in the body are applied."""

    title: Optional[str] = Field(default=None, description="Note title")
    content: Optional[str] = Field(default=None, description="Note content")
    tags: Any = Field(default=None, description="List of tags")
    is_public: Optional[bool] = Field(default=None, description="Whether note is publicly visible")

    model_config = ConfigDict(
        json_schema_extra={"example": {"title": "Grocery List (weekend)", "isPublic": True}}
    )


class AuthorInfo(CamelModel):
    """Author reduced to id and username."""

    id: uuid.UUID
    username: Optional[str] = None


class NoteResponse(CamelModel):
    """Note as returned by the API."""

    id: uuid.UUID = Field(description="Note unique identifier")
    title: str = Field(description="Note title")
    content: str = Field(description="Note content")
    author: AuthorInfo = Field(description="Note author")
    tags: List[str] = Field(default_factory=list, description="Note tags")
    is_public: bool = Field(description="Whether note is publicly visible")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "title": "Grocery List",
                "content": "Milk, eggs, bread",
                "author": {"id": "456e7890-e89b-12d3-a456-426614174000", "username": "alice"},
                "tags": ["home"],
                "isPublic": False,
                "createdAt": "2025-09-13T10:30:00Z",
                "updatedAt": "2025-09-13T11:00:00Z",
            }
        }
    )


class NoteEnvelope(CamelModel):
    """``{"note": ...}`` body of GET /{id}."""

    note: NoteResponse


class NoteMessageEnvelope(CamelModel):
    """``{"message", "note"}`` body of create and update."""

    message: str
    note: NoteResponse


class NoteListResponse(CamelModel):
    """One page of notes."""

    notes: List[NoteResponse]
    total_pages: int = Field(description="ceil(total / limit)")
    current_page: int = Field(description="Requested page number")
    total: int = Field(description="Number of matching notes before pagination")

    @classmethod
    def create(
        cls, notes: List[NoteResponse], total: int, page: int, total_pages: int
    ) -> "NoteListResponse":
        return cls(notes=notes, total=total, current_page=page, total_pages=total_pages)

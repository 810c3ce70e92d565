"""
Pydantic schemas for validating and documenting API requests and responses.
"""

from .auth import AuthResponse, CurrentUserResponse, LoginRequest, RegisterRequest, UserResponse
from .common import CamelModel, ErrorResponse, HealthCheckResponse, MessageResponse
from .notes import (
    AuthorInfo,
    NoteCreate,
    NoteEnvelope,
    NoteListResponse,
    NoteMessageEnvelope,
    NoteResponse,
    NoteUpdate,
)

__all__ = [
    # Auth schemas
    "RegisterRequest",
    "LoginRequest",
    "UserResponse",
    "AuthResponse",
    "CurrentUserResponse",
    # Note schemas
    "NoteCreate",
    "NoteUpdate",
    "NoteResponse",
    "AuthorInfo",
    "NoteEnvelope",
    "NoteMessageEnvelope",
    "NoteListResponse",
    # Common schemas
    "CamelModel",
    "MessageResponse",
    "ErrorResponse",
    "HealthCheckResponse",
]

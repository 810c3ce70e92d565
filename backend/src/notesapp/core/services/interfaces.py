"""
Service interfaces.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from uuid import UUID

from ..pagination import RawParam
from ..schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from ..schemas.common import HealthCheckResponse
from ..schemas.notes import NoteCreate, NoteListResponse, NoteResponse, NoteUpdate

class IAuthService(ABC):
    """Auth service for user management."""

    @abstractmethod
    async def register_user(self, request: RegisterRequest) -> AuthResponse:
        """Register new user and issue a token."""
        pass

    @abstractmethod
    async def authenticate_user(self, request: LoginRequest) -> AuthResponse:
        """Login user and issue a token."""
        pass

    @abstractmethod
    async def get_current_user(self, user_id: UUID) -> UserResponse:
        """Get user by ID."""
        pass

    @abstractmethod
    async def logout_user(self, access_token: str) -> bool:
        """Revoke the presented access token."""
        pass


class INoteService(ABC):
    """Note queries and owner-only mutations."""

    @abstractmethod
    async def list_user_notes(
        self,
        user_id: UUID,
        page: RawParam = None,
        limit: RawParam = None,
        search: Optional[str] = None,
        tags: Optional[str] = None,
    ) -> NoteListResponse:
        """List the caller's notes."""
        pass

    @abstractmethod
    async def list_public_notes(
        self, page: RawParam = None, limit: RawParam = None, search: Optional[str] = None
    ) -> NoteListResponse:
        """List public notes of every author."""
        pass

    @abstractmethod
    async def get_note(self, note_id: str, user_id: Optional[UUID]) -> NoteResponse:
        """Get a note the caller owns or that is public."""
        pass

    @abstractmethod
    async def create_note(self, user_id: UUID, request: NoteCreate) -> NoteResponse:
        """Create new note."""
        pass

    @abstractmethod
    async def update_note(self, note_id: str, user_id: UUID, request: NoteUpdate) -> NoteResponse:
        """Partially update an owned note."""
        pass

    @abstractmethod
    async def delete_note(self, note_id: str, user_id: UUID) -> None:
        """Delete an owned note."""
        pass


class IHealthService(ABC):
    """Health check service."""

    @abstractmethod
    async def get_health_status(self) -> HealthCheckResponse:
        """Get overall application health."""
        pass

    @abstractmethod
    async def check_database_health(self) -> Dict[str, Any]:
        """Check database connectivity."""
        pass

    @abstractmethod
    async def check_redis_health(self) -> Dict[str, Any]:
        """Check Redis connectivity."""
        pass

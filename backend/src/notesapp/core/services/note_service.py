"""Note service implementation."""

from contextlib import asynccontextmanager
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ...exceptions import DatabaseError, NotFoundError
from ..filters import NoteFilter, owned_notes_filter, public_notes_filter
from ..logging import get_logger
from ..models.note import Note
from ..pagination import RawParam, normalize_pagination
from ..repositories.note_repository import NoteRepository
from ..repositories.user_repository import UserRepository
from ..schemas.notes import AuthorInfo, NoteCreate, NoteListResponse, NoteResponse, NoteUpdate
from ..validation import (
    clean_tags,
    validate_content_update,
    validate_new_note,
    validate_title_update,
)
from .interfaces import INoteService

logger = get_logger("services.notes")

NOT_FOUND = "Note not found"
EDIT_NOT_FOUND = "Note not found or you do not have permission to edit it"
DELETE_NOT_FOUND = "Note not found or you do not have permission to delete it"


def parse_note_id(raw: str | UUID) -> Optional[UUID]:
    """Malformed ids are treated like missing notes."""
    if isinstance(raw, UUID):
        return raw
    try:
        return UUID(str(raw))
    except ValueError:
        return None


class NoteService(INoteService):
    """Note service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.note_repo = NoteRepository(session)
        # Used to resolve author usernames
        self.user_repo = UserRepository(session)

    @asynccontextmanager
    async def _database_errors(self, message: str):
        """Turn persistence failures into a generic DatabaseError."""
        try:
            yield
        except SQLAlchemyError as exc:
            logger.exception(message)
            await self.session.rollback()
            raise DatabaseError(message) from exc

    async def list_user_notes(
        self,
        user_id: UUID,
        page: RawParam = None,
        limit: RawParam = None,
        search: Optional[str] = None,
        tags: Optional[str] = None,
    ) -> NoteListResponse:
        """List the caller's notes, newest change first."""
        async with self._database_errors("Server error fetching notes"):
            return await self._list(owned_notes_filter(user_id, search, tags), page, limit)

    async def list_public_notes(
        self, page: RawParam = None, limit: RawParam = None, search: Optional[str] = None
    ) -> NoteListResponse:
        """List public notes, newest change first."""
        async with self._database_errors("Server error fetching public notes"):
            return await self._list(public_notes_filter(search), page, limit)

    async def get_note(self, note_id: str, user_id: Optional[UUID]) -> NoteResponse:
        """Get note by ID.

        Owned and public notes are visible; anything else is reported as
        missing so private notes never reveal that they exist.
        """
        parsed_id = parse_note_id(note_id)
        if parsed_id is None:
            raise NotFoundError(NOT_FOUND)

        async with self._database_errors("Server error fetching note"):
            note = await self.note_repo.get_visible(parsed_id, user_id)
            if not note:
                raise NotFoundError(NOT_FOUND)
            return await self._note_to_response(note)

    async def create_note(self, user_id: UUID, request: NoteCreate) -> NoteResponse:
        """Create new note owned by the caller."""
        title, content = validate_new_note(request.title, request.content)
        tags = clean_tags(request.tags)

        note_data = {
            "title": title,
            "content": content,
            "is_public": bool(request.is_public),
            "author_id": user_id,
        }

        async with self._database_errors("Server error creating note"):
            note = await self.note_repo.create_note(note_data, tags)
            logger.info("Note created", extra={"note_id": str(note.id), "user_id": str(user_id)})
            return await self._note_to_response(note)

    async def update_note(self, note_id: str, user_id: UUID, request: NoteUpdate) -> NoteResponse:
        """Apply the supplied fields to an owned note."""
        parsed_id = parse_note_id(note_id)
        if parsed_id is None:
            raise NotFoundError(EDIT_NOT_FOUND)

        async with self._database_errors("Server error updating note"):
            note = await self.note_repo.get_by_id_and_user(parsed_id, user_id)
            if not note:
                raise NotFoundError(EDIT_NOT_FOUND)

            # validate everything before touching the loaded note
            title = validate_title_update(request.title) if request.title is not None else None
            content = (
                validate_content_update(request.content) if request.content is not None else None
            )
            tags = clean_tags(request.tags) if "tags" in request.model_fields_set else None

            if title is not None:
                note.title = title
            if content is not None:
                note.content = content
            if tags is not None:
                note.set_tags(tags)
            if request.is_public is not None:
                note.is_public = request.is_public

            note = await self.note_repo.save(note)
            logger.info("Note updated", extra={"note_id": str(note.id), "user_id": str(user_id)})
            return await self._note_to_response(note)

    async def delete_note(self, note_id: str, user_id: UUID) -> None:
        """Delete an owned note."""
        parsed_id = parse_note_id(note_id)
        if parsed_id is None:
            raise NotFoundError(DELETE_NOT_FOUND)

        async with self._database_errors("Server error deleting note"):
            deleted = await self.note_repo.delete_note(parsed_id, user_id)
        if not deleted:
            raise NotFoundError(DELETE_NOT_FOUND)
        logger.info("Note deleted", extra={"note_id": str(parsed_id), "user_id": str(user_id)})

    async def _list(self, note_filter: NoteFilter, page: RawParam, limit: RawParam) -> NoteListResponse:
        page_params = normalize_pagination(page, limit)
        notes, total = await self.note_repo.find(note_filter, page_params)
        usernames = await self.user_repo.get_usernames(note.author_id for note in notes)
        return NoteListResponse.create(
            notes=[self._build_response(note, usernames) for note in notes],
            total=total,
            page=page_params.number,
            total_pages=page_params.total_pages(total),
        )

    async def _note_to_response(self, note: Note) -> NoteResponse:
        usernames = await self.user_repo.get_usernames([note.author_id])
        return self._build_response(note, usernames)

    @staticmethod
    def _build_response(note: Note, usernames: Dict[UUID, str]) -> NoteResponse:
        tags: List[str] = list(note.tags)
        return NoteResponse(
            id=note.id,
            title=note.title,
            content=note.content,
            author=AuthorInfo(id=note.author_id, username=usernames.get(note.author_id)),
            tags=tags,
            is_public=note.is_public,
            created_at=note.created_at,
            updated_at=note.updated_at,
        )

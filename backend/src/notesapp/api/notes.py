"""Notes API endpoints."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.common import MessageResponse
from ..core.schemas.notes import (
    NoteCreate,
    NoteEnvelope,
    NoteListResponse,
    NoteMessageEnvelope,
    NoteUpdate,
)
from ..core.services import NoteService
from ..database import get_db_session
from ..middleware.auth import get_current_user_id, get_optional_user_id

router = APIRouter(prefix="/notes", tags=["notes"])


@router.get("/", response_model=NoteListResponse)
async def list_notes(
    page: Optional[str] = Query(None, description="Page number, defaults to 1"),
    limit: Optional[str] = Query(None, description="Page size, defaults to 10"),
    search: Optional[str] = Query(None, description="Case-insensitive text in title or content"),
    tags: Optional[str] = Query(None, description="Comma separated tags, any may match"),
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """List the caller's notes."""
    note_service = NoteService(session)
    return await note_service.list_user_notes(
        user_id=current_user_id, page=page, limit=limit, search=search, tags=tags
    )


# declared before /{note_id} so "public" is never taken for an id
@router.get("/public/all", response_model=NoteListResponse)
async def list_public_notes(
    page: Optional[str] = Query(None, description="Page number, defaults to 1"),
    limit: Optional[str] = Query(None, description="Page size, defaults to 10"),
    search: Optional[str] = Query(None, description="Case-insensitive text in title or content"),
    session: AsyncSession = Depends(get_db_session),
):
    """List public notes of every user."""
    note_service = NoteService(session)
    return await note_service.list_public_notes(page=page, limit=limit, search=search)


@router.get("/{note_id}", response_model=NoteEnvelope)
async def get_note(
    note_id: str,
    current_user_id: Optional[UUID] = Depends(get_optional_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Get a note the caller owns, or any public note."""
    note_service = NoteService(session)
    note = await note_service.get_note(note_id, current_user_id)
    return NoteEnvelope(note=note)


@router.post("/", response_model=NoteMessageEnvelope, status_code=status.HTTP_201_CREATED)
async def create_note(
    request: NoteCreate,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Create a new note."""
    note_service = NoteService(session)
    note = await note_service.create_note(current_user_id, request)
    return NoteMessageEnvelope(message="Note created successfully", note=note)


@router.put("/{note_id}", response_model=NoteMessageEnvelope)
async def update_note(
    note_id: str,
    request: NoteUpdate,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Update a note."""
    note_service = NoteService(session)
    note = await note_service.update_note(note_id, current_user_id, request)
    return NoteMessageEnvelope(message="Note updated successfully", note=note)


@router.delete("/{note_id}", response_model=MessageResponse)
async def delete_note(
    note_id: str,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Delete a note."""
    note_service = NoteService(session)
    await note_service.delete_note(note_id, current_user_id)
    return MessageResponse(message="Note deleted successfully")

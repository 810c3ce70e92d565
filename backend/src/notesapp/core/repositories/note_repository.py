"""Note repository for database operations."""

from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import and_, delete, desc, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..filters import NoteFilter
from ..models.note import Note, NoteTag
from ..pagination import Page


class NoteRepository:
    """Repository for note database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_note(self, note_data: dict, tags: Optional[List[str]] = None) -> Note:
        """Create new note with its tags."""
        note = Note(**note_data)
        note.set_tags(tags or [])
        self.session.add(note)
        await self.session.commit()
        return await self.get_by_id(note.id)

    async def get_by_id(self, note_id: UUID) -> Optional[Note]:
        """Get note by ID with tags."""
        stmt = (
            select(Note)
            .options(selectinload(Note.tag_links))
            .where(Note.id == note_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_id_and_user(self, note_id: UUID, user_id: UUID) -> Optional[Note]:
        """Get note by ID if owned by user."""
        stmt = (
            select(Note)
            .options(selectinload(Note.tag_links))
            .where(and_(Note.id == note_id, Note.author_id == user_id))
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_visible(self, note_id: UUID, user_id: Optional[UUID]) -> Optional[Note]:
        """Get note by ID if owned by user or public."""
        visibility = Note.is_public.is_(True)
        if user_id is not None:
            visibility = or_(Note.author_id == user_id, visibility)
        stmt = (
            select(Note)
            .options(selectinload(Note.tag_links))
            .where(and_(Note.id == note_id, visibility))
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def save(self, note: Note) -> Note:
        """Persist pending changes of a loaded note and reload it."""
        note.touch()
        await self.session.commit()
        return await self.get_by_id(note.id)

    async def delete_note(self, note_id: UUID, user_id: UUID) -> bool:
        """Delete note and its tags if owned by user."""
        owned = and_(Note.id == note_id, Note.author_id == user_id)
        # tag rows first, scoped by the same ownership condition
        await self.session.execute(
            delete(NoteTag).where(NoteTag.note_id.in_(select(Note.id).where(owned)))
        )
        result = await self.session.execute(delete(Note).where(owned))
        await self.session.commit()
        return result.rowcount > 0

    async def find(self, note_filter: NoteFilter, page: Page) -> Tuple[List[Note], int]:
        """Return one page of notes matching the filter plus the total match count."""
        where = note_filter.to_clause()

        count_stmt = select(func.count(Note.id)).where(where)
        total_result = await self.session.execute(count_stmt)
        total_count = total_result.scalar() or 0

        stmt = (
            select(Note)
            .options(selectinload(Note.tag_links))
            .where(where)
            .order_by(desc(Note.updated_at), desc(Note.id))
            .offset(page.offset)
            .limit(page.size)
        )
        result = await self.session.execute(stmt)
        notes = result.scalars().all()

        return list(notes), total_count

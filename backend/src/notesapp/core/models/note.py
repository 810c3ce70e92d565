# Note model for user content
import uuid
from typing import Iterable, List

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Index, Integer, Text, String, event
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.orm import attributes as orm_attributes

from .base import BaseModel
from .types import GUID

TITLE_MAX_LENGTH = 100
CONTENT_MAX_LENGTH = 5000


class Note(BaseModel):
    """Note owned by exactly one user."""

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    is_public: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # owner reference, never reassigned
    author_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    tag_links: Mapped[List["NoteTag"]] = relationship(
        "NoteTag",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="NoteTag.position",
        lazy="selectin",
        doc="Ordered tags of this note",
    )

    __table_args__ = (
        Index("idx_notes_author_updated", "author_id", "updated_at"),
        Index("idx_notes_public_updated", "is_public", "updated_at"),
        CheckConstraint(f"length(title) <= {TITLE_MAX_LENGTH}", name="ck_notes_title_len"),
        CheckConstraint(f"length(content) <= {CONTENT_MAX_LENGTH}", name="ck_notes_content_len"),
    )

    def __repr__(self) -> str:
        truncated = self.title if len(self.title) <= 30 else (self.title[:30] + "...")
        return f"<Note(title='{truncated}', author_id={self.author_id})>"

    @property
    def tags(self) -> List[str]:
        """Tag names in their stored order."""
        return [link.name for link in self.tag_links]

    def set_tags(self, names: Iterable[str]) -> None:
        """Replace the tag list, keeping order; old rows are deleted on flush."""
        self.tag_links = [
            NoteTag(name=name, position=position) for position, name in enumerate(names)
        ]


class NoteTag(BaseModel):
    """One tag of a note at a given position."""

    __tablename__ = "note_tags"

    note_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("notes.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        Index("idx_note_tags_note_id", "note_id"),
        Index("idx_note_tags_name", "name"),
    )

    def __repr__(self) -> str:
        return f"<NoteTag(note_id={self.note_id}, name='{self.name}')>"


# Start new notes with an empty, already-loaded tag collection to avoid lazy loads
@event.listens_for(Note, "init", propagate=True)
def _init_note_collections(target, args, kwargs):
    if "tag_links" not in kwargs:
        orm_attributes.set_committed_value(target, "tag_links", [])

"""
Note filters.

A ``NoteFilter`` is an immutable description of which notes a query may
return. It is built by pure functions from the caller identity and query
parameters, so the access rules can be checked without a database:
``to_clause()`` renders it for SQLAlchemy and ``matches()`` evaluates the
same rules against an in-memory note.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple
from uuid import UUID

from sqlalchemy import and_, exists, false, or_, select, true
from sqlalchemy.sql.elements import ColumnElement

from .models.note import Note, NoteTag


def parse_tag_list(raw: Optional[str]) -> Tuple[str, ...]:
    """Split a comma separated ``tags`` query value into trimmed names."""
    if not raw:
        return ()
    return tuple(tag.strip() for tag in raw.split(",") if tag.strip())


def normalize_search(raw: Optional[str]) -> Optional[str]:
    """Empty search strings mean "no search"."""
    if raw is None or raw == "":
        return None
    return raw


@dataclass(frozen=True)
class NoteFilter:
    author_id: Optional[UUID] = None
    public_only: bool = False
    search: Optional[str] = None
    tags: Tuple[str, ...] = ()

    def to_clause(self) -> ColumnElement[bool]:
        """Render as a WHERE clause over ``Note``."""
        clauses = []
        if self.author_id is not None:
            clauses.append(Note.author_id == self.author_id)
        if self.public_only:
            clauses.append(Note.is_public.is_(True))
        if self.search is not None:
            clauses.append(
                or_(
                    Note.title.icontains(self.search, autoescape=True),
                    Note.content.icontains(self.search, autoescape=True),
                )
            )
        if self.tags:
            clauses.append(
                exists(
                    select(NoteTag.id).where(
                        NoteTag.note_id == Note.id, NoteTag.name.in_(self.tags)
                    )
                )
            )
        if self.author_id is None and not self.public_only:
            # an unscoped filter must never leak notes
            return false()
        return and_(true(), *clauses)

    def matches(self, note: Any) -> bool:
        """Evaluate against an object exposing author_id, is_public, title, content, tags."""
        if self.author_id is None and not self.public_only:
            return False
        if self.author_id is not None and note.author_id != self.author_id:
            return False
        if self.public_only and not note.is_public:
            return False
        if self.search is not None:
            needle = self.search.lower()
            if needle not in note.title.lower() and needle not in note.content.lower():
                return False
        if self.tags and not set(self.tags).intersection(note.tags):
            return False
        return True


def owned_notes_filter(
    author_id: UUID, search: Optional[str] = None, tags: Optional[str | Iterable[str]] = None
) -> NoteFilter:
    """Notes written by ``author_id``, optionally searched and tag filtered."""
    if isinstance(tags, str) or tags is None:
        tag_tuple = parse_tag_list(tags)
    else:
        tag_tuple = tuple(tag.strip() for tag in tags if tag and tag.strip())
    return NoteFilter(author_id=author_id, search=normalize_search(search), tags=tag_tuple)


def public_notes_filter(search: Optional[str] = None) -> NoteFilter:
    """Public notes of any author, optionally searched."""
    return NoteFilter(public_only=True, search=normalize_search(search))

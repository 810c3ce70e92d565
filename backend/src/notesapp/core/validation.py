"""
Note field validation.

Runs in the service layer before anything is written, so that the checks
happen after ownership has been resolved and produce a ``ValidationError``
with a client-facing message.
"""

from typing import Any, List, Optional

from ..exceptions import ValidationError
from .models.note import CONTENT_MAX_LENGTH, TITLE_MAX_LENGTH

REQUIRED_MESSAGE = "Title and content are required"
TITLE_TOO_LONG_MESSAGE = f"Title must be {TITLE_MAX_LENGTH} characters or less"
CONTENT_TOO_LONG_MESSAGE = f"Content must be {CONTENT_MAX_LENGTH} characters or less"
TITLE_EMPTY_MESSAGE = "Title cannot be empty"
CONTENT_EMPTY_MESSAGE = "Content cannot be empty"


def clean_tags(tags: Any) -> List[str]:
    """Trim tags, drop blanks and repeats; anything but a list becomes []."""
    if not isinstance(tags, list):
        return []
    cleaned: List[str] = []
    for tag in tags:
        if not isinstance(tag, str):
            raise ValidationError("Tags must be strings", field="tags")
        name = tag.strip()
        if name and name not in cleaned:
            cleaned.append(name)
    return cleaned


def _check_title_length(title: str) -> None:
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(TITLE_TOO_LONG_MESSAGE, field="title")


def _check_content_length(content: str) -> None:
    if len(content) > CONTENT_MAX_LENGTH:
        raise ValidationError(CONTENT_TOO_LONG_MESSAGE, field="content")


def validate_new_note(title: Optional[str], content: Optional[str]) -> tuple[str, str]:
    """Return trimmed (title, content) for a new note."""
    title = (title or "").strip()
    content = (content or "").strip()
    if not title or not content:
        raise ValidationError(REQUIRED_MESSAGE)
    _check_title_length(title)
    _check_content_length(content)
    return title, content


def validate_title_update(title: str) -> str:
    title = title.strip()
    if not title:
        raise ValidationError(TITLE_EMPTY_MESSAGE, field="title")
    _check_title_length(title)
    return title


def validate_content_update(content: str) -> str:
    content = content.strip()
    if not content:
        raise ValidationError(CONTENT_EMPTY_MESSAGE, field="content")
    _check_content_length(content)
    return content

"""Unit tests for core/validation.py"""

import pytest

from notesapp.core.validation import (
    CONTENT_EMPTY_MESSAGE,
    CONTENT_TOO_LONG_MESSAGE,
    REQUIRED_MESSAGE,
    TITLE_EMPTY_MESSAGE,
    TITLE_TOO_LONG_MESSAGE,
    clean_tags,
    validate_content_update,
    validate_new_note,
    validate_title_update,
)
from notesapp.exceptions import ValidationError


class TestNewNote:
    def test_trims_fields(self):
        assert validate_new_note("  Title ", "\nbody\t") == ("Title", "body")

    @pytest.mark.parametrize(
        "title,content",
        [(None, "body"), ("title", None), ("", "body"), ("   ", "body"), ("title", "  ")],
    )
    def test_missing_or_blank(self, title, content):
        with pytest.raises(ValidationError) as exc:
            validate_new_note(title, content)
        assert exc.value.message == REQUIRED_MESSAGE

    def test_title_length_boundary(self):
        assert validate_new_note("a" * 100, "body")[0] == "a" * 100
        with pytest.raises(ValidationError) as exc:
            validate_new_note("a" * 101, "body")
        assert exc.value.message == "Title must be 100 characters or less"
        assert exc.value.message == TITLE_TOO_LONG_MESSAGE

    def test_content_length_boundary(self):
        validate_new_note("t", "c" * 5000)
        with pytest.raises(ValidationError) as exc:
            validate_new_note("t", "c" * 5001)
        assert exc.value.message == CONTENT_TOO_LONG_MESSAGE

    def test_length_is_checked_after_trimming(self):
        title, _ = validate_new_note(" " + "a" * 100 + " ", "body")
        assert len(title) == 100


class TestUpdates:
    def test_blank_title(self):
        with pytest.raises(ValidationError) as exc:
            validate_title_update("   ")
        assert exc.value.message == TITLE_EMPTY_MESSAGE

    def test_blank_content(self):
        with pytest.raises(ValidationError) as exc:
            validate_content_update("")
        assert exc.value.message == CONTENT_EMPTY_MESSAGE

    def test_long_title(self):
        with pytest.raises(ValidationError):
            validate_title_update("x" * 101)

    def test_long_content(self):
        with pytest.raises(ValidationError):
            validate_content_update("x" * 5001)

    def test_values_are_trimmed(self):
        assert validate_title_update(" New ") == "New"
        assert validate_content_update(" text ") == "text"


class TestTags:
    def test_trims_and_dedupes(self):
        assert clean_tags([" work", "home ", "work", "", "  "]) == ["work", "home"]

    @pytest.mark.parametrize("raw", [None, "work", {"a": 1}, 3])
    def test_non_list_becomes_empty(self, raw):
        assert clean_tags(raw) == []

    def test_non_string_entry_rejected(self):
        with pytest.raises(ValidationError) as exc:
            clean_tags(["ok", 5])
        assert exc.value.field == "tags"

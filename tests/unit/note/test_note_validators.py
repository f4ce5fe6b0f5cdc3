"""Tests for note field validators."""

import pytest

from ainotes.core.modules.note.validators import MAX_TAG_LENGTH, MAX_TITLE_LENGTH, validate_content, validate_tags, validate_title
from ainotes.errors import ValidationError


class TestValidateTitle:
    def test_title_is_trimmed(self):
        assert validate_title("  Plans  ") == "Plans"

    def test_blank_title_rejected(self):
        with pytest.raises(ValidationError, match="Title is required"):
            validate_title("   ")

    def test_too_long_title_rejected(self):
        with pytest.raises(ValidationError):
            validate_title("x" * (MAX_TITLE_LENGTH + 1))


class TestValidateContent:
    def test_content_kept_as_written(self):
        assert validate_content("  indented\n") == "  indented\n"

    def test_blank_content_rejected(self):
        with pytest.raises(ValidationError, match="Content is required"):
            validate_content("\n\t ")


class TestValidateTags:
    def test_tags_trimmed_order_and_duplicates_kept(self):
        assert validate_tags([" b", "a ", "b"]) == ["b", "a", "b"]

    def test_empty_list_allowed(self):
        assert validate_tags([]) == []

    def test_blank_tag_rejected(self):
        with pytest.raises(ValidationError, match="Tags cannot be empty"):
            validate_tags(["ok", " "])

    def test_long_tag_rejected(self):
        with pytest.raises(ValidationError):
            validate_tags(["x" * (MAX_TAG_LENGTH + 1)])

"""Tests for the note store."""

from uuid import uuid4

import pytest

from ainotes.core.modules.note.models import NoteFormData, NoteUpdate
from ainotes.errors import NotFoundError, ValidationError


class TestCreateNote:
    """Tests for note creation."""

    async def test_create_then_get(self, core, note_data):
        note = await core.services.note.create_note("u1", note_data)
        fetched = await core.services.note.get_note(note.id)

        assert fetched is not None
        assert fetched.owner_id == "u1"
        assert fetched.title == "Groceries"
        assert fetched.content == note_data.content
        assert fetched.tags == ["shopping"]
        assert fetched.is_favorite is False
        assert fetched.summary is None
        assert fetched.created_at == fetched.updated_at

    async def test_tags_default_to_empty(self, core):
        note = await core.services.note.create_note("u1", NoteFormData(title="T", content="C"))
        assert note.tags == []

    async def test_duplicate_tags_are_kept(self, core):
        note = await core.services.note.create_note("u1", NoteFormData(title="T", content="C", tags=["x", "x"]))
        assert note.tags == ["x", "x"]

    async def test_ids_are_unique(self, core, note_data):
        first = await core.services.note.create_note("u1", note_data)
        second = await core.services.note.create_note("u1", note_data)
        assert first.id != second.id

    @pytest.mark.parametrize(("title", "content"), [("", "content"), ("   ", "content"), ("title", ""), ("title", "\n ")])
    async def test_blank_title_or_content_rejected(self, core, title, content):
        with pytest.raises(ValidationError):
            await core.services.note.create_note("u1", NoteFormData(title=title, content=content))


class TestGetNote:
    """Tests for note lookup."""

    async def test_missing_note_returns_none(self, core):
        assert await core.services.note.get_note(uuid4()) is None


class TestUpdateNote:
    """Tests for partial updates."""

    async def test_only_given_fields_change(self, core, note_data):
        note = await core.services.note.create_note("u1", note_data)
        updated = await core.services.note.update_note(note.id, NoteUpdate(title="Weekly groceries"))

        assert updated.title == "Weekly groceries"
        assert updated.content == note.content
        assert updated.tags == note.tags
        assert updated.is_favorite == note.is_favorite
        assert updated.created_at == note.created_at
        assert updated.owner_id == note.owner_id

    async def test_updated_at_strictly_increases(self, core, note_data):
        note = await core.services.note.create_note("u1", note_data)
        first = await core.services.note.update_note(note.id, NoteUpdate(content="Buy eggs."))
        second = await core.services.note.update_note(note.id, NoteUpdate(content="Buy eggs and flour."))

        assert note.updated_at < first.updated_at < second.updated_at

    async def test_update_is_persisted(self, core, note_data):
        note = await core.services.note.create_note("u1", note_data)
        await core.services.note.update_note(note.id, NoteUpdate(tags=["x", "y"]))
        assert (await core.services.note.get_note(note.id)).tags == ["x", "y"]

    async def test_missing_note_raises(self, core):
        with pytest.raises(NotFoundError):
            await core.services.note.update_note(uuid4(), NoteUpdate(title="x"))

    async def test_blank_title_rejected(self, core, note_data):
        note = await core.services.note.create_note("u1", note_data)
        with pytest.raises(ValidationError):
            await core.services.note.update_note(note.id, NoteUpdate(title=" "))
        assert (await core.services.note.get_note(note.id)).title == "Groceries"

    async def test_explicit_none_summary_clears_it(self, core, note_data):
        note = await core.services.note.create_note("u1", note_data)
        await core.services.note.attach_summary(note.id, "Shopping list.")
        cleared = await core.services.note.update_note(note.id, NoteUpdate(summary=None))
        assert cleared.summary is None

    async def test_blank_summary_update_clears_it(self, core, note_data):
        note = await core.services.note.create_note("u1", note_data)
        await core.services.note.attach_summary(note.id, "Shopping list.")
        cleared = await core.services.note.update_note(note.id, NoteUpdate(summary="  "))
        assert cleared.summary is None

    async def test_summary_untouched_when_not_given(self, core, note_data):
        note = await core.services.note.create_note("u1", note_data)
        await core.services.note.attach_summary(note.id, "Shopping list.")
        updated = await core.services.note.update_note(note.id, NoteUpdate(title="Other"))
        assert updated.summary == "Shopping list."


class TestToggleFavorite:
    """Tests for the favorite flag."""

    async def test_toggle_twice_restores_flag(self, core, note_data):
        note = await core.services.note.create_note("u1", note_data)
        once = await core.services.note.toggle_favorite(note.id)
        twice = await core.services.note.toggle_favorite(note.id)

        assert once.is_favorite is True
        assert twice.is_favorite is False
        assert note.updated_at < once.updated_at < twice.updated_at

    async def test_missing_note_raises(self, core):
        with pytest.raises(NotFoundError):
            await core.services.note.toggle_favorite(uuid4())


class TestAttachSummary:
    """Tests for attaching generated summaries."""

    async def test_attach_sets_summary_and_bumps_updated_at(self, core, note_data):
        note = await core.services.note.create_note("u1", note_data)
        updated = await core.services.note.attach_summary(note.id, "  Buy milk and bread.  ")
        assert updated.summary == "Buy milk and bread."
        assert updated.updated_at > note.updated_at

    @pytest.mark.parametrize("summary", ["", "   ", "\n\t"])
    async def test_blank_summary_rejected(self, core, note_data, summary):
        note = await core.services.note.create_note("u1", note_data)
        await core.services.note.attach_summary(note.id, "Shopping list.")

        with pytest.raises(ValidationError, match="Summary"):
            await core.services.note.attach_summary(note.id, summary)
        assert (await core.services.note.get_note(note.id)).summary == "Shopping list."


class TestDeleteNote:
    """Tests for deletion."""

    async def test_delete_then_get_is_none(self, core, note_data):
        note = await core.services.note.create_note("u1", note_data)
        await core.services.note.delete_note(note.id)
        assert await core.services.note.get_note(note.id) is None

    async def test_delete_is_idempotent(self, core, note_data):
        note = await core.services.note.create_note("u1", note_data)
        await core.services.note.delete_note(note.id)
        await core.services.note.delete_note(note.id)
        await core.services.note.delete_note(uuid4())

    async def test_delete_notes_by_owner(self, core, note_data):
        await core.services.note.create_note("u1", note_data)
        await core.services.note.create_note("u1", note_data)
        kept = await core.services.note.create_note("u2", note_data)

        assert await core.services.note.delete_notes_by_owner("u1") == 2
        assert await core.services.note.get_notes_by_owner("u1") == []
        assert await core.services.note.get_notes_by_owner("u2") == [kept]


class TestWelcomeNote:
    """Tests for the welcome note seeded for new accounts."""

    async def test_welcome_note_is_favorited_with_summary(self, core):
        note = await core.services.note.create_welcome_note("u1")
        assert note.title == "Welcome to AI Notes"
        assert note.tags == ["welcome", "tutorial"]
        assert note.is_favorite is True
        assert note.summary

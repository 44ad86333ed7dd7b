"""
Jotter Backend: Note Store Unit Tests
======================================

What:  Tests for NoteStore against a real in-memory SQLite database.

What we test:
    ✅ Create / list / get / delete round trips
    ✅ Duplicate content rejected, table unchanged
    ✅ Missing ids are not errors
    ✅ Non-integer and out-of-range ids raise ValidationError
    ✅ Ids are never reused
    ✅ SQLAlchemy failures surface as StorageError
"""

import pytest
from sqlalchemy import text

from jotter.exceptions import DuplicateContentError, StorageError, ValidationError
from jotter.services.note_store import NoteStore, coerce_note_id


class TestCoerceNoteId:
    """Tests for converting external ids to integer keys."""

    def test_int_passes_through(self):
        assert coerce_note_id(7) == 7

    def test_numeric_string(self):
        assert coerce_note_id("42") == 42

    def test_surrounding_whitespace_is_ignored(self):
        assert coerce_note_id(" 3 ") == 3

    @pytest.mark.parametrize("value", ["abc", "1.5", "", "12abc", "1_000", "+5", "\u0661", "0x10"])
    def test_non_integer_string_rejected(self, value):
        with pytest.raises(ValidationError) as exc_info:
            coerce_note_id(value)
        assert exc_info.value.field == "id"

    def test_bool_rejected(self):
        with pytest.raises(ValidationError):
            coerce_note_id(True)

    def test_64_bit_bounds_accepted(self):
        assert coerce_note_id(str(2 ** 63 - 1)) == 2 ** 63 - 1
        assert coerce_note_id(str(-(2 ** 63))) == -(2 ** 63)
        assert coerce_note_id("-3") == -3

    @pytest.mark.parametrize("value", ["99999999999999999999999", 2 ** 63, -(2 ** 63) - 1])
    def test_out_of_range_rejected(self, value):
        with pytest.raises(ValidationError) as exc_info:
            coerce_note_id(value)
        assert exc_info.value.field == "id"


class TestNoteStoreCreate:
    """Tests for create and create_and_list."""

    @pytest.mark.asyncio
    async def test_create_returns_inserted_row(self, store):
        note = await store.create("hello")

        assert isinstance(note.id, int)
        assert note.content == "hello"

    @pytest.mark.asyncio
    async def test_create_and_list_includes_new_note(self, store):
        await store.create("first")

        notes = await store.create_and_list("second")

        assert {n.content for n in notes} == {"first", "second"}

    @pytest.mark.asyncio
    async def test_duplicate_content_rejected(self, store):
        await store.create("a")

        with pytest.raises(DuplicateContentError):
            await store.create("a")

        notes = await store.list_all()
        assert [n.content for n in notes] == ["a"]

    @pytest.mark.asyncio
    async def test_duplicate_is_a_storage_error(self, store):
        await store.create("a")

        with pytest.raises(StorageError):
            await store.create_and_list("a")

    @pytest.mark.asyncio
    async def test_failed_create_and_list_leaves_count_unchanged(self, store):
        await store.create("x")
        await store.create("y")
        before = await store.count()

        with pytest.raises(DuplicateContentError):
            await store.create_and_list("y")

        assert await store.count() == before

    @pytest.mark.asyncio
    async def test_ids_are_increasing(self, store):
        first = await store.create("one")
        second = await store.create("two")

        assert second.id > first.id

    @pytest.mark.asyncio
    async def test_unencodable_content_is_a_storage_error(self, store):
        with pytest.raises(StorageError):
            await store.create("\ud800")

        assert await store.count() == 0

    @pytest.mark.asyncio
    async def test_ids_not_reused_after_delete(self, store):
        first = await store.create("one")
        second = await store.create("two")
        await store.delete_by_id(second.id)
        await store.delete_all()

        third = await store.create("three")

        assert third.id > second.id > first.id


class TestNoteStoreRead:
    """Tests for list_all and get_by_id."""

    @pytest.mark.asyncio
    async def test_list_empty(self, store):
        assert await store.list_all() == []

    @pytest.mark.asyncio
    async def test_list_contains_all_notes(self, store):
        for content in ("x", "y", "z"):
            await store.create(content)

        notes = await store.list_all()

        assert {n.content for n in notes} == {"x", "y", "z"}

    @pytest.mark.asyncio
    async def test_get_by_id_found(self, store):
        note = await store.create("hello")

        result = await store.get_by_id(str(note.id))

        assert len(result) == 1
        assert result[0].id == note.id
        assert result[0].content == "hello"

    @pytest.mark.asyncio
    async def test_get_by_id_missing_is_empty(self, store):
        assert await store.get_by_id("999") == []

    @pytest.mark.asyncio
    async def test_get_by_id_invalid(self, store):
        with pytest.raises(ValidationError):
            await store.get_by_id("abc")


class TestNoteStoreDelete:
    """Tests for delete_all and delete_by_id."""

    @pytest.mark.asyncio
    async def test_delete_all_on_empty_table(self, store):
        await store.delete_all()
        assert await store.count() == 0

    @pytest.mark.asyncio
    async def test_delete_all_removes_everything(self, store):
        await store.create("a")
        await store.create("b")

        await store.delete_all()

        assert await store.list_all() == []

    @pytest.mark.asyncio
    async def test_delete_by_id_removes_only_that_note(self, store):
        keep = await store.create("keep")
        drop = await store.create("drop")

        await store.delete_by_id(str(drop.id))

        notes = await store.list_all()
        assert [n.id for n in notes] == [keep.id]

    @pytest.mark.asyncio
    async def test_delete_by_id_missing_is_not_an_error(self, store):
        await store.create("a")

        await store.delete_by_id(999)

        assert await store.count() == 1

    @pytest.mark.asyncio
    async def test_delete_by_id_invalid(self, store):
        with pytest.raises(ValidationError):
            await store.delete_by_id("not-a-number")


class TestNoteStoreLifecycle:
    """Tests for initialize, ping and failure translation."""

    @pytest.mark.asyncio
    async def test_initialize_is_idempotent(self, store):
        await store.create("kept")

        await store.initialize()

        assert await store.count() == 1

    @pytest.mark.asyncio
    async def test_ping(self, store):
        assert await store.ping() is True

    @pytest.mark.asyncio
    async def test_missing_table_raises_storage_error(self, store):
        async with store.engine.begin() as conn:
            await conn.execute(text("DROP TABLE notes"))

        with pytest.raises(StorageError) as exc_info:
            await store.list_all()

        assert not isinstance(exc_info.value, DuplicateContentError)
        assert exc_info.value.context["operation"] == "list_all"

    @pytest.mark.asyncio
    async def test_file_database(self, tmp_path):
        url = f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}"
        file_store = NoteStore(url)
        await file_store.initialize()
        try:
            await file_store.create("persisted")
        finally:
            await file_store.dispose()

        reopened = NoteStore(url)
        await reopened.initialize()
        try:
            notes = await reopened.list_all()
        finally:
            await reopened.dispose()

        assert [n.content for n in notes] == ["persisted"]

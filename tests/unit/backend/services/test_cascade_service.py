"""
Unit Tests for Cascade Delete.
"""

from unittest.mock import patch

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from threadnote.backend.core.exceptions import DatabaseError, NotFoundError
from threadnote.backend.models.mention import Mention
from threadnote.backend.models.note import Note
from threadnote.backend.schemas.note import NoteCreate
from threadnote.backend.services.cascade import CascadeDeleteService
from threadnote.backend.services.note import NoteService


@pytest.fixture
def notes(db_session, mock_publisher):
    return NoteService(db_session, publisher=mock_publisher)


@pytest.fixture
def cascade(db_session):
    return CascadeDeleteService(db_session)


async def _remaining_note_ids(db_session) -> set[str]:
    result = await db_session.execute(select(Note.id))
    return set(result.scalars().all())


async def _remaining_edges(db_session) -> set[tuple[str, str]]:
    result = await db_session.execute(select(Mention.from_note_id, Mention.to_note_id))
    return {(row.from_note_id, row.to_note_id) for row in result.all()}


class TestCascadeDelete:
    """Tests for CascadeDeleteService.delete_note."""

    @pytest.mark.asyncio
    async def test_deletes_subtree_and_touching_mentions(self, notes, cascade, db_session):
        root = await notes.create_note(NoteCreate(content="root"))
        unrelated = await notes.create_note(NoteCreate(content=f"about @{root.id}"))
        child1 = await notes.create_note(
            NoteCreate(content=f"see @{unrelated.id}", parent_id=root.id)
        )
        child2 = await notes.create_note(NoteCreate(content="plain", parent_id=root.id))
        bystander = await notes.create_note(NoteCreate(content=f"cc @{unrelated.id}"))

        result = await cascade.delete_note(root.id)

        assert result.root_id == root.id
        assert set(result.deleted_note_ids) == {root.id, child1.id, child2.id}
        assert result.deleted_mention_count == 2
        assert await _remaining_note_ids(db_session) == {unrelated.id, bystander.id}
        assert await _remaining_edges(db_session) == {(bystander.id, unrelated.id)}

    @pytest.mark.asyncio
    async def test_deleting_reply_keeps_root_and_siblings(self, notes, cascade, db_session):
        root = await notes.create_note(NoteCreate(content="root"))
        child1 = await notes.create_note(NoteCreate(content="one", parent_id=root.id))
        child2 = await notes.create_note(NoteCreate(content="two", parent_id=root.id))

        result = await cascade.delete_note(child1.id)

        assert result.deleted_note_ids == [child1.id]
        assert await _remaining_note_ids(db_session) == {root.id, child2.id}

    @pytest.mark.asyncio
    async def test_deletes_every_level(self, cascade, db_session):
        db_session.add_all([
            Note(id="rootaa", content="root", depth=0),
            Note(id="child1", content="child", parent_id="rootaa", depth=1),
            Note(id="grand1", content="grandchild", parent_id="child1", depth=2),
        ])
        await db_session.flush()

        result = await cascade.delete_note("rootaa")

        assert result.deleted_note_ids == ["rootaa", "child1", "grand1"]
        assert await _remaining_note_ids(db_session) == set()

    @pytest.mark.asyncio
    async def test_deleted_notes_leave_the_session(self, notes, cascade, db_session):
        root = await notes.create_note(NoteCreate(content="root"))

        await cascade.delete_note(root.id)

        assert await notes.repo.get_by_id_or_none(root.id) is None

    @pytest.mark.asyncio
    async def test_unknown_note(self, cascade):
        with pytest.raises(NotFoundError):
            await cascade.delete_note("Zz9Zz9")


class TestCascadeDeleteAtomicity:
    """A failure partway through leaves the committed subtree untouched."""

    @pytest.mark.asyncio
    async def test_failure_after_deeper_level_rolls_everything_back(self, notes, cascade, db_session):
        root = await notes.create_note(NoteCreate(content="root"))
        other = await notes.create_note(NoteCreate(content=f"about @{root.id}"))
        reply = await notes.create_note(
            NoteCreate(content=f"see @{other.id}", parent_id=root.id)
        )
        notes_before = await _remaining_note_ids(db_session)
        edges_before = await _remaining_edges(db_session)

        delete_many = cascade.repo.delete_many

        async def fail_on_root_level(ids):
            ids = list(ids)
            if root.id in ids:
                raise OperationalError("DELETE FROM notes", {}, Exception("database is locked"))
            return await delete_many(ids)

        with patch.object(cascade.repo, "delete_many", side_effect=fail_on_root_level):
            with pytest.raises(DatabaseError):
                await cascade.delete_note(root.id)

        db_session.expunge_all()
        await db_session.rollback()

        assert await _remaining_note_ids(db_session) == notes_before == {root.id, other.id, reply.id}
        assert await _remaining_edges(db_session) == edges_before == {
            (other.id, root.id),
            (reply.id, other.id),
        }

"""
Unit Tests for Thread Assembly.
"""

from datetime import datetime, timedelta

import pytest

from threadnote.backend.core.exceptions import NotFoundError
from threadnote.backend.models.note import Note
from threadnote.backend.services.thread import ThreadService, order_thread

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


def _note(note_id: str, parent_id: str | None = None, depth: int = 0, seconds: int = 0) -> Note:
    created_at = BASE_TIME + timedelta(seconds=seconds)
    return Note(
        id=note_id,
        content=f"note {note_id}",
        parent_id=parent_id,
        depth=depth,
        created_at=created_at,
        updated_at=created_at,
    )


@pytest.fixture
async def add_notes(db_session):
    """Insert notes directly, bypassing service rules."""
    async def _add(*notes: Note) -> None:
        db_session.add_all(notes)
        await db_session.flush()

    return _add


class TestOrderThread:
    """Tests for the display ordering."""

    def test_orders_by_depth_then_created_at(self):
        root = _note("rootaa", seconds=5)
        late = _note("lateaa", "rootaa", 1, seconds=30)
        early = _note("earlya", "rootaa", 1, seconds=10)

        assert order_thread([late, early, root]) == [root, early, late]

    def test_ties_broken_by_id(self):
        root = _note("rootaa")
        b = _note("bbbbbb", "rootaa", 1, seconds=10)
        a = _note("aaaaaa", "rootaa", 1, seconds=10)

        assert order_thread([b, root, a]) == [root, a, b]


class TestGetThread:
    """Tests for ThreadService.get_thread."""

    @pytest.fixture
    def threads(self, db_session):
        return ThreadService(db_session)

    @pytest.mark.asyncio
    async def test_single_root(self, threads, add_notes):
        await add_notes(_note("rootaa"))

        thread = await threads.get_thread("rootaa")

        assert [n.id for n in thread] == ["rootaa"]

    @pytest.mark.asyncio
    async def test_same_thread_from_any_member(self, threads, add_notes):
        await add_notes(
            _note("rootaa"),
            _note("child1", "rootaa", 1, seconds=10),
            _note("child2", "rootaa", 1, seconds=20),
        )

        for note_id in ("rootaa", "child1", "child2"):
            thread = await threads.get_thread(note_id)
            assert [n.id for n in thread] == ["rootaa", "child1", "child2"]

    @pytest.mark.asyncio
    async def test_siblings_in_posting_order(self, threads, add_notes):
        await add_notes(
            _note("rootaa"),
            _note("child1", "rootaa", 1, seconds=20),
            _note("child2", "rootaa", 1, seconds=10),
        )

        thread = await threads.get_thread("child1")

        assert [n.id for n in thread] == ["rootaa", "child2", "child1"]

    @pytest.mark.asyncio
    async def test_collects_deeper_levels(self, threads, add_notes):
        await add_notes(
            _note("rootaa"),
            _note("child1", "rootaa", 1, seconds=10),
            _note("grand1", "child1", 2, seconds=5),
        )

        thread = await threads.get_thread("grand1")

        assert [n.id for n in thread] == ["rootaa", "child1", "grand1"]

    @pytest.mark.asyncio
    async def test_other_threads_excluded(self, threads, add_notes):
        await add_notes(
            _note("rootaa"),
            _note("child1", "rootaa", 1, seconds=10),
            _note("rootbb", seconds=1),
            _note("child2", "rootbb", 1, seconds=11),
        )

        thread = await threads.get_thread("child1")

        assert [n.id for n in thread] == ["rootaa", "child1"]

    @pytest.mark.asyncio
    async def test_broken_parent_chain_uses_last_reachable_note(self, threads, add_notes):
        await add_notes(
            _note("orphan", "ghost1", 1),
            _note("child1", "orphan", 2, seconds=10),
        )

        thread = await threads.get_thread("child1")

        assert [n.id for n in thread] == ["orphan", "child1"]

    @pytest.mark.asyncio
    async def test_parent_loop_terminates(self, threads, add_notes):
        await add_notes(
            _note("loopaa", "loopbb", 1),
            _note("loopbb", "loopaa", 1, seconds=1),
        )

        thread = await threads.get_thread("loopaa")

        assert sorted(n.id for n in thread) == ["loopaa", "loopbb"]

    @pytest.mark.asyncio
    async def test_unknown_note(self, threads):
        with pytest.raises(NotFoundError):
            await threads.get_thread("Zz9Zz9")

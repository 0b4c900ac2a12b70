"""
Thread Service.

Reconstructs the thread a note belongs to: walk parent links up to the
root, then collect every descendant of that root.

Both walks are iterative and keep a visited set, so a parent/child loop
left behind by bad data ends the walk instead of spinning forever.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from threadnote.backend.core.exceptions import NotFoundError
from threadnote.backend.models.note import Note
from threadnote.backend.repositories.note import NoteRepository
from threadnote.backend.services.base import BaseService


def order_thread(notes: list[Note]) -> list[Note]:
    """Display order: depth, then posting time, then id as a final tie-break."""
    return sorted(notes, key=lambda note: (note.depth, note.created_at, note.id))


async def collect_subtree_levels(repo: NoteRepository, root: Note) -> list[list[Note]]:
    """
    Collect root and all of its descendants, one list per tree level.

    Children are fetched a whole level at a time. A note reached twice
    is not expanded again.

    Returns:
        Levels from the root downwards; levels[0] == [root]
    """
    seen: set[str] = {root.id}
    levels: list[list[Note]] = [[root]]
    frontier = [root.id]

    while frontier:
        level = []
        for child in await repo.find_by_parent_ids(frontier):
            if child.id in seen:
                continue
            seen.add(child.id)
            level.append(child)
        if not level:
            break
        levels.append(level)
        frontier = [note.id for note in level]

    return levels


class ThreadService(BaseService):
    """Service for reading reply threads."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = NoteRepository(session)

    async def resolve_root(self, note: Note) -> Note:
        """
        Follow parent links from note to its thread root.

        A missing parent or a revisited note ends the walk; the last
        note reached is then treated as the root.
        """
        seen = {note.id}
        current = note

        while current.parent_id is not None:
            if current.parent_id in seen:
                self._logger.warning(
                    "Parent chain loops back on itself",
                    extra={"note_id": note.id, "at": current.id},
                )
                break

            parent = await self.repo.get_by_id_or_none(current.parent_id)
            if parent is None:
                self._logger.warning(
                    "Parent chain is broken",
                    extra={"note_id": note.id, "missing_parent_id": current.parent_id},
                )
                break

            seen.add(parent.id)
            current = parent

        return current

    async def get_thread(self, note_id: str) -> list[Note]:
        """
        Get the full thread containing a note, root first.

        Args:
            note_id: Any note in the thread

        Returns:
            Root and all descendants ordered by depth, then creation time

        Raises:
            NotFoundError: If note not found
        """
        note = await self.repo.get_by_id_or_none(note_id)
        if note is None:
            raise NotFoundError("Note not found")

        root = await self.resolve_root(note)
        levels = await collect_subtree_levels(self.repo, root)
        thread = order_thread([member for level in levels for member in level])

        self._log_debug("Thread assembled", note_id=note_id, root_id=root.id, size=len(thread))
        return thread

"""
Cascade Delete Service.

Removes a note together with its whole reply subtree and every mention
touching any note in that subtree, without relying on foreign-key
cascades in the database.

All statements run in the caller's transaction. If any of them fails the
exception propagates and the session rolls back, so either the whole
subtree disappears or nothing does.
"""

from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncSession

from threadnote.backend.core.exceptions import NotFoundError
from threadnote.backend.repositories.mention import MentionRepository
from threadnote.backend.repositories.note import NoteRepository
from threadnote.backend.services.base import BaseService
from threadnote.backend.services.thread import collect_subtree_levels


@dataclass
class CascadeResult:
    """What a cascade delete removed."""

    root_id: str
    deleted_note_ids: list[str] = field(default_factory=list)
    deleted_mention_count: int = 0


class CascadeDeleteService(BaseService):
    """Service for deleting notes with their descendants and mentions."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = NoteRepository(session)
        self.mention_repo = MentionRepository(session)

    async def delete_note(self, note_id: str) -> CascadeResult:
        """
        Delete a note, its entire subtree, and all mentions touching them.

        Mentions go first, then notes level by level from the deepest up,
        so no row is ever removed while something still references it.
        Notes outside the subtree are never removed, even when they
        mention or are mentioned by a deleted note.

        Args:
            note_id: Root of the subtree to delete

        Returns:
            CascadeResult listing the removed notes

        Raises:
            NotFoundError: If note not found
        """
        root = await self.repo.get_by_id_or_none(note_id)
        if root is None:
            raise NotFoundError("Note not found")

        levels = await collect_subtree_levels(self.repo, root)
        note_ids = [note.id for level in levels for note in level]

        self._log_operation("Deleting note subtree", note_id=note_id, note_count=len(note_ids))

        mention_count = await self._execute_db_operation(
            "delete_subtree_mentions",
            self.mention_repo.delete_touching(note_ids),
        )

        for level in reversed(levels):
            await self._execute_db_operation(
                "delete_subtree_notes",
                self.repo.delete_many([note.id for note in level]),
            )
            for note in level:
                self.session.expunge(note)

        self._log_debug(
            "Note subtree deleted",
            note_id=note_id,
            deleted_notes=len(note_ids),
            deleted_mentions=mention_count,
        )
        return CascadeResult(
            root_id=note_id,
            deleted_note_ids=note_ids,
            deleted_mention_count=mention_count,
        )

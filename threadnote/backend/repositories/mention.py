"""
Mention Repository.

Data access layer for mention edges.
"""

from collections.abc import Iterable

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from threadnote.backend.models.mention import Mention
from threadnote.backend.models.note import Note
from threadnote.backend.repositories.base import BaseRepository


class MentionRepository(BaseRepository[Mention]):
    """Repository for Mention model."""

    model = Mention

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get_all_edges(self) -> list[tuple[str, str]]:
        """
        Read every mention edge as (from_note_id, to_note_id).

        Duplicate pairs (same target at several positions) are returned
        once each per row; callers that only need adjacency may collapse them.
        """
        result = await self.session.execute(
            select(Mention.from_note_id, Mention.to_note_id)
            .order_by(Mention.from_note_id, Mention.position)
        )
        return [(row.from_note_id, row.to_note_id) for row in result.all()]

    async def find_incoming_with_notes(self, to_note_id: str) -> list[tuple[Note, int]]:
        """
        Get every note that mentions to_note_id, with the mention position.

        Returns:
            (source note, position) pairs ordered by source creation time
        """
        result = await self.session.execute(
            select(Note, Mention.position)
            .join(Mention, Mention.from_note_id == Note.id)
            .where(Mention.to_note_id == to_note_id)
            .order_by(Note.created_at, Note.id, Mention.position)
        )
        return [(note, position) for note, position in result.all()]

    async def create_many(
        self,
        from_note_id: str,
        references: Iterable[tuple[str, int]],
    ) -> list[Mention]:
        """
        Insert one mention row per (to_note_id, position) pair.

        Returns:
            The created mentions
        """
        mentions = [
            Mention(from_note_id=from_note_id, to_note_id=to_note_id, position=position)
            for to_note_id, position in references
        ]
        if mentions:
            self.session.add_all(mentions)
            await self.session.flush()
        return mentions

    async def delete_outgoing(self, from_note_id: str) -> int:
        """Delete a note's outgoing mentions. Returns rows deleted."""
        result = await self.session.execute(
            delete(Mention)
            .where(Mention.from_note_id == from_note_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0

    async def delete_touching(self, note_ids: Iterable[str]) -> int:
        """
        Delete every mention whose source or target is in note_ids.

        Returns:
            Number of rows deleted
        """
        id_list = list(note_ids)
        if not id_list:
            return 0
        result = await self.session.execute(
            delete(Mention)
            .where(
                or_(
                    Mention.from_note_id.in_(id_list),
                    Mention.to_note_id.in_(id_list),
                )
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0

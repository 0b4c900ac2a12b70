"""
Search Service.

Content and mention lookups over committed notes.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from threadnote.backend.core.identifiers import is_valid_id
from threadnote.backend.models.note import Note
from threadnote.backend.repositories.mention import MentionRepository
from threadnote.backend.repositories.note import NoteRepository
from threadnote.backend.services.base import BaseService


class SearchService(BaseService):
    """Service for searching notes."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = NoteRepository(session)
        self.mention_repo = MentionRepository(session)

    async def search_by_content(self, query: str, limit: int = 20) -> list[Note]:
        """
        Search notes whose content contains query (case-insensitive).

        Args:
            query: Search query
            limit: Maximum results

        Returns:
            Matching notes, newest first
        """
        self._log_debug("Searching notes by content", query=query, limit=limit)
        return await self.repo.search_by_content(query, limit=limit)

    async def search_by_mention(self, note_id: str, limit: int = 20) -> list[Note]:
        """
        Find the notes that mention note_id.

        A note that mentions the target several times is returned once.
        Unknown or malformed identifiers simply have no mentions.
        """
        self._log_debug("Searching notes by mention", note_id=note_id, limit=limit)
        if not is_valid_id(note_id):
            return []

        notes: dict[str, Note] = {}
        for note, _ in await self.mention_repo.find_incoming_with_notes(note_id):
            notes.setdefault(note.id, note)
        return list(notes.values())[:limit]

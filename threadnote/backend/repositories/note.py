"""
Note Repository.

Data access layer for notes. Tree-shaped queries (children, roots) live
here; traversal logic lives in the services.
"""

from collections.abc import Iterable

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from threadnote.backend.models.note import Note
from threadnote.backend.repositories.base import BaseRepository


class NoteRepository(BaseRepository[Note]):
    """
    Repository for Note model.

    Inherits standard CRUD operations from BaseRepository
    and adds reply-tree queries.
    """

    model = Note

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def find_by_parent_ids(self, parent_ids: Iterable[str]) -> list[Note]:
        """
        Get the direct children of every note in parent_ids.

        Args:
            parent_ids: Parent note IDs

        Returns:
            Children in posting order (created_at, then id)
        """
        id_list = list(parent_ids)
        if not id_list:
            return []
        result = await self.session.execute(
            select(Note)
            .where(Note.parent_id.in_(id_list))
            .order_by(Note.created_at, Note.id)
        )
        return list(result.scalars().all())

    async def get_roots(self, limit: int = 20, offset: int = 0) -> list[Note]:
        """
        Get thread roots, newest first.

        Args:
            limit: Maximum number of notes to return
            offset: Number of notes to skip

        Returns:
            List of root notes
        """
        result = await self.session.execute(
            select(Note)
            .where(Note.parent_id.is_(None))
            .order_by(Note.created_at.desc(), Note.id)
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all())

    async def count_roots(self) -> int:
        """Get count of thread roots."""
        result = await self.session.execute(
            select(func.count())
            .select_from(Note)
            .where(Note.parent_id.is_(None))
        )
        return result.scalar_one()

    async def search_by_content(self, query: str, limit: int = 20) -> list[Note]:
        """
        Search notes by content (case-insensitive substring).

        LIKE wildcards in the query match themselves.

        Args:
            query: Search query string
            limit: Maximum number of results

        Returns:
            Matching notes, newest first
        """
        result = await self.session.execute(
            select(Note)
            .where(Note.content.icontains(query, autoescape=True))
            .order_by(Note.created_at.desc(), Note.id)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def delete_many(self, ids: Iterable[str]) -> int:
        """
        Delete notes by ID in a single statement.

        Returns:
            Number of rows deleted
        """
        id_list = list(ids)
        if not id_list:
            return 0
        result = await self.session.execute(
            delete(Note)
            .where(Note.id.in_(id_list))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0

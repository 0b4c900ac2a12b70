"""
Note Service.

Business logic layer for notes. Every write goes through here so that
the content-length rule, the thread-depth rule and the mention-graph
acyclicity rule are checked before anything is persisted.

All reads and writes of one operation share the request's session, so
the cycle check sees the same graph that the write then changes, and a
failure at any step rolls the whole operation back. Each write operation
commits before its search-index event is published, so the index is
never told about a change that was not stored.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from threadnote.backend.core.constants import (
    ID_GENERATION_ATTEMPTS,
    MAX_CONTENT_LENGTH,
    MAX_THREAD_DEPTH,
    MIN_CONTENT_LENGTH,
)
from threadnote.backend.core.exceptions import (
    CircularReferenceError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from threadnote.backend.core.identifiers import generate_id
from threadnote.backend.core.utils import utc_now
from threadnote.backend.events.publishers import NoteEventPublisher
from threadnote.backend.models.mention import Mention
from threadnote.backend.models.note import Note
from threadnote.backend.repositories.mention import MentionRepository
from threadnote.backend.repositories.note import NoteRepository
from threadnote.backend.schemas.note import NoteCreate, NoteUpdate
from threadnote.backend.services.base import BaseService
from threadnote.backend.services.cascade import CascadeDeleteService, CascadeResult
from threadnote.backend.services.mention_graph import MentionGraph
from threadnote.backend.services.mention_parser import extract_references, find_positions
from threadnote.backend.services.thread import ThreadService


class NoteService(BaseService):
    """
    Service for note business logic.

    Handles creation, content updates, thread reads and cascade deletes.
    """

    def __init__(
        self,
        session: AsyncSession,
        publisher: NoteEventPublisher | None = None,
    ) -> None:
        super().__init__(session)
        self.repo = NoteRepository(session)
        self.mention_repo = MentionRepository(session)
        self.threads = ThreadService(session)
        self.cascade = CascadeDeleteService(session)
        self.publisher = publisher or NoteEventPublisher()

    async def create_note(self, data: NoteCreate) -> Note:
        """
        Create a new note, optionally as a reply, and record its mentions.

        Args:
            data: Note creation data

        Returns:
            Created note

        Raises:
            ValidationError: If content length or reply depth is invalid
            NotFoundError: If the parent note does not exist
            CircularReferenceError: If the mentions would close a cycle
        """
        self._validate_content(data.content)
        self._log_operation("Creating note", parent_id=data.parent_id, length=len(data.content))

        note_id = await self._allocate_id()

        targets = extract_references(data.content)
        if targets:
            await self._ensure_acyclic(note_id, targets, replaces_existing=False)

        depth = 0
        if data.parent_id is not None:
            parent = await self.repo.get_by_id_or_none(data.parent_id)
            if parent is None:
                raise NotFoundError("Parent note not found")
            if parent.depth >= MAX_THREAD_DEPTH:
                raise ValidationError(
                    "Cannot reply to a note that is already a reply",
                    details={"parent_id": parent.id, "max_depth": MAX_THREAD_DEPTH},
                    code="VAL_THREAD_DEPTH",
                )
            depth = parent.depth + 1

        note = await self._execute_db_operation(
            "create_note",
            self.repo.create(
                id=note_id,
                content=data.content,
                parent_id=data.parent_id,
                depth=depth,
            ),
        )
        await self._write_mentions(note)
        await self._commit("create_note")

        self._log_debug("Note created", note_id=note.id, depth=depth)
        await self.publisher.note_indexed(note.id, note.content)
        return note

    async def get_note(self, note_id: str) -> Note:
        """
        Get a note by ID.

        Raises:
            NotFoundError: If note not found
        """
        return await self.repo.get_by_id(note_id)

    async def list_root_notes(
        self,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Note], int]:
        """
        List thread roots, newest first, with total count for pagination.

        Returns:
            Tuple of (notes list, total count)
        """
        notes = await self.repo.get_roots(limit=limit, offset=offset)
        total = await self.repo.count_roots()
        return notes, total

    async def update_note(self, note_id: str, data: NoteUpdate) -> Note:
        """
        Replace a note's content and re-index its mentions.

        The cycle check treats the new mention set as replacing the
        note's current outgoing edges, so editing mention text is never
        blocked by the note's own previous mentions.

        Args:
            note_id: Note ID to update
            data: New content

        Returns:
            Updated note

        Raises:
            ValidationError: If content length is invalid
            NotFoundError: If note not found
            CircularReferenceError: If the new mentions would close a cycle
        """
        self._validate_content(data.content)

        if not await self.repo.exists(note_id):
            raise NotFoundError("Note not found")

        self._log_operation("Updating note", note_id=note_id, length=len(data.content))

        targets = extract_references(data.content)
        if targets:
            await self._ensure_acyclic(note_id, targets, replaces_existing=True)

        removed = await self._execute_db_operation(
            "delete_outgoing_mentions",
            self.mention_repo.delete_outgoing(note_id),
        )
        note = await self._execute_db_operation(
            "update_note",
            self.repo.update(note_id, content=data.content, updated_at=utc_now()),
        )
        created = await self._write_mentions(note)
        await self._commit("update_note")

        self._log_debug(
            "Note updated",
            note_id=note_id,
            mentions_removed=removed,
            mentions_created=len(created),
        )
        await self.publisher.note_indexed(note.id, note.content)
        return note

    async def get_thread(self, note_id: str) -> list[Note]:
        """
        Get the ordered thread containing a note.

        Raises:
            NotFoundError: If note not found
        """
        return await self.threads.get_thread(note_id)

    async def get_mentions(self, note_id: str) -> list[tuple[Note, int]]:
        """
        Get the notes that mention a note, each with the mention position.

        Raises:
            NotFoundError: If note not found
        """
        if not await self.repo.exists(note_id):
            raise NotFoundError("Note not found")
        return await self.mention_repo.find_incoming_with_notes(note_id)

    async def delete_note(self, note_id: str) -> CascadeResult:
        """
        Delete a note with its replies and every mention touching them.

        Raises:
            NotFoundError: If note not found
        """
        result = await self.cascade.delete_note(note_id)
        await self._commit("delete_note")
        await self.publisher.notes_removed(result.deleted_note_ids)
        return result

    def _validate_content(self, content: str) -> None:
        self._validate_string_length(
            content,
            "content",
            min_length=MIN_CONTENT_LENGTH,
            max_length=MAX_CONTENT_LENGTH,
        )

    async def _allocate_id(self) -> str:
        """Mint an identifier not yet used by any note."""
        for _ in range(ID_GENERATION_ATTEMPTS):
            candidate = generate_id()
            if not await self.repo.exists(candidate):
                return candidate
            self._log_debug("Identifier collision, retrying", candidate=candidate)
        raise ConflictError("Could not allocate a unique note identifier")

    async def _ensure_acyclic(
        self,
        note_id: str,
        targets: list[str],
        replaces_existing: bool,
    ) -> None:
        """
        Reject the operation if note_id → targets would close a cycle.

        The graph snapshot is read in the current transaction.
        """
        graph = MentionGraph(await self.mention_repo.get_all_edges())
        if replaces_existing:
            graph.remove_outgoing(note_id)

        cycle = graph.find_cycle(note_id, targets)
        if cycle is not None:
            self._logger.warning(
                "Rejected mentions that would create a cycle",
                extra={"note_id": note_id, "cycle": cycle},
            )
            raise CircularReferenceError(details={"cycle": cycle})

    async def _write_mentions(self, note: Note) -> list[Mention]:
        """
        Insert one mention row per reference occurrence in the note.

        References to identifiers that do not belong to an existing note
        are skipped, so every stored mention points at a real note.
        """
        targets = extract_references(note.content)
        if not targets:
            return []

        existing = {target.id for target in await self.repo.get_many(targets)}
        resolved = [
            (target, position)
            for target in targets
            if target in existing
            for position in find_positions(note.content, target)
        ]

        skipped = [target for target in targets if target not in existing]
        if skipped:
            self._log_debug("Skipped mentions of unknown notes", note_id=note.id, skipped=skipped)

        return await self._execute_db_operation(
            "create_mentions",
            self.mention_repo.create_many(note.id, resolved),
        )

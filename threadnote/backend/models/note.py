"""
Note Model.

A short piece of text, optionally replying to a root note. Notes are the
vertices of both the reply tree (parent_id) and the mention graph.
"""

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from threadnote.backend.core.constants import ID_LENGTH
from threadnote.backend.models.base import Base, TimestampMixin


class Note(TimestampMixin, Base):
    """
    Note database model.

    The primary key is the short identifier users type in mentions, so it
    is assigned by NoteService rather than defaulted here.

    Foreign keys carry no ON DELETE CASCADE; CascadeDeleteService
    removes subtrees and their mentions explicitly.
    """

    __tablename__ = "notes"

    id: Mapped[str] = mapped_column(String(ID_LENGTH), primary_key=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    parent_id: Mapped[str | None] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("notes.id"),
        nullable=True,
        index=True,
    )
    depth: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, parent_id={self.parent_id}, depth={self.depth})>"

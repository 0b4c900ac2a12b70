"""
Mention Model.

One row per occurrence of "@<id>" in a note's content: a directed edge
from the mentioning note to the mentioned one.
"""

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from threadnote.backend.core.constants import ID_LENGTH
from threadnote.backend.models.base import Base, CreatedAtMixin, UUIDMixin


class Mention(UUIDMixin, CreatedAtMixin, Base):
    """
    Mention database model.

    The same note may mention the same target several times, but never
    twice at the same position.
    """

    __tablename__ = "mentions"
    __table_args__ = (
        UniqueConstraint(
            "from_note_id",
            "to_note_id",
            "position",
            name="uq_mentions_from_to_position",
        ),
    )

    from_note_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("notes.id"),
        nullable=False,
        index=True,
    )
    to_note_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("notes.id"),
        nullable=False,
        index=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)

    def __repr__(self) -> str:
        return (
            f"<Mention(from={self.from_note_id}, to={self.to_note_id}, "
            f"position={self.position})>"
        )

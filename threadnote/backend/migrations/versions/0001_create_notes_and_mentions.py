"""create notes and mentions

Revision ID: 0001
Revises:
Create Date: 2024-06-01 00:00:00
"""

from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "notes",
        sa.Column("id", sa.String(length=6), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("parent_id", sa.String(length=6), nullable=True),
        sa.Column("depth", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["parent_id"], ["notes.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_notes_parent_id", "notes", ["parent_id"])

    op.create_table(
        "mentions",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("from_note_id", sa.String(length=6), nullable=False),
        sa.Column("to_note_id", sa.String(length=6), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["from_note_id"], ["notes.id"]),
        sa.ForeignKeyConstraint(["to_note_id"], ["notes.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "from_note_id",
            "to_note_id",
            "position",
            name="uq_mentions_from_to_position",
        ),
    )
    op.create_index("ix_mentions_from_note_id", "mentions", ["from_note_id"])
    op.create_index("ix_mentions_to_note_id", "mentions", ["to_note_id"])


def downgrade() -> None:
    op.drop_index("ix_mentions_to_note_id", table_name="mentions")
    op.drop_index("ix_mentions_from_note_id", table_name="mentions")
    op.drop_table("mentions")
    op.drop_index("ix_notes_parent_id", table_name="notes")
    op.drop_table("notes")

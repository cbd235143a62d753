"""Initial schema — users, lectures, user_lectures.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("login", sa.String(50), nullable=False, unique=True),
        sa.Column("email", sa.String(254), nullable=False, unique=True),
    )

    op.create_table(
        "lectures",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("path_number", sa.Integer, nullable=False),
        sa.Column("lecture_number", sa.Integer, nullable=False),
        sa.Column("capacity", sa.Integer, nullable=False),
        sa.Column("starts_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint(
            "path_number", "lecture_number", name="uq_lectures_path_lecture",
        ),
        sa.CheckConstraint("capacity >= 0", name="ck_lectures_capacity"),
    )

    op.create_table(
        "user_lectures",
        sa.Column(
            "user_id", sa.Integer,
            sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True,
        ),
        sa.Column(
            "lecture_id", sa.Integer,
            sa.ForeignKey("lectures.id", ondelete="CASCADE"), primary_key=True,
        ),
    )


def downgrade() -> None:
    op.drop_table("user_lectures")
    op.drop_table("lectures")
    op.drop_table("users")

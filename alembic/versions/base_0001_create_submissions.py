"""create submissions

Revision ID: base_0001
Revises:
Create Date: 2026-01-29 10:12:41.118203

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "base_0001"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "submissions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("public_id", sa.String(length=36), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("exam_date", sa.String(length=10), nullable=False),
        sa.Column("shift", sa.String(length=16), nullable=False),
        sa.Column("strategy", sa.String(length=16), nullable=False),
        sa.Column("total_marks", sa.Integer(), nullable=False),
        sa.Column("total_attempted", sa.Integer(), nullable=False),
        sa.Column("total_correct", sa.Integer(), nullable=False),
        sa.Column("total_wrong", sa.Integer(), nullable=False),
        sa.Column("total_unattempted", sa.Integer(), nullable=False),
        sa.Column("accuracy_percentage", sa.Float(), nullable=False),
        sa.Column("negative_marks", sa.Integer(), nullable=False),
        sa.Column("math_marks", sa.Integer(), nullable=False),
        sa.Column("physics_marks", sa.Integer(), nullable=False),
        sa.Column("chemistry_marks", sa.Integer(), nullable=False),
        sa.Column("percentile", sa.Float(), nullable=True),
        sa.Column("responses", sa.JSON(), nullable=False),
        sa.Column("duration_ms", sa.Integer(), nullable=True),
    )
    op.create_index("ix_submissions_public_id", "submissions", ["public_id"], unique=True)
    op.create_index("ix_submissions_created_at", "submissions", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_submissions_created_at", table_name="submissions")
    op.drop_index("ix_submissions_public_id", table_name="submissions")
    op.drop_table("submissions")

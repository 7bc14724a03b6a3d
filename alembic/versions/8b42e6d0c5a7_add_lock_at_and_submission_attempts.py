"""add lock_at, max_attempts and submission attempts

Revision ID: 8b42e6d0c5a7
Revises: 3f1c9a7d2b10
Create Date: 2026-10-06 16:40:02.551930

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8b42e6d0c5a7'
down_revision: Union[str, Sequence[str], None] = '3f1c9a7d2b10'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    with op.batch_alter_table("assignments") as batch_op:
        batch_op.add_column(sa.Column("lock_at", sa.DateTime(timezone=True), nullable=True))
        batch_op.add_column(
            sa.Column("max_attempts", sa.Integer(), nullable=False, server_default="1")
        )

    # existing rows become attempt 1
    with op.batch_alter_table("assignment_submissions", recreate="always") as batch_op:
        batch_op.add_column(
            sa.Column("attempt", sa.Integer(), nullable=False, server_default="1")
        )
        batch_op.create_unique_constraint(
            "uq_submission_assignment_student_attempt",
            ["assignment_id", "student_id", "attempt"],
        )


def downgrade() -> None:
    """Downgrade schema."""
    with op.batch_alter_table("assignment_submissions", recreate="always") as batch_op:
        batch_op.drop_constraint(
            "uq_submission_assignment_student_attempt",
            type_="unique",
        )
        batch_op.drop_column("attempt")

    with op.batch_alter_table("assignments") as batch_op:
        batch_op.drop_column("max_attempts")
        batch_op.drop_column("lock_at")

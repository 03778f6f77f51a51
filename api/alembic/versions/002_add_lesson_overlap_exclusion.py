"""Add lesson overlap exclusion constraint

Revision ID: 002_add_lesson_overlap_exclusion
Revises: 001_initial_schema
Create Date: 2024-03-08 00:00:00.000000

"""
from alembic import op

# revision identifiers, used by Alembic.
revision = '002_add_lesson_overlap_exclusion'
down_revision = '001_initial_schema'
branch_labels = None
depends_on = None


def upgrade() -> None:
    """
    Forbid overlapping non-cancelled lessons per teacher at the database level.

    PostgreSQL only: needs btree_gist so teacher_id can share a GiST index
    with the time range. The range is half-open, so back-to-back lessons are
    allowed.
    """
    bind = op.get_bind()
    if bind.dialect.name != 'postgresql':
        return

    op.execute("CREATE EXTENSION IF NOT EXISTS btree_gist")
    op.execute(
        """
        ALTER TABLE lesson
        ADD CONSTRAINT lesson_teacher_no_overlap
        EXCLUDE USING gist (
            teacher_id WITH =,
            tstzrange(start_time, end_time, '[)') WITH &&
        )
        WHERE (status <> 'cancelled')
        """
    )


def downgrade() -> None:
    """
    Drop the exclusion constraint.
    """
    bind = op.get_bind()
    if bind.dialect.name != 'postgresql':
        return

    op.execute("ALTER TABLE lesson DROP CONSTRAINT IF EXISTS lesson_teacher_no_overlap")

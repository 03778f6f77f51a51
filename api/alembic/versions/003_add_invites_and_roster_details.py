"""Add invites and roster details

Revision ID: 003_add_invites_and_roster_details
Revises: 002_add_lesson_overlap_exclusion
Create Date: 2024-03-15 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '003_add_invites_and_roster_details'
down_revision = '002_add_lesson_overlap_exclusion'
branch_labels = None
depends_on = None


def upgrade() -> None:
    """
    Create the invite table, add instrument/skill level/notes to student
    profiles and updated_at to users and assignments.
    """
    op.create_table(
        'invite',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('teacher_id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('token', sa.String(length=64), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('used_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['teacher_id'], ['user.id'], name='invite_teacher_id_fkey'),
        sa.PrimaryKeyConstraint('id', name='invite_pkey'),
    )
    op.create_index(op.f('ix_invite_teacher_id'), 'invite', ['teacher_id'], unique=False)
    op.create_index(op.f('ix_invite_email'), 'invite', ['email'], unique=False)
    op.create_index(op.f('ix_invite_token'), 'invite', ['token'], unique=True)

    op.add_column('student_profile', sa.Column('instrument', sa.String(length=100), nullable=True))
    op.add_column('student_profile', sa.Column('skill_level', sa.String(length=20), nullable=True))
    op.add_column('student_profile', sa.Column('notes', sa.Text(), nullable=True))
    op.create_check_constraint(
        'student_profile_skill_level_check',
        'student_profile',
        "skill_level IS NULL OR skill_level IN ('beginner', 'intermediate', 'advanced')",
    )

    op.add_column('user', sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True))
    op.add_column('assignment', sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True))


def downgrade() -> None:
    """
    Drop the invite table and the added columns.
    """
    op.drop_column('assignment', 'updated_at')
    op.drop_column('user', 'updated_at')

    op.drop_constraint('student_profile_skill_level_check', 'student_profile', type_='check')
    op.drop_column('student_profile', 'notes')
    op.drop_column('student_profile', 'skill_level')
    op.drop_column('student_profile', 'instrument')

    op.drop_index(op.f('ix_invite_token'), table_name='invite')
    op.drop_index(op.f('ix_invite_email'), table_name='invite')
    op.drop_index(op.f('ix_invite_teacher_id'), table_name='invite')
    op.drop_table('invite')

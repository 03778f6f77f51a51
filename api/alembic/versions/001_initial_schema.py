"""Initial schema

Revision ID: 001_initial_schema
Revises:
Create Date: 2024-03-01 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """
    Create users, rosters, practice logs, lessons, notifications, messages
    and the assignment tables.
    """
    op.create_table(
        'user',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('full_name', sa.String(), nullable=True),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('avatar_url', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id', name='user_pkey'),
        sa.CheckConstraint("role IN ('teacher', 'student')", name='user_role_check'),
    )
    op.create_index(op.f('ix_user_email'), 'user', ['email'], unique=True)

    op.create_table(
        'student_profile',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('teacher_id', sa.Integer(), nullable=False),
        sa.Column('weekly_practice_goal_minutes', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], name='student_profile_user_id_fkey'),
        sa.ForeignKeyConstraint(['teacher_id'], ['user.id'], name='student_profile_teacher_id_fkey'),
        sa.PrimaryKeyConstraint('id', name='student_profile_pkey'),
    )
    op.create_index(op.f('ix_student_profile_user_id'), 'student_profile', ['user_id'], unique=True)
    op.create_index(op.f('ix_student_profile_teacher_id'), 'student_profile', ['teacher_id'], unique=False)

    op.create_table(
        'practice_log',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('student_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=False),
        sa.Column('notes', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['student_id'], ['user.id'], name='practice_log_student_id_fkey'),
        sa.PrimaryKeyConstraint('id', name='practice_log_pkey'),
        sa.CheckConstraint('duration_minutes > 0', name='practice_log_duration_check'),
    )
    op.create_index(op.f('ix_practice_log_student_id'), 'practice_log', ['student_id'], unique=False)

    op.create_table(
        'lesson',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('teacher_id', sa.Integer(), nullable=False),
        sa.Column('student_id', sa.Integer(), nullable=False),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('notes', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['teacher_id'], ['user.id'], name='lesson_teacher_id_fkey'),
        sa.ForeignKeyConstraint(['student_id'], ['user.id'], name='lesson_student_id_fkey'),
        sa.PrimaryKeyConstraint('id', name='lesson_pkey'),
        sa.CheckConstraint(
            "status IN ('scheduled', 'completed', 'cancelled')",
            name='lesson_status_check'
        ),
        sa.CheckConstraint('end_time > start_time', name='lesson_interval_check'),
    )
    op.create_index(op.f('ix_lesson_teacher_id'), 'lesson', ['teacher_id'], unique=False)
    op.create_index(op.f('ix_lesson_student_id'), 'lesson', ['student_id'], unique=False)
    op.create_index(op.f('ix_lesson_start_time'), 'lesson', ['start_time'], unique=False)

    op.create_table(
        'notification',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('content', sa.String(), nullable=True),
        sa.Column('link', sa.String(), nullable=True),
        sa.Column('read_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], name='notification_user_id_fkey'),
        sa.PrimaryKeyConstraint('id', name='notification_pkey'),
    )
    op.create_index(op.f('ix_notification_user_id'), 'notification', ['user_id'], unique=False)

    op.create_table(
        'message',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('sender_id', sa.Integer(), nullable=False),
        sa.Column('receiver_id', sa.Integer(), nullable=False),
        sa.Column('content', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['sender_id'], ['user.id'], name='message_sender_id_fkey'),
        sa.ForeignKeyConstraint(['receiver_id'], ['user.id'], name='message_receiver_id_fkey'),
        sa.PrimaryKeyConstraint('id', name='message_pkey'),
    )
    op.create_index(op.f('ix_message_sender_id'), 'message', ['sender_id'], unique=False)
    op.create_index(op.f('ix_message_receiver_id'), 'message', ['receiver_id'], unique=False)

    op.create_table(
        'assignment',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('teacher_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('due_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['teacher_id'], ['user.id'], name='assignment_teacher_id_fkey'),
        sa.PrimaryKeyConstraint('id', name='assignment_pkey'),
    )
    op.create_index(op.f('ix_assignment_teacher_id'), 'assignment', ['teacher_id'], unique=False)

    op.create_table(
        'assignment_student',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('assignment_id', sa.Integer(), nullable=False),
        sa.Column('student_id', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.ForeignKeyConstraint(['assignment_id'], ['assignment.id'], name='assignment_student_assignment_id_fkey'),
        sa.ForeignKeyConstraint(['student_id'], ['user.id'], name='assignment_student_student_id_fkey'),
        sa.PrimaryKeyConstraint('id', name='assignment_student_pkey'),
        sa.CheckConstraint(
            "status IN ('pending', 'submitted', 'reviewed')",
            name='assignment_student_status_check'
        ),
    )
    op.create_index(op.f('ix_assignment_student_assignment_id'), 'assignment_student', ['assignment_id'], unique=False)
    op.create_index(op.f('ix_assignment_student_student_id'), 'assignment_student', ['student_id'], unique=False)

    op.create_table(
        'submission',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('assignment_id', sa.Integer(), nullable=False),
        sa.Column('student_id', sa.Integer(), nullable=False),
        sa.Column('file_url', sa.String(), nullable=False),
        sa.Column('file_type', sa.String(length=10), nullable=False),
        sa.Column('notes', sa.String(), nullable=True),
        sa.Column('submitted_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['assignment_id'], ['assignment.id'], name='submission_assignment_id_fkey'),
        sa.ForeignKeyConstraint(['student_id'], ['user.id'], name='submission_student_id_fkey'),
        sa.PrimaryKeyConstraint('id', name='submission_pkey'),
        sa.CheckConstraint("file_type IN ('pdf', 'audio', 'video')", name='submission_file_type_check'),
    )
    op.create_index(op.f('ix_submission_assignment_id'), 'submission', ['assignment_id'], unique=False)
    op.create_index(op.f('ix_submission_student_id'), 'submission', ['student_id'], unique=False)

    op.create_table(
        'feedback',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('submission_id', sa.Integer(), nullable=False),
        sa.Column('teacher_id', sa.Integer(), nullable=False),
        sa.Column('content', sa.String(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['submission_id'], ['submission.id'], name='feedback_submission_id_fkey'),
        sa.ForeignKeyConstraint(['teacher_id'], ['user.id'], name='feedback_teacher_id_fkey'),
        sa.PrimaryKeyConstraint('id', name='feedback_pkey'),
        sa.CheckConstraint('rating IS NULL OR rating BETWEEN 1 AND 5', name='feedback_rating_check'),
    )
    op.create_index(op.f('ix_feedback_submission_id'), 'feedback', ['submission_id'], unique=True)


def downgrade() -> None:
    """
    Drop all tables.
    """
    op.drop_index(op.f('ix_feedback_submission_id'), table_name='feedback')
    op.drop_table('feedback')
    op.drop_index(op.f('ix_submission_student_id'), table_name='submission')
    op.drop_index(op.f('ix_submission_assignment_id'), table_name='submission')
    op.drop_table('submission')
    op.drop_index(op.f('ix_assignment_student_student_id'), table_name='assignment_student')
    op.drop_index(op.f('ix_assignment_student_assignment_id'), table_name='assignment_student')
    op.drop_table('assignment_student')
    op.drop_index(op.f('ix_assignment_teacher_id'), table_name='assignment')
    op.drop_table('assignment')
    op.drop_index(op.f('ix_message_receiver_id'), table_name='message')
    op.drop_index(op.f('ix_message_sender_id'), table_name='message')
    op.drop_table('message')
    op.drop_index(op.f('ix_notification_user_id'), table_name='notification')
    op.drop_table('notification')
    op.drop_index(op.f('ix_lesson_start_time'), table_name='lesson')
    op.drop_index(op.f('ix_lesson_student_id'), table_name='lesson')
    op.drop_index(op.f('ix_lesson_teacher_id'), table_name='lesson')
    op.drop_table('lesson')
    op.drop_index(op.f('ix_practice_log_student_id'), table_name='practice_log')
    op.drop_table('practice_log')
    op.drop_index(op.f('ix_student_profile_teacher_id'), table_name='student_profile')
    op.drop_index(op.f('ix_student_profile_user_id'), table_name='student_profile')
    op.drop_table('student_profile')
    op.drop_index(op.f('ix_user_email'), table_name='user')
    op.drop_table('user')

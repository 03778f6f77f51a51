"""
Models package - imports all models so they register with SQLModel metadata.
"""
from studio.models.enums import (
    UserRole,
    LessonStatus,
    AssignmentStatus,
    SubmissionFileType,
    NotificationType,
    SkillLevel,
)
from studio.models.user import User, StudentProfile
from studio.models.practice import PracticeLog
from studio.models.lesson import Lesson
from studio.models.notification import Notification
from studio.models.message import Message
from studio.models.assignment import Assignment, AssignmentStudent, Submission, Feedback
from studio.models.invite import Invite

__all__ = [
    'UserRole',
    'LessonStatus',
    'AssignmentStatus',
    'SubmissionFileType',
    'NotificationType',
    'SkillLevel',
    'User',
    'StudentProfile',
    'PracticeLog',
    'Lesson',
    'Notification',
    'Message',
    'Assignment',
    'AssignmentStudent',
    'Submission',
    'Feedback',
    'Invite',
]

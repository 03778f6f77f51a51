"""
Model enums.
"""
from enum import Enum


class UserRole(str, Enum):
    """Role of a user within a studio."""
    TEACHER = "teacher"
    STUDENT = "student"


class LessonStatus(str, Enum):
    """Status enum for Lesson."""
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class AssignmentStatus(str, Enum):
    """Per-student progress on an assignment."""
    PENDING = "pending"
    SUBMITTED = "submitted"
    REVIEWED = "reviewed"


class SubmissionFileType(str, Enum):
    """Kinds of files a student can submit."""
    PDF = "pdf"
    AUDIO = "audio"
    VIDEO = "video"


class NotificationType(str, Enum):
    """Categories used by the application when it notifies a user.

    The notification column itself is a free-form tag; these are just the
    values the application writes.
    """
    LESSON = "lesson"
    ASSIGNMENT = "assignment"
    SUBMISSION = "submission"
    FEEDBACK = "feedback"
    MESSAGE = "message"


class SkillLevel(str, Enum):
    """Self-reported skill level of a student."""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

"""
User service for business logic related to users and rosters.
"""
import logging
from sqlmodel import Session, select
from sqlalchemy import func
from typing import List, Optional

from studio.core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from studio.models.enums import UserRole
from studio.models.user import StudentProfile, User
from studio.utils.time_utils import utc_now

logger = logging.getLogger(__name__)


def get_user(session: Session, user_id: int) -> User:
    """
    Load a user or raise NotFoundError.

    Raises:
        NotFoundError: If the user does not exist
    """
    user = session.get(User, user_id)
    if not user:
        raise NotFoundError(f"User with id {user_id} not found")
    return user


def find_user_by_email(session: Session, email: str) -> Optional[User]:
    """Case-insensitive lookup by email."""
    return session.exec(
        select(User).where(func.lower(User.email) == email.strip().lower())
    ).first()


def require_role(session: Session, user_id: int, role: UserRole) -> User:
    """Load a user and make sure they have the given role."""
    user = get_user(session, user_id)
    if user.role != role.value:
        raise AuthorizationError(f"Only {role.value}s can perform this action")
    return user


def display_name(user: Optional[User], fallback: str) -> str:
    if user and user.full_name:
        return user.full_name
    return fallback


def create_user(
    session: Session,
    email: str,
    role: UserRole,
    full_name: Optional[str] = None,
    avatar_url: Optional[str] = None,
) -> User:
    """Create a teacher or student account record."""
    if find_user_by_email(session, email):
        raise ConflictError("Email already exists")

    user = User(email=email, role=role.value, full_name=full_name, avatar_url=avatar_url)
    session.add(user)
    session.commit()
    session.refresh(user)

    logger.info(f"Created {role.value} user {user.id}")
    return user


def link_student(
    session: Session,
    student_id: int,
    teacher_id: int,
    weekly_practice_goal_minutes: Optional[int] = None,
) -> StudentProfile:
    """
    Put a student on a teacher's roster, or move them to a new teacher.

    Raises:
        NotFoundError: If either user does not exist
        ValidationError: If the roles do not match
    """
    student = get_user(session, student_id)
    teacher = get_user(session, teacher_id)
    if not student.is_student:
        raise ValidationError(f"User {student_id} is not a student")
    if not teacher.is_teacher:
        raise ValidationError(f"User {teacher_id} is not a teacher")

    profile = session.exec(
        select(StudentProfile).where(StudentProfile.user_id == student_id)
    ).first()
    if profile is None:
        profile = StudentProfile(user_id=student_id, teacher_id=teacher_id)
    profile.teacher_id = teacher_id
    if weekly_practice_goal_minutes is not None:
        profile.weekly_practice_goal_minutes = weekly_practice_goal_minutes

    session.add(profile)
    session.commit()
    session.refresh(profile)
    return profile


def get_students_for_teacher(session: Session, teacher_id: int) -> List[User]:
    """Students on a teacher's roster, ordered by name."""
    statement = (
        select(User)
        .join(StudentProfile, StudentProfile.user_id == User.id)
        .where(StudentProfile.teacher_id == teacher_id)
        .order_by(User.full_name, User.id)
    )
    return list(session.exec(statement).all())


def get_teacher_for_student(session: Session, student_id: int) -> Optional[User]:
    profile = session.exec(
        select(StudentProfile).where(StudentProfile.user_id == student_id)
    ).first()
    if profile is None:
        return None
    return session.get(User, profile.teacher_id)


def is_student_of(session: Session, student_id: int, teacher_id: int) -> bool:
    profile = session.exec(
        select(StudentProfile).where(
            StudentProfile.user_id == student_id,
            StudentProfile.teacher_id == teacher_id,
        )
    ).first()
    return profile is not None


def update_profile(
    session: Session,
    user_id: int,
    full_name: Optional[str] = None,
    avatar_url: Optional[str] = None,
) -> User:
    """
    Update the acting user's display name and/or avatar.

    Raises:
        NotFoundError: If the user does not exist
        ValidationError: If full_name is given but blank
    """
    user = get_user(session, user_id)
    if full_name is not None:
        name = full_name.strip()
        if not name:
            raise ValidationError("Name is required")
        user.full_name = name
    if avatar_url is not None:
        user.avatar_url = avatar_url.strip() or None
    user.updated_at = utc_now()

    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def _get_roster_profile(session: Session, teacher_id: int, student_id: int) -> StudentProfile:
    profile = session.exec(
        select(StudentProfile).where(
            StudentProfile.user_id == student_id,
            StudentProfile.teacher_id == teacher_id,
        )
    ).first()
    if profile is None:
        raise NotFoundError(f"Student {student_id} is not in your studio")
    return profile


def get_student_profile(session: Session, teacher_id: int, student_id: int) -> StudentProfile:
    """A roster entry, visible only to the student's own teacher."""
    require_role(session, teacher_id, UserRole.TEACHER)
    return _get_roster_profile(session, teacher_id, student_id)


def update_student_notes(session: Session, teacher_id: int, student_id: int, notes: Optional[str]) -> StudentProfile:
    """Replace the teacher's private notes about one of their students."""
    require_role(session, teacher_id, UserRole.TEACHER)
    profile = _get_roster_profile(session, teacher_id, student_id)
    profile.notes = notes.strip() if notes and notes.strip() else None

    session.add(profile)
    session.commit()
    session.refresh(profile)
    return profile


def remove_student(session: Session, teacher_id: int, student_id: int) -> None:
    """
    Take a student off the teacher's roster. The student's account is kept.

    Raises:
        AuthorizationError: If the acting user is not a teacher
        NotFoundError: If the student is not on this teacher's roster
    """
    require_role(session, teacher_id, UserRole.TEACHER)
    profile = _get_roster_profile(session, teacher_id, student_id)
    session.delete(profile)
    session.commit()
    logger.info(f"Removed student {student_id} from teacher {teacher_id}'s studio")

"""
Studio invites: a teacher sends a one-time link, the student signs up through it
and lands on that teacher's roster.
"""
import logging
import secrets
from datetime import timedelta
from typing import List, Optional
from sqlmodel import Session, select

from studio.core.config import settings
from studio.core.exceptions import ConflictError, NotFoundError, ValidationError
from studio.models.enums import SkillLevel, UserRole
from studio.models.invite import Invite
from studio.models.user import StudentProfile, User
from studio.services.user_service import find_user_by_email, is_student_of, require_role
from studio.utils.time_utils import utc_now

logger = logging.getLogger(__name__)


def invite_url(invite: Invite) -> str:
    return f"{settings.app_url.rstrip('/')}/invite/{invite.token}"


def _active_invites():
    return select(Invite).where(Invite.used_at.is_(None), Invite.expires_at > utc_now())


def create_invite(session: Session, teacher_id: int, email: str) -> Invite:
    """
    Create an invite for email, valid for settings.invite_expiry_days.

    Raises:
        ValidationError: Blank email
        AuthorizationError: The acting user is not a teacher
        ConflictError: The student is already on the roster, or an active
            invite for this email already exists
    """
    email = (email or "").strip().lower()
    if not email:
        raise ValidationError("Email is required")

    require_role(session, teacher_id, UserRole.TEACHER)

    existing_user = find_user_by_email(session, email)
    if existing_user and is_student_of(session, existing_user.id, teacher_id):
        raise ConflictError("This student is already in your studio")

    pending = session.exec(
        _active_invites().where(Invite.teacher_id == teacher_id, Invite.email == email)
    ).first()
    if pending:
        raise ConflictError("An active invite already exists for this email")

    invite = Invite(
        teacher_id=teacher_id,
        email=email,
        token=secrets.token_hex(32),
        expires_at=utc_now() + timedelta(days=settings.invite_expiry_days),
    )
    session.add(invite)
    session.commit()
    session.refresh(invite)

    logger.info(f"Teacher {teacher_id} created invite {invite.id}")
    return invite


def get_pending_invites(session: Session, teacher_id: int) -> List[Invite]:
    """Unused, unexpired invites of a teacher, newest first."""
    statement = (
        _active_invites()
        .where(Invite.teacher_id == teacher_id)
        .order_by(Invite.created_at.desc(), Invite.id.desc())
    )
    return list(session.exec(statement).all())


def cancel_invite(session: Session, teacher_id: int, invite_id: int) -> None:
    invite = session.exec(
        select(Invite).where(Invite.id == invite_id, Invite.teacher_id == teacher_id)
    ).first()
    if invite is None:
        raise NotFoundError(f"Invite with id {invite_id} not found")
    session.delete(invite)
    session.commit()
    logger.info(f"Teacher {teacher_id} cancelled invite {invite_id}")


def accept_invite(
    session: Session,
    token: str,
    email: str,
    full_name: str,
    instrument: Optional[str] = None,
    skill_level: Optional[SkillLevel] = None,
) -> User:
    """
    Create a student account from an invite and put it on the inviting
    teacher's roster. The invite can be used once.

    Raises:
        NotFoundError: Unknown, used or expired token
        ValidationError: Blank name, or the invite was sent to another email
        ConflictError: An account with this email already exists
    """
    email = (email or "").strip()
    full_name = (full_name or "").strip()
    if not email or not full_name:
        raise ValidationError("Email and name are required")

    invite = session.exec(_active_invites().where(Invite.token == token)).first()
    if invite is None:
        raise NotFoundError("This invite link is invalid or has expired.")
    if invite.email and invite.email.lower() != email.lower():
        raise ValidationError("This invite was sent to a different email address.")
    if find_user_by_email(session, email):
        raise ConflictError("An account with this email already exists. Please log in instead.")

    student = User(email=email, role=UserRole.STUDENT.value, full_name=full_name)
    session.add(student)
    session.flush()
    session.add(
        StudentProfile(
            user_id=student.id,
            teacher_id=invite.teacher_id,
            instrument=instrument.strip() if instrument and instrument.strip() else None,
            skill_level=SkillLevel(skill_level).value if skill_level else None,
        )
    )
    invite.used_at = utc_now()
    session.add(invite)
    session.commit()
    session.refresh(student)

    logger.info(f"Invite {invite.id} accepted by new student {student.id}")
    return student

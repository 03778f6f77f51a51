"""
Tests for studio invites.
"""
import pytest
from datetime import timedelta
from sqlmodel import select

from studio.core.config import settings
from studio.core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from studio.models import Invite, SkillLevel, StudentProfile, UserRole
from studio.services.invite_service import (
    accept_invite,
    cancel_invite,
    create_invite,
    get_pending_invites,
    invite_url,
)
from studio.services.user_service import get_students_for_teacher
from studio.utils.time_utils import utc_now


@pytest.fixture
def invite(session, teacher):
    return create_invite(session, teacher.id, "New.Pupil@Example.com")


class TestCreateInvite:

    def test_creates_active_invite(self, session, teacher, invite):
        assert invite.email == "new.pupil@example.com"
        assert len(invite.token) == 64
        assert invite.used_at is None
        assert invite.expires_at - utc_now() > timedelta(days=settings.invite_expiry_days - 1)
        assert invite_url(invite).endswith(f"/invite/{invite.token}")

    def test_tokens_are_unique(self, session, teacher, invite):
        another = create_invite(session, teacher.id, "someone.else@example.com")

        assert another.token != invite.token

    def test_duplicate_active_invite(self, session, teacher, invite):
        with pytest.raises(ConflictError):
            create_invite(session, teacher.id, "new.pupil@example.com")

    def test_other_teacher_may_invite_same_email(self, session, other_teacher, invite):
        assert create_invite(session, other_teacher.id, "new.pupil@example.com").teacher_id == other_teacher.id

    def test_student_already_on_roster(self, session, teacher, student):
        with pytest.raises(ConflictError):
            create_invite(session, teacher.id, "STUDENT@example.com")

    def test_expired_invite_does_not_block(self, session, teacher, invite):
        invite.expires_at = utc_now() - timedelta(minutes=1)
        session.add(invite)
        session.commit()

        assert create_invite(session, teacher.id, "new.pupil@example.com").id != invite.id

    def test_students_cannot_invite(self, session, student):
        with pytest.raises(AuthorizationError):
            create_invite(session, student.id, "friend@example.com")

    def test_blank_email(self, session, teacher):
        with pytest.raises(ValidationError):
            create_invite(session, teacher.id, "  ")


class TestPendingAndCancel:

    def test_pending_lists_only_active_own_invites(self, session, teacher, other_teacher, invite):
        used = create_invite(session, teacher.id, "used@example.com")
        used.used_at = utc_now()
        session.add(used)
        session.commit()
        create_invite(session, other_teacher.id, "theirs@example.com")

        assert [i.id for i in get_pending_invites(session, teacher.id)] == [invite.id]

    def test_cancel(self, session, teacher, invite):
        cancel_invite(session, teacher.id, invite.id)

        assert session.exec(select(Invite)).all() == []

    def test_cancel_foreign_invite(self, session, other_teacher, invite):
        with pytest.raises(NotFoundError):
            cancel_invite(session, other_teacher.id, invite.id)


class TestAcceptInvite:

    def test_creates_student_on_roster(self, session, teacher, invite):
        user = accept_invite(
            session, invite.token, "new.pupil@example.com", " Fanny Mendelssohn ",
            instrument="Piano", skill_level=SkillLevel.INTERMEDIATE,
        )

        assert user.role == UserRole.STUDENT.value
        assert user.full_name == "Fanny Mendelssohn"
        profile = session.exec(select(StudentProfile).where(StudentProfile.user_id == user.id)).one()
        assert profile.teacher_id == teacher.id
        assert profile.instrument == "Piano"
        assert profile.skill_level == "intermediate"
        assert user.id in [s.id for s in get_students_for_teacher(session, teacher.id)]
        session.refresh(invite)
        assert invite.used_at is not None

    def test_email_match_ignores_case(self, session, invite):
        assert accept_invite(session, invite.token, "NEW.PUPIL@example.com", "Fanny").id is not None

    def test_single_use(self, session, invite):
        accept_invite(session, invite.token, "new.pupil@example.com", "Fanny")

        with pytest.raises(NotFoundError):
            accept_invite(session, invite.token, "new.pupil@example.com", "Fanny again")

    def test_expired(self, session, invite):
        invite.expires_at = utc_now() - timedelta(seconds=1)
        session.add(invite)
        session.commit()

        with pytest.raises(NotFoundError):
            accept_invite(session, invite.token, "new.pupil@example.com", "Fanny")

    def test_unknown_token(self, session):
        with pytest.raises(NotFoundError):
            accept_invite(session, "0" * 64, "new.pupil@example.com", "Fanny")

    def test_wrong_email(self, session, invite):
        with pytest.raises(ValidationError):
            accept_invite(session, invite.token, "someone.else@example.com", "Fanny")

        session.refresh(invite)
        assert invite.used_at is None

    def test_existing_account(self, session, student, other_teacher):
        invite = create_invite(session, other_teacher.id, "student@example.com")

        with pytest.raises(ConflictError):
            accept_invite(session, invite.token, "student@example.com", "Johannes Brahms")

    def test_blank_name(self, session, invite):
        with pytest.raises(ValidationError):
            accept_invite(session, invite.token, "new.pupil@example.com", "  ")

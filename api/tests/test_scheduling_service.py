"""
Tests for lesson conflict detection and lesson mutations.
"""
import pytest
from datetime import date, datetime, time, timedelta, timezone
from unittest.mock import patch
from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from studio.core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from studio.models import Lesson, LessonStatus, Notification
from studio.services.scheduling_service import (
    LessonConflict,
    create_lesson,
    delete_lesson,
    find_conflict,
    get_lessons_for_week,
    schedule_lesson,
    update_lesson,
)
from tests.conftest import add_lesson

DAY = date(2024, 3, 4)


def at(hour, minute=0):
    return datetime(2024, 3, 4, hour, minute, tzinfo=timezone.utc)


class TestFindConflict:
    """Half-open interval overlap against a teacher's calendar."""

    def test_partial_overlap_reports_existing_start(self, session, teacher, afternoon_lesson):
        conflict = find_conflict(session, teacher.id, at(14, 30), at(15, 30))

        assert conflict is not None
        assert conflict.lesson_id == afternoon_lesson.id
        assert conflict.start_time == at(14)
        assert conflict.counterparty_name == "Johannes Brahms"

    def test_back_to_back_is_not_a_conflict(self, session, teacher, afternoon_lesson):
        assert find_conflict(session, teacher.id, at(15), at(16)) is None
        assert find_conflict(session, teacher.id, at(13), at(14)) is None

    def test_cancelled_lesson_is_ignored(self, session, teacher, student):
        add_lesson(session, teacher, student, at(14), at(15), status=LessonStatus.CANCELLED)

        assert find_conflict(session, teacher.id, at(14), at(15)) is None

    def test_completed_lesson_still_blocks(self, session, teacher, student):
        add_lesson(session, teacher, student, at(14), at(15), status=LessonStatus.COMPLETED)

        assert find_conflict(session, teacher.id, at(14), at(15)) is not None

    def test_other_teacher_is_ignored(self, session, other_teacher, afternoon_lesson):
        assert find_conflict(session, other_teacher.id, at(14), at(15)) is None

    def test_excluded_lesson_is_ignored(self, session, teacher, afternoon_lesson):
        assert find_conflict(
            session, teacher.id, at(14, 30), at(15, 30), exclude_lesson_id=afternoon_lesson.id
        ) is None

    @pytest.mark.parametrize("start,end", [
        (at(14), at(15)),        # identical
        (at(13), at(16)),        # contains
        (at(14, 15), at(14, 45)),  # contained
        (at(13, 30), at(14, 1)),   # one minute of overlap
    ])
    def test_any_shared_instant_conflicts(self, session, teacher, afternoon_lesson, start, end):
        assert find_conflict(session, teacher.id, start, end) is not None

    def test_returns_earliest_conflict(self, session, teacher, student, afternoon_lesson):
        add_lesson(session, teacher, student, at(15), at(16))

        conflict = find_conflict(session, teacher.id, at(14, 30), at(15, 30))

        assert conflict.start_time == at(14)

    def test_inverted_interval_is_rejected(self, session, teacher):
        with pytest.raises(ValidationError):
            find_conflict(session, teacher.id, at(15), at(14))

    def test_zero_length_interval_is_rejected(self, session, teacher):
        with pytest.raises(ValidationError):
            find_conflict(session, teacher.id, at(15), at(15))

    def test_aware_datetimes_are_compared_in_utc(self, session, teacher, afternoon_lesson):
        plus_two = timezone(timedelta(hours=2))
        start = datetime(2024, 3, 4, 16, 30, tzinfo=plus_two)  # 14:30 UTC
        end = datetime(2024, 3, 4, 17, 30, tzinfo=plus_two)

        assert find_conflict(session, teacher.id, start, end) is not None

    def test_naive_datetimes_are_taken_as_utc(self, session, teacher, afternoon_lesson):
        conflict = find_conflict(session, teacher.id, datetime(2024, 3, 4, 14, 30), datetime(2024, 3, 4, 15, 30))

        assert conflict is not None
        assert conflict.start_time == at(14)


class TestLessonConflictMessage:

    def test_message_names_student_and_time(self):
        conflict = LessonConflict(lesson_id=1, start_time=at(14), end_time=at(15), counterparty_name="Clara")

        assert conflict.message("UTC") == "Time conflict: You already have a lesson with Clara at 14:00"

    def test_message_without_name(self):
        conflict = LessonConflict(lesson_id=1, start_time=at(14), end_time=at(15))

        assert "another student" in conflict.message("UTC")

    def test_message_in_studio_timezone(self):
        conflict = LessonConflict(lesson_id=1, start_time=at(14), end_time=at(15), counterparty_name="Clara")

        assert conflict.message("Europe/Berlin").endswith("at 15:00")


class TestCreateLesson:

    def test_creates_lesson_and_notifies_student(self, session, dispatcher, teacher, student):
        lesson = create_lesson(session, dispatcher, teacher.id, student.id, DAY, time(14, 0), 60, notes="Scales")

        assert lesson.id is not None
        assert lesson.start_time == at(14)
        assert lesson.end_time == at(15)
        assert lesson.status == LessonStatus.SCHEDULED.value

        notifications = session.exec(select(Notification).where(Notification.user_id == student.id)).all()
        assert len(notifications) == 1
        assert notifications[0].type == "lesson"
        assert notifications[0].title == "New Lesson Scheduled"
        assert "Clara Wieck" in notifications[0].content
        assert notifications[0].link == "/dashboard/schedule"

    def test_conflict_is_rejected_with_readable_message(self, session, dispatcher, teacher, student, afternoon_lesson):
        with pytest.raises(ConflictError) as exc_info:
            create_lesson(session, dispatcher, teacher.id, student.id, DAY, time(14, 30), 60)

        assert str(exc_info.value) == "Time conflict: You already have a lesson with Johannes Brahms at 14:00"
        assert len(session.exec(select(Lesson)).all()) == 1

    def test_back_to_back_is_allowed(self, session, dispatcher, teacher, student, afternoon_lesson):
        lesson = create_lesson(session, dispatcher, teacher.id, student.id, DAY, time(15, 0), 60)

        assert lesson.start_time == at(15)

    def test_over_cancelled_lesson_is_allowed(self, session, dispatcher, teacher, student):
        add_lesson(session, teacher, student, at(14), at(15), status=LessonStatus.CANCELLED)

        lesson = create_lesson(session, dispatcher, teacher.id, student.id, DAY, time(14, 0), 60)

        assert lesson.id is not None

    @pytest.mark.parametrize("duration", [0, -30])
    def test_non_positive_duration(self, session, dispatcher, teacher, student, duration):
        with pytest.raises(ValidationError):
            create_lesson(session, dispatcher, teacher.id, student.id, DAY, time(14, 0), duration)

    def test_student_cannot_schedule(self, session, dispatcher, student):
        with pytest.raises(AuthorizationError):
            create_lesson(session, dispatcher, student.id, student.id, DAY, time(14, 0), 60)

    def test_student_must_be_on_roster(self, session, dispatcher, other_teacher, student):
        with pytest.raises(AuthorizationError):
            create_lesson(session, dispatcher, other_teacher.id, student.id, DAY, time(14, 0), 60)

    def test_wall_clock_is_read_in_studio_timezone(self, session, dispatcher, teacher, student, monkeypatch):
        monkeypatch.setattr("studio.services.scheduling_service.settings.studio_timezone", "Europe/Berlin")

        lesson = create_lesson(session, dispatcher, teacher.id, student.id, DAY, time(14, 0), 60)

        assert lesson.start_time == at(13)

    def test_notification_failure_does_not_fail_lesson(self, session, broken_dispatcher, teacher, student):
        lesson = create_lesson(session, broken_dispatcher, teacher.id, student.id, DAY, time(14, 0), 60)

        assert lesson.id is not None
        assert session.get(Lesson, lesson.id) is not None
        assert session.exec(select(Notification)).all() == []

    def test_database_overlap_rejection_becomes_conflict(self, session, dispatcher, teacher, student):
        error = IntegrityError("INSERT INTO lesson", {}, Exception("lesson_teacher_no_overlap"))
        with patch.object(session, "commit", side_effect=error):
            with pytest.raises(ConflictError):
                schedule_lesson(session, dispatcher, teacher.id, student.id, at(14), at(15))


class TestUpdateLesson:

    def test_move_within_own_slot(self, session, teacher, student, afternoon_lesson):
        lesson = update_lesson(session, teacher.id, afternoon_lesson.id, student.id, DAY, time(14, 30), 60)

        assert lesson.start_time == at(14, 30)
        assert lesson.end_time == at(15, 30)

    def test_move_onto_other_lesson_conflicts(self, session, teacher, student, second_student, afternoon_lesson):
        other = add_lesson(session, teacher, second_student, at(16), at(17))

        with pytest.raises(ConflictError) as exc_info:
            update_lesson(session, teacher.id, other.id, second_student.id, DAY, time(14, 30), 60)

        assert "Johannes Brahms" in str(exc_info.value)
        session.refresh(other)
        assert other.start_time == at(16)

    def test_cancelling_never_conflicts(self, session, teacher, student, second_student, afternoon_lesson):
        other = add_lesson(session, teacher, second_student, at(16), at(17))

        lesson = update_lesson(
            session, teacher.id, other.id, second_student.id, DAY, time(14, 0), 60,
            status=LessonStatus.CANCELLED,
        )

        assert lesson.status == LessonStatus.CANCELLED.value

    def test_omitted_status_resets_to_scheduled(self, session, teacher, student):
        lesson = add_lesson(session, teacher, student, at(10), at(11), status=LessonStatus.COMPLETED)

        updated = update_lesson(session, teacher.id, lesson.id, student.id, DAY, time(10, 0), 60)

        assert updated.status == LessonStatus.SCHEDULED.value

    def test_only_owner_can_edit(self, session, other_teacher, student, afternoon_lesson):
        with pytest.raises(AuthorizationError):
            update_lesson(session, other_teacher.id, afternoon_lesson.id, student.id, DAY, time(9, 0), 60)

    def test_unknown_lesson(self, session, teacher, student):
        with pytest.raises(NotFoundError):
            update_lesson(session, teacher.id, 999, student.id, DAY, time(9, 0), 60)


class TestDeleteAndList:

    def test_delete(self, session, teacher, afternoon_lesson):
        lesson_id = afternoon_lesson.id
        delete_lesson(session, teacher.id, lesson_id)

        assert session.get(Lesson, lesson_id) is None

    def test_delete_requires_owner(self, session, other_teacher, afternoon_lesson):
        with pytest.raises(AuthorizationError):
            delete_lesson(session, other_teacher.id, afternoon_lesson.id)

    def test_week_listing_for_teacher_and_student(self, session, teacher, student, second_student, afternoon_lesson):
        add_lesson(session, teacher, second_student, at(9), at(10))
        next_monday = datetime(2024, 3, 11, 9, tzinfo=timezone.utc)
        add_lesson(session, teacher, student, next_monday, next_monday + timedelta(hours=1))

        teacher_view = get_lessons_for_week(session, teacher.id, today=date(2024, 3, 6))
        student_view = get_lessons_for_week(session, student.id, today=date(2024, 3, 6))
        next_week = get_lessons_for_week(session, student.id, week_offset=1, today=date(2024, 3, 6))

        assert [lesson.start_time for lesson in teacher_view] == [at(9), at(14)]
        assert teacher_view[0].student_name == "Robert Schumann"
        assert teacher_view[0].teacher_name == "Clara Wieck"
        assert [lesson.id for lesson in student_view] == [afternoon_lesson.id]
        assert len(next_week) == 1

    def test_week_window_follows_studio_timezone(self, session, teacher, student, monkeypatch):
        monkeypatch.setattr("studio.services.scheduling_service.settings.studio_timezone", "Europe/Berlin")
        # Monday 2024-03-04 00:30 in Berlin is Sunday 23:30 UTC
        early = add_lesson(
            session, teacher, student,
            datetime(2024, 3, 3, 23, 30, tzinfo=timezone.utc), datetime(2024, 3, 4, 0, 30, tzinfo=timezone.utc),
        )

        this_week = get_lessons_for_week(session, teacher.id, today=date(2024, 3, 6))
        last_week = get_lessons_for_week(session, teacher.id, week_offset=-1, today=date(2024, 3, 6))

        assert [lesson.id for lesson in this_week] == [early.id]
        assert last_week == []

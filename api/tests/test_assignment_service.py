"""
Tests for assignments, submissions and feedback.
"""
import datetime as dt
import pytest
from sqlmodel import select

from studio.core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from studio.models import Assignment, AssignmentStudent, Feedback, Notification, Submission, SubmissionFileType
from studio.services.assignment_service import (
    create_assignment,
    delete_assignment,
    get_student_assignments,
    get_student_feedback,
    get_teacher_assignments,
    submit_assignment,
    submit_feedback,
    update_assignment,
)


def notifications_for(session, user):
    return session.exec(select(Notification).where(Notification.user_id == user.id)).all()


@pytest.fixture
def assignment(session, dispatcher, teacher, student, second_student):
    return create_assignment(
        session, dispatcher, teacher.id, "Minuet in G", [student.id, second_student.id],
        description="First 16 bars",
    )


class TestAssignments:

    def test_create_notifies_each_student(self, session, assignment, student, second_student):
        links = session.exec(select(AssignmentStudent)).all()

        assert {link.student_id for link in links} == {student.id, second_student.id}
        assert all(link.status == "pending" for link in links)
        for user in (student, second_student):
            notes = notifications_for(session, user)
            assert len(notes) == 1
            assert notes[0].type == "assignment"
            assert notes[0].content == 'Clara Wieck created a new assignment: "Minuet in G"'

    def test_duplicate_student_ids_link_once(self, session, dispatcher, teacher, student):
        create_assignment(session, dispatcher, teacher.id, "Scales", [student.id, student.id])

        assert len(session.exec(select(AssignmentStudent)).all()) == 1
        assert len(notifications_for(session, student)) == 1

    def test_requires_students(self, session, dispatcher, teacher):
        with pytest.raises(ValidationError):
            create_assignment(session, dispatcher, teacher.id, "Scales", [])

    def test_requires_title(self, session, dispatcher, teacher, student):
        with pytest.raises(ValidationError):
            create_assignment(session, dispatcher, teacher.id, "  ", [student.id])

    def test_students_must_be_on_roster(self, session, dispatcher, other_teacher, student):
        with pytest.raises(AuthorizationError):
            create_assignment(session, dispatcher, other_teacher.id, "Scales", [student.id])

    def test_listing_counts_students(self, session, assignment, teacher):
        listed = get_teacher_assignments(session, teacher.id)

        assert len(listed) == 1
        assert listed[0].student_count == 2

    def test_submit_notifies_teacher(self, session, dispatcher, assignment, teacher, student):
        submission = submit_assignment(
            session, dispatcher, student.id, assignment.id,
            "https://storage.example.com/submissions/take1.mp3", SubmissionFileType.AUDIO,
        )

        assert submission.file_type == "audio"
        link = session.exec(
            select(AssignmentStudent).where(AssignmentStudent.student_id == student.id)
        ).one()
        assert link.status == "submitted"
        notes = notifications_for(session, teacher)
        assert len(notes) == 1
        assert notes[0].type == "submission"
        assert "Johannes Brahms" in notes[0].content

    def test_submit_requires_assignment_link(self, session, dispatcher, teacher, student, second_student):
        solo = create_assignment(session, dispatcher, teacher.id, "Solo", [second_student.id])

        with pytest.raises(AuthorizationError):
            submit_assignment(session, dispatcher, student.id, solo.id, "https://x/y.pdf", "pdf")

    def test_submit_unknown_assignment(self, session, dispatcher, student):
        with pytest.raises(NotFoundError):
            submit_assignment(session, dispatcher, student.id, 999, "https://x/y.pdf", "pdf")

    def test_feedback_flow(self, session, dispatcher, assignment, teacher, student):
        submission = submit_assignment(session, dispatcher, student.id, assignment.id, "https://x/y.pdf", "pdf")

        feedback = submit_feedback(session, dispatcher, teacher.id, submission.id, "Lovely phrasing", rating=5)

        assert feedback.rating == 5
        link = session.exec(
            select(AssignmentStudent).where(AssignmentStudent.student_id == student.id)
        ).one()
        assert link.status == "reviewed"
        assert [n.type for n in notifications_for(session, student)] == ["assignment", "feedback"]

        with pytest.raises(ConflictError):
            submit_feedback(session, dispatcher, teacher.id, submission.id, "Again")

    @pytest.mark.parametrize("rating", [0, 6])
    def test_feedback_rating_range(self, session, dispatcher, assignment, teacher, student, rating):
        submission = submit_assignment(session, dispatcher, student.id, assignment.id, "https://x/y.pdf", "pdf")

        with pytest.raises(ValidationError):
            submit_feedback(session, dispatcher, teacher.id, submission.id, "Nice", rating=rating)

    def test_feedback_only_by_owning_teacher(self, session, dispatcher, assignment, other_teacher, student):
        submission = submit_assignment(session, dispatcher, student.id, assignment.id, "https://x/y.pdf", "pdf")

        with pytest.raises(AuthorizationError):
            submit_feedback(session, dispatcher, other_teacher.id, submission.id, "Nice")

    def test_student_cannot_give_feedback(self, session, dispatcher, assignment, student):
        submission = submit_assignment(session, dispatcher, student.id, assignment.id, "https://x/y.pdf", "pdf")

        with pytest.raises(AuthorizationError):
            submit_feedback(session, dispatcher, student.id, submission.id, "Nice")


class TestAssignmentEdits:

    def test_update(self, session, assignment, teacher):
        due = dt.datetime(2024, 3, 8, 18, 0, tzinfo=dt.timezone.utc)

        updated = update_assignment(session, teacher.id, assignment.id, " Minuet in G, bars 1-32 ", due_date=due)

        assert updated.title == "Minuet in G, bars 1-32"
        assert updated.description is None
        assert updated.due_date == due
        assert updated.updated_at is not None

    def test_naive_due_date_is_taken_as_utc(self, session, assignment, teacher):
        updated = update_assignment(
            session, teacher.id, assignment.id, "Minuet", due_date=dt.datetime(2024, 3, 8, 18, 0),
        )

        assert updated.due_date == dt.datetime(2024, 3, 8, 18, 0, tzinfo=dt.timezone.utc)

    def test_update_requires_owner(self, session, assignment, other_teacher):
        with pytest.raises(AuthorizationError):
            update_assignment(session, other_teacher.id, assignment.id, "Mine now")

    def test_update_requires_title(self, session, assignment, teacher):
        with pytest.raises(ValidationError):
            update_assignment(session, teacher.id, assignment.id, "  ")

    def test_delete_removes_links_submissions_and_feedback(self, session, dispatcher, assignment, teacher, student):
        submission = submit_assignment(session, dispatcher, student.id, assignment.id, "https://x/y.pdf", "pdf")
        submit_feedback(session, dispatcher, teacher.id, submission.id, "Good", rating=4)

        delete_assignment(session, teacher.id, assignment.id)

        assert session.exec(select(Assignment)).all() == []
        assert session.exec(select(AssignmentStudent)).all() == []
        assert session.exec(select(Submission)).all() == []
        assert session.exec(select(Feedback)).all() == []

    def test_delete_requires_owner(self, session, assignment, other_teacher):
        with pytest.raises(AuthorizationError):
            delete_assignment(session, other_teacher.id, assignment.id)

    def test_delete_unknown(self, session, teacher):
        with pytest.raises(NotFoundError):
            delete_assignment(session, teacher.id, 999)


class TestStudentViews:

    def test_assigned_work_with_own_status(self, session, dispatcher, assignment, teacher, student, second_student):
        create_assignment(session, dispatcher, teacher.id, "Scales", [second_student.id])
        submit_assignment(session, dispatcher, student.id, assignment.id, "https://x/y.pdf", "pdf")

        mine = get_student_assignments(session, student.id)
        theirs = get_student_assignments(session, second_student.id)

        assert [(a.title, a.status, a.teacher_name) for a in mine] == [("Minuet in G", "submitted", "Clara Wieck")]
        assert {a.title: a.status for a in theirs} == {"Minuet in G": "pending", "Scales": "pending"}

    def test_feedback_view(self, session, dispatcher, assignment, teacher, student):
        reviewed = submit_assignment(session, dispatcher, student.id, assignment.id, "https://x/take1.mp3", "audio")
        submit_feedback(session, dispatcher, teacher.id, reviewed.id, "Steadier tempo", rating=3)
        submit_assignment(session, dispatcher, student.id, assignment.id, "https://x/take2.mp3", "audio")

        entries = get_student_feedback(session, student.id)

        assert len(entries) == 2
        by_id = {entry.id: entry for entry in entries}
        assert by_id[reviewed.id].assignment_title == "Minuet in G"
        assert by_id[reviewed.id].feedback.content == "Steadier tempo"
        assert by_id[reviewed.id].feedback.rating == 3
        assert [e.feedback for e in entries if e.id != reviewed.id] == [None]

    def test_feedback_view_is_per_student(self, session, dispatcher, assignment, student, second_student):
        submit_assignment(session, dispatcher, student.id, assignment.id, "https://x/y.pdf", "pdf")

        assert get_student_feedback(session, second_student.id) == []

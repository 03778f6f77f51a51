"""
Assignment service: teachers hand out work, students submit, teachers review.

Each step notifies the other party after its own write has committed.
"""
import logging
from datetime import datetime
from typing import List, Optional
from sqlmodel import Session, select
from sqlalchemy import func

from studio.core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from studio.models.assignment import Assignment, AssignmentStudent, Feedback, Submission
from studio.models.enums import AssignmentStatus, NotificationType, SubmissionFileType, UserRole
from studio.models.user import User
from studio.schemas.assignment import (
    AssignmentResponse,
    FeedbackResponse,
    StudentAssignmentResponse,
    StudentSubmissionResponse,
)
from studio.services.notification_service import NotificationDispatcher
from studio.services.user_service import display_name, get_user, is_student_of, require_role
from studio.utils.time_utils import optional_utc, utc_now

logger = logging.getLogger(__name__)

ASSIGNMENTS_LINK = "/dashboard/assignments"
SUBMISSIONS_LINK = "/dashboard/submissions"
FEEDBACK_LINK = "/dashboard/feedback"


def create_assignment(
    session: Session,
    dispatcher: NotificationDispatcher,
    teacher_id: int,
    title: str,
    student_ids: List[int],
    description: Optional[str] = None,
    due_date: Optional[datetime] = None,
) -> Assignment:
    """
    Create an assignment, link it to each student and notify them.

    Raises:
        ValidationError: Empty title or no students
        AuthorizationError: Not a teacher, or a student is not on the roster
    """
    title = (title or "").strip()
    if not title:
        raise ValidationError("Title is required")
    unique_student_ids = list(dict.fromkeys(student_ids))
    if not unique_student_ids:
        raise ValidationError("Select at least one student")

    teacher = require_role(session, teacher_id, UserRole.TEACHER)
    for student_id in unique_student_ids:
        if not is_student_of(session, student_id, teacher_id):
            raise AuthorizationError(f"Student {student_id} is not on your roster")

    assignment = Assignment(
        teacher_id=teacher_id,
        title=title,
        description=description,
        due_date=optional_utc(due_date),
    )
    session.add(assignment)
    session.flush()
    for student_id in unique_student_ids:
        session.add(
            AssignmentStudent(
                assignment_id=assignment.id,
                student_id=student_id,
                status=AssignmentStatus.PENDING.value,
            )
        )
    session.commit()
    session.refresh(assignment)

    logger.info(f"Created assignment {assignment.id} for {len(unique_student_ids)} students")

    teacher_name = display_name(teacher, "Your teacher")
    for student_id in unique_student_ids:
        dispatcher.notify(
            student_id,
            type=NotificationType.ASSIGNMENT.value,
            title="New Assignment",
            content=f'{teacher_name} created a new assignment: "{title}"',
            link=ASSIGNMENTS_LINK,
        )
    return assignment


def get_teacher_assignments(session: Session, teacher_id: int) -> List[AssignmentResponse]:
    """A teacher's assignments, newest first, with the number of assigned students."""
    statement = (
        select(Assignment, func.count(AssignmentStudent.id))
        .outerjoin(AssignmentStudent, AssignmentStudent.assignment_id == Assignment.id)
        .where(Assignment.teacher_id == teacher_id)
        .group_by(Assignment.id)
        .order_by(Assignment.created_at.desc(), Assignment.id.desc())
    )
    return [
        AssignmentResponse(
            id=assignment.id,
            teacher_id=assignment.teacher_id,
            title=assignment.title,
            description=assignment.description,
            due_date=assignment.due_date,
            created_at=assignment.created_at,
            student_count=count,
        )
        for assignment, count in session.exec(statement).all()
    ]


def _get_assignment_link(session: Session, assignment_id: int, student_id: int) -> Optional[AssignmentStudent]:
    return session.exec(
        select(AssignmentStudent).where(
            AssignmentStudent.assignment_id == assignment_id,
            AssignmentStudent.student_id == student_id,
        )
    ).first()


def submit_assignment(
    session: Session,
    dispatcher: NotificationDispatcher,
    student_id: int,
    assignment_id: int,
    file_url: str,
    file_type: SubmissionFileType,
    notes: Optional[str] = None,
) -> Submission:
    """
    Record a student's submission and notify the teacher.

    file_url is whatever the object storage returned; it is stored as-is.
    """
    if not file_url or not file_url.strip():
        raise ValidationError("A file URL is required")

    student = get_user(session, student_id)
    assignment = session.get(Assignment, assignment_id)
    if assignment is None:
        raise NotFoundError(f"Assignment with id {assignment_id} not found")

    link = _get_assignment_link(session, assignment_id, student_id)
    if link is None:
        raise AuthorizationError("This assignment is not assigned to you")

    submission = Submission(
        assignment_id=assignment_id,
        student_id=student_id,
        file_url=file_url.strip(),
        file_type=SubmissionFileType(file_type).value,
        notes=notes or None,
    )
    session.add(submission)
    link.status = AssignmentStatus.SUBMITTED.value
    session.add(link)
    session.commit()
    session.refresh(submission)

    logger.info(f"Student {student_id} submitted work for assignment {assignment_id}")

    dispatcher.notify(
        assignment.teacher_id,
        type=NotificationType.SUBMISSION.value,
        title="New Submission",
        content=f'{display_name(student, "A student")} submitted work for "{assignment.title}".',
        link=SUBMISSIONS_LINK,
    )
    return submission


def submit_feedback(
    session: Session,
    dispatcher: NotificationDispatcher,
    teacher_id: int,
    submission_id: int,
    content: str,
    rating: Optional[int] = None,
) -> Feedback:
    """
    Review a submission. Each submission gets at most one feedback.

    Raises:
        ValidationError: Empty content or rating outside 1-5
        AuthorizationError: Not a teacher, or not the assignment's teacher
        NotFoundError: Unknown submission
        ConflictError: Feedback already exists
    """
    text = (content or "").strip()
    if not text:
        raise ValidationError("Feedback content is required")
    if rating is not None and not 1 <= rating <= 5:
        raise ValidationError("Rating must be between 1 and 5")

    require_role(session, teacher_id, UserRole.TEACHER)

    row = session.exec(
        select(Submission, Assignment)
        .join(Assignment, Assignment.id == Submission.assignment_id)
        .where(Submission.id == submission_id)
    ).first()
    if row is None:
        raise NotFoundError(f"Submission with id {submission_id} not found")
    submission, assignment = row
    if assignment.teacher_id != teacher_id:
        raise AuthorizationError("You can only review submissions for your own assignments")

    existing = session.exec(
        select(Feedback).where(Feedback.submission_id == submission_id)
    ).first()
    if existing:
        raise ConflictError("Feedback has already been provided for this submission")

    feedback = Feedback(
        submission_id=submission_id,
        teacher_id=teacher_id,
        content=text,
        rating=rating,
    )
    session.add(feedback)
    link = _get_assignment_link(session, assignment.id, submission.student_id)
    if link is not None:
        link.status = AssignmentStatus.REVIEWED.value
        session.add(link)
    session.commit()
    session.refresh(feedback)

    logger.info(f"Teacher {teacher_id} reviewed submission {submission_id}")

    dispatcher.notify(
        submission.student_id,
        type=NotificationType.FEEDBACK.value,
        title="New Feedback",
        content=f'You received feedback on "{assignment.title}".',
        link=FEEDBACK_LINK,
    )
    return feedback


def _get_owned_assignment(session: Session, teacher_id: int, assignment_id: int, action: str) -> Assignment:
    assignment = session.get(Assignment, assignment_id)
    if assignment is None:
        raise NotFoundError(f"Assignment with id {assignment_id} not found")
    if assignment.teacher_id != teacher_id:
        raise AuthorizationError(f"Not authorized to {action} this assignment")
    return assignment


def update_assignment(
    session: Session,
    teacher_id: int,
    assignment_id: int,
    title: str,
    description: Optional[str] = None,
    due_date: Optional[datetime] = None,
) -> Assignment:
    """Edit an assignment's title, description and due date. Omitted values are cleared."""
    title = (title or "").strip()
    if not title:
        raise ValidationError("Title is required")

    assignment = _get_owned_assignment(session, teacher_id, assignment_id, "edit")
    assignment.title = title
    assignment.description = description or None
    assignment.due_date = optional_utc(due_date)
    assignment.updated_at = utc_now()

    session.add(assignment)
    session.commit()
    session.refresh(assignment)
    return assignment


def delete_assignment(session: Session, teacher_id: int, assignment_id: int) -> None:
    """Delete an assignment with its student links, submissions and their feedback."""
    assignment = _get_owned_assignment(session, teacher_id, assignment_id, "delete")

    submission_ids = select(Submission.id).where(Submission.assignment_id == assignment_id)
    for feedback in session.exec(select(Feedback).where(Feedback.submission_id.in_(submission_ids))).all():
        session.delete(feedback)
    for submission in session.exec(select(Submission).where(Submission.assignment_id == assignment_id)).all():
        session.delete(submission)
    for link in session.exec(select(AssignmentStudent).where(AssignmentStudent.assignment_id == assignment_id)).all():
        session.delete(link)
    session.delete(assignment)
    session.commit()

    logger.info(f"Teacher {teacher_id} deleted assignment {assignment_id}")


def get_student_assignments(session: Session, student_id: int) -> List[StudentAssignmentResponse]:
    """Assignments handed to a student, newest first, with their own status and the teacher's name."""
    get_user(session, student_id)
    statement = (
        select(Assignment, AssignmentStudent.status, User.full_name)
        .join(AssignmentStudent, AssignmentStudent.assignment_id == Assignment.id)
        .outerjoin(User, User.id == Assignment.teacher_id)
        .where(AssignmentStudent.student_id == student_id)
        .order_by(Assignment.created_at.desc(), Assignment.id.desc())
    )
    return [
        StudentAssignmentResponse(
            id=assignment.id,
            title=assignment.title,
            description=assignment.description,
            due_date=assignment.due_date,
            created_at=assignment.created_at,
            status=status,
            teacher_name=teacher_name or "Unknown Teacher",
        )
        for assignment, status, teacher_name in session.exec(statement).all()
    ]


def get_student_feedback(session: Session, student_id: int) -> List[StudentSubmissionResponse]:
    """A student's submissions, newest first, each with its assignment and any feedback."""
    get_user(session, student_id)
    statement = (
        select(Submission, Assignment, Feedback)
        .join(Assignment, Assignment.id == Submission.assignment_id)
        .outerjoin(Feedback, Feedback.submission_id == Submission.id)
        .where(Submission.student_id == student_id)
        .order_by(Submission.submitted_at.desc(), Submission.id.desc())
    )
    return [
        StudentSubmissionResponse(
            id=submission.id,
            assignment_id=assignment.id,
            assignment_title=assignment.title,
            due_date=assignment.due_date,
            file_url=submission.file_url,
            file_type=submission.file_type,
            notes=submission.notes,
            submitted_at=submission.submitted_at,
            feedback=FeedbackResponse.model_validate(feedback) if feedback else None,
        )
        for submission, assignment, feedback in session.exec(statement).all()
    ]

"""
Assignment, submission and feedback endpoints.
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from typing import List

from studio.api.v1.endpoints.utils import get_notification_dispatcher
from studio.core.database import get_session
from studio.schemas.assignment import (
    AssignmentResponse,
    CreateAssignmentRequest,
    FeedbackRequest,
    FeedbackResponse,
    StudentAssignmentResponse,
    StudentSubmissionResponse,
    SubmissionResponse,
    SubmitAssignmentRequest,
    UpdateAssignmentRequest,
)
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
from studio.services.notification_service import NotificationDispatcher

router = APIRouter(prefix="/assignments", tags=["assignments"])


@router.post("", response_model=AssignmentResponse, status_code=status.HTTP_201_CREATED)
async def create_assignment_endpoint(
    user_id: int,
    request: CreateAssignmentRequest,
    session: Session = Depends(get_session),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher)
):
    """Create an assignment and notify every assigned student."""
    assignment = create_assignment(
        session,
        dispatcher,
        teacher_id=user_id,
        title=request.title,
        student_ids=request.student_ids,
        description=request.description,
        due_date=request.due_date,
    )
    return AssignmentResponse(
        id=assignment.id,
        teacher_id=assignment.teacher_id,
        title=assignment.title,
        description=assignment.description,
        due_date=assignment.due_date,
        created_at=assignment.created_at,
        student_count=len(set(request.student_ids)),
    )


@router.get("", response_model=List[AssignmentResponse])
async def list_assignments(
    user_id: int,
    session: Session = Depends(get_session)
):
    return get_teacher_assignments(session, user_id)


@router.get("/assigned", response_model=List[StudentAssignmentResponse])
async def list_assigned_to_me(
    user_id: int,
    session: Session = Depends(get_session)
):
    """Assignments handed to the acting student, with their own status."""
    return get_student_assignments(session, user_id)


@router.get("/feedback", response_model=List[StudentSubmissionResponse])
async def list_my_feedback(
    user_id: int,
    session: Session = Depends(get_session)
):
    """The acting student's submissions with any feedback received."""
    return get_student_feedback(session, user_id)


@router.put("/{assignment_id}", response_model=AssignmentResponse)
async def update_assignment_endpoint(
    assignment_id: int,
    user_id: int,
    request: UpdateAssignmentRequest,
    session: Session = Depends(get_session)
):
    assignment = update_assignment(
        session,
        teacher_id=user_id,
        assignment_id=assignment_id,
        title=request.title,
        description=request.description,
        due_date=request.due_date,
    )
    return AssignmentResponse(
        id=assignment.id,
        teacher_id=assignment.teacher_id,
        title=assignment.title,
        description=assignment.description,
        due_date=assignment.due_date,
        created_at=assignment.created_at,
        student_count=len(assignment.students),
    )


@router.delete("/{assignment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_assignment_endpoint(
    assignment_id: int,
    user_id: int,
    session: Session = Depends(get_session)
):
    """Delete an assignment together with its submissions and feedback."""
    delete_assignment(session, teacher_id=user_id, assignment_id=assignment_id)


@router.post(
    "/{assignment_id}/submissions",
    response_model=SubmissionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_assignment_endpoint(
    assignment_id: int,
    user_id: int,
    request: SubmitAssignmentRequest,
    session: Session = Depends(get_session),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher)
):
    """Submit work; file_url comes from the object storage upload."""
    return submit_assignment(
        session,
        dispatcher,
        student_id=user_id,
        assignment_id=assignment_id,
        file_url=request.file_url,
        file_type=request.file_type,
        notes=request.notes,
    )


@router.post(
    "/submissions/{submission_id}/feedback",
    response_model=FeedbackResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_feedback_endpoint(
    submission_id: int,
    user_id: int,
    request: FeedbackRequest,
    session: Session = Depends(get_session),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher)
):
    return submit_feedback(
        session,
        dispatcher,
        teacher_id=user_id,
        submission_id=submission_id,
        content=request.content,
        rating=request.rating,
    )

"""
Notification endpoints. Every operation is scoped to the acting recipient.
"""
from fastapi import APIRouter, Depends
from sqlmodel import Session
from typing import List

from studio.core.database import get_session
from studio.schemas.notification import MarkAllReadResponse, NotificationResponse
from studio.services.notification_service import get_unread_notifications, mark_all_as_read, mark_as_read

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=List[NotificationResponse])
async def list_notifications(
    user_id: int,
    session: Session = Depends(get_session)
):
    """Unread notifications, newest first."""
    return get_unread_notifications(session, user_id)


@router.post("/read-all", response_model=MarkAllReadResponse)
async def read_all_notifications(
    user_id: int,
    session: Session = Depends(get_session)
):
    return MarkAllReadResponse(updated_count=mark_all_as_read(session, user_id))


@router.post("/{notification_id}/read", response_model=NotificationResponse)
async def read_notification(
    notification_id: int,
    user_id: int,
    session: Session = Depends(get_session)
):
    return mark_as_read(session, user_id, notification_id)

"""
Direct message endpoints.
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from typing import List

from studio.api.v1.endpoints.utils import get_notification_dispatcher
from studio.core.database import get_session
from studio.schemas.message import MessageResponse, SendMessageRequest
from studio.schemas.user import UserSummary
from studio.services.message_service import get_contacts, get_conversation, send_message
from studio.services.notification_service import NotificationDispatcher

router = APIRouter(prefix="/messages", tags=["messages"])


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def send_message_endpoint(
    user_id: int,
    request: SendMessageRequest,
    session: Session = Depends(get_session),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher)
):
    return send_message(session, dispatcher, sender_id=user_id, receiver_id=request.receiver_id, content=request.content)


@router.get("/contacts", response_model=List[UserSummary])
async def list_contacts(
    user_id: int,
    session: Session = Depends(get_session)
):
    """People the acting user can message."""
    return get_contacts(session, user_id)


@router.get("/{contact_id}", response_model=List[MessageResponse])
async def conversation(
    contact_id: int,
    user_id: int,
    session: Session = Depends(get_session)
):
    """Conversation with a contact, oldest first."""
    return get_conversation(session, user_id, contact_id)

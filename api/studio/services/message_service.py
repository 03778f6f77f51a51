"""
Direct messaging between teachers and their students.
"""
import logging
from typing import List
from sqlmodel import Session, select
from sqlalchemy import and_, or_

from studio.core.exceptions import AuthorizationError, ValidationError
from studio.models.enums import NotificationType
from studio.models.message import Message
from studio.models.user import User
from studio.services.notification_service import NotificationDispatcher
from studio.services.user_service import (
    display_name,
    get_students_for_teacher,
    get_teacher_for_student,
    get_user,
)

logger = logging.getLogger(__name__)

MAX_MESSAGE_LENGTH = 5000
MESSAGES_LINK = "/dashboard/messages"
PREVIEW_LENGTH = 100


def send_message(
    session: Session,
    dispatcher: NotificationDispatcher,
    sender_id: int,
    receiver_id: int,
    content: str,
) -> Message:
    """
    Store a message and notify the receiver.

    Raises:
        ValidationError: Empty or oversized content, or messaging yourself
        NotFoundError: If sender or receiver does not exist
        AuthorizationError: The receiver is not one of the sender's contacts
    """
    text = (content or "").strip()
    if not text:
        raise ValidationError("Message must not be empty")
    if len(text) > MAX_MESSAGE_LENGTH:
        raise ValidationError(f"Message must be at most {MAX_MESSAGE_LENGTH} characters")
    if sender_id == receiver_id:
        raise ValidationError("Cannot send a message to yourself")

    sender = get_user(session, sender_id)
    get_user(session, receiver_id)
    if receiver_id not in {contact.id for contact in get_contacts(session, sender_id)}:
        raise AuthorizationError("You can only message your teacher or your students")

    message = Message(sender_id=sender_id, receiver_id=receiver_id, content=text)
    session.add(message)
    session.commit()
    session.refresh(message)

    preview = text if len(text) <= PREVIEW_LENGTH else text[:PREVIEW_LENGTH] + "..."
    dispatcher.notify(
        receiver_id,
        type=NotificationType.MESSAGE.value,
        title="New Message",
        content=f"{display_name(sender, 'Someone')}: {preview}",
        link=MESSAGES_LINK,
    )
    return message


def get_conversation(session: Session, user_id: int, contact_id: int) -> List[Message]:
    """Messages exchanged between two users in either direction, oldest first."""
    statement = (
        select(Message)
        .where(
            or_(
                and_(Message.sender_id == user_id, Message.receiver_id == contact_id),
                and_(Message.sender_id == contact_id, Message.receiver_id == user_id),
            )
        )
        .order_by(Message.created_at, Message.id)
    )
    return list(session.exec(statement).all())


def get_contacts(session: Session, user_id: int) -> List[User]:
    """A teacher's contacts are their students; a student's is their teacher."""
    user = get_user(session, user_id)
    if user.is_teacher:
        return get_students_for_teacher(session, user_id)
    teacher = get_teacher_for_student(session, user_id)
    return [teacher] if teacher else []

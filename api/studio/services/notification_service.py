"""
Notification service.

Other users' actions create notifications through NotificationDispatcher,
which writes with the elevated-privilege session and never raises. The
recipient reads and marks their own notifications through the plain
functions below, using the normal request session.
"""
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional
from sqlmodel import Session, select

from studio.core.config import settings
from studio.core.exceptions import NotFoundError
from studio.models.notification import Notification
from studio.utils.time_utils import utc_now

logger = logging.getLogger(__name__)


@dataclass
class DispatchResult:
    """
    Outcome of a best-effort notification write.

    Callers may inspect it but never turn a failure into their own error:
    the primary action has already succeeded by the time a notification is
    dispatched.
    """
    notification_id: Optional[int] = None
    error: Optional[Exception] = None

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def is_failure(self) -> bool:
        return self.error is not None

    @classmethod
    def success(cls, notification_id: int) -> "DispatchResult":
        return cls(notification_id=notification_id)

    @classmethod
    def failure(cls, error: Exception) -> "DispatchResult":
        return cls(error=error)


class NotificationDispatcher:
    """Writes one notification row per call on behalf of another user."""

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def notify(
        self,
        recipient_user_id: int,
        type: str,
        title: str,
        content: Optional[str] = None,
        link: Optional[str] = None,
    ) -> DispatchResult:
        """
        Insert a notification for recipient_user_id.

        Args:
            recipient_user_id: The single recipient
            type: Free-form category tag ('lesson', 'message', ...)
            title: Short headline
            content: Optional body text
            link: Optional deep link into the dashboard

        Returns:
            DispatchResult; failures are logged here and returned, never raised
        """
        logger.info(f"Creating notification for user {recipient_user_id}: {title}")
        session = None
        try:
            session = self._session_factory()
            notification = Notification(
                user_id=recipient_user_id,
                type=type,
                title=title,
                content=content,
                link=link,
            )
            session.add(notification)
            session.commit()
            session.refresh(notification)
            return DispatchResult.success(notification.id)
        except Exception as e:
            if session is not None:
                session.rollback()
            logger.error(
                f"Failed to create notification for user {recipient_user_id} ({title!r}): {e}",
                exc_info=e,
            )
            return DispatchResult.failure(e)
        finally:
            if session is not None:
                session.close()


def get_unread_notifications(
    session: Session,
    user_id: int,
    limit: Optional[int] = None,
) -> List[Notification]:
    """Unread notifications for a user, newest first."""
    if limit is None:
        limit = settings.notification_page_size
    statement = (
        select(Notification)
        .where(Notification.user_id == user_id, Notification.read_at.is_(None))
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .limit(limit)
    )
    return list(session.exec(statement).all())


def mark_as_read(session: Session, user_id: int, notification_id: int) -> Notification:
    """
    Mark one of the user's notifications as read.

    A notification that belongs to somebody else is reported as not found.
    Marking an already-read notification keeps its original read_at.

    Raises:
        NotFoundError: If the notification does not exist for this user
    """
    notification = session.exec(
        select(Notification).where(
            Notification.id == notification_id,
            Notification.user_id == user_id,
        )
    ).first()
    if notification is None:
        raise NotFoundError(f"Notification with id {notification_id} not found")

    if notification.read_at is None:
        notification.read_at = utc_now()
        session.add(notification)
        session.commit()
        session.refresh(notification)
    return notification


def mark_all_as_read(session: Session, user_id: int) -> int:
    """Mark every unread notification of the user as read. Returns the count."""
    unread = session.exec(
        select(Notification).where(
            Notification.user_id == user_id,
            Notification.read_at.is_(None),
        )
    ).all()
    now = utc_now()
    for notification in unread:
        notification.read_at = now
        session.add(notification)
    session.commit()

    logger.info(f"Marked {len(unread)} notifications as read for user {user_id}")
    return len(unread)

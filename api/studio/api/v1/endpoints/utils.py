"""
Shared dependencies for endpoint modules.
"""
from studio.core.database import get_admin_session_factory
from studio.services.notification_service import NotificationDispatcher


def get_notification_dispatcher() -> NotificationDispatcher:
    """Dispatcher bound to the elevated-privilege session factory."""
    return NotificationDispatcher(get_admin_session_factory())

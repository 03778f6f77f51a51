from sqlmodel import SQLModel, create_engine, Session
from sqlalchemy.engine import Engine
from typing import Callable
from studio.core.config import settings, normalize_database_url
import logging

logger = logging.getLogger(__name__)


def build_engine(url: str) -> Engine:
    """Create an engine, applying pool sizing only to server databases."""
    db_url = normalize_database_url(url)
    if db_url.startswith("sqlite"):
        return create_engine(
            db_url,
            echo=False,
            connect_args={"check_same_thread": False},
        )
    return create_engine(
        db_url,
        echo=False,  # Set to False in production to reduce logs
        pool_pre_ping=True,  # Verify connections before using
        pool_size=5,
        max_overflow=10,
    )


logger.info(f"Connecting to database: {normalize_database_url(settings.database_url)[:20]}...")

engine = build_engine(settings.database_url)

# Elevated-privilege engine. Only the notification dispatcher writes through
# it, because a notification row belongs to the recipient, not the actor.
if settings.admin_database_url:
    admin_engine = build_engine(settings.admin_database_url)
else:
    admin_engine = engine


def get_session():
    """Dependency for getting database sessions."""
    with Session(engine) as session:
        yield session


def get_admin_session_factory() -> Callable[[], Session]:
    """Return a factory opening sessions on the elevated-privilege engine."""
    return lambda: Session(admin_engine)


def init_db():
    """Initialize database tables."""
    SQLModel.metadata.create_all(engine)

"""
Test fixtures for the Studio API.

Every test gets a fresh in-memory SQLite database shared by the request
session and the notification dispatcher (StaticPool keeps one connection).
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from datetime import datetime, timezone
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

import studio.models  # noqa: F401
from studio.api.v1.endpoints.utils import get_notification_dispatcher
from studio.core.database import get_session
from studio.main import app
from studio.models import Lesson, LessonStatus, StudentProfile, User, UserRole
from studio.services.notification_service import NotificationDispatcher


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def dispatcher(engine):
    return NotificationDispatcher(lambda: Session(engine))


@pytest.fixture
def broken_dispatcher():
    """Dispatcher whose database has no tables, so every insert fails."""
    empty_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield NotificationDispatcher(lambda: Session(empty_engine))
    empty_engine.dispose()


@pytest.fixture
def client(engine, dispatcher):
    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_notification_dispatcher] = lambda: dispatcher
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_user(session, email, role, full_name=None):
    user = User(email=email, role=role.value, full_name=full_name)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def teacher(session):
    return make_user(session, "teacher@example.com", UserRole.TEACHER, "Clara Wieck")


@pytest.fixture
def other_teacher(session):
    return make_user(session, "other.teacher@example.com", UserRole.TEACHER, "Franz Liszt")


@pytest.fixture
def student(session, teacher):
    user = make_user(session, "student@example.com", UserRole.STUDENT, "Johannes Brahms")
    session.add(StudentProfile(user_id=user.id, teacher_id=teacher.id))
    session.commit()
    return user


@pytest.fixture
def second_student(session, teacher):
    user = make_user(session, "student2@example.com", UserRole.STUDENT, "Robert Schumann")
    session.add(StudentProfile(user_id=user.id, teacher_id=teacher.id, weekly_practice_goal_minutes=300))
    session.commit()
    return user


def add_lesson(session, teacher, student, start, end, status=LessonStatus.SCHEDULED):
    lesson = Lesson(
        teacher_id=teacher.id,
        student_id=student.id,
        start_time=start,
        end_time=end,
        status=status.value,
    )
    session.add(lesson)
    session.commit()
    session.refresh(lesson)
    return lesson


@pytest.fixture
def afternoon_lesson(session, teacher, student):
    """Existing lesson 14:00-15:00 on 2024-03-04 (UTC)."""
    return add_lesson(
        session, teacher, student,
        datetime(2024, 3, 4, 14, 0, tzinfo=timezone.utc), datetime(2024, 3, 4, 15, 0, tzinfo=timezone.utc),
    )

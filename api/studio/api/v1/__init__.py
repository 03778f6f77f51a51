"""
API v1 router aggregation.
"""
from fastapi import APIRouter
from studio.api.v1.endpoints import (
    users, students, invites, practice, lessons, notifications, messages, assignments
)

api_router = APIRouter()

# Include all endpoint routers
# Note: Each router already defines its own prefix, so we don't add another one here
api_router.include_router(users.router)
api_router.include_router(students.router)
api_router.include_router(invites.router)
api_router.include_router(practice.router)
api_router.include_router(lessons.router)
api_router.include_router(notifications.router)
api_router.include_router(messages.router)
api_router.include_router(assignments.router)

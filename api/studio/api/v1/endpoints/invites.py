"""
Studio invite endpoints.
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from typing import List

from studio.core.database import get_session
from studio.models.invite import Invite
from studio.schemas.invite import AcceptInviteRequest, CreateInviteRequest, InviteResponse
from studio.schemas.user import UserResponse
from studio.services.invite_service import (
    accept_invite,
    cancel_invite,
    create_invite,
    get_pending_invites,
    invite_url,
)

router = APIRouter(prefix="/invites", tags=["invites"])


def _to_response(invite: Invite) -> InviteResponse:
    return InviteResponse(
        id=invite.id,
        email=invite.email,
        expires_at=invite.expires_at,
        created_at=invite.created_at,
        invite_url=invite_url(invite),
    )


@router.post("", response_model=InviteResponse, status_code=status.HTTP_201_CREATED)
async def create_invite_endpoint(
    user_id: int,
    request: CreateInviteRequest,
    session: Session = Depends(get_session)
):
    """Create a one-time invite link for a student, valid for a week."""
    return _to_response(create_invite(session, teacher_id=user_id, email=request.email))


@router.get("", response_model=List[InviteResponse])
async def list_invites(
    user_id: int,
    session: Session = Depends(get_session)
):
    return [_to_response(invite) for invite in get_pending_invites(session, user_id)]


@router.delete("/{invite_id}", status_code=status.HTTP_204_NO_CONTENT)
async def cancel_invite_endpoint(
    invite_id: int,
    user_id: int,
    session: Session = Depends(get_session)
):
    cancel_invite(session, teacher_id=user_id, invite_id=invite_id)


@router.post("/{token}/accept", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def accept_invite_endpoint(
    token: str,
    request: AcceptInviteRequest,
    session: Session = Depends(get_session)
):
    """Create the student account and join the inviting teacher's studio."""
    return accept_invite(
        session,
        token=token,
        email=request.email,
        full_name=request.full_name,
        instrument=request.instrument,
        skill_level=request.skill_level,
    )

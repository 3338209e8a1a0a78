from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from stack_assist.core.mailer import MailSender, get_mail_sender
from stack_assist.database import get_db
from stack_assist.dependencies import get_access_context
from stack_assist.models.access_context import AccessContext
from stack_assist.services.invitation_service import TeamService
from stack_assist.services.message_service import MessageService
from stack_assist.schemas.team_schemas import (
    TeamMemberInvite,
    TeamMemberUpdate,
    TeamMemberResponse,
    TeamMemberInviteResponse,
    TeamInviteResponse,
    TeamMemberRemoveResponse,
    MessageCreate,
    TeamMessageResponse,
)

router = APIRouter()


@router.get("/members", response_model=list[TeamMemberResponse])
async def list_members(
    context: AccessContext = Depends(get_access_context),
    db: Session = Depends(get_db),
):
    """
    List the owner's team members.

    - **Requires the account owner**
    """
    service = TeamService(db)
    return service.get_members(context)


@router.post(
    "/members", response_model=TeamMemberInviteResponse, status_code=status.HTTP_201_CREATED
)
async def invite_member(
    data: TeamMemberInvite,
    context: AccessContext = Depends(get_access_context),
    db: Session = Depends(get_db),
    mail_sender: MailSender = Depends(get_mail_sender),
):
    """
    Invite someone to the team.

    - **Requires the account owner**
    - Creates a pending member and an invite record
    - Sends a password-setup email and an invitation email
    - If either email fails the member is still created and
      `invitation_sent` is false
    """
    service = TeamService(db)
    return await service.invite_member(data, context, mail_sender)


@router.patch("/members/{member_id}", response_model=TeamMemberResponse)
async def update_member(
    member_id: int,
    data: TeamMemberUpdate,
    context: AccessContext = Depends(get_access_context),
    db: Session = Depends(get_db),
):
    """
    Update a member's permissions, role or status.

    - **Requires the account owner**
    - Status `inactive` suspends the member's access
    """
    service = TeamService(db)
    return service.update_member(member_id, data, context)


@router.delete("/members/{member_id}", response_model=TeamMemberRemoveResponse)
async def remove_member(
    member_id: int,
    context: AccessContext = Depends(get_access_context),
    db: Session = Depends(get_db),
):
    """
    Remove a member from the team.

    - **Requires the account owner**
    """
    service = TeamService(db)
    removed_id = service.remove_member(member_id, context)
    return TeamMemberRemoveResponse(
        message="Team member removed successfully", removed_member_id=removed_id
    )


@router.get("/invites", response_model=list[TeamInviteResponse])
async def list_invites(
    context: AccessContext = Depends(get_access_context),
    db: Session = Depends(get_db),
):
    service = TeamService(db)
    return service.get_invites(context)


@router.get("/messages", response_model=list[TeamMessageResponse])
async def list_messages(
    context: AccessContext = Depends(get_access_context),
    db: Session = Depends(get_db),
):
    """Latest team messages, oldest first"""
    service = MessageService(db)
    return service.get_messages(context)


@router.post(
    "/messages", response_model=TeamMessageResponse, status_code=status.HTTP_201_CREATED
)
async def post_message(
    data: MessageCreate,
    context: AccessContext = Depends(get_access_context),
    db: Session = Depends(get_db),
):
    service = MessageService(db)
    return service.post_message(data.text, context)

"""Team management and the two-leg team invitation."""

import logging
from html import escape
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from stack_assist.config import settings
from stack_assist.core.exceptions import (
    EmailDeliveryException,
    NotFoundException,
    ValidationException,
)
from stack_assist.core.mailer import MailSender
from stack_assist.models.access_context import AccessContext, ensure_owner
from stack_assist.models.team_invite import TeamInvite
from stack_assist.models.team_member import TeamMember, MemberStatus
from stack_assist.repositories.team_invite_repository import TeamInviteRepository
from stack_assist.repositories.team_member_repository import TeamMemberRepository
from stack_assist.repositories.user_repository import UserRepository
from stack_assist.schemas.team_schemas import (
    TeamMemberInvite,
    TeamMemberUpdate,
    TeamMemberInviteResponse,
    TeamMemberResponse,
)
from stack_assist.services.auth_service import AuthService

logger = logging.getLogger(__name__)

INVITATION_FAILED = "Invitation could not be sent. The team member was added; ask them to use password setup."


async def send_team_invitation_email(
    mail_sender: MailSender, email: str, team_owner_name: str, company_name: str
) -> None:
    """
    Send the HTML invitation that accompanies the password-setup email.

    Raises:
        EmailDeliveryException: If the email could not be sent
    """
    owner = escape(team_owner_name)
    company = escape(company_name)
    html = f"""
      <h2>Welcome to Stack Assist!</h2>
      <p>You've been invited to join {company}'s team by {owner}.</p>
      <p>You'll receive a separate email with a link to set up your password. Please follow these steps:</p>
      <ol>
        <li>Click the password setup link in the other email</li>
        <li>Set your secure password</li>
        <li>Log in at {escape(settings.APP_URL)}</li>
      </ol>
      <p>The password setup link expires in {settings.PASSWORD_SETUP_EXPIRE_HOURS} hours.</p>
      <p>If you have any questions, please contact your team owner at {owner}.</p>
      <p>Best regards,<br>The Stack Assist Team</p>
    """
    text = (
        f"You've been invited to join {company_name}'s team by {team_owner_name}.\n"
        "Use the password setup link in the other email, then log in at "
        f"{settings.APP_URL}."
    )
    await mail_sender.send(
        email,
        f"Join {company_name}'s Team on Stack Assist",
        text,
        html=html,
        from_name=company_name,
    )


class TeamService:
    """Service for the owner's team: invitations, members and permissions"""

    def __init__(self, db: Session):
        self.db = db
        self.member_repo = TeamMemberRepository(db)
        self.invite_repo = TeamInviteRepository(db)
        self.user_repo = UserRepository(db)

    async def invite_member(
        self, data: TeamMemberInvite, context: AccessContext, mail_sender: MailSender
    ) -> TeamMemberInviteResponse:
        """
        Invite someone to the caller's team.

        The TeamMember (pending) and TeamInvite are committed before any email
        goes out. Both email legs are best effort: if either fails the records
        stay and the response reports invitation_sent=False.

        Raises:
            ForbiddenException: If the caller is not the owner
            ValidationException: If the email is the owner's own, belongs to
                another agency owner, or is already on the team
        """
        ensure_owner(context)
        owner_id = context.tenant_id
        email = data.email.lower()

        if email == context.identity.email.lower():
            raise ValidationException("You cannot invite yourself")
        if self.user_repo.get_by_email(email):
            raise ValidationException("This email belongs to an agency owner account")
        if self.member_repo.get_by_email(owner_id, email):
            raise ValidationException("This email is already part of your team")

        profile = self.user_repo.get_by_id(owner_id)
        company_name = profile.company_name if profile else ""
        owner_email = context.identity.email
        permissions = data.permissions.model_dump()

        member = TeamMember(
            owner_id=owner_id,
            email=email,
            name=data.name,
            role=data.role,
            permissions=permissions,
            status=MemberStatus.PENDING,
            invited_by=owner_email,
        )
        invite = TeamInvite(
            owner_id=owner_id,
            email=email,
            owner_email=owner_email,
            company_name=company_name,
            permissions=permissions,
        )
        try:
            self.member_repo.create_no_commit(member)
            self.invite_repo.create_no_commit(invite)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ValidationException("This email is already part of your team")
        self.db.refresh(member)
        logger.info("Team member %s invited to tenant %s", member.id, owner_id)

        invitation_sent = True
        try:
            await AuthService(self.db).send_password_setup_email(
                email,
                mail_sender,
                continue_params={
                    "email": email,
                    "type": "team-invitation",
                    "owner": owner_email,
                    "company": company_name,
                },
                from_name=company_name or None,
            )
            await send_team_invitation_email(mail_sender, email, owner_email, company_name)
        except EmailDeliveryException as e:
            logger.error("Invitation email for team member %s failed: %s", member.id, e)
            invitation_sent = False

        response = TeamMemberResponse.model_validate(member)
        return TeamMemberInviteResponse(
            **response.model_dump(),
            invitation_sent=invitation_sent,
            invitation_error=None if invitation_sent else INVITATION_FAILED,
        )

    def get_members(self, context: AccessContext) -> list[TeamMember]:
        """All members of the caller's team, any status"""
        ensure_owner(context)
        return self.member_repo.get_by_tenant(context.tenant_id)

    def get_invites(self, context: AccessContext) -> list[TeamInvite]:
        ensure_owner(context)
        return self.invite_repo.get_by_tenant(context.tenant_id)

    def update_member(
        self, member_id: int, data: TeamMemberUpdate, context: AccessContext
    ) -> TeamMember:
        """
        Change a member's name, role, permissions or status.

        Setting status to inactive suspends access at the next request.
        """
        ensure_owner(context)
        member = self._get_owned(member_id, context.tenant_id)

        if data.name is not None:
            member.name = data.name
        if data.role is not None:
            member.role = data.role
        if data.permissions is not None:
            member.permissions = data.permissions.model_dump()
        if data.status is not None:
            member.status = data.status

        member = self.member_repo.update(member)
        logger.info("Team member %s of tenant %s updated", member.id, context.tenant_id)
        return member

    def remove_member(self, member_id: int, context: AccessContext) -> int:
        """Delete a member; the invited identity keeps its login but loses access"""
        ensure_owner(context)
        member = self._get_owned(member_id, context.tenant_id)
        self.member_repo.delete(member)
        logger.info("Team member %s removed from tenant %s", member_id, context.tenant_id)
        return member_id

    def _get_owned(self, member_id: int, owner_id: int) -> TeamMember:
        member = self.member_repo.get_by_id_and_tenant(member_id, owner_id)
        if not member:
            raise NotFoundException("Team member not found")
        return member

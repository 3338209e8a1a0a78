from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from stack_assist.models.team_member import MemberStatus
from stack_assist.models.team_invite import InviteStatus


class ModulePermissions(BaseModel):
    """Per-module access flags"""

    clients: bool = False
    sites: bool = False
    hosting: bool = False
    mobile_apps: bool = False
    developer_accounts: bool = False
    tasks: bool = False


class TeamPermissions(BaseModel):
    """Write flags plus module map granted to a team member"""

    can_create: bool = True
    can_edit: bool = False
    can_delete: bool = False
    modules: ModulePermissions = Field(default_factory=ModulePermissions)


class TeamMemberInvite(BaseModel):
    """Invite someone to the owner's team"""

    email: EmailStr
    name: str = Field(..., min_length=1, max_length=255)
    role: str = Field(default="developer", min_length=1, max_length=100)
    permissions: TeamPermissions = Field(default_factory=TeamPermissions)


class TeamMemberUpdate(BaseModel):
    """Owner edits to a member (partial)"""

    name: str | None = Field(None, min_length=1, max_length=255)
    role: str | None = Field(None, min_length=1, max_length=100)
    permissions: TeamPermissions | None = None
    status: MemberStatus | None = None


class TeamMemberResponse(BaseModel):
    """Team member details"""

    id: int
    owner_id: int
    member_user_id: int | None
    email: str
    name: str
    role: str
    permissions: TeamPermissions
    status: MemberStatus
    invited_by: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class TeamMemberInviteResponse(TeamMemberResponse):
    """
    Created member plus the outcome of the invitation emails.

    invitation_error is a single message whichever email leg failed.
    """

    invitation_sent: bool
    invitation_error: str | None = None


class TeamInviteResponse(BaseModel):
    id: int
    owner_id: int
    email: str
    owner_email: str
    company_name: str
    permissions: TeamPermissions
    status: InviteStatus
    created_at: datetime

    model_config = {"from_attributes": True}


class TeamMemberRemoveResponse(BaseModel):
    """Response after removing member"""

    message: str
    removed_member_id: int


class MessageCreate(BaseModel):
    text: str = Field(..., min_length=1, max_length=5000)


class TeamMessageResponse(BaseModel):
    id: int
    sender_id: int
    sender_name: str
    text: str
    created_at: datetime

    model_config = {"from_attributes": True}

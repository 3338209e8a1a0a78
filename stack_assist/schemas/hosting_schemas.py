from datetime import date, datetime
from pydantic import BaseModel, Field
from stack_assist.models.hosting_account import HostType, HostingStatus


class HostingAccountCreate(BaseModel):
    """Schema for creating a hosting account"""

    provider: str = Field(..., min_length=1, max_length=255)
    server_login_url: str | None = Field(None, max_length=500)
    host_type: HostType = HostType.SHARED
    username: str | None = Field(None, max_length=255)
    email: str | None = Field(None, max_length=255)
    password_hint: str | None = Field(None, max_length=255)
    expiration_date: date | None = None
    status: HostingStatus = HostingStatus.ACTIVE


class HostingAccountUpdate(BaseModel):
    """Schema for updating a hosting account (partial)"""

    provider: str | None = Field(None, min_length=1, max_length=255)
    server_login_url: str | None = Field(None, max_length=500)
    host_type: HostType | None = None
    username: str | None = Field(None, max_length=255)
    email: str | None = Field(None, max_length=255)
    password_hint: str | None = Field(None, max_length=255)
    expiration_date: date | None = None
    status: HostingStatus | None = None


class HostingAccountResponse(BaseModel):
    """Schema for hosting account response"""

    model_config = {"from_attributes": True}

    id: int
    user_id: int
    provider: str
    server_login_url: str | None
    host_type: HostType
    username: str | None
    email: str | None
    password_hint: str | None
    expiration_date: date | None
    status: HostingStatus
    expiring_soon: bool = False
    created_at: datetime
    updated_at: datetime


class HostingAccountListResponse(BaseModel):
    """Schema for list of hosting accounts"""

    hosting_accounts: list[HostingAccountResponse]
    total: int

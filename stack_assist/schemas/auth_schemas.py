from datetime import datetime
from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    """Create an owner account (identity + tenant profile)"""

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)
    company_name: str = Field(..., min_length=1, max_length=255)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class TokenResponse(BaseModel):
    """Bearer token for an open session"""

    access_token: str
    token_type: str = "bearer"
    session_id: str
    user_id: int


class MeResponse(BaseModel):
    """Who the caller is and which tenant they act for"""

    user_id: int
    email: str
    tenant_id: int
    company_name: str | None
    is_owner: bool
    role: str | None = None
    permissions: dict | None = None
    session_last_activity_at: datetime


class PasswordSetupRequest(BaseModel):
    email: EmailStr


class PasswordSetupConfirm(BaseModel):
    token: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1, max_length=128)


class MessageResponse(BaseModel):
    message: str

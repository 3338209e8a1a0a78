from datetime import datetime
from pydantic import BaseModel, EmailStr, Field
from stack_assist.models.client import ClientStatus


class ClientCreate(BaseModel):
    """Schema for creating a new client"""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: str = Field(..., min_length=1, max_length=50)


class ClientUpdate(BaseModel):
    """Schema for updating a client"""

    name: str | None = Field(None, min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(None, min_length=1, max_length=50)


class ClientResponse(BaseModel):
    """Schema for client response"""

    id: int
    user_id: int
    name: str
    email: str
    phone: str
    self_onboarded: bool
    onboarded_at: datetime | None
    status: ClientStatus | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ClientListResponse(BaseModel):
    """Schema for list of clients"""

    clients: list[ClientResponse]
    total: int


class OnboardingResponse(BaseModel):
    """Acknowledgement for a self-onboarded client"""

    message: str
    client_id: int

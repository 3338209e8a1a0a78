from datetime import date, datetime
from pydantic import BaseModel, EmailStr, Field
from stack_assist.models.developer_account import DeveloperAccountType


class DeveloperAccountCreate(BaseModel):
    """Schema for creating a developer account"""

    account_type: DeveloperAccountType
    email: EmailStr
    mobile_number: str | None = Field(None, max_length=50)
    expiry_date: date | None = None
    duns: str | None = Field(None, max_length=50)
    company_name: str = Field(..., min_length=1, max_length=255)
    date_created: date | None = None
    status: str | None = Field(None, max_length=50)


class DeveloperAccountUpdate(BaseModel):
    """Schema for updating a developer account (partial)"""

    account_type: DeveloperAccountType | None = None
    email: EmailStr | None = None
    mobile_number: str | None = Field(None, max_length=50)
    expiry_date: date | None = None
    duns: str | None = Field(None, max_length=50)
    company_name: str | None = Field(None, min_length=1, max_length=255)
    date_created: date | None = None
    status: str | None = Field(None, max_length=50)


class DeveloperAccountResponse(BaseModel):
    """Developer account with its derived app count"""

    model_config = {"from_attributes": True}

    id: int
    user_id: int
    account_type: DeveloperAccountType
    email: str
    mobile_number: str | None
    expiry_date: date | None
    duns: str | None
    company_name: str
    date_created: date | None
    status: str | None
    mobile_apps_count: int = 0
    created_at: datetime
    updated_at: datetime


class DeveloperAccountListResponse(BaseModel):
    """Schema for list of developer accounts"""

    developer_accounts: list[DeveloperAccountResponse]
    total: int

from datetime import date, datetime
from pydantic import BaseModel, Field
from stack_assist.models.mobile_app import Platform


class MobileAppCreate(BaseModel):
    """Schema for creating a mobile app (also registers its domain as a site)"""

    app_name: str = Field(..., min_length=1, max_length=255)
    platform: Platform = Platform.BOTH
    client_id: int
    app_domain: str | None = Field(None, max_length=500)
    date_created: date | None = None
    renewal_date: date | None = None
    ios_developer_account_id: int | None = None
    google_developer_account_id: int | None = None
    apple_live_url: str | None = Field(None, max_length=500)
    google_live_url: str | None = Field(None, max_length=500)
    app_cost: float = Field(default=0.00, ge=0)
    amount_spent: float = Field(default=0.00, ge=0)
    status: str | None = Field(None, max_length=50)
    version: str | None = Field(None, max_length=50)


class MobileAppUpdate(BaseModel):
    """Schema for updating a mobile app (partial)"""

    app_name: str | None = Field(None, min_length=1, max_length=255)
    platform: Platform | None = None
    client_id: int | None = None
    app_domain: str | None = Field(None, max_length=500)
    date_created: date | None = None
    renewal_date: date | None = None
    ios_developer_account_id: int | None = None
    google_developer_account_id: int | None = None
    apple_live_url: str | None = Field(None, max_length=500)
    google_live_url: str | None = Field(None, max_length=500)
    app_cost: float | None = Field(None, ge=0)
    amount_spent: float | None = Field(None, ge=0)
    status: str | None = Field(None, max_length=50)
    version: str | None = Field(None, max_length=50)


class MobileAppResponse(BaseModel):
    """Schema for mobile app response"""

    model_config = {"from_attributes": True}

    id: int
    user_id: int
    app_name: str
    platform: Platform
    client_id: int | None
    client_name: str | None
    app_domain: str | None
    date_created: date | None
    renewal_date: date | None
    ios_developer_account_id: int | None
    google_developer_account_id: int | None
    apple_live_url: str | None
    google_live_url: str | None
    app_cost: float
    amount_spent: float
    status: str | None
    version: str | None
    created_at: datetime
    updated_at: datetime


class MobileAppListResponse(BaseModel):
    """Schema for list of mobile apps"""

    mobile_apps: list[MobileAppResponse]
    total: int

from datetime import date, datetime
from pydantic import BaseModel, Field


class SiteCreate(BaseModel):
    """Schema for creating a new site"""

    name: str = Field(..., min_length=1, max_length=255)
    type: str | None = Field(None, max_length=100)
    url: str | None = Field(None, max_length=500)
    client_id: int | None = None
    host_id: int | None = None
    domain_purchased_from: str | None = Field(None, max_length=255)
    expiration_date: date | None = None
    name_changed: bool = False
    old_domain_name: str | None = Field(None, max_length=255)
    old_domain_expiration_date: date | None = None
    amount_paid: float = Field(default=0.00, ge=0)
    amount_used_for_creation: float = Field(default=0.00, ge=0)


class SiteUpdate(BaseModel):
    """Schema for updating a site (partial)"""

    name: str | None = Field(None, min_length=1, max_length=255)
    type: str | None = Field(None, max_length=100)
    url: str | None = Field(None, max_length=500)
    client_id: int | None = None
    host_id: int | None = None
    domain_purchased_from: str | None = Field(None, max_length=255)
    expiration_date: date | None = None
    name_changed: bool | None = None
    old_domain_name: str | None = Field(None, max_length=255)
    old_domain_expiration_date: date | None = None
    amount_paid: float | None = Field(None, ge=0)
    amount_used_for_creation: float | None = Field(None, ge=0)


class SiteResponse(BaseModel):
    """Schema for site response"""

    model_config = {"from_attributes": True}

    id: int
    user_id: int
    name: str
    type: str | None
    url: str | None
    client_id: int | None
    client_name: str | None
    host_id: int | None
    host_name: str | None
    domain_purchased_from: str | None
    expiration_date: date | None
    name_changed: bool
    old_domain_name: str | None
    old_domain_expiration_date: date | None
    amount_paid: float
    amount_used_for_creation: float
    created_at: datetime
    updated_at: datetime


class SiteListResponse(BaseModel):
    """Schema for list of sites"""

    sites: list[SiteResponse]
    total: int

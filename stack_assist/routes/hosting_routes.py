from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from stack_assist.core.clock import today
from stack_assist.database import get_db
from stack_assist.dependencies import get_access_context
from stack_assist.models.access_context import AccessContext
from stack_assist.models.hosting_account import HostingAccount
from stack_assist.services.expiry import is_hosting_expiring_soon
from stack_assist.services.hosting_service import HostingService
from stack_assist.schemas.hosting_schemas import (
    HostingAccountCreate,
    HostingAccountUpdate,
    HostingAccountResponse,
    HostingAccountListResponse,
)

router = APIRouter()


def _to_response(account: HostingAccount) -> HostingAccountResponse:
    response = HostingAccountResponse.model_validate(account)
    response.expiring_soon = is_hosting_expiring_soon(account.expiration_date, today())
    return response


@router.post("", response_model=HostingAccountResponse, status_code=status.HTTP_201_CREATED)
async def create_hosting_account(
    data: HostingAccountCreate,
    context: AccessContext = Depends(get_access_context),
    db: Session = Depends(get_db),
):
    service = HostingService(db)
    return _to_response(service.create_account(data, context))


@router.get("", response_model=HostingAccountListResponse)
async def list_hosting_accounts(
    context: AccessContext = Depends(get_access_context), db: Session = Depends(get_db)
):
    """Get the tenant's hosting accounts, flagging those expiring within 30 days"""
    service = HostingService(db)
    accounts = [_to_response(a) for a in service.get_accounts(context)]
    return HostingAccountListResponse(hosting_accounts=accounts, total=len(accounts))


@router.get("/{account_id}", response_model=HostingAccountResponse)
async def get_hosting_account(
    account_id: int,
    context: AccessContext = Depends(get_access_context),
    db: Session = Depends(get_db),
):
    service = HostingService(db)
    return _to_response(service.get_account(account_id, context))


@router.patch("/{account_id}", response_model=HostingAccountResponse)
async def update_hosting_account(
    account_id: int,
    data: HostingAccountUpdate,
    context: AccessContext = Depends(get_access_context),
    db: Session = Depends(get_db),
):
    service = HostingService(db)
    return _to_response(service.update_account(account_id, data, context))


@router.delete("/{account_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_hosting_account(
    account_id: int,
    context: AccessContext = Depends(get_access_context),
    db: Session = Depends(get_db),
):
    service = HostingService(db)
    service.delete_account(account_id, context)
    return None

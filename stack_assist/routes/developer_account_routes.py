from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from stack_assist.database import get_db
from stack_assist.dependencies import get_access_context
from stack_assist.models.access_context import AccessContext
from stack_assist.services.developer_account_service import DeveloperAccountService
from stack_assist.schemas.developer_account_schemas import (
    DeveloperAccountCreate,
    DeveloperAccountUpdate,
    DeveloperAccountResponse,
    DeveloperAccountListResponse,
)

router = APIRouter()


@router.post("", response_model=DeveloperAccountResponse, status_code=status.HTTP_201_CREATED)
async def create_developer_account(
    data: DeveloperAccountCreate,
    context: AccessContext = Depends(get_access_context),
    db: Session = Depends(get_db),
):
    service = DeveloperAccountService(db)
    return service.create_account(data, context)


@router.get("", response_model=DeveloperAccountListResponse)
async def list_developer_accounts(
    context: AccessContext = Depends(get_access_context), db: Session = Depends(get_db)
):
    """Get developer accounts with the number of apps linked to each"""
    service = DeveloperAccountService(db)
    accounts = service.get_accounts(context)
    return DeveloperAccountListResponse(developer_accounts=accounts, total=len(accounts))


@router.get("/{account_id}", response_model=DeveloperAccountResponse)
async def get_developer_account(
    account_id: int,
    context: AccessContext = Depends(get_access_context),
    db: Session = Depends(get_db),
):
    service = DeveloperAccountService(db)
    return service.get_account(account_id, context)


@router.patch("/{account_id}", response_model=DeveloperAccountResponse)
async def update_developer_account(
    account_id: int,
    data: DeveloperAccountUpdate,
    context: AccessContext = Depends(get_access_context),
    db: Session = Depends(get_db),
):
    service = DeveloperAccountService(db)
    return service.update_account(account_id, data, context)


@router.delete("/{account_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_developer_account(
    account_id: int,
    context: AccessContext = Depends(get_access_context),
    db: Session = Depends(get_db),
):
    service = DeveloperAccountService(db)
    service.delete_account(account_id, context)
    return None

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from stack_assist.database import get_db
from stack_assist.dependencies import get_access_context
from stack_assist.models.access_context import AccessContext
from stack_assist.models.client import ClientStatus
from stack_assist.services.client_service import ClientService
from stack_assist.schemas.client_schemas import (
    ClientCreate,
    ClientUpdate,
    ClientResponse,
    ClientListResponse,
    OnboardingResponse,
)

router = APIRouter()
onboarding_router = APIRouter()


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
async def create_client(
    data: ClientCreate,
    context: AccessContext = Depends(get_access_context),
    db: Session = Depends(get_db),
):
    """Create a client; email and phone must be unique within the tenant"""
    service = ClientService(db)
    return service.create_client(data, context)


@router.get("", response_model=ClientListResponse)
async def list_clients(
    context: AccessContext = Depends(get_access_context), db: Session = Depends(get_db)
):
    service = ClientService(db)
    clients = service.get_clients(context)
    return ClientListResponse(clients=clients, total=len(clients))


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(
    client_id: int,
    context: AccessContext = Depends(get_access_context),
    db: Session = Depends(get_db),
):
    service = ClientService(db)
    return service.get_client(client_id, context)


@router.patch("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: int,
    data: ClientUpdate,
    context: AccessContext = Depends(get_access_context),
    db: Session = Depends(get_db),
):
    """Update client details"""
    service = ClientService(db)
    return service.update_client(client_id, data, context)


@router.post("/{client_id}/approve", response_model=ClientResponse)
async def approve_client(
    client_id: int,
    context: AccessContext = Depends(get_access_context),
    db: Session = Depends(get_db),
):
    """Approve a self-onboarded client"""
    service = ClientService(db)
    return service.set_review_status(client_id, ClientStatus.APPROVED, context)


@router.post("/{client_id}/reject", response_model=ClientResponse)
async def reject_client(
    client_id: int,
    context: AccessContext = Depends(get_access_context),
    db: Session = Depends(get_db),
):
    """Reject a self-onboarded client"""
    service = ClientService(db)
    return service.set_review_status(client_id, ClientStatus.REJECTED, context)


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_client(
    client_id: int,
    context: AccessContext = Depends(get_access_context),
    db: Session = Depends(get_db),
):
    service = ClientService(db)
    service.delete_client(client_id, context)
    return None


@onboarding_router.post(
    "/{user_id}", response_model=OnboardingResponse, status_code=status.HTTP_201_CREATED
)
async def onboard_client(user_id: int, data: ClientCreate, db: Session = Depends(get_db)):
    """
    Public onboarding form for a tenant's clients.

    No authentication; the client is created pending the tenant's approval.
    """
    service = ClientService(db)
    client = service.onboard_client(user_id, data)
    return OnboardingResponse(message="Onboarding received", client_id=client.id)

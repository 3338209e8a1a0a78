from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from stack_assist.database import get_db
from stack_assist.dependencies import get_access_context
from stack_assist.models.access_context import AccessContext
from stack_assist.services.mobile_app_service import MobileAppService
from stack_assist.schemas.mobile_app_schemas import (
    MobileAppCreate,
    MobileAppUpdate,
    MobileAppResponse,
    MobileAppListResponse,
)

router = APIRouter()


@router.post("", response_model=MobileAppResponse, status_code=status.HTTP_201_CREATED)
async def create_mobile_app(
    data: MobileAppCreate,
    context: AccessContext = Depends(get_access_context),
    db: Session = Depends(get_db),
):
    """
    Create a mobile app for a client.

    A matching site of type "Mobile App" is created in the same transaction.
    """
    service = MobileAppService(db)
    return service.create_app(data, context)


@router.get("", response_model=MobileAppListResponse)
async def list_mobile_apps(
    context: AccessContext = Depends(get_access_context), db: Session = Depends(get_db)
):
    service = MobileAppService(db)
    apps = service.get_apps(context)
    return MobileAppListResponse(mobile_apps=apps, total=len(apps))


@router.get("/{app_id}", response_model=MobileAppResponse)
async def get_mobile_app(
    app_id: int,
    context: AccessContext = Depends(get_access_context),
    db: Session = Depends(get_db),
):
    service = MobileAppService(db)
    return service.get_app(app_id, context)


@router.patch("/{app_id}", response_model=MobileAppResponse)
async def update_mobile_app(
    app_id: int,
    data: MobileAppUpdate,
    context: AccessContext = Depends(get_access_context),
    db: Session = Depends(get_db),
):
    service = MobileAppService(db)
    return service.update_app(app_id, data, context)


@router.delete("/{app_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_mobile_app(
    app_id: int,
    context: AccessContext = Depends(get_access_context),
    db: Session = Depends(get_db),
):
    service = MobileAppService(db)
    service.delete_app(app_id, context)
    return None

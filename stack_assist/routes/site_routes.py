from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from stack_assist.database import get_db
from stack_assist.dependencies import get_access_context
from stack_assist.models.access_context import AccessContext
from stack_assist.services.site_service import SiteService
from stack_assist.schemas.site_schemas import (
    SiteCreate,
    SiteUpdate,
    SiteResponse,
    SiteListResponse,
)

router = APIRouter()


@router.post("", response_model=SiteResponse, status_code=status.HTTP_201_CREATED)
async def create_site(
    data: SiteCreate,
    context: AccessContext = Depends(get_access_context),
    db: Session = Depends(get_db),
):
    """Create a site; client and host must belong to the same tenant"""
    service = SiteService(db)
    return service.create_site(data, context)


@router.get("", response_model=SiteListResponse)
async def list_sites(
    context: AccessContext = Depends(get_access_context), db: Session = Depends(get_db)
):
    service = SiteService(db)
    sites = service.get_sites(context)
    return SiteListResponse(sites=sites, total=len(sites))


@router.get("/{site_id}", response_model=SiteResponse)
async def get_site(
    site_id: int,
    context: AccessContext = Depends(get_access_context),
    db: Session = Depends(get_db),
):
    service = SiteService(db)
    return service.get_site(site_id, context)


@router.patch("/{site_id}", response_model=SiteResponse)
async def update_site(
    site_id: int,
    data: SiteUpdate,
    context: AccessContext = Depends(get_access_context),
    db: Session = Depends(get_db),
):
    service = SiteService(db)
    return service.update_site(site_id, data, context)


@router.delete("/{site_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_site(
    site_id: int,
    context: AccessContext = Depends(get_access_context),
    db: Session = Depends(get_db),
):
    service = SiteService(db)
    service.delete_site(site_id, context)
    return None

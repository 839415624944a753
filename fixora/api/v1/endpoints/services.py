"""
Service catalog endpoints.

- GET operations are public.
- POST / PUT / DELETE operations require admin role.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from fixora.api.v1.deps import get_db, require_admin
from fixora.core.exceptions import NotFoundError
from fixora.models.service import Service
from fixora.repositories.services import ServiceRepository
from fixora.schemas.common import MessageResponse
from fixora.schemas.service import (Category, ServiceCreate,
                                    ServiceListResponse, ServiceRead,
                                    ServiceResponse, ServiceUpdate)
from fixora.schemas.token import TokenIdentity

router = APIRouter(prefix="/services", tags=["services"])
logger = logging.getLogger(__name__)


async def _get_or_404(repo: ServiceRepository, service_id: int) -> Service:
    service = await repo.get(service_id)
    if service is None:
        raise NotFoundError("Service not found")
    return service


@router.get("", response_model=ServiceListResponse)
async def list_services(
    category: Category | None = Query(default=None),
    db: AsyncSession = Depends(get_db),
) -> ServiceListResponse:
    services = await ServiceRepository(db).list(category)
    return ServiceListResponse(
        services=[ServiceRead.model_validate(s) for s in services],
        total=len(services),
    )


@router.get("/{service_id}", response_model=ServiceResponse)
async def get_service(
    service_id: int,
    db: AsyncSession = Depends(get_db),
) -> ServiceResponse:
    service = await _get_or_404(ServiceRepository(db), service_id)
    return ServiceResponse(service=ServiceRead.model_validate(service))


@router.post("", response_model=ServiceResponse, status_code=201)
async def create_service(
    body: ServiceCreate,
    db: AsyncSession = Depends(get_db),
    admin: TokenIdentity = Depends(require_admin),
) -> ServiceResponse:
    service = await ServiceRepository(db).add(Service(**body.model_dump()))
    logger.info("Service %d (%s) created by admin %d", service.id, service.title, admin.user_id)
    return ServiceResponse(
        message="Service created successfully!",
        service=ServiceRead.model_validate(service),
    )


@router.put("/{service_id}", response_model=ServiceResponse)
async def update_service(
    service_id: int,
    body: ServiceUpdate,
    db: AsyncSession = Depends(get_db),
    admin: TokenIdentity = Depends(require_admin),
) -> ServiceResponse:
    repo = ServiceRepository(db)
    service = await _get_or_404(repo, service_id)
    changes = body.model_dump(exclude_unset=True)
    service = await repo.update(service, changes)
    logger.info("Service %d updated by admin %d: %s", service_id, admin.user_id, sorted(changes))
    return ServiceResponse(
        message="Service updated successfully!",
        service=ServiceRead.model_validate(service),
    )


@router.delete("/{service_id}", response_model=MessageResponse)
async def delete_service(
    service_id: int,
    db: AsyncSession = Depends(get_db),
    admin: TokenIdentity = Depends(require_admin),
) -> MessageResponse:
    """Delete a service. Existing bookings keep their ``service_name`` snapshot."""
    repo = ServiceRepository(db)
    service = await _get_or_404(repo, service_id)
    await repo.delete(service)
    logger.info("Service %d deleted by admin %d", service_id, admin.user_id)
    return MessageResponse(message="Service deleted successfully!")

"""
Catalog API - Pricing plans and add-on services offered on quotes.

Deleting a plan or service deactivates it; rows stay for existing quotes.
"""
from fastapi import APIRouter, status
from typing import List

from arqui_api.api.deps import CatalogAdminDep, CatalogDep
from arqui_api.schemas.errors import responses_for
from arqui_api.schemas.pricing import (
    PricingPlanCreate,
    PricingPlanUpdate,
    PricingPlanResponse,
    ServiceCreate,
    ServiceUpdate,
    ServiceResponse,
)

router = APIRouter()


# Pricing plans

@router.get("/plans", response_model=List[PricingPlanResponse])
async def list_plans(catalog: CatalogDep, active_only: bool = False):
    """List pricing plans, active first then most recent."""
    if active_only:
        return await catalog.list_active_plans()
    return await catalog.list_plans()


@router.post(
    "/plans",
    response_model=PricingPlanResponse,
    status_code=status.HTTP_201_CREATED,
    responses=responses_for(422, 500),
)
async def create_plan(plan_data: PricingPlanCreate, admin: CatalogAdminDep):
    """Create a pricing plan."""
    return await admin.create_plan(plan_data)


@router.patch(
    "/plans/{plan_id}",
    response_model=PricingPlanResponse,
    responses=responses_for(404, 422, 500),
)
async def update_plan(plan_id: int, plan_data: PricingPlanUpdate, admin: CatalogAdminDep):
    """Update a pricing plan. Existing quotes keep their snapshot."""
    return await admin.update_plan(plan_id, plan_data)


@router.delete(
    "/plans/{plan_id}",
    response_model=PricingPlanResponse,
    responses=responses_for(404, 500),
)
async def deactivate_plan(plan_id: int, admin: CatalogAdminDep):
    """Deactivate a pricing plan."""
    return await admin.deactivate_plan(plan_id)


# Services

@router.get("/services", response_model=List[ServiceResponse])
async def list_services(catalog: CatalogDep, active_only: bool = False):
    """List services in display order."""
    if active_only:
        return await catalog.list_active_services()
    return await catalog.list_services()


@router.post(
    "/services",
    response_model=ServiceResponse,
    status_code=status.HTTP_201_CREATED,
    responses=responses_for(422, 500),
)
async def create_service(service_data: ServiceCreate, admin: CatalogAdminDep):
    """Create a catalog service."""
    return await admin.create_service(service_data)


@router.patch(
    "/services/{service_id}",
    response_model=ServiceResponse,
    responses=responses_for(404, 422, 500),
)
async def update_service(service_id: int, service_data: ServiceUpdate, admin: CatalogAdminDep):
    """Update a catalog service. Existing line items keep their unit price."""
    return await admin.update_service(service_id, service_data)


@router.delete(
    "/services/{service_id}",
    response_model=ServiceResponse,
    responses=responses_for(404, 500),
)
async def deactivate_service(service_id: int, admin: CatalogAdminDep):
    """Deactivate a service and hide it from the public list."""
    return await admin.deactivate_service(service_id)

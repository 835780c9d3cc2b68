"""Pricing catalog: read access to pricing plans and services.

The catalog never talks to a global connection. It is built on a
``CatalogRepository``; the SQL implementation is bound to the session of the
unit of work that uses it, so plan and service reads happen inside the same
transaction as the quote mutation.
"""

from typing import Dict, Iterable, List, Optional, Protocol
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from arqui_api.exceptions import InvalidPricingPlanError, InvalidServiceError
from arqui_api.models.pricing import PricingPlan, Service

logger = logging.getLogger(__name__)


class CatalogRepository(Protocol):
    """Read-only access to catalog rows."""

    async def get_plan(self, plan_id: int) -> Optional[PricingPlan]: ...

    async def get_service(self, service_id: int) -> Optional[Service]: ...

    async def get_services(self, service_ids: Iterable[int]) -> List[Service]: ...

    async def list_plans(self, active_only: bool = False) -> List[PricingPlan]: ...

    async def list_services(self, active_only: bool = False) -> List[Service]: ...


class SqlCatalogRepository:
    """CatalogRepository backed by the SQLAlchemy models."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_plan(self, plan_id: int) -> Optional[PricingPlan]:
        return await self.db.get(PricingPlan, plan_id)

    async def get_service(self, service_id: int) -> Optional[Service]:
        return await self.db.get(Service, service_id)

    async def get_services(self, service_ids: Iterable[int]) -> List[Service]:
        ids = list(set(service_ids))
        if not ids:
            return []
        result = await self.db.execute(select(Service).where(Service.id.in_(ids)))
        return list(result.scalars().all())

    async def list_plans(self, active_only: bool = False) -> List[PricingPlan]:
        query = select(PricingPlan)
        if active_only:
            query = query.where(PricingPlan.is_active.is_(True))
        query = query.order_by(
            PricingPlan.is_active.desc(),
            PricingPlan.effective_from.desc(),
            PricingPlan.id.desc(),
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def list_services(self, active_only: bool = False) -> List[Service]:
        query = select(Service)
        if active_only:
            query = query.where(Service.is_active.is_(True))
        query = query.order_by(Service.display_order.asc(), Service.id.asc())
        result = await self.db.execute(query)
        return list(result.scalars().all())


class PricingCatalog:
    """Plan and service lookups used by the quote mutation protocol."""

    def __init__(self, repository: CatalogRepository):
        self.repository = repository

    async def find_active_plan(self, plan_id: int) -> PricingPlan:
        """Return the plan if it exists and is active.

        Raises:
            InvalidPricingPlanError: unknown or inactive plan id
        """
        plan = await self.repository.get_plan(plan_id)
        if plan is None or not plan.is_active:
            logger.info("Rejected pricing plan %s (missing or inactive)", plan_id)
            raise InvalidPricingPlanError(plan_id)
        return plan

    async def find_service(self, service_id: int) -> Optional[Service]:
        """Lookup that may return an inactive service."""
        return await self.repository.get_service(service_id)

    async def find_services(self, service_ids: Iterable[int]) -> Dict[int, Service]:
        services = await self.repository.get_services(service_ids)
        return {service.id: service for service in services}

    async def require_active_service(self, service_id: int) -> Service:
        """Service that may be attached to a new line item.

        Raises:
            InvalidServiceError: unknown or inactive service id
        """
        service = await self.find_service(service_id)
        if service is None or not service.is_active:
            raise InvalidServiceError(service_id)
        return service

    async def list_active_plans(self) -> List[PricingPlan]:
        return await self.repository.list_plans(active_only=True)

    async def list_active_services(self) -> List[Service]:
        return await self.repository.list_services(active_only=True)

    async def list_plans(self) -> List[PricingPlan]:
        return await self.repository.list_plans()

    async def list_services(self) -> List[Service]:
        return await self.repository.list_services()

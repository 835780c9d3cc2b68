"""Tests for catalog lookups and catalog administration."""
from datetime import date
from decimal import Decimal

import pytest
import pytest_asyncio

from arqui_api.exceptions import (
    InvalidPricingPlanError,
    InvalidServiceError,
    NotFoundError,
    ValidationError,
)
from arqui_api.models import PricingPlan
from arqui_api.schemas.pricing import (
    PricingPlanCreate,
    PricingPlanUpdate,
    ServiceCreate,
    ServiceUpdate,
)
from arqui_api.services.catalog import PricingCatalog, SqlCatalogRepository
from arqui_api.services.catalog_admin import CatalogAdminService

from tests.factories import PricingPlanFactory


class InMemoryCatalogRepository:
    """Repository stub holding plans and services in dicts."""

    def __init__(self, plans=(), services=()):
        self.plans = {p.id: p for p in plans}
        self.services = {s.id: s for s in services}

    async def get_plan(self, plan_id):
        return self.plans.get(plan_id)

    async def get_service(self, service_id):
        return self.services.get(service_id)

    async def get_services(self, service_ids):
        return [self.services[i] for i in set(service_ids) if i in self.services]

    async def list_plans(self, active_only=False):
        return [p for p in self.plans.values() if p.is_active or not active_only]

    async def list_services(self, active_only=False):
        return [s for s in self.services.values() if s.is_active or not active_only]


@pytest_asyncio.fixture
async def catalog(test_db):
    return PricingCatalog(SqlCatalogRepository(test_db))


@pytest_asyncio.fixture
async def admin(test_db):
    return CatalogAdminService(test_db)


class TestPricingCatalog:
    """Plan and service lookups."""

    @pytest.mark.asyncio
    async def test_find_active_plan(self, catalog, standard_plan):
        plan = await catalog.find_active_plan(standard_plan.id)
        assert plan.id == standard_plan.id

    @pytest.mark.asyncio
    async def test_inactive_or_missing_plan(self, catalog, inactive_plan):
        with pytest.raises(InvalidPricingPlanError):
            await catalog.find_active_plan(inactive_plan.id)
        with pytest.raises(InvalidPricingPlanError):
            await catalog.find_active_plan(9999)

    @pytest.mark.asyncio
    async def test_find_service_returns_inactive(self, catalog, inactive_service):
        service = await catalog.find_service(inactive_service.id)
        assert service is not None
        assert service.is_active is False

    @pytest.mark.asyncio
    async def test_require_active_service(self, catalog, flat_service, inactive_service):
        assert (await catalog.require_active_service(flat_service.id)).id == flat_service.id
        with pytest.raises(InvalidServiceError):
            await catalog.require_active_service(inactive_service.id)

    @pytest.mark.asyncio
    async def test_find_services_batch(self, catalog, flat_service, percent_service):
        found = await catalog.find_services([flat_service.id, percent_service.id, flat_service.id, 9999])
        assert set(found) == {flat_service.id, percent_service.id}

    @pytest.mark.asyncio
    async def test_plan_ordering_active_first(self, catalog, test_db):
        old = PricingPlan(**PricingPlanFactory(effective_from=date(2024, 1, 1)))
        new = PricingPlan(**PricingPlanFactory(effective_from=date(2026, 1, 1)))
        retired = PricingPlan(**PricingPlanFactory(effective_from=date(2026, 6, 1), is_active=False))
        test_db.add_all([old, new, retired])
        await test_db.commit()

        plans = await catalog.list_plans()
        active = await catalog.list_active_plans()

        assert [p.id for p in plans] == [new.id, old.id, retired.id]
        assert [p.id for p in active] == [new.id, old.id]

    @pytest.mark.asyncio
    async def test_service_ordering(self, catalog, area_service, flat_service, percent_service, inactive_service):
        services = await catalog.list_services()
        active = await catalog.list_active_services()

        assert [s.id for s in services] == [
            flat_service.id, percent_service.id, area_service.id, inactive_service.id
        ]
        assert inactive_service.id not in [s.id for s in active]

    @pytest.mark.asyncio
    async def test_works_over_any_repository(self):
        plan = PricingPlan(id=1, name="Plan", price_per_area=Decimal("10"), is_active=True)
        catalog = PricingCatalog(InMemoryCatalogRepository(plans=[plan]))

        assert await catalog.find_active_plan(1) is plan
        with pytest.raises(InvalidServiceError):
            await catalog.require_active_service(1)


class TestCatalogAdmin:
    """Creating, editing and retiring catalog entries."""

    @pytest.mark.asyncio
    async def test_create_plan_defaults_currency(self, admin):
        plan = await admin.create_plan(PricingPlanCreate(name="Anteproyecto", price_per_area="15"))

        assert plan.id is not None
        assert plan.currency == "PEN"
        assert plan.is_active is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("overrides,field", [
        ({"price_per_area": 0}, "price_per_area"),
        ({"name": "  "}, "name"),
        ({"currency": "S/"}, "currency"),
        ({"min_days": 40, "max_days": 20}, "min_days"),
    ])
    async def test_create_plan_validation(self, admin, overrides, field):
        values = {"name": "Plan", "price_per_area": "20"}
        values.update(overrides)

        with pytest.raises(ValidationError) as exc_info:
            await admin.create_plan(PricingPlanCreate(**values))

        assert exc_info.value.field == field

    @pytest.mark.asyncio
    async def test_update_plan(self, admin, standard_plan):
        plan = await admin.update_plan(
            standard_plan.id, PricingPlanUpdate(price_per_area="550", currency="usd")
        )

        assert plan.price_per_area == Decimal("550")
        assert plan.currency == "USD"

    @pytest.mark.asyncio
    async def test_update_plan_day_window_checked_against_stored(self, admin, standard_plan):
        with pytest.raises(ValidationError):
            await admin.update_plan(standard_plan.id, PricingPlanUpdate(min_days=60))

    @pytest.mark.asyncio
    async def test_update_missing_plan(self, admin):
        with pytest.raises(NotFoundError):
            await admin.update_plan(9999, PricingPlanUpdate(name="X"))

    @pytest.mark.asyncio
    async def test_deactivate_plan(self, admin, catalog, standard_plan):
        plan_id = standard_plan.id

        await admin.deactivate_plan(plan_id)

        with pytest.raises(InvalidPricingPlanError):
            await catalog.find_active_plan(plan_id)

    @pytest.mark.asyncio
    async def test_create_service(self, admin):
        service = await admin.create_service(
            ServiceCreate(name="Renders 3D", pricing_mode="flat", price="350", currency="pen")
        )

        assert service.currency == "PEN"
        assert service.price == Decimal("350")
        assert service.is_active is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("overrides,field", [
        ({"pricing_mode": "hourly"}, "pricing_mode"),
        ({"price": -1}, "price"),
        ({"name": ""}, "name"),
    ])
    async def test_create_service_validation(self, admin, overrides, field):
        values = {"name": "Servicio", "price": "100"}
        values.update(overrides)

        with pytest.raises(ValidationError) as exc_info:
            await admin.create_service(ServiceCreate(**values))

        assert exc_info.value.field == field

    @pytest.mark.asyncio
    async def test_zero_price_service_allowed(self, admin):
        service = await admin.create_service(ServiceCreate(name="Visita técnica", price=0))
        assert service.price == Decimal("0")

    @pytest.mark.asyncio
    async def test_update_service(self, admin, flat_service):
        service = await admin.update_service(
            flat_service.id, ServiceUpdate(pricing_mode="per_area", price="12.5")
        )

        assert service.pricing_mode == "per_area"
        assert service.price == Decimal("12.5")

    @pytest.mark.asyncio
    async def test_update_service_rejects_null_flag(self, admin, flat_service):
        with pytest.raises(ValidationError):
            await admin.update_service(flat_service.id, ServiceUpdate(is_active=None))

    @pytest.mark.asyncio
    async def test_empty_service_update(self, admin, flat_service):
        with pytest.raises(ValidationError):
            await admin.update_service(flat_service.id, ServiceUpdate())

    @pytest.mark.asyncio
    async def test_deactivate_service_is_soft(self, admin, catalog, flat_service):
        service_id = flat_service.id

        service = await admin.deactivate_service(service_id)

        assert service.is_active is False
        assert service.is_public is False
        assert await catalog.find_service(service_id) is not None
        with pytest.raises(InvalidServiceError):
            await catalog.require_active_service(service_id)

    @pytest.mark.asyncio
    async def test_deactivate_missing_service(self, admin):
        with pytest.raises(NotFoundError):
            await admin.deactivate_service(9999)

"""Catalog administration: create, edit and retire pricing plans and services.

Edits to a plan never reach existing quotes; quotes keep the rate and
snapshot fields copied when the plan was selected.
"""

from typing import Optional
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from arqui_api.config import settings
from arqui_api.exceptions import NotFoundError, ValidationError
from arqui_api.models.pricing import PRICING_MODES, PricingPlan, Service
from arqui_api.schemas.pricing import (
    PricingPlanCreate,
    PricingPlanUpdate,
    ServiceCreate,
    ServiceUpdate,
)
from arqui_api.services import validation
from arqui_api.services.transaction import unit_of_work

logger = logging.getLogger(__name__)

# Flags and ordering may not be cleared with null
NON_NULLABLE_FLAGS = ("is_active", "is_public", "is_addon", "display_order")


class CatalogAdminService:
    def __init__(self, db: AsyncSession, default_currency: Optional[str] = None):
        self.db = db
        self.default_currency = default_currency or settings.DEFAULT_CURRENCY

    # Pricing plans

    async def create_plan(self, data: PricingPlanCreate) -> PricingPlan:
        values = data.model_dump()
        values["name"] = validation.required_text(values["name"], "name")
        values["description"] = validation.optional_text(values["description"])
        values["price_per_area"] = validation.positive_decimal(values["price_per_area"], "price_per_area")
        values["currency"] = self._currency(values["currency"])
        for field in ("min_days", "max_days"):
            values[field] = validation.day_count(values[field], field)
        self._check_day_window(values["min_days"], values["max_days"])

        async with unit_of_work(self.db, "create pricing plan"):
            plan = PricingPlan(**values)
            self.db.add(plan)

        logger.info("Created pricing plan %s (%s %s)", plan.id, plan.price_per_area, plan.currency)
        return plan

    async def update_plan(self, plan_id: int, data: PricingPlanUpdate) -> PricingPlan:
        payload = data.model_dump(exclude_unset=True)
        if not payload:
            raise ValidationError("No fields to update")

        changes = {}
        if "name" in payload:
            changes["name"] = validation.required_text(payload["name"], "name")
        if "description" in payload:
            changes["description"] = validation.optional_text(payload["description"])
        if "price_per_area" in payload:
            changes["price_per_area"] = validation.positive_decimal(
                payload["price_per_area"], "price_per_area"
            )
        if "currency" in payload:
            changes["currency"] = validation.currency_code(payload["currency"])
        for field in ("min_days", "max_days"):
            if field in payload:
                changes[field] = validation.day_count(payload[field], field)
        if "effective_from" in payload:
            changes["effective_from"] = payload["effective_from"]
        if "is_active" in payload:
            if payload["is_active"] is None:
                raise ValidationError("is_active cannot be null", field="is_active")
            changes["is_active"] = payload["is_active"]

        async with unit_of_work(self.db, "update pricing plan"):
            plan = await self._get(PricingPlan, plan_id, "Pricing plan")
            self._check_day_window(
                changes.get("min_days", plan.min_days),
                changes.get("max_days", plan.max_days),
            )
            for field, value in changes.items():
                setattr(plan, field, value)

        logger.info("Updated pricing plan %s fields=%s", plan_id, sorted(changes))
        return plan

    async def deactivate_plan(self, plan_id: int) -> PricingPlan:
        async with unit_of_work(self.db, "deactivate pricing plan"):
            plan = await self._get(PricingPlan, plan_id, "Pricing plan")
            plan.is_active = False

        logger.info("Deactivated pricing plan %s", plan_id)
        return plan

    # Services

    async def create_service(self, data: ServiceCreate) -> Service:
        values = data.model_dump()
        values["name"] = validation.required_text(values["name"], "name")
        values["description"] = validation.optional_text(values["description"])
        values["icon"] = validation.optional_text(values["icon"])
        values["pricing_mode"] = validation.choice(values["pricing_mode"], PRICING_MODES, "pricing_mode")
        values["price"] = validation.non_negative_decimal(values["price"], "price")
        values["currency"] = self._currency(values["currency"])

        async with unit_of_work(self.db, "create service"):
            service = Service(**values)
            self.db.add(service)

        logger.info("Created service %s (%s %s)", service.id, service.pricing_mode, service.price)
        return service

    async def update_service(self, service_id: int, data: ServiceUpdate) -> Service:
        payload = data.model_dump(exclude_unset=True)
        if not payload:
            raise ValidationError("No fields to update")

        changes = {}
        if "name" in payload:
            changes["name"] = validation.required_text(payload["name"], "name")
        for field in ("description", "icon"):
            if field in payload:
                changes[field] = validation.optional_text(payload[field])
        if "pricing_mode" in payload:
            changes["pricing_mode"] = validation.choice(
                payload["pricing_mode"], PRICING_MODES, "pricing_mode"
            )
        if "price" in payload:
            changes["price"] = validation.non_negative_decimal(payload["price"], "price")
        if "currency" in payload:
            changes["currency"] = validation.currency_code(payload["currency"])
        for field in NON_NULLABLE_FLAGS:
            if field in payload:
                if payload[field] is None:
                    raise ValidationError(f"{field} cannot be null", field=field)
                changes[field] = payload[field]

        async with unit_of_work(self.db, "update service"):
            service = await self._get(Service, service_id, "Service")
            for field, value in changes.items():
                setattr(service, field, value)

        logger.info("Updated service %s fields=%s", service_id, sorted(changes))
        return service

    async def deactivate_service(self, service_id: int) -> Service:
        """Soft delete: hidden from the public list and from new line items."""
        async with unit_of_work(self.db, "deactivate service"):
            service = await self._get(Service, service_id, "Service")
            service.is_active = False
            service.is_public = False

        logger.info("Deactivated service %s", service_id)
        return service

    # Helpers

    async def _get(self, model, entity_id: int, resource: str):
        entity = await self.db.get(model, entity_id, with_for_update=True, populate_existing=True)
        if entity is None:
            raise NotFoundError(resource, entity_id)
        return entity

    def _currency(self, value: Optional[str]) -> str:
        if value is None:
            return self.default_currency
        return validation.currency_code(value)

    @staticmethod
    def _check_day_window(min_days: Optional[int], max_days: Optional[int]) -> None:
        if min_days is not None and max_days is not None and min_days > max_days:
            raise ValidationError(
                "min_days cannot be greater than max_days", field="min_days"
            )

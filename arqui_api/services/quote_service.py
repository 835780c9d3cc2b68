"""Quote mutation protocol.

Every public operation is one unit of work over a quote's full state (the
quote row plus its line items):

1. validate the caller's input, before anything is read for writing
2. lock the quote row and read the catalog entries it needs
3. apply the change and re-establish the derived figures
4. commit, or roll back on any failure

Area, floor, rate and plan changes run the full recomputation in
``pricing_engine.recompute_quote``; line-item changes recompute only the
affected item before re-deriving extras and total.
"""

from decimal import Decimal
from typing import Dict, List, Optional, Tuple
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import raiseload

from arqui_api.config import settings
from arqui_api.exceptions import InvalidServiceError, NotFoundError, ValidationError
from arqui_api.models.pricing import PricingPlan
from arqui_api.models.quote import QUOTE_STATUSES, Quote, QuoteLineItem
from arqui_api.schemas.quote import LineItemCreate, LineItemUpdate, QuoteCreate, QuoteUpdate
from arqui_api.services import validation
from arqui_api.services.catalog import PricingCatalog, SqlCatalogRepository
from arqui_api.services.money import round2
from arqui_api.services.pricing_engine import (
    RECOMPUTE_TRIGGERS,
    recompute_quote,
    refresh_extras,
    refresh_line_item,
)
from arqui_api.services.transaction import unit_of_work

logger = logging.getLogger(__name__)

IDENTITY_FIELDS = ("full_name", "phone", "email", "project_name")
OPTIONAL_TEXT_FIELDS = ("document_type", "document_number", "project_address", "notes")
PLAN_SNAPSHOT_FIELDS = ("plan_name", "plan_min_days", "plan_max_days")


def _apply_plan(quote: Quote, plan: PricingPlan) -> None:
    """Copy the plan's rate, currency and snapshot fields onto the quote."""
    quote.pricing_plan_id = plan.id
    quote.rate_per_area = plan.price_per_area
    quote.currency = plan.currency
    quote.plan_name = plan.name
    quote.plan_min_days = plan.min_days
    quote.plan_max_days = plan.max_days


def _clean_plan_snapshot(payload: dict) -> dict:
    cleaned = {}
    if "plan_name" in payload:
        cleaned["plan_name"] = validation.optional_text(payload["plan_name"])
    for field in ("plan_min_days", "plan_max_days"):
        if field in payload:
            cleaned[field] = validation.day_count(payload[field], field)
    return cleaned


def _clean_line_item(quantity, unit_price) -> Tuple[Optional[int], Optional[Decimal]]:
    if quantity is not None:
        quantity = validation.at_least_one(quantity, "quantity")
    if unit_price is not None:
        unit_price = validation.non_negative_decimal(unit_price, "unit_price")
    return quantity, unit_price


class QuoteService:
    """Create, read and mutate quotes while keeping their totals consistent."""

    def __init__(self, db: AsyncSession, catalog: Optional[PricingCatalog] = None):
        self.db = db
        self.catalog = catalog or PricingCatalog(SqlCatalogRepository(db))
        self.default_currency = settings.DEFAULT_CURRENCY
        self.default_uncovered_percent = round2(settings.DEFAULT_UNCOVERED_PERCENT)

    # Reads

    async def get_quote(self, quote_id: int) -> Quote:
        result = await self.db.execute(
            select(Quote)
            .where(Quote.id == quote_id)
            .execution_options(populate_existing=True)
        )
        quote = result.scalar_one_or_none()
        if quote is None:
            raise NotFoundError("Quote", quote_id)
        return quote

    async def list_quotes(
        self,
        status: Optional[str] = None,
        page: int = 1,
        page_size: int = 20,
    ) -> Tuple[List[Quote], int]:
        """Newest first. Returns (quotes, total matching)."""
        query = select(Quote)
        if status is not None:
            validation.choice(status, QUOTE_STATUSES, "status")
            query = query.where(Quote.status == status)

        count_query = select(func.count()).select_from(query.subquery())
        total = (await self.db.execute(count_query)).scalar() or 0

        offset = (page - 1) * page_size
        query = (
            query.options(raiseload(Quote.line_items))
            .order_by(Quote.created_at.desc(), Quote.id.desc())
            .offset(offset)
            .limit(page_size)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all()), total

    async def quote_status_summary(self) -> Dict[str, int]:
        """Number of quotes per status, zero-filled for every known status."""
        result = await self.db.execute(
            select(Quote.status, func.count(Quote.id)).group_by(Quote.status)
        )
        counts = {status: 0 for status in QUOTE_STATUSES}
        for status, count in result.all():
            counts[status] = count
        return counts

    # Mutations

    async def create_quote(self, data: QuoteCreate) -> Quote:
        """Validate, price and persist a new quote with its line items."""
        values = {field: validation.required_text(getattr(data, field), field) for field in IDENTITY_FIELDS}
        for field in OPTIONAL_TEXT_FIELDS:
            values[field] = validation.optional_text(getattr(data, field))

        values["total_area"] = validation.positive_decimal(data.total_area, "total_area")
        values["uncovered_percent"] = (
            self.default_uncovered_percent
            if data.uncovered_percent is None
            else validation.percent(data.uncovered_percent, "uncovered_percent")
        )
        explicit_covered = (
            None
            if data.covered_area is None
            else validation.non_negative_decimal(data.covered_area, "covered_area")
        )
        values["floor_count"] = (
            1 if data.floor_count is None else validation.at_least_one(data.floor_count, "floor_count")
        )
        values["status"] = (
            "new" if data.status is None else validation.choice(data.status, QUOTE_STATUSES, "status")
        )
        values["expires_at"] = data.expires_at

        if data.pricing_plan_id is None:
            values["rate_per_area"] = validation.positive_decimal(data.rate_per_area, "rate_per_area")
            values["currency"] = (
                self.default_currency
                if data.currency is None
                else validation.currency_code(data.currency)
            )
            values.update(_clean_plan_snapshot(data.model_dump(include=set(PLAN_SNAPSHOT_FIELDS))))

        requested_items = [
            (line.service_id, *_clean_line_item(line.quantity, line.unit_price))
            for line in data.line_items
        ]

        async with unit_of_work(self.db, "create quote"):
            quote = Quote(**values)
            if data.pricing_plan_id is not None:
                plan = await self.catalog.find_active_plan(data.pricing_plan_id)
                _apply_plan(quote, plan)

            services = await self.catalog.find_services(service_id for service_id, _, _ in requested_items)
            line_items = []
            for service_id, quantity, unit_price in requested_items:
                service = services.get(service_id)
                if service is None or not service.is_active:
                    raise InvalidServiceError(service_id)
                line_items.append(
                    QuoteLineItem(
                        service=service,
                        service_id=service.id,
                        quantity=quantity or 1,
                        unit_price=service.price if unit_price is None else unit_price,
                    )
                )
            quote.line_items = line_items

            recompute_quote(quote, explicit_covered)
            self.db.add(quote)

        logger.info(
            "Created quote %s: base=%s extras=%s total=%s %s",
            quote.id, quote.base_cost, quote.extras_cost, quote.total_cost, quote.currency,
        )
        return quote

    async def update_quote_fields(self, quote_id: int, data: QuoteUpdate) -> Quote:
        """Apply a partial update; recompute everything if a pricing input changed."""
        payload = data.model_dump(exclude_unset=True)
        if not payload:
            raise ValidationError("No fields to update")
        changes = self._clean_update(payload)

        async with unit_of_work(self.db, "update quote"):
            quote = await self._lock_quote(quote_id)

            plan = None
            switches_plan = "pricing_plan_id" in changes
            if changes.get("pricing_plan_id") is not None:
                plan = await self.catalog.find_active_plan(changes["pricing_plan_id"])
            elif quote.pricing_plan_id is not None and not switches_plan:
                for field in ("rate_per_area", "currency"):
                    if field in changes:
                        raise ValidationError(
                            f"{field} cannot be set while a pricing plan is selected; "
                            "clear pricing_plan_id to price manually",
                            field=field,
                        )

            for field in IDENTITY_FIELDS + OPTIONAL_TEXT_FIELDS:
                if field in changes:
                    setattr(quote, field, changes[field])
            for field in ("status", "expires_at", "total_area", "uncovered_percent", "floor_count"):
                if field in changes:
                    setattr(quote, field, changes[field])

            if plan is not None:
                _apply_plan(quote, plan)
            else:
                if switches_plan:
                    # Manual override: rate and currency stay as last resolved
                    quote.pricing_plan_id = None
                for field in ("rate_per_area", "currency") + PLAN_SNAPSHOT_FIELDS:
                    if field in changes:
                        setattr(quote, field, changes[field])

            if RECOMPUTE_TRIGGERS & changes.keys():
                recompute_quote(quote, changes.get("covered_area"))

        logger.info(
            "Updated quote %s fields=%s total=%s",
            quote_id, sorted(changes), quote.total_cost,
        )
        return quote

    async def add_line_item(self, quote_id: int, data: LineItemCreate) -> QuoteLineItem:
        """Attach an active service to the quote and re-derive its totals."""
        quantity, unit_price = _clean_line_item(data.quantity, data.unit_price)

        async with unit_of_work(self.db, "add line item"):
            quote = await self._lock_quote(quote_id)
            service = await self.catalog.require_active_service(data.service_id)

            item = QuoteLineItem(
                service=service,
                service_id=service.id,
                quantity=quantity or 1,
                unit_price=service.price if unit_price is None else unit_price,
            )
            quote.line_items.append(item)
            refresh_line_item(quote, item)
            refresh_extras(quote)

        logger.info(
            "Added service %s to quote %s: line_total=%s total=%s",
            service.id, quote_id, item.line_total, quote.total_cost,
        )
        return item

    async def update_line_item(
        self, quote_id: int, item_id: int, data: LineItemUpdate
    ) -> QuoteLineItem:
        """Edit quantity and/or unit price of one item.

        The service's current active flag is not re-checked.
        """
        payload = data.model_dump(exclude_unset=True)
        if payload.get("quantity") is None and payload.get("unit_price") is None:
            raise ValidationError("No fields to update")
        quantity, unit_price = _clean_line_item(payload.get("quantity"), payload.get("unit_price"))

        async with unit_of_work(self.db, "update line item"):
            quote = await self._lock_quote(quote_id)
            item = self._find_item(quote, item_id)
            if quantity is not None:
                item.quantity = quantity
            if unit_price is not None:
                item.unit_price = unit_price
            refresh_line_item(quote, item)
            refresh_extras(quote)

        logger.info("Updated line item %s on quote %s", item_id, quote_id)
        return item

    async def remove_line_item(self, quote_id: int, item_id: int) -> Quote:
        async with unit_of_work(self.db, "remove line item"):
            quote = await self._lock_quote(quote_id)
            item = self._find_item(quote, item_id)
            quote.line_items.remove(item)
            refresh_extras(quote)

        logger.info("Removed line item %s from quote %s", item_id, quote_id)
        return quote

    # Helpers

    async def _lock_quote(self, quote_id: int) -> Quote:
        """Load the quote with its line items, holding a row lock until commit.

        SQLite ignores FOR UPDATE, so there writers are not serialized per row.
        """
        result = await self.db.execute(
            select(Quote)
            .where(Quote.id == quote_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        quote = result.scalar_one_or_none()
        if quote is None:
            raise NotFoundError("Quote", quote_id)
        return quote

    @staticmethod
    def _find_item(quote: Quote, item_id: int) -> QuoteLineItem:
        for item in quote.line_items:
            if item.id == item_id:
                return item
        raise NotFoundError("Quote line item", item_id)

    def _clean_update(self, payload: dict) -> dict:
        """Validate only the supplied fields."""
        changes = {}
        for field in IDENTITY_FIELDS:
            if field in payload:
                changes[field] = validation.required_text(payload[field], field)
        for field in OPTIONAL_TEXT_FIELDS:
            if field in payload:
                changes[field] = validation.optional_text(payload[field])

        if "status" in payload:
            changes["status"] = validation.choice(payload["status"], QUOTE_STATUSES, "status")
        if "expires_at" in payload:
            changes["expires_at"] = payload["expires_at"]

        if "total_area" in payload:
            changes["total_area"] = validation.positive_decimal(payload["total_area"], "total_area")
        if "uncovered_percent" in payload:
            changes["uncovered_percent"] = validation.percent(
                payload["uncovered_percent"], "uncovered_percent"
            )
        if "covered_area" in payload:
            # null asks for covered area to be derived from the percentage again
            changes["covered_area"] = (
                None
                if payload["covered_area"] is None
                else validation.non_negative_decimal(payload["covered_area"], "covered_area")
            )
        if "floor_count" in payload:
            changes["floor_count"] = validation.at_least_one(payload["floor_count"], "floor_count")

        if "pricing_plan_id" in payload:
            changes["pricing_plan_id"] = payload["pricing_plan_id"]
        if "rate_per_area" in payload:
            changes["rate_per_area"] = validation.positive_decimal(
                payload["rate_per_area"], "rate_per_area"
            )
        if "currency" in payload:
            changes["currency"] = validation.currency_code(payload["currency"])
        changes.update(_clean_plan_snapshot(payload))
        return changes

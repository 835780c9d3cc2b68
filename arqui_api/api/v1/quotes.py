"""
Quotes API - Price architecture projects and manage their add-on services.
"""
from fastapi import APIRouter, Query, Response, status
from typing import Optional

from arqui_api.api.deps import CatalogDep, QuoteServiceDep
from arqui_api.schemas.errors import responses_for
from arqui_api.schemas.quote import (
    LineItemCreate,
    LineItemUpdate,
    QuoteCreate,
    QuoteUpdate,
    QuoteResponse,
    QuoteListResponse,
    QuoteOptionsResponse,
    QuoteStatusSummary,
)

router = APIRouter()


@router.get("", response_model=QuoteListResponse, responses=responses_for(422))
async def list_quotes(
    service: QuoteServiceDep,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=500),
    status: Optional[str] = None,
):
    """List quotes, newest first, with pagination and status filter."""
    quotes, total = await service.list_quotes(status=status, page=page, page_size=page_size)

    return QuoteListResponse(
        items=quotes,
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/options", response_model=QuoteOptionsResponse)
async def get_quote_options(catalog: CatalogDep):
    """All pricing plans and services for the quote form, active entries first."""
    return QuoteOptionsResponse(
        pricing_plans=await catalog.list_plans(),
        services=await catalog.list_services(),
    )


@router.get("/summary", response_model=QuoteStatusSummary)
async def get_quote_summary(service: QuoteServiceDep):
    """Quote counts per status."""
    counts = await service.quote_status_summary()
    return QuoteStatusSummary(counts=counts, total=sum(counts.values()))


@router.get("/{quote_id}", response_model=QuoteResponse, responses=responses_for(404))
async def get_quote(quote_id: int, service: QuoteServiceDep):
    """Get a single quote with its line items."""
    return await service.get_quote(quote_id)


@router.post(
    "",
    response_model=QuoteResponse,
    status_code=status.HTTP_201_CREATED,
    responses=responses_for(400, 422, 500),
)
async def create_quote(quote_data: QuoteCreate, service: QuoteServiceDep):
    """Create a priced quote, optionally with line items."""
    return await service.create_quote(quote_data)


@router.patch(
    "/{quote_id}",
    response_model=QuoteResponse,
    responses=responses_for(400, 404, 422, 500),
)
async def update_quote(quote_id: int, quote_data: QuoteUpdate, service: QuoteServiceDep):
    """Update quote fields. Area, floor, rate or plan changes reprice the whole quote."""
    return await service.update_quote_fields(quote_id, quote_data)


@router.post(
    "/{quote_id}/line-items",
    response_model=QuoteResponse,
    status_code=status.HTTP_201_CREATED,
    responses=responses_for(400, 404, 422, 500),
)
async def add_line_item(quote_id: int, item_data: LineItemCreate, service: QuoteServiceDep):
    """Attach a service to the quote. Returns the repriced quote."""
    await service.add_line_item(quote_id, item_data)
    return await service.get_quote(quote_id)


@router.patch(
    "/{quote_id}/line-items/{item_id}",
    response_model=QuoteResponse,
    responses=responses_for(404, 422, 500),
)
async def update_line_item(
    quote_id: int,
    item_id: int,
    item_data: LineItemUpdate,
    service: QuoteServiceDep,
):
    """Change a line item's quantity or unit price. Returns the repriced quote."""
    await service.update_line_item(quote_id, item_id, item_data)
    return await service.get_quote(quote_id)


@router.delete(
    "/{quote_id}/line-items/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=responses_for(404, 500),
)
async def remove_line_item(quote_id: int, item_id: int, service: QuoteServiceDep):
    """Remove a line item from the quote."""
    await service.remove_line_item(quote_id, item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

from arqui_api.schemas.pricing import (
    PricingPlanCreate,
    PricingPlanUpdate,
    PricingPlanResponse,
    ServiceCreate,
    ServiceUpdate,
    ServiceResponse,
)
from arqui_api.schemas.quote import (
    LineItemInput,
    LineItemCreate,
    LineItemUpdate,
    LineItemResponse,
    QuoteCreate,
    QuoteUpdate,
    QuoteResponse,
    QuoteSummary,
    QuoteListResponse,
    QuoteStatusSummary,
    QuoteOptionsResponse,
)

__all__ = [
    "PricingPlanCreate",
    "PricingPlanUpdate",
    "PricingPlanResponse",
    "ServiceCreate",
    "ServiceUpdate",
    "ServiceResponse",
    "LineItemInput",
    "LineItemCreate",
    "LineItemUpdate",
    "LineItemResponse",
    "QuoteCreate",
    "QuoteUpdate",
    "QuoteResponse",
    "QuoteSummary",
    "QuoteListResponse",
    "QuoteStatusSummary",
    "QuoteOptionsResponse",
]

from pydantic import BaseModel, Field
from datetime import datetime, date
from typing import Optional, List, Dict
from decimal import Decimal

from arqui_api.schemas.pricing import PricingPlanResponse, ServiceResponse
from arqui_api.schemas.types import JsonDecimal


class LineItemInput(BaseModel):
    """Service requested on a new quote."""
    service_id: int
    quantity: Optional[int] = None
    unit_price: Optional[Decimal] = None


class LineItemCreate(LineItemInput):
    """Schema for adding a line item to an existing quote."""
    pass


class LineItemUpdate(BaseModel):
    """Schema for editing a line item. Only supplied fields change."""
    quantity: Optional[int] = None
    unit_price: Optional[Decimal] = None


class LineItemResponse(BaseModel):
    """Schema for line item response."""
    id: int
    service_id: int
    name: Optional[str] = None
    pricing_mode: Optional[str] = None
    quantity: int
    unit_price: JsonDecimal
    line_total: JsonDecimal

    class Config:
        from_attributes = True


class QuoteCreate(BaseModel):
    """Schema for creating a quote.

    Range checks (area, percent, rate, floors) are applied by the quote
    service so every caller gets the same field-level errors.
    """
    full_name: Optional[str] = Field(None, max_length=150)
    phone: Optional[str] = Field(None, max_length=50)
    email: Optional[str] = Field(None, max_length=255)
    document_type: Optional[str] = Field(None, max_length=30)
    document_number: Optional[str] = Field(None, max_length=50)
    project_name: Optional[str] = Field(None, max_length=255)
    project_address: Optional[str] = Field(None, max_length=255)

    total_area: Optional[Decimal] = None
    covered_area: Optional[Decimal] = None
    uncovered_percent: Optional[Decimal] = None
    floor_count: Optional[int] = None

    pricing_plan_id: Optional[int] = None
    rate_per_area: Optional[Decimal] = None
    currency: Optional[str] = None
    plan_name: Optional[str] = Field(None, max_length=150)
    plan_min_days: Optional[int] = None
    plan_max_days: Optional[int] = None

    status: Optional[str] = None
    expires_at: Optional[date] = None
    notes: Optional[str] = None

    line_items: List[LineItemInput] = []


class QuoteUpdate(BaseModel):
    """Schema for updating a quote. Unset fields are left untouched."""
    full_name: Optional[str] = Field(None, max_length=150)
    phone: Optional[str] = Field(None, max_length=50)
    email: Optional[str] = Field(None, max_length=255)
    document_type: Optional[str] = Field(None, max_length=30)
    document_number: Optional[str] = Field(None, max_length=50)
    project_name: Optional[str] = Field(None, max_length=255)
    project_address: Optional[str] = Field(None, max_length=255)

    total_area: Optional[Decimal] = None
    covered_area: Optional[Decimal] = None
    uncovered_percent: Optional[Decimal] = None
    floor_count: Optional[int] = None

    pricing_plan_id: Optional[int] = None
    rate_per_area: Optional[Decimal] = None
    currency: Optional[str] = None
    plan_name: Optional[str] = Field(None, max_length=150)
    plan_min_days: Optional[int] = None
    plan_max_days: Optional[int] = None

    status: Optional[str] = None
    expires_at: Optional[date] = None
    notes: Optional[str] = None


class QuoteResponse(BaseModel):
    """Schema for quote response."""
    id: int
    full_name: str
    phone: str
    email: str
    document_type: Optional[str] = None
    document_number: Optional[str] = None
    project_name: str
    project_address: Optional[str] = None

    total_area: JsonDecimal
    covered_area: JsonDecimal
    uncovered_percent: JsonDecimal
    floor_count: int

    pricing_plan_id: Optional[int] = None
    rate_per_area: JsonDecimal
    currency: str
    plan_name: Optional[str] = None
    plan_min_days: Optional[int] = None
    plan_max_days: Optional[int] = None

    base_cost: JsonDecimal
    extras_cost: JsonDecimal
    total_cost: JsonDecimal

    status: str
    notes: Optional[str] = None
    expires_at: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    line_items: List[LineItemResponse] = []

    class Config:
        from_attributes = True


class QuoteSummary(BaseModel):
    """Row in the quote list."""
    id: int
    full_name: str
    project_name: str
    total_area: JsonDecimal
    total_cost: JsonDecimal
    currency: str
    status: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class QuoteListResponse(BaseModel):
    """Paginated quote list response."""
    items: list[QuoteSummary]
    total: int
    page: int
    page_size: int


class QuoteStatusSummary(BaseModel):
    """Quote counts per status."""
    counts: Dict[str, int]
    total: int


class QuoteOptionsResponse(BaseModel):
    """Catalog data for building a quote form (active entries first)."""
    pricing_plans: List[PricingPlanResponse]
    services: List[ServiceResponse]

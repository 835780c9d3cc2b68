"""Schemas for the pricing catalog (plans and services)."""
from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Optional
from decimal import Decimal

from arqui_api.schemas.types import JsonDecimal


class PricingPlanCreate(BaseModel):
    name: str = Field(..., max_length=150)
    description: Optional[str] = None
    price_per_area: Decimal
    currency: Optional[str] = None
    min_days: Optional[int] = None
    max_days: Optional[int] = None
    effective_from: Optional[date] = None
    is_active: bool = True


class PricingPlanUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=150)
    description: Optional[str] = None
    price_per_area: Optional[Decimal] = None
    currency: Optional[str] = None
    min_days: Optional[int] = None
    max_days: Optional[int] = None
    effective_from: Optional[date] = None
    is_active: Optional[bool] = None


class PricingPlanResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    price_per_area: JsonDecimal
    currency: str
    min_days: Optional[int] = None
    max_days: Optional[int] = None
    effective_from: Optional[date] = None
    is_active: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ServiceCreate(BaseModel):
    name: str = Field(..., max_length=255)
    description: Optional[str] = None
    icon: Optional[str] = Field(None, max_length=100)
    display_order: int = 0
    pricing_mode: str = "flat"
    price: Decimal
    currency: Optional[str] = None
    is_addon: bool = False
    is_public: bool = True
    is_active: bool = True


class ServiceUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    icon: Optional[str] = Field(None, max_length=100)
    display_order: Optional[int] = None
    pricing_mode: Optional[str] = None
    price: Optional[Decimal] = None
    currency: Optional[str] = None
    is_addon: Optional[bool] = None
    is_public: Optional[bool] = None
    is_active: Optional[bool] = None


class ServiceResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    icon: Optional[str] = None
    display_order: int
    pricing_mode: str
    price: JsonDecimal
    currency: str
    is_addon: bool
    is_public: bool
    is_active: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

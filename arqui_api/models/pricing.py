"""Pricing catalog models: plans (rate per unit area) and add-on services."""
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, Date, Text, Integer, Numeric, Boolean, Index

from arqui_api.database import Base


PRICING_MODES = ("flat", "per_area", "percent")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PricingPlan(Base):
    """Named pricing template providing a base rate per unit area."""

    __tablename__ = "pricing_plans"

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String(150), nullable=False)
    description = Column(Text, nullable=True)

    # Pricing
    price_per_area = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="PEN")

    # Delivery window in days, copied onto quotes at selection time
    min_days = Column(Integer, nullable=True)
    max_days = Column(Integer, nullable=True)

    effective_from = Column(Date, nullable=True)

    # Status
    is_active = Column(Boolean, nullable=False, default=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    __table_args__ = (
        Index("idx_pricing_plans_active", "is_active"),
    )

    def __repr__(self):
        return f"<PricingPlan {self.id} - {self.name}>"


class Service(Base):
    """Catalog of add-on services priced flat, per unit area, or as a percent of base cost."""

    __tablename__ = "services"

    id = Column(Integer, primary_key=True, index=True)

    # Service identification
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    icon = Column(String(100), nullable=True)
    display_order = Column(Integer, nullable=False, default=0)

    # Pricing: flat amount, amount per unit area, or percent of base cost
    pricing_mode = Column(String(20), nullable=False, default="flat")
    price = Column(Numeric(12, 2), nullable=False, default=0)
    currency = Column(String(3), nullable=False, default="PEN")

    # Flags
    is_addon = Column(Boolean, nullable=False, default=False)
    is_public = Column(Boolean, nullable=False, default=True)
    is_active = Column(Boolean, nullable=False, default=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    __table_args__ = (
        Index("idx_services_active_order", "is_active", "display_order"),
    )

    def __repr__(self):
        return f"<Service {self.id} - {self.name} ({self.pricing_mode})>"

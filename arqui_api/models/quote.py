"""
SQLAlchemy models for Quotes and their service line items.
"""
from sqlalchemy import (
    Column, DateTime, Date, Integer, String, Text, Numeric, ForeignKey, Index
)
from sqlalchemy.orm import relationship

from arqui_api.database import Base
from arqui_api.models.pricing import _utcnow


QUOTE_STATUSES = ("new", "reviewed", "sent", "accepted", "rejected")


class Quote(Base):
    """Quote/Estimate for an architecture project."""
    __tablename__ = "quotes"

    id = Column(Integer, primary_key=True, index=True)

    # Customer identity
    full_name = Column(String(150), nullable=False)
    phone = Column(String(50), nullable=False)
    email = Column(String(255), nullable=False)
    document_type = Column(String(30), nullable=True)
    document_number = Column(String(50), nullable=True)

    # Project identity
    project_name = Column(String(255), nullable=False)
    project_address = Column(String(255), nullable=True)

    # Area figures
    total_area = Column(Numeric(12, 2), nullable=False)
    uncovered_percent = Column(Numeric(5, 2), nullable=False, default=30)
    covered_area = Column(Numeric(12, 2), nullable=False)
    floor_count = Column(Integer, nullable=False, default=1)

    # Pricing plan reference; the plan_* columns are a snapshot taken at selection
    pricing_plan_id = Column(
        Integer, ForeignKey("pricing_plans.id", ondelete="SET NULL"), nullable=True, index=True
    )
    rate_per_area = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="PEN")
    plan_name = Column(String(150), nullable=True)
    plan_min_days = Column(Integer, nullable=True)
    plan_max_days = Column(Integer, nullable=True)

    # Derived money figures
    base_cost = Column(Numeric(12, 2), nullable=False, default=0)
    extras_cost = Column(Numeric(12, 2), nullable=False, default=0)
    total_cost = Column(Numeric(12, 2), nullable=False, default=0)

    # Status: new, reviewed, sent, accepted, rejected
    status = Column(String(20), nullable=False, default="new", index=True)

    notes = Column(Text, nullable=True)
    expires_at = Column(Date, nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    line_items = relationship(
        "QuoteLineItem",
        back_populates="quote",
        cascade="all, delete-orphan",
        order_by="QuoteLineItem.id",
        lazy="selectin",
    )

    __table_args__ = (
        Index('idx_quotes_created_at', 'created_at'),
    )

    def __repr__(self):
        return f"<Quote(id={self.id}, project_name={self.project_name}, status={self.status})>"


class QuoteLineItem(Base):
    """A service attached to a quote, with its own quantity and unit price."""
    __tablename__ = "quote_line_items"

    id = Column(Integer, primary_key=True, index=True)
    quote_id = Column(
        Integer, ForeignKey("quotes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    service_id = Column(Integer, ForeignKey("services.id"), nullable=False, index=True)

    quantity = Column(Integer, nullable=False, default=1)
    unit_price = Column(Numeric(12, 2), nullable=False)
    line_total = Column(Numeric(12, 2), nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    quote = relationship("Quote", back_populates="line_items")
    service = relationship("Service", lazy="selectin")

    @property
    def name(self) -> str | None:
        return self.service.name if self.service is not None else None

    @property
    def pricing_mode(self) -> str | None:
        return self.service.pricing_mode if self.service is not None else None

    def __repr__(self):
        return f"<QuoteLineItem(id={self.id}, quote_id={self.quote_id}, service_id={self.service_id})>"

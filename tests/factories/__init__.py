"""
Test factories for generating realistic test data.

Uses factory_boy for declarative test data generation.
"""

from .quote import QuotePayloadFactory, LineItemPayloadFactory
from .pricing import PricingPlanFactory, ServiceFactory

__all__ = [
    "QuotePayloadFactory",
    "LineItemPayloadFactory",
    "PricingPlanFactory",
    "ServiceFactory",
]

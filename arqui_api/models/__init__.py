from arqui_api.models.pricing import PricingPlan, Service
from arqui_api.models.quote import Quote, QuoteLineItem

__all__ = [
    "PricingPlan",
    "Service",
    "Quote",
    "QuoteLineItem",
]

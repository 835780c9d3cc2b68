# Services module
from arqui_api.services.catalog import CatalogRepository, SqlCatalogRepository, PricingCatalog
from arqui_api.services.catalog_admin import CatalogAdminService
from arqui_api.services.quote_service import QuoteService

__all__ = [
    "CatalogRepository",
    "SqlCatalogRepository",
    "PricingCatalog",
    "CatalogAdminService",
    "QuoteService",
]

"""
FastAPI Dependencies

Provides dependency injection for database sessions and the services
built on them. Each request gets its own session; services share it so a
mutation and its catalog reads run in one transaction.
"""

from typing import Annotated
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from arqui_api.database import get_db
from arqui_api.services.catalog import PricingCatalog, SqlCatalogRepository
from arqui_api.services.catalog_admin import CatalogAdminService
from arqui_api.services.quote_service import QuoteService


DbSession = Annotated[AsyncSession, Depends(get_db)]


def get_pricing_catalog(db: DbSession) -> PricingCatalog:
    return PricingCatalog(SqlCatalogRepository(db))


def get_quote_service(
    db: DbSession,
    catalog: Annotated[PricingCatalog, Depends(get_pricing_catalog)],
) -> QuoteService:
    return QuoteService(db, catalog)


def get_catalog_admin(db: DbSession) -> CatalogAdminService:
    return CatalogAdminService(db)


CatalogDep = Annotated[PricingCatalog, Depends(get_pricing_catalog)]
QuoteServiceDep = Annotated[QuoteService, Depends(get_quote_service)]
CatalogAdminDep = Annotated[CatalogAdminService, Depends(get_catalog_admin)]

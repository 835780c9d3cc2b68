from fastapi import APIRouter
from arqui_api.api.v1 import (
    catalog,
    quotes,
)

api_router = APIRouter()

# Include all v1 routers
api_router.include_router(quotes.router, prefix="/quotes", tags=["quotes"])
api_router.include_router(catalog.router, prefix="/catalog", tags=["catalog"])

"""API route modules."""

from stockledger.api.routes.catalog import router as catalog_router
from stockledger.api.routes.expenses import router as expenses_router
from stockledger.api.routes.health import router as health_router
from stockledger.api.routes.inventory import router as inventory_router
from stockledger.api.routes.production import router as production_router
from stockledger.api.routes.sales import router as sales_router

__all__ = [
    "health_router",
    "catalog_router",
    "inventory_router",
    "expenses_router",
    "sales_router",
    "production_router",
]

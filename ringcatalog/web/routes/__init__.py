"""RingCatalog Web Route Modules.

Each module exports a `router` object (APIRouter instance) that the main
app includes in ringcatalog/web/app.py. Shared dependencies come from
ringcatalog.web.dependencies and response models from ringcatalog.web.models.

Usage:
    from ringcatalog.web.routes import products
    app.include_router(products.router)
"""

from ringcatalog.web.routes import health, products

__all__ = [
    "products",
    "health",
]

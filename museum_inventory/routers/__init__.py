# museum_inventory/routers/__init__.py

from .masters.item_template_router import router as item_template_router

from .inventory.location_router import router as location_router
from .inventory.inventory_item_router import router as inventory_item_router


__all__ = [
"item_template_router",

"location_router",
"inventory_item_router",
]

# Masters
from museum_inventory.models.masters.item_template_models import ItemTemplate

# Inventory
from museum_inventory.models.inventory.location_models import Location
from museum_inventory.models.inventory.inventory_item_models import InventoryItem
from museum_inventory.models.inventory.position_counter_models import PositionCounter

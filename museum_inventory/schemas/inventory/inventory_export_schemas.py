# museum_inventory/schemas/inventory/inventory_export_schemas.py

from pydantic import BaseModel
from typing import Optional

MISSING_REFERENCE = "N/A"

# field name -> spreadsheet header, in column order
EXPORT_COLUMNS = {
    "position": "Position",
    "asset_code": "Asset Code",
    "item_name": "Item Name",
    "brand": "Brand",
    "model": "Model",
    "location": "Location",
    "serial": "Serial Number",
    "situation": "Situation",
    "conservation_state": "Conservation State",
    "observations": "Observations",
}


class InventoryExportRow(BaseModel):
    position: int
    asset_code: str
    item_name: str
    brand: Optional[str] = ""
    model: Optional[str] = ""
    location: str
    serial: Optional[str] = ""
    situation: Optional[str] = ""
    conservation_state: str
    observations: Optional[str] = ""

    def as_cells(self) -> list:
        return [getattr(self, field) for field in EXPORT_COLUMNS]

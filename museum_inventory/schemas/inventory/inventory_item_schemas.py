# museum_inventory/schemas/inventory/inventory_item_schemas.py

from pydantic import BaseModel, ConfigDict, Field
from typing import Annotated, Dict, Optional, List
from datetime import datetime

from museum_inventory.models.enums.conservation_state import ConservationState

Quantity = Annotated[int, Field(ge=0)]


class InventoryBatchCreate(BaseModel):
    """One submission: N units of a template, graded by conservation state."""

    template_id: str
    location_id: Optional[str] = None
    quantities: Dict[ConservationState, Quantity]
    situation: Optional[str] = None
    observations: Optional[str] = None

    model_config = ConfigDict(extra="forbid")

    @property
    def total_quantity(self) -> int:
        return sum(self.quantities.values())


class InventoryItemUpdate(BaseModel):
    # position is deliberately absent: it never changes after creation
    template_id: Optional[str] = None
    location_id: Optional[str] = None
    serial: Optional[str] = None
    situation: Optional[str] = None
    conservation_state: Optional[ConservationState] = None
    observations: Optional[str] = None

    model_config = ConfigDict(extra="forbid")


class InventoryItemOut(BaseModel):
    id: str
    position: int
    template_id: str
    location_id: Optional[str]
    serial: Optional[str]
    situation: Optional[str]
    conservation_state: ConservationState
    observations: Optional[str]

    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    model_config = ConfigDict(from_attributes=True)


class InventoryItemListData(BaseModel):
    total: int
    items: List[InventoryItemOut]


class InventoryBatchData(BaseModel):
    created: int
    first_position: int
    last_position: int
    items: List[InventoryItemOut]

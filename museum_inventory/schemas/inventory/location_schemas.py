# museum_inventory/schemas/inventory/location_schemas.py

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import datetime


class LocationCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)

    model_config = ConfigDict(extra="forbid")


class LocationUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)

    model_config = ConfigDict(extra="forbid")


class LocationOut(BaseModel):
    id: str
    name: str

    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    model_config = ConfigDict(from_attributes=True)


class LocationListData(BaseModel):
    total: int
    items: List[LocationOut]

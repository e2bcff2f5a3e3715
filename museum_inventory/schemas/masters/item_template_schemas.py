# museum_inventory/schemas/masters/item_template_schemas.py

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import datetime

# Optional descriptive attributes shared by create/update/out
OPTIONAL_TEMPLATE_FIELDS = (
    "brand",
    "model",
    "type",
    "color",
    "dimensions",
    "other",
    "origin",
)


class ItemTemplateCreate(BaseModel):
    asset_code: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=255)
    brand: Optional[str] = None
    model: Optional[str] = None
    type: Optional[str] = None
    color: Optional[str] = None
    dimensions: Optional[str] = None
    other: Optional[str] = None
    origin: Optional[str] = None

    model_config = ConfigDict(extra="forbid")


class ItemTemplateUpdate(BaseModel):
    asset_code: Optional[str] = Field(None, max_length=100)
    name: Optional[str] = Field(None, max_length=255)
    brand: Optional[str] = None
    model: Optional[str] = None
    type: Optional[str] = None
    color: Optional[str] = None
    dimensions: Optional[str] = None
    other: Optional[str] = None
    origin: Optional[str] = None

    model_config = ConfigDict(extra="forbid")


class ItemTemplateOut(BaseModel):
    id: str
    asset_code: str
    name: str
    brand: Optional[str]
    model: Optional[str]
    type: Optional[str]
    color: Optional[str]
    dimensions: Optional[str]
    other: Optional[str]
    origin: Optional[str]

    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    model_config = ConfigDict(from_attributes=True)


class ItemTemplateListData(BaseModel):
    total: int
    items: List[ItemTemplateOut]

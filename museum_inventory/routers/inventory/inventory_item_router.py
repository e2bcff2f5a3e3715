from fastapi import APIRouter, Depends, status
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from museum_inventory.core.db import get_db
from museum_inventory.utils.response import success_response, list_data, APIResponse
from museum_inventory.utils.logger import get_logger
from museum_inventory.services.inventory.inventory_batch_service import (
    create_inventory_items_batch_with_retry,
)
from museum_inventory.services.inventory.inventory_item_service import (
    list_inventory_items,
    get_inventory_item,
    update_inventory_item,
    delete_inventory_item,
)
from museum_inventory.services.inventory.inventory_export_service import (
    export_inventory_workbook,
    EXPORT_FILENAME,
    XLSX_MEDIA_TYPE,
)
from museum_inventory.schemas.inventory.inventory_item_schemas import (
    InventoryBatchCreate,
    InventoryBatchData,
    InventoryItemUpdate,
    InventoryItemOut,
    InventoryItemListData,
)

router = APIRouter(
    prefix="/inventory",
    tags=["Inventory Items"],
)
logger = get_logger(__name__)


# =========================
# EXPORT
# =========================
@router.get("/export")
async def export_inventory_api(db: AsyncSession = Depends(get_db)):
    excel_file = await export_inventory_workbook(db)
    headers = {
        "Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'
    }
    return StreamingResponse(excel_file, media_type=XLSX_MEDIA_TYPE, headers=headers)


# =========================
# BATCH CREATE
# =========================
@router.post(
    "/items/batch",
    response_model=APIResponse[InventoryBatchData],
    status_code=status.HTTP_201_CREATED,
)
async def create_inventory_batch_api(
    payload: InventoryBatchCreate,
    db: AsyncSession = Depends(get_db),
):
    logger.info(
        "Create inventory batch",
        extra={"template_id": payload.template_id, "quantity": payload.total_quantity},
    )
    items = await create_inventory_items_batch_with_retry(db, payload)
    data = {
        "created": len(items),
        "first_position": items[0].position,
        "last_position": items[-1].position,
        "items": items,
    }
    return success_response(f"{len(items)} inventory items created successfully", data)


# =========================
# LIST
# =========================
@router.get("/items/", response_model=APIResponse[InventoryItemListData])
async def list_inventory_items_api(db: AsyncSession = Depends(get_db)):
    items = await list_inventory_items(db)
    return success_response("Inventory items fetched successfully", list_data(items))


# =========================
# GET
# =========================
@router.get("/items/{item_id}", response_model=APIResponse[InventoryItemOut])
async def get_inventory_item_api(
    item_id: str,
    db: AsyncSession = Depends(get_db),
):
    item = await get_inventory_item(db, item_id)
    return success_response("Inventory item fetched successfully", item)


# =========================
# UPDATE
# =========================
@router.patch("/items/{item_id}", response_model=APIResponse[InventoryItemOut])
async def update_inventory_item_api(
    item_id: str,
    payload: InventoryItemUpdate,
    db: AsyncSession = Depends(get_db),
):
    item = await update_inventory_item(db, item_id, payload)
    return success_response("Inventory item updated successfully", item)


# =========================
# DELETE
# =========================
@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_inventory_item_api(
    item_id: str,
    db: AsyncSession = Depends(get_db),
):
    await delete_inventory_item(db, item_id)

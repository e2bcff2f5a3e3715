from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from sqlalchemy.exc import SQLAlchemyError

from museum_inventory.models.inventory.inventory_item_models import InventoryItem
from museum_inventory.schemas.inventory.inventory_item_schemas import (
    InventoryItemUpdate,
    InventoryItemOut,
)
from museum_inventory.core.exceptions import (
    InvalidInputError,
    RecordNotFoundError,
    PersistenceError,
)
from museum_inventory.constants.error_codes import ErrorCode
from museum_inventory.utils.formatting import blank_to_none, is_blank
from museum_inventory.utils.logger import get_logger

logger = get_logger(__name__)

# Fields an update may not clear
REQUIRED_FIELDS = ("template_id", "conservation_state")


def _map_item(item: InventoryItem) -> InventoryItemOut:
    return InventoryItemOut.model_validate(item)


async def _get_item_or_404(db: AsyncSession, item_id: str) -> InventoryItem:
    item = await db.get(InventoryItem, item_id)
    if not item:
        raise RecordNotFoundError(
            "Inventory item not found",
            ErrorCode.INVENTORY_ITEM_NOT_FOUND,
        )
    return item


# =========================
# LIST
# =========================
async def list_inventory_items(db: AsyncSession) -> list[InventoryItemOut]:
    result = await db.execute(select(InventoryItem).order_by(InventoryItem.position))
    return [_map_item(i) for i in result.scalars().all()]


# =========================
# GET
# =========================
async def get_inventory_item(db: AsyncSession, item_id: str) -> InventoryItemOut:
    return _map_item(await _get_item_or_404(db, item_id))


# =========================
# UPDATE
# =========================
async def update_inventory_item(
    db: AsyncSession,
    item_id: str,
    payload: InventoryItemUpdate,
) -> InventoryItemOut:
    item = await _get_item_or_404(db, item_id)

    updates = payload.model_dump(exclude_unset=True)
    if not updates:
        return _map_item(item)

    for field, value in updates.items():
        if field in REQUIRED_FIELDS:
            if is_blank(value):
                raise InvalidInputError(f"{field} cannot be empty")
        else:
            # "" location means "no location"
            value = blank_to_none(value)
        setattr(item, field, value)

    try:
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Inventory item update failed", extra={"item_id": item_id})
        raise PersistenceError("Failed to update inventory item.") from exc

    await db.refresh(item)
    logger.info(
        "Inventory item updated",
        extra={"item_id": item_id, "position": item.position, "fields": sorted(updates)},
    )
    return _map_item(item)


# =========================
# DELETE
# =========================
async def delete_inventory_item(db: AsyncSession, item_id: str) -> None:
    # The freed position stays retired: the counter never moves back
    try:
        result = await db.execute(delete(InventoryItem).where(InventoryItem.id == item_id))
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Inventory item delete failed", extra={"item_id": item_id})
        raise PersistenceError("Failed to delete inventory item.") from exc

    if result.rowcount:
        logger.info("Inventory item deleted", extra={"item_id": item_id})
    else:
        logger.debug("Inventory item already absent", extra={"item_id": item_id})

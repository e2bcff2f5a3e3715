# museum_inventory/services/masters/item_template_service.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from sqlalchemy.exc import SQLAlchemyError

from museum_inventory.models.masters.item_template_models import ItemTemplate
from museum_inventory.schemas.masters.item_template_schemas import (
    ItemTemplateCreate,
    ItemTemplateUpdate,
    ItemTemplateOut,
    OPTIONAL_TEMPLATE_FIELDS,
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

REQUIRED_FIELDS = ("asset_code", "name")


def _map_template(t: ItemTemplate) -> ItemTemplateOut:
    return ItemTemplateOut.model_validate(t)


async def _get_template_or_404(db: AsyncSession, template_id: str) -> ItemTemplate:
    template = await db.get(ItemTemplate, template_id)
    if not template:
        raise RecordNotFoundError(
            "Template not found",
            ErrorCode.ITEM_TEMPLATE_NOT_FOUND,
        )
    return template


# ---------------- LIST ----------------
async def list_item_templates(db: AsyncSession) -> list[ItemTemplateOut]:
    result = await db.execute(
        select(ItemTemplate).order_by(ItemTemplate.name, ItemTemplate.id)
    )
    return [_map_template(t) for t in result.scalars().all()]


# ---------------- GET ----------------
async def get_item_template(db: AsyncSession, template_id: str) -> ItemTemplateOut:
    return _map_template(await _get_template_or_404(db, template_id))


# ---------------- CREATE ----------------
async def create_item_template(
    db: AsyncSession,
    payload: ItemTemplateCreate,
) -> ItemTemplateOut:
    data = payload.model_dump()
    for field in REQUIRED_FIELDS:
        if is_blank(data[field]):
            raise InvalidInputError(f"{field} is required")
    for field in OPTIONAL_TEMPLATE_FIELDS:
        data[field] = blank_to_none(data[field])

    template = ItemTemplate(**data)
    db.add(template)

    try:
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Item template create failed", extra={"asset_code": data["asset_code"]})
        raise PersistenceError("Failed to create item template.") from exc

    await db.refresh(template)
    logger.info(
        "Item template created",
        extra={"template_id": template.id, "asset_code": template.asset_code},
    )
    return _map_template(template)


# ---------------- UPDATE ----------------
async def update_item_template(
    db: AsyncSession,
    template_id: str,
    payload: ItemTemplateUpdate,
) -> ItemTemplateOut:
    template = await _get_template_or_404(db, template_id)

    updates = payload.model_dump(exclude_unset=True)
    if not updates:
        return _map_template(template)

    for field, value in updates.items():
        if field in REQUIRED_FIELDS:
            if is_blank(value):
                raise InvalidInputError(f"{field} cannot be empty")
        else:
            value = blank_to_none(value)
        setattr(template, field, value)

    try:
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Item template update failed", extra={"template_id": template_id})
        raise PersistenceError("Failed to update item template.") from exc

    await db.refresh(template)
    logger.info(
        "Item template updated",
        extra={"template_id": template_id, "fields": sorted(updates)},
    )
    return _map_template(template)


# ---------------- DELETE ----------------
async def delete_item_template(db: AsyncSession, template_id: str) -> None:
    # Inventory items that reference the template are left as they are
    try:
        result = await db.execute(
            delete(ItemTemplate).where(ItemTemplate.id == template_id)
        )
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Item template delete failed", extra={"template_id": template_id})
        raise PersistenceError("Failed to delete item template.") from exc

    if result.rowcount:
        logger.info("Item template deleted", extra={"template_id": template_id})
    else:
        logger.debug("Item template already absent", extra={"template_id": template_id})

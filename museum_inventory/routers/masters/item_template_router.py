# museum_inventory/routers/masters/item_template_router.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from museum_inventory.core.db import get_db
from museum_inventory.schemas.masters.item_template_schemas import (
    ItemTemplateCreate,
    ItemTemplateUpdate,
    ItemTemplateOut,
    ItemTemplateListData,
)
from museum_inventory.services.masters.item_template_service import (
    create_item_template,
    list_item_templates,
    get_item_template,
    update_item_template,
    delete_item_template,
)
from museum_inventory.utils.response import APIResponse, success_response, list_data
from museum_inventory.utils.logger import get_logger

router = APIRouter(prefix="/item-templates", tags=["Item Templates"])
logger = get_logger(__name__)


@router.post(
    "/",
    response_model=APIResponse[ItemTemplateOut],
    status_code=status.HTTP_201_CREATED,
)
async def create_item_template_api(
    payload: ItemTemplateCreate,
    db: AsyncSession = Depends(get_db),
):
    logger.info("Create item template", extra={"asset_code": payload.asset_code})
    template = await create_item_template(db, payload)
    return success_response("Item template created successfully", template)


@router.get("/", response_model=APIResponse[ItemTemplateListData])
async def list_item_templates_api(db: AsyncSession = Depends(get_db)):
    templates = await list_item_templates(db)
    return success_response("Item templates fetched successfully", list_data(templates))


@router.get("/{template_id}", response_model=APIResponse[ItemTemplateOut])
async def get_item_template_api(
    template_id: str,
    db: AsyncSession = Depends(get_db),
):
    template = await get_item_template(db, template_id)
    return success_response("Item template fetched successfully", template)


@router.patch("/{template_id}", response_model=APIResponse[ItemTemplateOut])
async def update_item_template_api(
    template_id: str,
    payload: ItemTemplateUpdate,
    db: AsyncSession = Depends(get_db),
):
    template = await update_item_template(db, template_id, payload)
    return success_response("Item template updated successfully", template)


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item_template_api(
    template_id: str,
    db: AsyncSession = Depends(get_db),
):
    await delete_item_template(db, template_id)

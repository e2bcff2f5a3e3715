from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from museum_inventory.core.db import get_db
from museum_inventory.utils.response import success_response, list_data, APIResponse
from museum_inventory.services.inventory.location_service import (
    create_location,
    list_locations,
    get_location,
    update_location,
    delete_location,
)
from museum_inventory.schemas.inventory.location_schemas import (
    LocationCreate,
    LocationUpdate,
    LocationOut,
    LocationListData,
)

router = APIRouter(
    prefix="/locations",
    tags=["Locations"],
)


# =========================
# CREATE
# =========================
@router.post(
    "/",
    response_model=APIResponse[LocationOut],
    status_code=status.HTTP_201_CREATED,
)
async def create_location_api(
    payload: LocationCreate,
    db: AsyncSession = Depends(get_db),
):
    location = await create_location(db, payload)
    return success_response("Location created successfully", location)


# =========================
# LIST
# =========================
@router.get("/", response_model=APIResponse[LocationListData])
async def list_locations_api(db: AsyncSession = Depends(get_db)):
    locations = await list_locations(db)
    return success_response("Locations fetched successfully", list_data(locations))


# =========================
# GET
# =========================
@router.get("/{location_id}", response_model=APIResponse[LocationOut])
async def get_location_api(
    location_id: str,
    db: AsyncSession = Depends(get_db),
):
    location = await get_location(db, location_id)
    return success_response("Location fetched successfully", location)


# =========================
# UPDATE
# =========================
@router.patch("/{location_id}", response_model=APIResponse[LocationOut])
async def update_location_api(
    location_id: str,
    payload: LocationUpdate,
    db: AsyncSession = Depends(get_db),
):
    location = await update_location(db, location_id, payload)
    return success_response("Location updated successfully", location)


# =========================
# DELETE
# =========================
@router.delete("/{location_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_location_api(
    location_id: str,
    db: AsyncSession = Depends(get_db),
):
    await delete_location(db, location_id)

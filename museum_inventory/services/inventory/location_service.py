from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from museum_inventory.models.inventory.location_models import Location
from museum_inventory.schemas.inventory.location_schemas import (
    LocationCreate,
    LocationUpdate,
    LocationOut,
)
from museum_inventory.core.exceptions import (
    DuplicateNameError,
    InvalidInputError,
    RecordNotFoundError,
    PersistenceError,
)
from museum_inventory.constants.error_codes import ErrorCode
from museum_inventory.utils.formatting import is_blank
from museum_inventory.utils.integrity import violates_unique
from museum_inventory.utils.logger import get_logger

logger = get_logger(__name__)


# =====================================================
# MAPPER
# =====================================================
def _map_location(loc: Location) -> LocationOut:
    return LocationOut.model_validate(loc)


async def _get_location_or_404(db: AsyncSession, location_id: str) -> Location:
    location = await db.get(Location, location_id)
    if not location:
        raise RecordNotFoundError("Location not found", ErrorCode.LOCATION_NOT_FOUND)
    return location


async def _commit_location_write(db: AsyncSession, name: str, action: str) -> None:
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        if violates_unique(exc, "locations", "name"):
            logger.warning("Location name already exists", extra={"location_name": name})
            raise DuplicateNameError() from exc
        logger.exception(f"Location {action} failed", extra={"location_name": name})
        raise PersistenceError(f"Failed to {action} location.") from exc
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception(f"Location {action} failed", extra={"location_name": name})
        raise PersistenceError(f"Failed to {action} location.") from exc


# =====================================================
# LIST LOCATIONS
# =====================================================
async def list_locations(db: AsyncSession) -> list[LocationOut]:
    result = await db.execute(select(Location).order_by(Location.name))
    return [_map_location(l) for l in result.scalars().all()]


# =====================================================
# GET LOCATION
# =====================================================
async def get_location(db: AsyncSession, location_id: str) -> LocationOut:
    return _map_location(await _get_location_or_404(db, location_id))


# =====================================================
# CREATE LOCATION
# =====================================================
async def create_location(db: AsyncSession, payload: LocationCreate) -> LocationOut:
    if is_blank(payload.name):
        raise InvalidInputError("Location name is required")

    location = Location(name=payload.name)
    db.add(location)

    # Uniqueness is left to the uq_locations_name constraint
    await _commit_location_write(db, payload.name, "create")

    await db.refresh(location)
    logger.info("Location created", extra={"location_id": location.id, "location_name": location.name})
    return _map_location(location)


# =====================================================
# UPDATE LOCATION
# =====================================================
async def update_location(
    db: AsyncSession,
    location_id: str,
    payload: LocationUpdate,
) -> LocationOut:
    if is_blank(payload.name):
        raise InvalidInputError("Location name is required")

    location = await _get_location_or_404(db, location_id)
    if location.name == payload.name:
        return _map_location(location)

    old_name = location.name
    location.name = payload.name
    await _commit_location_write(db, payload.name, "update")

    await db.refresh(location)
    logger.info(
        "Location renamed",
        extra={"location_id": location_id, "changes": f"name: {old_name} → {location.name}"},
    )
    return _map_location(location)


# =====================================================
# DELETE LOCATION
# =====================================================
async def delete_location(db: AsyncSession, location_id: str) -> None:
    # Items stored here keep their location_id; exports show it as N/A
    try:
        result = await db.execute(delete(Location).where(Location.id == location_id))
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Location delete failed", extra={"location_id": location_id})
        raise PersistenceError("Failed to delete location.") from exc

    if result.rowcount:
        logger.info("Location deleted", extra={"location_id": location_id})
    else:
        logger.debug("Location already absent", extra={"location_id": location_id})

"""Batch creation of inventory items.

A batch turns {state: quantity} into one row per unit. Position allocation
and the insert share one transaction: the position counter row is locked
first, so concurrent batches queue behind each other instead of computing
overlapping ranges. The unique constraint on position backs this up on
stores without row locks (SQLite), where a lost race surfaces as
DuplicatePositionError and the whole batch is rolled back.
"""

import asyncio
from typing import Mapping

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from museum_inventory.core.config import BATCH_MAX_ATTEMPTS, BATCH_RETRY_BACKOFF_SECONDS
from museum_inventory.core.exceptions import (
    BatchCreateError,
    DuplicatePositionError,
    InvalidInputError,
)
from museum_inventory.models.base.mixins import new_record_id
from museum_inventory.models.enums.conservation_state import ConservationState
from museum_inventory.models.inventory.inventory_item_models import InventoryItem
from museum_inventory.schemas.inventory.inventory_item_schemas import (
    InventoryBatchCreate,
    InventoryItemOut,
)
from museum_inventory.services.inventory.position_allocator import (
    allocate_positions,
    current_max_position,
    lock_position_counter,
)
from museum_inventory.utils.formatting import blank_to_none, is_blank
from museum_inventory.utils.integrity import violates_primary_key, violates_unique
from museum_inventory.utils.logger import get_logger

logger = get_logger(__name__)

# Fixed order in which a batch's states occupy its position block
STATE_EXPANSION_ORDER = tuple(ConservationState)


def expand_quantities(quantities: Mapping[ConservationState, int]) -> list[ConservationState]:
    return [
        state
        for state in STATE_EXPANSION_ORDER
        for _ in range(quantities.get(state, 0))
    ]


def validate_batch(payload: InventoryBatchCreate) -> None:
    if is_blank(payload.template_id):
        raise InvalidInputError("Please select an item template.")

    negative = {s.value: q for s, q in payload.quantities.items() if q < 0}
    if negative:
        raise InvalidInputError("Quantities cannot be negative", details=negative)

    if payload.total_quantity <= 0:
        raise InvalidInputError("At least one quantity must be positive.")


async def create_inventory_items_batch(
    db: AsyncSession,
    payload: InventoryBatchCreate,
) -> list[InventoryItemOut]:
    # ------------------------------------
    # 0. Validate before touching the store
    # ------------------------------------
    validate_batch(payload)

    states = expand_quantities(payload.quantities)
    location_id = blank_to_none(payload.location_id)
    situation = blank_to_none(payload.situation)
    observations = blank_to_none(payload.observations)

    try:
        # ------------------------------------
        # 1. Lock counter, read current max
        # ------------------------------------
        counter = await lock_position_counter(db)
        current_max = await current_max_position(db, counter)

        # ------------------------------------
        # 2. Allocate and stage one row per unit
        # ------------------------------------
        positions = allocate_positions(len(states), current_max)
        db.add_all(
            [
                InventoryItem(
                    id=new_record_id(),
                    position=position,
                    template_id=payload.template_id,
                    location_id=location_id,
                    serial=None,
                    situation=situation,
                    conservation_state=state,
                    observations=observations,
                )
                for position, state in zip(positions, states)
            ]
        )

        # ------------------------------------
        # 3. Advance the high-water mark
        # ------------------------------------
        counter.last_position = max(counter.last_position or 0, positions[-1])

        await db.commit()

    except IntegrityError as exc:
        await db.rollback()
        if violates_unique(exc, "inventory_items", "position") or violates_primary_key(
            exc, "inventory_position_counter"
        ):
            logger.warning(
                "Batch lost a position race",
                extra={"template_id": payload.template_id, "quantity": len(states)},
            )
            raise DuplicatePositionError() from exc

        logger.exception(
            "Batch insert violated a constraint",
            extra={"template_id": payload.template_id},
        )
        raise BatchCreateError() from exc

    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception(
            "Batch insert failed",
            extra={"template_id": payload.template_id},
        )
        raise BatchCreateError() from exc

    # Committed block is contiguous, so read it back by range
    result = await db.execute(
        select(InventoryItem)
        .where(InventoryItem.position.between(positions[0], positions[-1]))
        .order_by(InventoryItem.position)
    )
    items = [InventoryItemOut.model_validate(i) for i in result.scalars().all()]

    logger.info(
        "Inventory batch created",
        extra={
            "template_id": payload.template_id,
            "location_id": location_id,
            "first_position": positions[0],
            "last_position": positions[-1],
        },
    )
    return items


async def create_inventory_items_batch_with_retry(
    db: AsyncSession,
    payload: InventoryBatchCreate,
    max_attempts: int = BATCH_MAX_ATTEMPTS,
    backoff_seconds: float = BATCH_RETRY_BACKOFF_SECONDS,
) -> list[InventoryItemOut]:
    """Rerun the whole batch when it loses a position race.

    Only DuplicatePositionError is retried, with exponential backoff.
    Validation and other persistence errors propagate on the first attempt.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    for attempt in range(1, max_attempts + 1):
        try:
            return await create_inventory_items_batch(db, payload)
        except DuplicatePositionError:
            if attempt >= max_attempts:
                logger.error(
                    "Batch still colliding after retries",
                    extra={"template_id": payload.template_id, "attempts": attempt},
                )
                raise
            sleep_time = backoff_seconds * (2 ** (attempt - 1))
            logger.info(
                f"Retrying batch in {sleep_time} seconds",
                extra={"template_id": payload.template_id, "attempt": attempt},
            )
            await asyncio.sleep(sleep_time)

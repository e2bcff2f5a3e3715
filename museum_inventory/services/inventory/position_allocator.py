# museum_inventory/services/inventory/position_allocator.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from museum_inventory.models.inventory.inventory_item_models import InventoryItem
from museum_inventory.models.inventory.position_counter_models import (
    PositionCounter,
    POSITION_COUNTER_ID,
)


def allocate_positions(count: int, current_max: int) -> list[int]:
    """Next `count` positions after `current_max`, in order."""
    if count < 1:
        raise ValueError("count must be at least 1")
    if current_max < 0:
        raise ValueError("current_max cannot be negative")
    return list(range(current_max + 1, current_max + count + 1))


async def lock_position_counter(db: AsyncSession) -> PositionCounter:
    """Lock the counter row for the rest of the transaction, creating it if missing.

    Two first-ever batches racing to create the row collide on its primary key.
    """
    result = await db.execute(
        select(PositionCounter)
        .where(PositionCounter.id == POSITION_COUNTER_ID)
        .with_for_update()
    )
    counter = result.scalar_one_or_none()

    if not counter:
        counter = PositionCounter(id=POSITION_COUNTER_ID, last_position=0)
        db.add(counter)
        await db.flush()

    return counter


async def current_max_position(db: AsyncSession, counter: PositionCounter) -> int:
    # The counter never moves back; MAX() covers rows written before it existed
    stored_max = await db.scalar(
        select(func.coalesce(func.max(InventoryItem.position), 0))
    )
    return max(counter.last_position or 0, stored_max or 0)

import pytest
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError, OperationalError

from museum_inventory.constants.error_codes import ErrorCode
from museum_inventory.core.exceptions import (
    BatchCreateError,
    DuplicatePositionError,
    InvalidInputError,
)
from museum_inventory.models.enums.conservation_state import ConservationState
from museum_inventory.models.inventory.position_counter_models import PositionCounter
from museum_inventory.services.inventory import inventory_batch_service
from museum_inventory.services.inventory.inventory_batch_service import (
    create_inventory_items_batch,
    create_inventory_items_batch_with_retry,
    expand_quantities,
)
from museum_inventory.services.inventory.inventory_item_service import delete_inventory_item

from conftest import batch, count_items, stored_positions


# =========================
# EXPANSION
# =========================
def test_expand_quantities_orders_good_regular_bad():
    states = expand_quantities(
        {
            ConservationState.bad: 1,
            ConservationState.good: 2,
            ConservationState.regular: 1,
        }
    )
    assert states == [
        ConservationState.good,
        ConservationState.good,
        ConservationState.regular,
        ConservationState.bad,
    ]


def test_expand_quantities_skips_missing_and_zero_states():
    assert expand_quantities({ConservationState.regular: 0, ConservationState.bad: 2}) == [
        ConservationState.bad,
        ConservationState.bad,
    ]


# =========================
# CREATE
# =========================
async def test_first_batch_starts_at_one(session, chair, warehouse):
    items = await create_inventory_items_batch(
        session, batch(chair.id, warehouse.id, good=2, regular=1)
    )

    assert [i.position for i in items] == [1, 2, 3]
    assert [i.conservation_state for i in items] == [
        ConservationState.good,
        ConservationState.good,
        ConservationState.regular,
    ]
    assert all(i.template_id == chair.id for i in items)
    assert all(i.location_id == warehouse.id for i in items)
    assert all(i.serial is None for i in items)


async def test_batches_continue_from_previous_block(session, chair):
    await create_inventory_items_batch(session, batch(chair.id, good=2))
    items = await create_inventory_items_batch(session, batch(chair.id, bad=3))

    assert [i.position for i in items] == [3, 4, 5]
    assert await stored_positions(session) == [1, 2, 3, 4, 5]


async def test_batch_shares_situation_and_observations(session, chair):
    items = await create_inventory_items_batch(
        session,
        batch(chair.id, good=1, bad=1, situation="On loan", observations="Scratched leg"),
    )
    assert {i.situation for i in items} == {"On loan"}
    assert {i.observations for i in items} == {"Scratched leg"}


async def test_blank_optional_fields_are_stored_as_null(session, chair):
    items = await create_inventory_items_batch(
        session,
        batch(chair.id, location_id="", good=1, situation="  ", observations=""),
    )
    assert items[0].location_id is None
    assert items[0].situation is None
    assert items[0].observations is None


async def test_unknown_template_is_accepted(session):
    items = await create_inventory_items_batch(session, batch("no-such-template", good=1))
    assert items[0].template_id == "no-such-template"


async def test_deleting_highest_position_does_not_free_it(session, chair):
    items = await create_inventory_items_batch(session, batch(chair.id, good=3))
    await delete_inventory_item(session, items[-1].id)

    assert await stored_positions(session) == [1, 2]

    again = await create_inventory_items_batch(session, batch(chair.id, regular=1))
    assert [i.position for i in again] == [4]


# =========================
# VALIDATION
# =========================
async def test_zero_total_rejected_before_store_is_touched(session, chair, monkeypatch):
    async def must_not_lock(db):
        raise AssertionError("counter locked for an invalid batch")

    monkeypatch.setattr(inventory_batch_service, "lock_position_counter", must_not_lock)

    with pytest.raises(InvalidInputError) as exc_info:
        await create_inventory_items_batch(session, batch(chair.id))

    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "At least one quantity must be positive."
    assert await count_items(session) == 0


async def test_blank_template_rejected(session):
    with pytest.raises(InvalidInputError) as exc_info:
        await create_inventory_items_batch(session, batch("", good=1))

    assert exc_info.value.message == "Please select an item template."
    assert await count_items(session) == 0


async def test_negative_quantity_rejected(session, chair):
    payload = batch(chair.id, good=1)
    # bypass field validation to reach the service check
    payload.quantities[ConservationState.bad] = -2

    with pytest.raises(InvalidInputError):
        await create_inventory_items_batch(session, payload)
    assert await count_items(session) == 0


# =========================
# FAILURES
# =========================
async def test_lost_race_rolls_back_whole_batch(session, chair, monkeypatch):
    await create_inventory_items_batch(session, batch(chair.id, good=3))

    async def stale_max(db, counter):
        return 0

    monkeypatch.setattr(inventory_batch_service, "current_max_position", stale_max)

    with pytest.raises(DuplicatePositionError) as exc_info:
        await create_inventory_items_batch(session, batch(chair.id, good=2, bad=2))

    assert exc_info.value.status_code == 409
    assert exc_info.value.error_code == ErrorCode.DUPLICATE_POSITION
    assert await stored_positions(session) == [1, 2, 3]
    assert await session.scalar(select(PositionCounter.last_position)) == 3


async def test_store_failure_becomes_batch_create_error(session, chair, monkeypatch):
    async def broken_lock(db):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(inventory_batch_service, "lock_position_counter", broken_lock)

    with pytest.raises(BatchCreateError) as exc_info:
        await create_inventory_items_batch(session, batch(chair.id, good=1))

    assert exc_info.value.status_code == 500
    assert exc_info.value.error_code == ErrorCode.BATCH_CREATE_FAILED
    assert await count_items(session) == 0


async def test_other_constraint_violation_is_not_a_position_race(session, chair, monkeypatch):
    async def failing_lock(db):
        raise IntegrityError(
            "INSERT", {}, Exception("NOT NULL constraint failed: inventory_items.template_id")
        )

    monkeypatch.setattr(inventory_batch_service, "lock_position_counter", failing_lock)

    with pytest.raises(BatchCreateError):
        await create_inventory_items_batch(session, batch(chair.id, good=1))


# =========================
# RETRY
# =========================
async def test_retry_recovers_after_lost_race(monkeypatch):
    calls = []

    async def flaky(db, payload):
        calls.append(payload)
        if len(calls) < 3:
            raise DuplicatePositionError()
        return ["created"]

    monkeypatch.setattr(inventory_batch_service, "create_inventory_items_batch", flaky)

    result = await create_inventory_items_batch_with_retry(
        None, batch("T1", good=1), max_attempts=3, backoff_seconds=0
    )
    assert result == ["created"]
    assert len(calls) == 3


async def test_retry_gives_up_after_max_attempts(monkeypatch):
    calls = []

    async def always_collides(db, payload):
        calls.append(payload)
        raise DuplicatePositionError()

    monkeypatch.setattr(inventory_batch_service, "create_inventory_items_batch", always_collides)

    with pytest.raises(DuplicatePositionError):
        await create_inventory_items_batch_with_retry(
            None, batch("T1", good=1), max_attempts=2, backoff_seconds=0
        )
    assert len(calls) == 2


async def test_retry_does_not_repeat_other_failures(monkeypatch):
    calls = []

    async def broken(db, payload):
        calls.append(payload)
        raise BatchCreateError()

    monkeypatch.setattr(inventory_batch_service, "create_inventory_items_batch", broken)

    with pytest.raises(BatchCreateError):
        await create_inventory_items_batch_with_retry(
            None, batch("T1", good=1), max_attempts=5, backoff_seconds=0
        )
    assert len(calls) == 1


async def test_retry_requires_one_attempt():
    with pytest.raises(ValueError):
        await create_inventory_items_batch_with_retry(None, batch("T1", good=1), max_attempts=0)


async def test_retry_path_allocates_real_positions(session, chair):
    items = await create_inventory_items_batch_with_retry(session, batch(chair.id, good=2))
    assert [i.position for i in items] == [1, 2]
    assert await session.scalar(select(func.count()).select_from(PositionCounter)) == 1

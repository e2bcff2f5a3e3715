import os

os.environ.setdefault("APP_ENV", "development")
os.environ.setdefault("DB_TYPE", "sqlite")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select, func

from main import create_app
from museum_inventory.core.db import Database
from museum_inventory.models.enums.conservation_state import ConservationState
from museum_inventory.models.inventory.inventory_item_models import InventoryItem
from museum_inventory.schemas.inventory.inventory_item_schemas import InventoryBatchCreate
from museum_inventory.schemas.inventory.location_schemas import LocationCreate
from museum_inventory.schemas.masters.item_template_schemas import ItemTemplateCreate
from museum_inventory.services.inventory.location_service import create_location
from museum_inventory.services.masters.item_template_service import create_item_template


@pytest.fixture
async def database(tmp_path):
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'inventory.db'}")
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
async def session(database):
    async with database.session() as s:
        yield s


@pytest.fixture
async def client(database):
    app = create_app(database, create_tables=False)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


@pytest.fixture
async def chair(session):
    return await create_item_template(
        session, ItemTemplateCreate(asset_code="A1", name="Chair", brand="Thonet")
    )


@pytest.fixture
async def warehouse(session):
    return await create_location(session, LocationCreate(name="Warehouse"))


def batch(template_id, location_id=None, good=0, regular=0, bad=0, **extra):
    return InventoryBatchCreate(
        template_id=template_id,
        location_id=location_id,
        quantities={
            ConservationState.good: good,
            ConservationState.regular: regular,
            ConservationState.bad: bad,
        },
        **extra,
    )


async def stored_positions(session) -> list[int]:
    result = await session.execute(select(InventoryItem.position).order_by(InventoryItem.position))
    return list(result.scalars().all())


async def count_items(session) -> int:
    return await session.scalar(select(func.count()).select_from(InventoryItem))

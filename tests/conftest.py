import asyncio
import os
import tempfile
from decimal import Decimal

import pytest
import pytest_asyncio

# must be set before canteen.config is imported
_db_dir = tempfile.mkdtemp(prefix="canteen-tests-")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(_db_dir, "canteen.db")
os.environ["VERIFY_TOTAL_PRICE"] = "false"

from fastapi.testclient import TestClient  # noqa: E402

from canteen.db.base import Base  # noqa: E402
from canteen.db.session import AsyncSessionLocal, engine  # noqa: E402
from canteen.main import app  # noqa: E402
from canteen.models import MenuItem  # noqa: E402


async def _reset_db():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


@pytest.fixture()
def client():
    asyncio.run(_reset_db())
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def menu(client):
    """Three catalog items with ids 1, 2, 3."""
    created = []
    for name, description, price in [
        ("Burger", "Beef burger", "10.00"),
        ("Tea", "Black tea", "4.00"),
        ("Salad", "Garden salad", "5.50"),
    ]:
        response = client.post(
            "/api/menuItems",
            json={"name": name, "description": description, "price": price},
        )
        assert response.status_code == 201
        created.append(response.json())
    return created


@pytest_asyncio.fixture()
async def db():
    await _reset_db()
    async with AsyncSessionLocal() as session:
        yield session


@pytest_asyncio.fixture()
async def menu_items(db):
    items = [
        MenuItem(name="Burger", description="Beef burger", price=Decimal("10.00")),
        MenuItem(name="Tea", description="Black tea", price=Decimal("4.00")),
        MenuItem(name="Salad", description="Garden salad", price=Decimal("5.50")),
    ]
    db.add_all(items)
    await db.commit()
    return items

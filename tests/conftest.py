from decimal import Decimal

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from arqui_api.main import app
from arqui_api.database import Base, get_db
from arqui_api.models import PricingPlan, Service

from tests.factories import PricingPlanFactory, ServiceFactory

# In-memory SQLite shared across the session's connections
TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture
async def test_db():
    """Create a fresh in-memory database with FK enforcement."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def client(test_db: AsyncSession):
    """Create test client with overridden database."""

    async def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def _add(db: AsyncSession, entity):
    db.add(entity)
    await db.commit()
    return entity


@pytest_asyncio.fixture
async def standard_plan(test_db: AsyncSession) -> PricingPlan:
    """Active plan at 500.00 PEN per unit area."""
    return await _add(test_db, PricingPlan(**PricingPlanFactory(
        name="Proyecto de arquitectura",
        price_per_area=Decimal("500.00"),
        min_days=30,
        max_days=45,
    )))


@pytest_asyncio.fixture
async def premium_plan(test_db: AsyncSession) -> PricingPlan:
    """Active plan at 800.00 USD per unit area."""
    return await _add(test_db, PricingPlan(**PricingPlanFactory(
        name="Expediente completo",
        price_per_area=Decimal("800.00"),
        currency="USD",
        min_days=45,
        max_days=75,
    )))


@pytest_asyncio.fixture
async def inactive_plan(test_db: AsyncSession) -> PricingPlan:
    return await _add(test_db, PricingPlan(**PricingPlanFactory(is_active=False)))


@pytest_asyncio.fixture
async def flat_service(test_db: AsyncSession) -> Service:
    """Flat service priced 1500.00."""
    return await _add(test_db, Service(**ServiceFactory(
        name="Saneamiento físico legal",
        pricing_mode="flat",
        price=Decimal("1500.00"),
        display_order=1,
    )))


@pytest_asyncio.fixture
async def percent_service(test_db: AsyncSession) -> Service:
    """Service charging 10% of the base cost."""
    return await _add(test_db, Service(**ServiceFactory(
        name="Supervisión de obra",
        pricing_mode="percent",
        price=Decimal("10.00"),
        display_order=2,
    )))


@pytest_asyncio.fixture
async def area_service(test_db: AsyncSession) -> Service:
    """Service charging 4.50 per unit of total area."""
    return await _add(test_db, Service(**ServiceFactory(
        name="Modelado BIM",
        pricing_mode="per_area",
        price=Decimal("4.50"),
        display_order=3,
    )))


@pytest_asyncio.fixture
async def inactive_service(test_db: AsyncSession) -> Service:
    return await _add(test_db, Service(**ServiceFactory(
        pricing_mode="flat",
        price=Decimal("999.00"),
        is_active=False,
        is_public=False,
        display_order=9,
    )))

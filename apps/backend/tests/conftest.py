"""Test fixtures and configuration."""

import logging
import sys

import pytest
import pytest_asyncio
import structlog
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from ledger_insights import database, models  # noqa: F401
from ledger_insights.database import Base
from ledger_insights.deps import get_ledger_gateway
from ledger_insights.main import app
from tests.fakes import FakeLedgerGateway

OWNER_ID = "owner-1"


# --- Structlog Configuration for Tests ---
@pytest.fixture(autouse=True, scope="session")
def configure_structlog_for_tests():
    """Configure structlog for proper capsys capture in tests."""
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.format_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.dev.ConsoleRenderer(),
        foreign_pre_chain=processors[:-1],
    )

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.DEBUG)

    yield

    structlog.reset_defaults()


@pytest.fixture
def owner_id() -> str:
    return OWNER_ID


@pytest.fixture
def gateway() -> FakeLedgerGateway:
    return FakeLedgerGateway()


@pytest_asyncio.fixture
async def client(gateway):
    """Async test client whose ledger gateway is the in-memory fake."""
    app.dependency_overrides[get_ledger_gateway] = lambda: gateway
    try:
        transport = ASGITransport(app=app)
        async with AsyncClient(
            transport=transport,
            base_url="http://test",
            headers={"X-User-Id": OWNER_ID},
        ) as client_instance:
            yield client_instance
    finally:
        app.dependency_overrides.pop(get_ledger_gateway, None)


@pytest_asyncio.fixture
async def session_maker():
    """Session maker over a fresh in-memory SQLite database with the ledger schema."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    previous = database.set_test_session_maker(maker)
    try:
        yield maker
    finally:
        database.set_test_session_maker(previous)
        await engine.dispose()


@pytest_asyncio.fixture
async def db(session_maker):
    async with session_maker() as session:
        yield session

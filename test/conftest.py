"""
Test Configuration and Fixtures

This module provides:
- Environment setup (throwaway SQLite database, test log directory, mock email)
- Database creation once per session and table cleanup between integration tests
- The session-scoped TestClient and JWT helpers for integration tests

Architecture:
- Unit tests (marked `unit`): no database, no HTTP client
- Integration tests: run against the FastAPI app and a real SQLite file
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# settings and the loguru sinks are configured at import time
# =============================================================================
import os
from pathlib import Path
import tempfile


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    db_dir = Path(tempfile.gettempdir()) / 'eventora_booking_test'
    db_dir.mkdir(exist_ok=True)
    os.environ['DATABASE_URL'] = f'sqlite+aiosqlite:///{db_dir / f"test_{worker_id}.db"}'

    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ['DEBUG'] = 'true'
    os.environ['EMAIL_BACKEND'] = 'mock'
    os.environ['SECRET_KEY'] = 'test_secret_key'


_early_setup_test_environment()

import asyncio  # noqa: E402
from collections.abc import Callable, Generator  # noqa: E402
from typing import Any  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy import delete  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402

from src.platform.config.core_setting import settings  # noqa: E402
from src.platform.database.orm_db_setting import Base  # noqa: E402
import src.service.booking.driven_adapter.model  # noqa: E402, F401
from src.service.booking.domain.entity.user_entity import UserEntity  # noqa: E402
from test.jwt_token import issue_token  # noqa: E402


# =============================================================================
# Pytest Hooks: Detect test type and setup accordingly
# =============================================================================
def _is_unit_test_only_run(config: pytest.Config) -> bool:
    markexpr = config.getoption('markexpr', default='')
    if markexpr and 'unit' in str(markexpr) and 'not unit' not in str(markexpr):
        return True

    args = config.args or []
    test_paths = [arg for arg in args if arg and not arg.startswith('-')]
    return bool(test_paths and all('/unit/' in path or '\\unit\\' in path for path in test_paths))


def pytest_sessionstart(session: pytest.Session) -> None:
    if _is_unit_test_only_run(session.config):
        return
    asyncio.run(_setup_test_database())


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        markers = [m.name for m in item.iter_markers()]
        if 'unit' not in markers:
            item.add_marker(pytest.mark.integration)
            item.fixturenames.append('clean_database')


# =============================================================================
# Database Setup and Cleanup (fresh engine per call, the app owns its own)
# =============================================================================
async def _setup_test_database() -> None:
    engine = create_async_engine(settings.DATABASE_URL_ASYNC)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
    finally:
        await engine.dispose()


async def _clean_all_tables() -> None:
    engine = create_async_engine(settings.DATABASE_URL_ASYNC)
    try:
        async with engine.begin() as conn:
            for table in reversed(Base.metadata.sorted_tables):
                await conn.execute(delete(table))
    finally:
        await engine.dispose()


def run_db(coro_factory: Callable[[Any], Any]) -> Any:
    """Run `coro_factory(session)` on a throwaway engine and commit."""

    async def _run() -> Any:
        engine = create_async_engine(settings.DATABASE_URL_ASYNC)
        try:
            async with async_sessionmaker(engine, expire_on_commit=False)() as session:
                result = await coro_factory(session)
                await session.commit()
                return result
        finally:
            await engine.dispose()

    return asyncio.run(_run())


@pytest.fixture(scope='function')
def clean_database() -> Generator[None, None, None]:
    asyncio.run(_clean_all_tables())
    yield


# =============================================================================
# Session-scoped Fixtures
# =============================================================================
@pytest.fixture(scope='session')
def client() -> Generator[TestClient, None, None]:
    from test.test_main import app

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def auth_headers() -> Callable[[UserEntity], dict[str, str]]:
    def _headers(user: UserEntity) -> dict[str, str]:
        return {'Authorization': f'Bearer {issue_token(user)}'}

    return _headers

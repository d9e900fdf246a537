"""
Test Configuration and Fixtures

This module provides:
- A throwaway SQLite database, migrated with alembic at session start
- Table cleanup between integration tests
- The test FastAPI app and TestClient
- Showtime seeding and cookie login helpers

Architecture:
- Unit tests (test/**/unit/): mocked collaborators, no database
- Integration tests: real database through the HTTP API or the repositories
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings are read at import time by cinema_booking.platform.config.core_setting
# =============================================================================
import os
from pathlib import Path
import tempfile


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    db_dir = Path(tempfile.mkdtemp(prefix=f'cinema_booking_{worker_id}_'))
    os.environ['TEST_DB_PATH'] = str(db_dir / 'cinema_booking_test.db')
    os.environ['DATABASE_URL'] = f'sqlite+aiosqlite:///{os.environ["TEST_DB_PATH"]}'

    # In-process gateway; Khalti adapter tests use httpx.MockTransport instead
    os.environ['PAYMENT_GATEWAY'] = 'mock'

    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)


_early_setup_test_environment()

from collections.abc import AsyncIterator, Callable, Generator  # noqa: E402
from contextlib import asynccontextmanager  # noqa: E402
from datetime import datetime, timezone  # noqa: E402

from alembic import command  # noqa: E402
from alembic.config import Config  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy import create_engine, text  # noqa: E402

from cinema_booking.platform.app_factory import create_app  # noqa: E402
from cinema_booking.platform.config.core_setting import settings  # noqa: E402
from cinema_booking.platform.config.di import container  # noqa: E402
from cinema_booking.platform.config.wire_modules import WIRE_MODULES  # noqa: E402
from cinema_booking.platform.constant.path import ALEMBIC_DIR  # noqa: E402
from cinema_booking.platform.database.orm_db_setting import dispose_engine  # noqa: E402
from cinema_booking.platform.logging.loguru_io import Logger  # noqa: E402
from cinema_booking.service.reservation.domain.entity.user_entity import UserRole  # noqa: E402
from cinema_booking.service.reservation.driven_adapter.model import ShowtimeModel  # noqa: E402
from cinema_booking.service.reservation.driving_adapter.http_controller.auth.jwt_auth import (  # noqa: E402
    JwtAuth,
)
from fixture_constants import (  # noqa: E402
    HALL_A_PRICE,
    HALL_B_PRICE,
    MOVIE_ID,
    OTHER_MOVIE_ID,
    SHOWTIME_HALL_A,
    SHOWTIME_HALL_B,
    SHOWTIME_OTHER_MOVIE,
    USER_ID,
)


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
    _migrate_test_database()


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        markers = [m.name for m in item.iter_markers()]
        if 'unit' not in markers:
            item.fixturenames.append('clean_database')  # type: ignore[attr-defined]


# =============================================================================
# Database Setup and Cleanup
# =============================================================================
def _sync_database_url() -> str:
    return f'sqlite:///{os.environ["TEST_DB_PATH"]}'


def _migrate_test_database() -> None:
    # No ini file: keeps alembic from reconfiguring logging for the whole session
    alembic_cfg = Config()
    alembic_cfg.set_main_option('script_location', str(ALEMBIC_DIR))
    alembic_cfg.set_main_option('sqlalchemy.url', settings.DATABASE_URL_ASYNC)
    command.upgrade(alembic_cfg, 'head')


def _clean_all_tables() -> None:
    engine = create_engine(_sync_database_url())
    try:
        with engine.begin() as conn:
            for table in ('booking_seat', 'booking', 'showtime'):
                conn.execute(text(f'DELETE FROM {table}'))
    finally:
        engine.dispose()


@pytest.fixture(scope='function')
def clean_database() -> Generator[None, None, None]:
    _clean_all_tables()
    yield
    _clean_all_tables()


@pytest.fixture
def seed_showtimes(clean_database: None) -> dict[int, dict]:
    rows = {
        SHOWTIME_HALL_A: {
            'movie_id': MOVIE_ID,
            'hall_id': 'A',
            'hall_name': 'Hall A',
            'start_time': datetime(2025, 1, 10, 18, 30, tzinfo=timezone.utc),
            'price': HALL_A_PRICE,
        },
        SHOWTIME_HALL_B: {
            'movie_id': MOVIE_ID,
            'hall_id': 'B',
            'hall_name': 'Hall B',
            'start_time': datetime(2025, 1, 10, 14, 0, tzinfo=timezone.utc),
            'price': HALL_B_PRICE,
        },
        SHOWTIME_OTHER_MOVIE: {
            'movie_id': OTHER_MOVIE_ID,
            'hall_id': 'A',
            'hall_name': 'Hall A',
            'start_time': datetime(2025, 1, 11, 20, 0, tzinfo=timezone.utc),
            'price': HALL_A_PRICE,
        },
    }
    engine = create_engine(_sync_database_url())
    try:
        with engine.begin() as conn:
            conn.execute(
                ShowtimeModel.__table__.insert(),
                [{'id': showtime_id, **row} for showtime_id, row in rows.items()],
            )
    finally:
        engine.dispose()
    return rows


@pytest.fixture
def count_rows() -> Callable[[str], int]:
    def _count(table: str) -> int:
        engine = create_engine(_sync_database_url())
        try:
            with engine.connect() as conn:
                return conn.execute(text(f'SELECT COUNT(*) FROM {table}')).scalar_one()
        finally:
            engine.dispose()

    return _count


# =============================================================================
# Test App
# =============================================================================
@asynccontextmanager
async def lifespan_for_tests(app: FastAPI) -> AsyncIterator[None]:
    """Minimal lifespan for testing - schema comes from the session-level migration"""
    Logger.base.info('🧪 [Test App] Starting up...')
    container.wire(modules=WIRE_MODULES)
    yield
    await dispose_engine()
    container.unwire()
    Logger.base.info('🛑 [Test App] Shut down')


app = create_app(lifespan=lifespan_for_tests, title_suffix=' (Test)')


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client


# =============================================================================
# Auth Helpers
# =============================================================================
@pytest.fixture
def jwt_auth() -> JwtAuth:
    return JwtAuth()


@pytest.fixture
def login_as(client: TestClient, jwt_auth: JwtAuth) -> Callable[..., TestClient]:
    """Put a token for the given identity in the client's cookie jar"""

    def _login(user_id: int, role: UserRole = UserRole.USER) -> TestClient:
        token = jwt_auth.create_jwt_token(user_id=user_id, role=role)
        client.cookies.set(settings.AUTH_COOKIE_NAME, token)
        return client

    return _login


@pytest.fixture
def reserve(login_as: Callable[..., TestClient]) -> Callable[..., dict]:
    """Reserve seats over HTTP as the given user and return the booking JSON"""
    from cinema_booking.platform.constant.route_constant import BOOKING_CREATE

    def _reserve(seats: list[str], showtime_id: int = SHOWTIME_HALL_A, user_id: int = USER_ID):
        client = login_as(user_id)
        response = client.post(BOOKING_CREATE, json={'showtime_id': showtime_id, 'seats': seats})
        assert response.status_code == 201, response.text
        return response.json()

    return _reserve

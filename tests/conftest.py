import asyncio
import os
import sys
import tempfile
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Must be set before wellum_service.config is first imported
_DB_DIR = tempfile.mkdtemp(prefix="wellum_test_")
os.environ.setdefault("WELLUM_DATABASE_URL", f"sqlite+aiosqlite:///{_DB_DIR}/test_wellum.db")
# Long enough that the background ticker never fires during API tests
os.environ.setdefault("SESSION_TICK_SECONDS", "30")
os.environ.setdefault("APP_ENV", "test")

from alembic import command  # noqa: E402
from alembic.config import Config  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

USER_ID = "athlete-1"
OTHER_USER_ID = "athlete-2"


def _alembic_upgrade_head() -> None:
    cfg = Config(str(PROJECT_ROOT / "alembic.ini"))
    # Pin script_location explicitly to avoid picking up wrong migrations when running from another cwd
    cfg.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    command.upgrade(cfg, "head")


def _clean_tables() -> None:
    from sqlalchemy import create_engine

    from wellum_service import models  # noqa: F401
    from wellum_service.database import DATABASE_URL, Base

    engine = create_engine(DATABASE_URL.replace("sqlite+aiosqlite", "sqlite", 1))
    with engine.begin() as connection:
        for table in reversed(Base.metadata.sorted_tables):
            connection.execute(table.delete())
    engine.dispose()


@pytest.fixture(scope="session")
def migrated_db():
    _alembic_upgrade_head()
    yield


@pytest.fixture()
def client(migrated_db):
    from wellum_service.main import app

    with TestClient(app, headers={"X-User-Id": USER_ID}) as c:
        yield c

    _clean_tables()


class ManualClock:
    """Stand-in for asyncio.sleep that only returns when the test advances it."""

    def __init__(self):
        self._waiters: list[asyncio.Future] = []

    async def sleep(self, interval: float) -> None:
        fut = asyncio.get_running_loop().create_future()
        self._waiters.append(fut)
        await fut

    @staticmethod
    async def settle() -> None:
        await settle()

    @property
    def pending(self) -> list[asyncio.Future]:
        return [f for f in self._waiters if not f.done()]

    @property
    def sleeping(self) -> bool:
        return bool(self.pending)

    async def advance(self, ticks: int = 1) -> int:
        """Release ``ticks`` pending sleeps; returns how many were released."""
        released = 0
        for _ in range(ticks):
            await settle()
            pending = [f for f in self._waiters if not f.done()]
            self._waiters = []
            if not pending:
                break
            for fut in pending:
                fut.set_result(None)
            released += 1
            await settle()
        return released


async def settle() -> None:
    for _ in range(20):
        await asyncio.sleep(0)


@pytest.fixture()
def clock() -> ManualClock:
    return ManualClock()

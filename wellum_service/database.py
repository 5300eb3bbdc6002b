from collections.abc import AsyncGenerator
from urllib.parse import parse_qsl, urlencode, urlparse, urlunparse

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

from .config import get_settings

logger = structlog.get_logger(__name__)

Base = declarative_base()


def ensure_async_url(url: str) -> str:
    """Rewrite sync driver URLs to their async counterparts."""
    if url.startswith("postgresql://"):
        url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
    elif url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql+asyncpg://", 1)
    elif url.startswith("sqlite://"):
        url = url.replace("sqlite://", "sqlite+aiosqlite://", 1)

    parsed = urlparse(url)
    if not parsed.scheme.startswith("postgresql+asyncpg"):
        return url

    # asyncpg understands ssl=true/false but not libpq's sslmode or channel_binding
    q = dict(parse_qsl(parsed.query, keep_blank_values=True))
    sslmode = (q.pop("sslmode", None) or "").strip().lower()
    if sslmode in {"require", "verify-full", "verify-ca"}:
        q.setdefault("ssl", "true")
    elif sslmode == "disable":
        q.setdefault("ssl", "false")
    q.pop("channel_binding", None)
    return urlunparse(parsed._replace(query=urlencode(q, doseq=True)))


DATABASE_URL = ensure_async_url(get_settings().WELLUM_DATABASE_URL)

engine_args = {}
if DATABASE_URL.startswith("sqlite"):
    # aiosqlite connections must not outlive the event loop that opened them
    engine_args["poolclass"] = NullPool

logger.info("database_url_configured", scheme=urlparse(DATABASE_URL).scheme)

engine = create_async_engine(DATABASE_URL, future=True, **engine_args)
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    expire_on_commit=False,
    autoflush=False,
    class_=AsyncSession,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session

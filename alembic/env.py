from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine

from wellum_service import models  # noqa: F401
from wellum_service.database import DATABASE_URL, Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata


def sync_database_url(url: str) -> str:
    """Migrations run on a synchronous driver."""
    if "+aiosqlite" in url:
        return url.replace("sqlite+aiosqlite", "sqlite", 1)
    if "+asyncpg" in url:
        # psycopg2 expects libpq's sslmode instead of asyncpg's ssl flag
        url = url.replace("postgresql+asyncpg", "postgresql+psycopg2", 1)
        url = url.replace("ssl=true", "sslmode=require").replace("ssl=false", "sslmode=disable")
    return url


config.set_main_option("sqlalchemy.url", sync_database_url(DATABASE_URL))


def run_migrations_offline() -> None:
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    connectable = create_engine(config.get_main_option("sqlalchemy.url"))

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
        )

        with context.begin_transaction():
            context.run_migrations()

    connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()

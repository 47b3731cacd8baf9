import argparse
import asyncio

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from taskboard import models  # noqa: F401
from taskboard.config import settings
from taskboard.models.base import Base
from taskboard.utils.logger import setup_logger

logger = setup_logger("db")

if not settings.app_database_url:
    raise ValueError("TASKBOARD_DATABASE_URL environment variable not set")

if not settings.app_database_url.startswith("postgresql+asyncpg://"):
    if settings.app_database_url.startswith("postgresql://"):
        settings.app_database_url = settings.app_database_url.replace(
            "postgresql://", "postgresql+asyncpg://", 1
        )
    else:
        raise ValueError(
            f"Unsupported settings.app_database_url prefix: {settings.app_database_url}"
        )

app_engine = create_async_engine(
    settings.app_database_url,
    pool_pre_ping=True,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_pool_size,
    pool_timeout=30,
    pool_recycle=300,
    echo=False,
    connect_args={"timeout": 30},
)

AppAsyncSessionLocal = async_sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=app_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def init_db():
    """Create the schema and any missing tables."""
    if not Base.metadata.tables:
        logger.warning("Base.metadata.tables is EMPTY! No tables will be created.")
    else:
        logger.debug(
            f"Tables registered in Base.metadata: {list(Base.metadata.tables.keys())}"
        )

    async with app_engine.begin() as conn:
        await conn.execute(text(f'CREATE SCHEMA IF NOT EXISTS "{settings.schema_name}"'))
        await conn.run_sync(Base.metadata.create_all)

    logger.info(f"Database schema '{settings.schema_name}' initialized.")


async def close_db():
    """Closes database connections."""
    logger.info("Closing database connections.")
    await app_engine.dispose()


async def list_tables_in_schema(schema_name: str) -> list[str]:
    """Lists all tables in the specified schema."""
    async with app_engine.connect() as conn:
        result = await conn.execute(
            text(
                "SELECT table_name FROM information_schema.tables "
                "WHERE table_schema = :schema_name ORDER BY table_name"
            ),
            {"schema_name": schema_name},
        )
        table_names = [row[0] for row in result.fetchall()]

    if table_names:
        logger.info(f"Tables in schema '{schema_name}': {table_names}")
    else:
        logger.info(f"No tables found in schema '{schema_name}'.")
    return table_names


async def reset_db():
    logger.warning(
        f"Resetting schema '{settings.schema_name}'. THIS IS A DESTRUCTIVE OPERATION."
    )
    async with app_engine.begin() as conn:
        await conn.execute(
            text(f'DROP SCHEMA IF EXISTS "{settings.schema_name}" CASCADE')
        )
        logger.info(f"Schema '{settings.schema_name}' dropped.")

    await init_db()
    logger.info(f"Schema '{settings.schema_name}' has been reset and re-initialized.")


async def check_db_connection(engine_to_check=None) -> bool:
    """Performs a simple query to check actual DB connectivity."""
    if engine_to_check is None:
        engine_to_check = app_engine

    try:
        async with engine_to_check.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            if result.scalar_one() != 1:
                raise RuntimeError("Test query returned an unexpected result.")
    except Exception as e:
        logger.error(f"Failed to execute test query: {e}", exc_info=True)
        raise RuntimeError("Database connectivity check failed.") from e

    logger.info("Successfully connected to the database and executed a test query.")
    return True


def _run_cli():
    parser = argparse.ArgumentParser(
        description=f"Taskboard database ({settings.schema_name}) utility"
    )
    parser.add_argument(
        "action",
        choices=["init", "reset", "list-tables", "check"],
        help=f"'init' to create missing tables in schema '{settings.schema_name}', "
        f"'reset' to drop the schema and recreate it, "
        f"'list-tables' to show the tables of a schema, "
        f"'check' to run a connectivity check.",
    )
    parser.add_argument(
        "--schema",
        type=str,
        default=settings.schema_name,
        help="Schema to inspect with list-tables.",
    )
    args = parser.parse_args()

    if args.action == "init":
        asyncio.run(init_db())
    elif args.action == "reset":
        confirm = input(
            f"WARNING: This will delete all data in schema '{settings.schema_name}'. "
            "Are you sure? (yes/no): "
        )
        if confirm.lower() == "yes":
            asyncio.run(reset_db())
        else:
            logger.info("Database reset cancelled by user.")
    elif args.action == "list-tables":
        asyncio.run(list_tables_in_schema(args.schema))
    elif args.action == "check":
        asyncio.run(check_db_connection())


if __name__ == "__main__":
    _run_cli()

"""Database engine, session factory and gateway selection."""

import logging
from enum import Enum

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from tripflow.config import Settings
from tripflow.db.gateway import InstrumentedGateway, TripGateway

logger = logging.getLogger(__name__)


class PersistenceMode(str, Enum):
    """Which gateway backend the process runs with."""

    REMOTE = "remote"
    LOCAL = "local"


def resolve_mode(settings: Settings) -> PersistenceMode:
    """Pick the persistence mode from configuration presence.

    Returns:
        REMOTE when DATABASE_URL is set, LOCAL otherwise
    """
    if settings.database_url:
        return PersistenceMode.REMOTE
    return PersistenceMode.LOCAL


def create_async_engine_from_settings(settings: Settings) -> AsyncEngine:
    """Create async SQLAlchemy engine from settings.

    Raises:
        ValueError: If DATABASE_URL is unset or empty.
    """
    database_url = settings.database_url

    if not database_url:
        raise ValueError(
            "DATABASE_URL must be set to a valid connection string. "
            "Please configure the database_url setting."
        )

    # Convert postgresql:// to postgresql+asyncpg://
    if database_url.startswith("postgresql://"):
        database_url = database_url.replace("postgresql://", "postgresql+asyncpg://", 1)

    return create_async_engine(database_url, pool_pre_ping=True, echo=False)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create sessionmaker for creating database sessions.

    Args:
        engine: Async SQLAlchemy engine

    Returns:
        Sessionmaker bound to the engine
    """
    return async_sessionmaker(bind=engine, expire_on_commit=False)


def build_gateway(
    settings: Settings, mode: PersistenceMode | None = None
) -> InstrumentedGateway:
    """Construct the persistence gateway for a mode.

    Args:
        settings: Application settings
        mode: Explicit mode; resolved from settings when omitted

    Returns:
        Instrumented gateway over the SQL or local backend
    """
    from tripflow.db.local_gateway import LocalTripGateway
    from tripflow.db.local_store import FileKeyValueStore
    from tripflow.db.sql_gateway import SqlTripGateway

    mode = mode or resolve_mode(settings)
    inner: TripGateway

    if mode == PersistenceMode.REMOTE:
        engine = create_async_engine_from_settings(settings)
        inner = SqlTripGateway(create_session_factory(engine))
        logger.info("Persistence mode: remote")
    else:
        store = FileKeyValueStore(settings.local_store_dir)
        inner = LocalTripGateway(store, key_prefix=settings.storage_key_prefix)
        logger.info(f"Persistence mode: local (store at {settings.local_store_dir})")

    return InstrumentedGateway(inner, backend=mode.value)

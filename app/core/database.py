from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import QueuePool
from .config import Settings, settings as default_settings
import logging

logger = logging.getLogger(__name__)

# Create Base class for models
Base = declarative_base()


# =============================================================================
# DATABASE ENGINE CONFIGURATION
# =============================================================================

def create_db_engine(settings: Settings = default_settings) -> Engine:
    """
    Build the process-wide engine from settings.

    Nothing connects here; the pool opens its first connection when the
    store is initialized at startup.
    """
    engine = create_engine(
        settings.DATABASE_URL,

        # Connection pool settings
        poolclass=QueuePool,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,

        # Test connection before using (detect disconnects)
        pool_pre_ping=True,

        echo=settings.DB_ECHO_SQL,

        connect_args={
            "connect_timeout": 10,
        }
    )

    if settings.DEBUG:
        event.listen(engine, "connect", _log_new_connection)

    return engine


def _log_new_connection(dbapi_conn, connection_record):
    logger.debug("New database connection established")


# =============================================================================
# DATABASE UTILITIES
# =============================================================================

def ping(engine: Engine):
    """
    Liveness check. Raises whatever the driver raises when the store
    cannot be reached.
    """
    with engine.connect() as connection:
        connection.execute(text("SELECT 1"))


def create_database_tables(engine: Engine):
    """
    Create all tables defined in models. Existing tables are left alone.
    """
    # Register the models on Base.metadata
    from app.models import student  # noqa: F401

    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready")


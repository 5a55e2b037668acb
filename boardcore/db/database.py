"""
Database engine and session management.

Builds the SQLAlchemy engine from environment configuration with an
in-memory SQLite fallback for test runs, and exposes session helpers.
"""
import logging
import os
import sys
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

IN_MEMORY_SQLITE_URL = "sqlite+pysqlite:///:memory:"


def _get_database_url() -> str:
    # If DATABASE_URL is explicitly set, use it
    if os.getenv("DATABASE_URL"):
        return os.getenv("DATABASE_URL")

    # Otherwise, generate from individual components (all must be set)
    components = {
        "POSTGRES_USER": os.getenv("POSTGRES_USER"),
        "POSTGRES_PASSWORD": os.getenv("POSTGRES_PASSWORD"),
        "POSTGRES_HOST": os.getenv("POSTGRES_HOST"),
        "POSTGRES_PORT": os.getenv("POSTGRES_PORT"),
        "POSTGRES_DB": os.getenv("POSTGRES_DB"),
    }
    missing = [name for name, value in components.items() if not value]
    if missing:
        raise ValueError(f"Missing required database environment variables: {', '.join(missing)}")

    return (
        f"postgresql://{components['POSTGRES_USER']}:{components['POSTGRES_PASSWORD']}"
        f"@{components['POSTGRES_HOST']}:{components['POSTGRES_PORT']}/{components['POSTGRES_DB']}"
    )


def _is_pytest_runtime() -> bool:
    """Best-effort detection that we're executing under pytest.

    ``PYTEST_CURRENT_TEST`` is only set while an individual test is running,
    so module import during collection is detected through ``sys.modules``.
    ``PYTEST_RUNNING=1`` forces the answer.
    """
    if os.getenv("PYTEST_RUNNING") == "1":
        return True
    if "PYTEST_CURRENT_TEST" in os.environ:
        return True
    return "pytest" in sys.modules


def _resolve_engine_config() -> tuple[str, dict]:
    """Pick the URL and engine kwargs.

    Order: BOARDCORE_TEST_DB, then in-memory SQLite under pytest, then the
    production URL from the environment.
    """
    explicit_test_db = os.getenv("BOARDCORE_TEST_DB")
    if explicit_test_db:
        kwargs = {"connect_args": {"check_same_thread": False}} if explicit_test_db.startswith("sqlite") else {}
        return explicit_test_db, kwargs
    if _is_pytest_runtime():
        # StaticPool so the in-memory schema persists across connections
        return IN_MEMORY_SQLITE_URL, {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }
    return _get_database_url(), {"pool_pre_ping": True}


DATABASE_URL, _engine_kwargs = _resolve_engine_config()

engine = create_engine(DATABASE_URL, **_engine_kwargs)
logger.debug("engine_configured: backend=%s database=%s", engine.url.get_backend_name(), engine.url.database)

# Each new connection to an in-memory database would otherwise start empty.
if DATABASE_URL == IN_MEMORY_SQLITE_URL:
    from boardcore.db import models  # local import to avoid circular import at module load
    models.Base.metadata.create_all(bind=engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Dependency to get a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_db_session_local():
    """Return a generator that yields a Session and closes it when exhausted.

    Lets scripts write ``db = next(gen)`` and clean up with a second ``next``.
    """

    def _session_gen():
        db = SessionLocal()
        try:
            yield db
        finally:
            db.close()

    return _session_gen()

"""SQLModel database engine and session management."""

import logging

from sqlalchemy import inspect
from sqlmodel import SQLModel, create_engine, Session

from indexer.config import settings

logger = logging.getLogger(__name__)

# SQLite needs check_same_thread=False; PostgreSQL does not
connect_args = {}
if settings.database_url.startswith("sqlite"):
    connect_args["check_same_thread"] = False

engine = create_engine(
    settings.database_url,
    echo=False,
    connect_args=connect_args,
)


def _run_migrations(bind=None):
    """Add columns introduced after the first schema release."""
    from sqlalchemy import text

    bind = bind or engine
    inspector = inspect(bind)

    if "instrument_position" not in inspector.get_table_names():
        return

    columns = {col["name"] for col in inspector.get_columns("instrument_position")}
    added = {
        "exercised": "BOOLEAN NOT NULL DEFAULT FALSE",
        "exercise_profit": "VARCHAR(78) NOT NULL DEFAULT '0'",
    }
    if bind.dialect.name == "postgresql":
        added["exercise_profit"] = "NUMERIC(78, 0) NOT NULL DEFAULT 0"

    for name, ddl in added.items():
        if name in columns:
            continue
        logger.info(f"Migrating: adding instrument_position.{name}")
        with bind.connect() as conn:
            conn.execute(text(f"ALTER TABLE instrument_position ADD COLUMN {name} {ddl}"))
            conn.commit()


def create_db_and_tables(bind=None):
    """Create all tables. Called on startup."""
    import indexer.models  # noqa: F401  (populate metadata)

    bind = bind or engine
    SQLModel.metadata.create_all(bind)
    _run_migrations(bind)


def get_session() -> Session:
    """Dependency that yields a database session."""
    with Session(engine) as session:
        yield session

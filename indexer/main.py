"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlmodel import Session

from indexer.database import create_db_and_tables, engine
from indexer.engine.registry import DataSourceRegistry
from indexer.store import SqlEntityStore
from indexer.utils.logging import setup_logging
from indexer.api import events, positions, system

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: schema, then the tracked-source registry."""
    setup_logging()
    create_db_and_tables()
    registry = DataSourceRegistry()
    with Session(engine) as session:
        registry.load(SqlEntityStore(session))
    app.state.registry = registry
    logger.info("Indexer API ready")

    yield


app = FastAPI(
    title="Instrument Indexer",
    description="Derived ledger of instrument positions and option purchases",
    version="0.1.0",
    lifespan=lifespan,
)

app.state.registry = DataSourceRegistry()

# Mount routers
app.include_router(events.router)
app.include_router(positions.router)
app.include_router(system.router)

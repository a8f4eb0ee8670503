"""Shared fixtures."""

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from indexer.database import create_db_and_tables
from indexer.engine.context import HandlerContext
from indexer.engine.registry import DataSourceRegistry
from indexer.store import MemoryEntityStore


@pytest.fixture
def store():
    return MemoryEntityStore()


@pytest.fixture
def registry():
    return DataSourceRegistry()


@pytest.fixture
def ctx(store, registry):
    return HandlerContext(store=store, registry=registry)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_db_and_tables(engine)
    return engine


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session

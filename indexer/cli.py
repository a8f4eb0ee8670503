"""CLI tool for indexer operations.

Usage:
    python -m indexer.cli init-db
    python -m indexer.cli ingest <events.jsonl>
    python -m indexer.cli sources
    python -m indexer.cli serve
"""

import sys

from sqlmodel import Session

from indexer.config import settings
from indexer.database import engine, create_db_and_tables
from indexer.engine.dispatcher import Dispatcher
from indexer.engine.ingest import read_event_file
from indexer.engine.registry import DataSourceRegistry
from indexer.errors import IndexingHalted
from indexer.models.tracked_source import TrackedSource
from indexer.store import SqlEntityStore
from indexer.utils.logging import setup_logging


def init_db():
    """Create tables and apply column migrations."""
    create_db_and_tables()
    print(f"Database ready at {settings.database_url}")


def ingest(path: str):
    """Replay a JSONL export of decoded events into the database."""
    create_db_and_tables()
    try:
        records = list(read_event_file(path))
    except (OSError, ValueError) as e:
        print(f"Cannot read events: {e}")
        sys.exit(1)

    with Session(engine) as session:
        store = SqlEntityStore(session)
        registry = DataSourceRegistry()
        registry.load(store)
        dispatcher = Dispatcher(
            store,
            registry,
            factory_addresses=settings.factory_addresses,
            start_block=settings.start_block,
            instrument_template=settings.instrument_template,
        )
        try:
            result = dispatcher.dispatch_many(records)
        except IndexingHalted as e:
            print(f"Indexing halted after {e.processed} events: {e}")
            sys.exit(2)

    print(f"{result.processed} events processed, {result.skipped} skipped")


def list_sources():
    """Print every tracked instrument address."""
    create_db_and_tables()
    with Session(engine) as session:
        sources = SqlEntityStore(session).find(TrackedSource)
    if not sources:
        print("No tracked sources.")
        return
    for source in sorted(sources, key=lambda s: s.created_block or 0):
        print(f"{source.id}  {source.template}  block={source.created_block}")


def serve():
    import uvicorn

    uvicorn.run("indexer.main:app", host=settings.api_host, port=settings.api_port)


def main():
    if len(sys.argv) < 2:
        print("Usage: python -m indexer.cli <command>")
        print("Commands: init-db, ingest <file>, sources, serve")
        sys.exit(1)

    setup_logging()
    command = sys.argv[1]
    if command == "init-db":
        init_db()
    elif command == "ingest":
        if len(sys.argv) != 3:
            print("Usage: python -m indexer.cli ingest <events.jsonl>")
            sys.exit(1)
        ingest(sys.argv[2])
    elif command == "sources":
        list_sources()
    elif command == "serve":
        serve()
    else:
        print(f"Unknown command: {command}")
        sys.exit(1)


if __name__ == "__main__":
    main()

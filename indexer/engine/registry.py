"""Data-source registry — contract addresses bound to event templates at runtime.

The factory announces every instrument it deploys; from that block on the
instrument's own events must be routed to the Instrument handlers. New
registrations are staged and only become visible once the event that made
them has been committed.
"""

import logging

from indexer.models.tracked_source import TrackedSource
from indexer.schemas.events import EventMeta
from indexer.store import EntityStore

logger = logging.getLogger(__name__)


class DataSourceRegistry:
    def __init__(self):
        self._sources: dict[str, str] = {}
        self._pending: dict[str, TrackedSource] = {}

    def load(self, store: EntityStore) -> int:
        """Populate from persisted TrackedSource rows. Returns the number loaded."""
        rows = store.find(TrackedSource)
        for row in rows:
            self.add(row)
        logger.info(f"Registry loaded {len(rows)} tracked sources")
        return len(rows)

    def start_tracking(self, template: str, address: str, meta: EventMeta | None = None) -> bool:
        """Bind an address to a template. Returns False if it was already tracked."""
        address = address.lower()
        if address in self._sources or address in self._pending:
            logger.debug(f"Registry: {address} already tracked, ignoring")
            return False
        self._pending[address] = TrackedSource(
            id=address,
            template=template,
            created_block=meta.block_number if meta else None,
            created_tx=meta.tx_hash if meta else None,
        )
        return True

    def add(self, source: TrackedSource):
        """Bind an already persisted source, e.g. one registered by another process."""
        self._sources[source.id] = source.template

    def pending(self) -> list[TrackedSource]:
        return list(self._pending.values())

    def commit(self):
        for address, source in self._pending.items():
            self._sources[address] = source.template
            logger.info(f"Now tracking {address} as {source.template}")
        self._pending.clear()

    def discard(self):
        self._pending.clear()

    def template_for(self, address: str) -> str | None:
        return self._sources.get(address.lower())

    def is_tracked(self, address: str) -> bool:
        return address.lower() in self._sources

    def sources(self) -> dict[str, str]:
        return dict(self._sources)

    def __len__(self):
        return len(self._sources)

"""Event dispatcher — routes decoded events to handlers, one transaction each.

Events are handled strictly one at a time in (block, log index) order. For
each event the handler's writes, any data sources it registered and the
advanced cursor are committed together. A failure rolls all of that back,
records an IndexingFailure row and halts the batch.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable

from indexer.engine.context import HandlerContext
from indexer.engine.registry import DataSourceRegistry
from indexer.errors import IndexingHalted
from indexer.handlers.factory import handle_legacy_new_instrument, handle_new_instrument
from indexer.handlers.instrument import handle_exercised, handle_position_created, handle_purchase
from indexer.models.cursor import IndexerCursor
from indexer.models.failure import IndexingFailure
from indexer.models.tracked_source import TrackedSource
from indexer.schemas.events import EventRecord
from indexer.store import EntityStore
from indexer.utils.constants import (
    CURSOR_ID,
    EXERCISED,
    FACTORY_TEMPLATE,
    INSTRUMENT_CREATED,
    INSTRUMENT_CREATED_LEGACY,
    INSTRUMENT_TEMPLATE,
    POSITION_CREATED,
    PURCHASED,
)

logger = logging.getLogger(__name__)

Handler = Callable[..., None]

HANDLERS: dict[str, dict[str, Handler]] = {
    FACTORY_TEMPLATE: {
        INSTRUMENT_CREATED: handle_new_instrument,
        INSTRUMENT_CREATED_LEGACY: handle_legacy_new_instrument,
    },
    INSTRUMENT_TEMPLATE: {
        POSITION_CREATED: handle_position_created,
        PURCHASED: handle_purchase,
        EXERCISED: handle_exercised,
    },
}


@dataclass
class DispatchResult:
    processed: int = 0
    skipped: int = 0


class Dispatcher:
    def __init__(
        self,
        store: EntityStore,
        registry: DataSourceRegistry,
        factory_addresses: Iterable[str] = (),
        start_block: int = 0,
        instrument_template: str = INSTRUMENT_TEMPLATE,
    ):
        self.store = store
        self.registry = registry
        self.factory_addresses = {a.lower() for a in factory_addresses}
        self.start_block = start_block
        self.instrument_template = instrument_template
        self._handlers = dict(HANDLERS)
        if instrument_template != INSTRUMENT_TEMPLATE:
            self._handlers[instrument_template] = HANDLERS[INSTRUMENT_TEMPLATE]

    def cursor(self) -> IndexerCursor | None:
        return self.store.get(IndexerCursor, CURSOR_ID)

    def _template_for(self, address: str) -> str | None:
        template = self.registry.template_for(address)
        if template is not None:
            return template
        # Another writer (CLI or a second API process) may have registered it
        source = self.store.get(TrackedSource, address)
        if source is not None:
            self.registry.add(source)
            return source.template
        if not self.factory_addresses or address in self.factory_addresses:
            return FACTORY_TEMPLATE
        return None

    def _resolve(self, record: EventRecord) -> Handler | None:
        template = self._template_for(record.address)
        if template is None:
            logger.debug(f"Skipping {record.event} from untracked address {record.address}")
            return None
        handler = self._handlers.get(template, {}).get(record.event)
        if handler is None:
            logger.debug(f"No {template} handler for {record.event}, skipping")
        return handler

    def _already_processed(self, record: EventRecord) -> bool:
        cursor = self.cursor()
        if cursor is None:
            return False
        return record.sort_key <= (cursor.block_number, cursor.log_index)

    def dispatch(self, record: EventRecord) -> bool:
        """Handle one event. Returns False if it was skipped."""
        if record.block_number < self.start_block:
            return False
        if self._already_processed(record):
            logger.debug(f"Skipping {record.event} at {record.tx_hash}-{record.log_index}: behind cursor")
            return False
        handler = self._resolve(record)
        if handler is None:
            return False

        meta = record.meta()
        ctx = HandlerContext(
            store=self.store,
            registry=self.registry,
            instrument_template=self.instrument_template,
        )
        try:
            handler(record.decode(), meta, ctx)
            for source in self.registry.pending():
                if not self.store.exists(TrackedSource, source.id):
                    self.store.put(source)
            self._advance_cursor(record)
            self.store.commit()
        except Exception as e:
            self.store.rollback()
            self.registry.discard()
            self._record_failure(record, e)
            raise IndexingHalted(record.event, record.tx_hash, record.log_index, e) from e

        self.registry.commit()
        return True

    def dispatch_many(self, records: Iterable[EventRecord]) -> DispatchResult:
        """Handle a batch in chain order. Stops at the first failure."""
        result = DispatchResult()
        for record in sorted(records, key=lambda r: r.sort_key):
            try:
                handled = self.dispatch(record)
            except IndexingHalted as e:
                e.processed = result.processed
                raise
            if handled:
                result.processed += 1
            else:
                result.skipped += 1
        logger.info(f"Dispatched batch: {result.processed} processed, {result.skipped} skipped")
        return result

    def _advance_cursor(self, record: EventRecord):
        cursor = self.cursor()
        if cursor is None:
            cursor = IndexerCursor(id=CURSOR_ID, block_number=0, log_index=0)
        cursor.block_number = record.block_number
        cursor.log_index = record.log_index
        self.store.put(cursor)

    def _record_failure(self, record: EventRecord, error: Exception):
        logger.error(
            f"Indexing failed for {record.event} at block {record.block_number} "
            f"({record.tx_hash}-{record.log_index}): {error}"
        )
        failure = IndexingFailure(
            event=record.event,
            address=record.address,
            block_number=record.block_number,
            tx_hash=record.tx_hash,
            log_index=record.log_index,
            error=type(error).__name__,
            message=str(error),
        )
        try:
            self.store.put(failure)
            self.store.commit()
        except Exception as store_error:
            # Store is likely the thing that failed; the halt still propagates
            logger.error(f"Could not record indexing failure: {store_error}")
            self.store.rollback()

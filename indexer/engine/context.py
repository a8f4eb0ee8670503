"""What a handler is given besides the event itself."""

from dataclasses import dataclass

from indexer.engine.registry import DataSourceRegistry
from indexer.store import EntityStore
from indexer.utils.constants import INSTRUMENT_TEMPLATE


@dataclass
class HandlerContext:
    store: EntityStore
    registry: DataSourceRegistry
    instrument_template: str = INSTRUMENT_TEMPLATE

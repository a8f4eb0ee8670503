"""Database models."""

from indexer.models.position import InstrumentPosition
from indexer.models.purchase import OptionPurchase
from indexer.models.tracked_source import TrackedSource
from indexer.models.cursor import IndexerCursor
from indexer.models.failure import IndexingFailure

__all__ = [
    "InstrumentPosition",
    "OptionPurchase",
    "TrackedSource",
    "IndexerCursor",
    "IndexingFailure",
]

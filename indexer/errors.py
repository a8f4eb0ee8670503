"""Indexing error taxonomy."""


class IndexingError(Exception):
    """Base class for failures that abort a single event."""


class NarrowingError(IndexingError):
    """A wide on-chain integer does not fit a 32-bit identifier field."""

    def __init__(self, field: str, value: int):
        self.field = field
        self.value = value
        super().__init__(f"{field}={value} does not fit in a signed 32-bit integer")


class Uint256OverflowError(IndexingError):
    """An accumulated quantity left the uint256 range."""


class DuplicateEntityError(IndexingError):
    """An immutable entity was about to be created twice."""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} already exists")


class IndexingHalted(IndexingError):
    """Raised by the dispatcher once a failed event has been rolled back and recorded."""

    def __init__(self, event: str, tx_hash: str, log_index: int, cause: Exception):
        self.event = event
        self.tx_hash = tx_hash
        self.log_index = log_index
        self.cause = cause
        self.processed = 0  # events committed earlier in the same batch
        super().__init__(f"{event} at {tx_hash}-{log_index} failed: {cause}")

"""IndexingFailure model — events whose handler failed and was rolled back."""

from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class IndexingFailure(SQLModel, table=True):
    __tablename__ = "indexing_failure"

    id: int | None = Field(default=None, primary_key=True)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    event: str
    address: str | None = None
    block_number: int
    tx_hash: str = Field(index=True)
    log_index: int
    error: str  # exception class name
    message: str

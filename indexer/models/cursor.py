"""IndexerCursor model — position of the last committed event."""

from sqlmodel import SQLModel, Field


class IndexerCursor(SQLModel, table=True):
    __tablename__ = "indexer_cursor"

    id: str = Field(primary_key=True)
    block_number: int
    log_index: int

"""TrackedSource model — instrument contracts registered at runtime by the factory."""

from datetime import datetime, timezone
from sqlmodel import SQLModel, Field


class TrackedSource(SQLModel, table=True):
    __tablename__ = "tracked_source"

    id: str = Field(primary_key=True)  # contract address, lowercase hex
    template: str = Field(index=True)
    created_block: int | None = None
    created_tx: str | None = None
    registered_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

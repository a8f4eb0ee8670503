"""InstrumentPosition model — one row per transaction that opened or bought into a position."""

from sqlmodel import SQLModel, Field, Column

from indexer.models.types import Uint256


class InstrumentPosition(SQLModel, table=True):
    __tablename__ = "instrument_position"

    id: str = Field(primary_key=True)  # transaction hash
    position_id: int | None = None  # unknown until PositionCreated is seen
    account: str | None = Field(default=None, index=True)
    instrument_address: str | None = Field(default=None, index=True)
    cost: int = Field(default=0, sa_column=Column(Uint256(), nullable=False, default=0))
    exercised: bool = False
    exercise_profit: int = Field(default=0, sa_column=Column(Uint256(), nullable=False, default=0))

"""Pydantic read schemas for indexed entities.

uint256 quantities are serialised as decimal strings; JSON consumers cannot
be trusted with integers above 2**53.
"""

from datetime import datetime
from pydantic import BaseModel, field_serializer


class OptionPurchaseRead(BaseModel):
    id: str
    instrument_position: str
    account: str
    underlying: str
    option_type: int
    amount: int
    premium: int
    option_id: int
    instrument_address: str | None
    block_number: int | None

    model_config = {"from_attributes": True}

    @field_serializer("amount", "premium")
    def _uint256(self, value: int) -> str:
        return str(value)


class InstrumentPositionRead(BaseModel):
    id: str
    position_id: int | None
    account: str | None
    instrument_address: str | None
    cost: int
    exercised: bool
    exercise_profit: int

    model_config = {"from_attributes": True}

    @field_serializer("cost", "exercise_profit")
    def _uint256(self, value: int) -> str:
        return str(value)


class InstrumentPositionDetail(InstrumentPositionRead):
    purchases: list[OptionPurchaseRead] = []


class TrackedSourceRead(BaseModel):
    id: str
    template: str
    created_block: int | None
    created_tx: str | None
    registered_at: datetime

    model_config = {"from_attributes": True}

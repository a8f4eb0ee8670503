"""Pydantic schemas for decoded on-chain event records."""

import re
from dataclasses import dataclass
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field, Strict, field_validator, model_validator

from indexer.utils.constants import (
    EXERCISED,
    INSTRUMENT_CREATED,
    INSTRUMENT_CREATED_LEGACY,
    POSITION_CREATED,
    PURCHASED,
    UINT256_MAX,
)

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")
_TX_HASH_RE = re.compile(r"^0x[0-9a-fA-F]{64}$")
_DECIMAL_RE = re.compile(r"^[0-9]+$")


def _parse_uint(value: Any) -> Any:
    """Accept JSON integers or decimal strings; booleans and floats are rejected."""
    if isinstance(value, bool):
        raise ValueError("must be an integer, not a boolean")
    if isinstance(value, str):
        text = value.strip()
        if not _DECIMAL_RE.match(text):
            raise ValueError("must be a non-negative decimal integer")
        return int(text)
    return value


# Chain integers arrive as JSON numbers or, when wider than 53 bits, as strings
Uint = Annotated[int, BeforeValidator(_parse_uint), Strict()]


def _normalize_address(value: str) -> str:
    text = value.strip()
    if not _ADDRESS_RE.match(text):
        raise ValueError("must be a 0x-prefixed 20-byte hex address")
    return text.lower()


@dataclass(frozen=True)
class EventMeta:
    """Transaction metadata that accompanies every event."""

    tx_hash: str
    log_index: int
    block_number: int = 0
    address: str | None = None  # emitting contract

    @property
    def event_id(self) -> str:
        return f"{self.tx_hash}-{self.log_index}"


class _Params(BaseModel):
    model_config = {"populate_by_name": True}


class InstrumentCreated(_Params):
    instrument_address: str = Field(alias="instrumentAddress")

    @field_validator("instrument_address")
    @classmethod
    def _address(cls, value: str) -> str:
        return _normalize_address(value)


class PositionCreated(_Params):
    position_id: Uint = Field(alias="positionID", ge=0, le=UINT256_MAX)
    account: str

    @field_validator("account")
    @classmethod
    def _address(cls, value: str) -> str:
        return _normalize_address(value)


class Purchased(_Params):
    caller: str
    underlying: str
    option_type: Uint = Field(alias="optionType", ge=0)
    amount: Uint = Field(ge=0, le=UINT256_MAX)
    premium: Uint = Field(ge=0, le=UINT256_MAX)
    option_id: Uint = Field(alias="optionID", ge=0, le=UINT256_MAX)

    @field_validator("caller", "underlying")
    @classmethod
    def _address(cls, value: str) -> str:
        return _normalize_address(value)


class Exercised(_Params):
    account: str
    position_id: Uint = Field(alias="positionID", ge=0, le=UINT256_MAX)
    total_profit: Uint = Field(alias="totalProfit", ge=0, le=UINT256_MAX)

    @field_validator("account")
    @classmethod
    def _address(cls, value: str) -> str:
        return _normalize_address(value)


EVENT_PARAMS: dict[str, type[_Params]] = {
    INSTRUMENT_CREATED: InstrumentCreated,
    INSTRUMENT_CREATED_LEGACY: InstrumentCreated,
    POSITION_CREATED: PositionCreated,
    PURCHASED: Purchased,
    EXERCISED: Exercised,
}


class EventRecord(BaseModel):
    """One decoded log, as delivered by the chain reader."""

    event: str = Field(min_length=1, max_length=64)
    address: str
    block_number: Uint = Field(ge=0)
    tx_hash: str
    log_index: Uint = Field(ge=0)
    params: dict[str, Any] = Field(default_factory=dict)

    @field_validator("address")
    @classmethod
    def _address(cls, value: str) -> str:
        return _normalize_address(value)

    @field_validator("tx_hash")
    @classmethod
    def _tx_hash(cls, value: str) -> str:
        text = value.strip()
        if not _TX_HASH_RE.match(text):
            raise ValueError("must be a 0x-prefixed 32-byte hex hash")
        return text.lower()

    @model_validator(mode="after")
    def _check_params(self):
        params_model = EVENT_PARAMS.get(self.event)
        if params_model is not None:
            params_model.model_validate(self.params)
        return self

    def decode(self) -> _Params | None:
        """Typed parameters, or None for events this indexer has no schema for."""
        params_model = EVENT_PARAMS.get(self.event)
        if params_model is None:
            return None
        return params_model.model_validate(self.params)

    @property
    def sort_key(self) -> tuple[int, int]:
        return (self.block_number, self.log_index)

    def meta(self) -> EventMeta:
        return EventMeta(
            tx_hash=self.tx_hash,
            log_index=self.log_index,
            block_number=self.block_number,
            address=self.address,
        )

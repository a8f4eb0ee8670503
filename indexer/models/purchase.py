"""OptionPurchase model — immutable record of every option purchase."""

from sqlmodel import SQLModel, Field, Column

from indexer.models.types import Uint256


class OptionPurchase(SQLModel, table=True):
    __tablename__ = "option_purchase"

    id: str = Field(primary_key=True)  # "<txhash>-<logIndex>"
    instrument_position: str = Field(foreign_key="instrument_position.id", index=True)
    account: str = Field(index=True)
    underlying: str
    option_type: int  # contract-defined enum, kept opaque
    amount: int = Field(sa_column=Column(Uint256(), nullable=False))
    premium: int = Field(sa_column=Column(Uint256(), nullable=False))
    option_id: int
    instrument_address: str | None = Field(default=None, index=True)
    block_number: int | None = None

"""Event builders shared by the test modules."""

from indexer.schemas.events import EventRecord

FACTORY = "0x" + "f" * 40
INSTRUMENT = "0x" + "1" * 40
ACCOUNT = "0x" + "a" * 40
UNDERLYING = "0x" + "e" * 40


def tx(n: int) -> str:
    return "0x" + f"{n:064x}"


def record(event: str, block: int, log_index: int, tx_hash: str | None = None,
           address: str = INSTRUMENT, **params) -> EventRecord:
    return EventRecord(
        event=event,
        address=address,
        block_number=block,
        tx_hash=tx_hash or tx(block),
        log_index=log_index,
        params=params,
    )


def purchased(block: int, log_index: int, premium: int, tx_hash: str | None = None,
              option_id: int = 1, address: str = INSTRUMENT) -> EventRecord:
    return record(
        "Purchased", block, log_index, tx_hash, address,
        caller=ACCOUNT, underlying=UNDERLYING, optionType=1,
        amount="1000000000000000000", premium=str(premium), optionID=option_id,
    )


def position_created(block: int, log_index: int, position_id: int, tx_hash: str | None = None,
                     address: str = INSTRUMENT) -> EventRecord:
    return record("PositionCreated", block, log_index, tx_hash, address,
                  positionID=position_id, account=ACCOUNT)


def instrument_created(block: int, log_index: int, instrument: str = INSTRUMENT,
                       address: str = FACTORY) -> EventRecord:
    return record("InstrumentCreated", block, log_index, None, address,
                  instrumentAddress=instrument)

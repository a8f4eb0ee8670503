"""Instrument handlers — positions, purchases and exercises.

A position is keyed by the hash of the transaction that opened it. Purchases
in that transaction point back at it and accumulate their premium into
``cost``, so ``cost`` always equals the sum of its purchases' premiums.
Either event may be the first to mention a transaction, so both create the
position on demand.
"""

import logging

from indexer.engine.context import HandlerContext
from indexer.errors import DuplicateEntityError
from indexer.models.position import InstrumentPosition
from indexer.models.purchase import OptionPurchase
from indexer.schemas.events import EventMeta, Exercised, PositionCreated, Purchased
from indexer.utils.numeric import checked_add_u256, to_i32

logger = logging.getLogger(__name__)


def _load_or_create_position(ctx: HandlerContext, meta: EventMeta) -> InstrumentPosition:
    position = ctx.store.get(InstrumentPosition, meta.tx_hash)
    if position is None:
        position = InstrumentPosition(id=meta.tx_hash, instrument_address=meta.address, cost=0)
    return position


def handle_position_created(event: PositionCreated, meta: EventMeta, ctx: HandlerContext):
    position_id = to_i32(event.position_id, "positionID")

    position = _load_or_create_position(ctx, meta)
    if position.position_id is not None and (
        position.position_id != position_id or position.account != event.account
    ):
        logger.warning(
            f"Second PositionCreated in tx {meta.tx_hash}: "
            f"replacing position {position.position_id} ({position.account}) "
            f"with {position_id} ({event.account})"
        )
    position.position_id = position_id
    position.account = event.account
    ctx.store.put(position)


def handle_purchase(event: Purchased, meta: EventMeta, ctx: HandlerContext):
    purchase_id = meta.event_id
    if ctx.store.exists(OptionPurchase, purchase_id):
        raise DuplicateEntityError("OptionPurchase", purchase_id)

    option_id = to_i32(event.option_id, "optionID")

    position = _load_or_create_position(ctx, meta)
    position.cost = checked_add_u256(position.cost, event.premium)

    purchase = OptionPurchase(
        id=purchase_id,
        instrument_position=meta.tx_hash,
        account=event.caller,
        underlying=event.underlying,
        option_type=event.option_type,
        amount=event.amount,
        premium=event.premium,
        option_id=option_id,
        instrument_address=meta.address,
        block_number=meta.block_number,
    )

    # Parent row first; both land in the same transaction
    ctx.store.put(position)
    ctx.store.put(purchase)


def handle_exercised(event: Exercised, meta: EventMeta, ctx: HandlerContext):
    position_id = to_i32(event.position_id, "positionID")
    filters = {"account": event.account, "position_id": position_id}
    if meta.address is not None:
        filters["instrument_address"] = meta.address
    matches = ctx.store.find(InstrumentPosition, **filters)
    if not matches:
        logger.warning(
            f"Exercised for unknown position {position_id} of {event.account} "
            f"(tx {meta.tx_hash}), ignoring"
        )
        return

    for position in matches:
        position.exercised = True
        position.exercise_profit = event.total_profit
        ctx.store.put(position)

"""Factory handlers — register freshly deployed instruments as event sources."""

import logging

from indexer.engine.context import HandlerContext
from indexer.schemas.events import EventMeta, InstrumentCreated

logger = logging.getLogger(__name__)


def handle_new_instrument(event: InstrumentCreated, meta: EventMeta, ctx: HandlerContext):
    if ctx.registry.start_tracking(ctx.instrument_template, event.instrument_address, meta):
        logger.info(
            f"Instrument {event.instrument_address} created at block {meta.block_number}"
        )


def handle_legacy_new_instrument(event: InstrumentCreated, meta: EventMeta, ctx: HandlerContext):
    """Older factory deployments emitted a different InstrumentCreated signature."""
    handle_new_instrument(event, meta, ctx)

"""Event ingestion API."""

import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException

from indexer.api.deps import dispatch_lock, get_dispatcher, require_api_token
from indexer.engine.dispatcher import Dispatcher
from indexer.errors import IndexingHalted
from indexer.schemas.events import EventRecord

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/events", tags=["events"])


@router.post("", dependencies=[Depends(require_api_token)])
def ingest_events(
    records: list[EventRecord],
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    """Deliver a batch of decoded events. Records are applied in chain order."""
    with dispatch_lock:
        try:
            result = dispatcher.dispatch_many(records)
        except IndexingHalted as e:
            logger.warning(f"Ingest halted after {e.processed} events: {e}")
            raise HTTPException(
                status_code=409,
                detail={
                    "message": str(e),
                    "event": e.event,
                    "tx_hash": e.tx_hash,
                    "log_index": e.log_index,
                    "error": type(e.cause).__name__,
                    "processed": e.processed,
                },
            )
    return asdict(result)

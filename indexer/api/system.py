"""System API — health check, indexing status, failure log, tracked sources."""

from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlmodel import Session, select

from indexer.api.deps import get_registry
from indexer.database import get_session
from indexer.engine.registry import DataSourceRegistry
from indexer.models.cursor import IndexerCursor
from indexer.models.failure import IndexingFailure
from indexer.models.position import InstrumentPosition
from indexer.models.purchase import OptionPurchase
from indexer.models.tracked_source import TrackedSource
from indexer.schemas.entities import TrackedSourceRead
from indexer.utils.constants import CURSOR_ID

router = APIRouter(prefix="/api", tags=["system"])


@router.get("/system/health")
def health_check():
    return {"status": "ok"}


@router.get("/system/status")
def indexing_status(
    session: Session = Depends(get_session),
    registry: DataSourceRegistry = Depends(get_registry),
):
    """Where the indexer is and how much it has seen."""
    cursor = session.get(IndexerCursor, CURSOR_ID)
    return {
        "cursor": (
            {"block_number": cursor.block_number, "log_index": cursor.log_index}
            if cursor
            else None
        ),
        "tracked_sources": len(registry),
        "positions": session.exec(select(func.count()).select_from(InstrumentPosition)).one(),
        "purchases": session.exec(select(func.count()).select_from(OptionPurchase)).one(),
        "failures": session.exec(select(func.count()).select_from(IndexingFailure)).one(),
    }


@router.get("/system/failures")
def list_failures(
    limit: int = 100,
    offset: int = 0,
    session: Session = Depends(get_session),
):
    stmt = (
        select(IndexingFailure)
        .order_by(IndexingFailure.timestamp.desc())
        .offset(offset)
        .limit(limit)
    )
    return session.exec(stmt).all()


@router.get("/sources", response_model=list[TrackedSourceRead])
def list_sources(
    template: str | None = None,
    session: Session = Depends(get_session),
):
    stmt = select(TrackedSource).order_by(TrackedSource.created_block)
    if template is not None:
        stmt = stmt.where(TrackedSource.template == template)
    return session.exec(stmt).all()

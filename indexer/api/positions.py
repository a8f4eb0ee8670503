"""Positions and purchases API."""

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from indexer.database import get_session
from indexer.models.position import InstrumentPosition
from indexer.models.purchase import OptionPurchase
from indexer.schemas.entities import (
    InstrumentPositionDetail,
    InstrumentPositionRead,
    OptionPurchaseRead,
)

router = APIRouter(prefix="/api", tags=["positions"])


@router.get("/positions", response_model=list[InstrumentPositionRead])
def list_positions(
    account: str | None = None,
    instrument: str | None = None,
    limit: int = 50,
    offset: int = 0,
    session: Session = Depends(get_session),
):
    stmt = select(InstrumentPosition).order_by(InstrumentPosition.id)
    if account is not None:
        stmt = stmt.where(InstrumentPosition.account == account.lower())
    if instrument is not None:
        stmt = stmt.where(InstrumentPosition.instrument_address == instrument.lower())
    stmt = stmt.offset(offset).limit(limit)
    return session.exec(stmt).all()


@router.get("/positions/{position_id}", response_model=InstrumentPositionDetail)
def get_position(position_id: str, session: Session = Depends(get_session)):
    position = session.get(InstrumentPosition, position_id.lower())
    if not position:
        raise HTTPException(status_code=404, detail="Position not found")
    purchases = session.exec(
        select(OptionPurchase)
        .where(OptionPurchase.instrument_position == position.id)
        .order_by(OptionPurchase.block_number, OptionPurchase.id)
    ).all()
    detail = InstrumentPositionDetail.model_validate(position)
    detail.purchases = [OptionPurchaseRead.model_validate(p) for p in purchases]
    return detail


@router.get("/purchases", response_model=list[OptionPurchaseRead])
def list_purchases(
    position: str | None = None,
    account: str | None = None,
    limit: int = 50,
    offset: int = 0,
    session: Session = Depends(get_session),
):
    stmt = select(OptionPurchase).order_by(OptionPurchase.block_number, OptionPurchase.id)
    if position is not None:
        stmt = stmt.where(OptionPurchase.instrument_position == position.lower())
    if account is not None:
        stmt = stmt.where(OptionPurchase.account == account.lower())
    stmt = stmt.offset(offset).limit(limit)
    return session.exec(stmt).all()

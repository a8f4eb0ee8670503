"""Shared API dependencies."""

import secrets
import threading

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session

from indexer.config import settings
from indexer.database import get_session
from indexer.engine.dispatcher import Dispatcher
from indexer.engine.registry import DataSourceRegistry
from indexer.store import SqlEntityStore

# Handlers must never run concurrently; the threadpool may call us in parallel
dispatch_lock = threading.Lock()

bearer_scheme = HTTPBearer(auto_error=False)


def require_api_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
):
    """Check the shared bearer token on ledger-writing routes."""
    if not settings.api_token:
        return
    if credentials is None or not secrets.compare_digest(
        credentials.credentials.encode(), settings.api_token.encode()
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing API token",
        )


def get_registry(request: Request) -> DataSourceRegistry:
    """The process-wide registry loaded at startup."""
    return request.app.state.registry


def get_dispatcher(
    session: Session = Depends(get_session),
    registry: DataSourceRegistry = Depends(get_registry),
) -> Dispatcher:
    return Dispatcher(
        SqlEntityStore(session),
        registry,
        factory_addresses=settings.factory_addresses,
        start_block=settings.start_block,
        instrument_template=settings.instrument_template,
    )

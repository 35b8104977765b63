"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from fastapi import Header, HTTPException

from hearth.config import get_settings
from hearth.db import DbClient, InMemoryDbClient, PostgresDbClient

Clock = Callable[[], datetime]

_db_client: DbClient | None = None


def get_db_client() -> DbClient:
    """
    Return a singleton DB client so state persists across requests.
    """
    global _db_client
    if _db_client:
        return _db_client

    settings = get_settings()
    if settings.use_in_memory_backends or not settings.database_url:
        _db_client = InMemoryDbClient()
    else:
        _db_client = PostgresDbClient(settings.database_url)
    return _db_client


def get_clock() -> Clock:
    """Source of "now" for request handlers; overridden in tests."""
    return datetime.now


def get_current_user_id(
    x_user_id: Optional[str] = Header(default=None),
) -> str:
    """
    Identity of the caller, set by the authenticating proxy in front of us.
    """
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Authentication required")
    return x_user_id

"""Shared FastAPI dependencies."""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fpa.database import get_db
from fpa.store.base import RecordStore
from fpa.store.sql import SqlRecordStore


async def get_store(db: AsyncSession = Depends(get_db)) -> RecordStore:
    """Request-scoped record store over the database session."""
    return SqlRecordStore(db)

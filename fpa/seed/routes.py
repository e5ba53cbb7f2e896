"""Seed data routes for demo/development."""
from fastapi import APIRouter, Depends

from fpa.dependencies import get_store
from fpa.seed.demo import seed_demo_data
from fpa.store.base import RecordStore

router = APIRouter()


@router.post("/seed/demo")
async def seed_demo(force: bool = False, store: RecordStore = Depends(get_store)):
    """
    Seed the store with demo planning data.

    Creates account maps, FX rates and the Actual/Forecast/Budget
    scenarios for 2023-2024. Skipped when data already exists unless
    force is set.
    """
    return await seed_demo_data(store, force=force)

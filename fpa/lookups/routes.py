"""Lookup table routes: FX rates, account maps and filter values."""
from typing import List

from fastapi import APIRouter, Depends

from fpa.dependencies import get_store
from fpa.lookups import services
from fpa.lookups.models import AccountMap, FXRate
from fpa.lookups.schemas import (
    AccountMapCreate,
    AccountMapResponse,
    FXRateCreate,
    FXRateResponse,
    LookupUploadResponse,
)
from fpa.store.base import RecordStore

router = APIRouter()


@router.post("/fx-rates", response_model=LookupUploadResponse)
async def add_fx_rates(data: List[FXRateCreate], store: RecordStore = Depends(get_store)):
    """Add a batch of FX rates."""
    rates = await services.add_fx_rates(store, [FXRate(**item.model_dump()) for item in data])
    return LookupUploadResponse(message="FX rates added successfully", count=len(rates))


@router.get("/fxrates/{from_currency}/{to_currency}/{period}", response_model=FXRateResponse)
async def get_fx_rate(
    from_currency: str,
    to_currency: str,
    period: str,
    store: RecordStore = Depends(get_store),
):
    """Get the FX rate for a currency pair and period."""
    return await services.get_fx_rate(store, from_currency, to_currency, period)


@router.post("/account-maps", response_model=LookupUploadResponse)
async def add_account_maps(data: List[AccountMapCreate], store: RecordStore = Depends(get_store)):
    """Add a batch of account maps."""
    maps = await services.add_account_maps(store, [AccountMap(**item.model_dump()) for item in data])
    return LookupUploadResponse(message="Account maps added successfully", count=len(maps))


@router.get("/account-maps/{account_code}", response_model=AccountMapResponse)
async def get_account_map(account_code: str, store: RecordStore = Depends(get_store)):
    """Get the account map for a code."""
    return await services.get_account_map(store, account_code)


# ============================================================================
# DROPDOWN FILTER VALUES
# ============================================================================

@router.get("/scenarios", response_model=List[str])
async def get_scenarios(store: RecordStore = Depends(get_store)):
    """Distinct scenario names."""
    return await store.distinct_scenarios()


@router.get("/accounts", response_model=List[str])
async def get_accounts(store: RecordStore = Depends(get_store)):
    """Distinct account names."""
    return await store.distinct_accounts()


@router.get("/departments", response_model=List[str])
async def get_departments(store: RecordStore = Depends(get_store)):
    """Distinct departments."""
    return await store.distinct_departments()

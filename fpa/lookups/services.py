"""Lookup table management: FX rates and account maps."""
import logging
from typing import List

from fpa.errors import NotFoundError, ValidationError
from fpa.lookups.models import AccountMap, FXRate
from fpa.store.base import RecordStore

logger = logging.getLogger(__name__)


async def add_fx_rates(store: RecordStore, rates: List[FXRate]) -> List[FXRate]:
    """Store a batch of FX rates."""
    if not rates:
        raise ValidationError("FX rates data is required.")
    stored = await store.add_fx_rates(rates)
    logger.info(f"Added {len(stored)} FX rates")
    return stored


async def add_account_maps(store: RecordStore, maps: List[AccountMap]) -> List[AccountMap]:
    """Store a batch of account maps."""
    if not maps:
        raise ValidationError("Account maps data is required.")
    stored = await store.add_account_maps(maps)
    logger.info(f"Added {len(stored)} account maps")
    return stored


async def get_fx_rate(store: RecordStore, from_currency: str, to_currency: str, period: str) -> FXRate:
    """FX rate for a pair and period; NotFoundError when absent."""
    fx_rate = await store.get_fx_rate(from_currency, to_currency, period)
    if fx_rate is None:
        raise NotFoundError(f"FX rate not found for {from_currency} to {to_currency} in period {period}")
    return fx_rate


async def get_account_map(store: RecordStore, account_code: str) -> AccountMap:
    """Account map for a code; NotFoundError when absent."""
    account_map = await store.get_account_map(account_code)
    if account_map is None:
        raise NotFoundError(f"Account map not found for code: {account_code}")
    return account_map

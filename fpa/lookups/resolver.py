"""Account-code and FX-rate resolution applied during ingestion."""
import logging
from decimal import Decimal
from typing import Optional

from fpa.config import settings
from fpa.periods import format_period
from fpa.store.base import RecordStore

logger = logging.getLogger(__name__)


class LookupResolver:
    """
    Resolves account codes to canonical names and converts amounts.

    Missing lookup entries are not errors: the input passes through
    unchanged. Store failures propagate to the caller.
    """

    def __init__(
        self,
        store: RecordStore,
        from_currency: Optional[str] = None,
        to_currency: Optional[str] = None,
    ):
        self.store = store
        self.from_currency = from_currency or settings.FX_SOURCE_CURRENCY
        self.to_currency = to_currency or settings.FX_TARGET_CURRENCY

    async def resolve_account(self, code: str) -> str:
        """Mapped account name, or the code itself when no mapping exists."""
        account_map = await self.store.get_account_map(code)
        if account_map is None:
            return code
        return account_map.account_name

    async def convert_amount(self, amount: Decimal, year: int, month: int) -> Decimal:
        """
        Convert an amount using the rate for its "YYYY-MM" period.

        Returns the amount unchanged when no rate exists for the period.
        No rounding is applied.
        """
        period = format_period(year, month)
        fx_rate = await self.store.get_fx_rate(self.from_currency, self.to_currency, period)
        if fx_rate is None:
            logger.debug(f"No {self.from_currency}->{self.to_currency} rate for {period}, amount kept")
            return amount
        return Decimal(amount) * Decimal(fx_rate.rate)

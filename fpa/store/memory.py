"""In-memory record store for tests and local scripting."""
from typing import List, Optional

from fpa.audit.models import ChangeHistory
from fpa.base import generate_id
from fpa.errors import StoreError
from fpa.lookups.models import AccountMap, FXRate
from fpa.records.models import FinancialRecord
from fpa.store.base import RecordFilter, RecordStore

_REQUIRED_RECORD_FIELDS = ("type", "account", "year", "month", "amount", "scenario", "version", "upload_timestamp")


class InMemoryRecordStore(RecordStore):
    """
    Record store backed by plain lists.

    Batches are validated in full before anything is appended, so a
    rejected batch leaves the store untouched.
    """

    def __init__(self):
        self.records: List[FinancialRecord] = []
        self.change_history: List[ChangeHistory] = []
        self.fx_rates: List[FXRate] = []
        self.account_maps: List[AccountMap] = []

    async def add_records(self, records: List[FinancialRecord]) -> List[FinancialRecord]:
        for record in records:
            missing = [name for name in _REQUIRED_RECORD_FIELDS if getattr(record, name) is None]
            if missing:
                raise StoreError(f"Record is missing required fields: {', '.join(missing)}")
            if not 1 <= record.month <= 12:
                raise StoreError(f"Record month out of range: {record.month}")

        for record in records:
            if record.id is None:
                record.id = generate_id("rec")
        self.records.extend(records)
        return records

    async def query(self, record_filter: RecordFilter) -> List[FinancialRecord]:
        matching = [r for r in self.records if record_filter.matches(r)]
        return sorted(matching, key=lambda r: r.upload_timestamp)

    async def distinct_scenarios(self) -> List[str]:
        return sorted({r.scenario for r in self.records if r.scenario})

    async def distinct_accounts(self) -> List[str]:
        return sorted({r.account for r in self.records if r.account})

    async def distinct_departments(self) -> List[str]:
        return sorted({r.department for r in self.records if r.department})

    async def add_change_history(self, entry: ChangeHistory) -> ChangeHistory:
        if entry.id is None:
            entry.id = generate_id("audit")
        self.change_history.append(entry)
        return entry

    async def get_change_history(self, record_id: str) -> List[ChangeHistory]:
        entries = [e for e in self.change_history if e.record_id == record_id]
        return sorted(entries, key=lambda e: e.timestamp, reverse=True)

    async def add_fx_rates(self, rates: List[FXRate]) -> List[FXRate]:
        for rate in rates:
            if rate.id is None:
                rate.id = generate_id("fxrate")
        self.fx_rates.extend(rates)
        return rates

    async def add_account_maps(self, maps: List[AccountMap]) -> List[AccountMap]:
        for account_map in maps:
            if account_map.id is None:
                account_map.id = generate_id("acctmap")
        self.account_maps.extend(maps)
        return maps

    async def get_fx_rate(self, from_currency: str, to_currency: str, period: str) -> Optional[FXRate]:
        for rate in self.fx_rates:
            if (
                rate.from_currency == from_currency
                and rate.to_currency == to_currency
                and rate.period == period
            ):
                return rate
        return None

    async def get_account_map(self, account_code: str) -> Optional[AccountMap]:
        for account_map in self.account_maps:
            if account_map.account_code == account_code:
                return account_map
        return None

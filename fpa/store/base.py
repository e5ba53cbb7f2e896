"""
Record store interface.

The engine treats persistence as an abstract store of financial records,
lookup tables and change history. Each batch write is expected to be
all-or-nothing; there is no isolation between separate batches.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from fpa.audit.models import ChangeHistory
from fpa.lookups.models import AccountMap, FXRate
from fpa.periods import YearMonth
from fpa.records.models import FinancialRecord


@dataclass
class RecordFilter:
    """
    Filter for record queries.

    Every set field is an exact-match condition. The period bounds are
    inclusive (year, month) tuples compared calendar-wise.
    """
    scenario: Optional[str] = None
    version: Optional[str] = None
    account: Optional[str] = None
    department: Optional[str] = None
    type: Optional[str] = None
    upload_timestamp: Optional[datetime] = None
    period_from: Optional[YearMonth] = None
    period_to: Optional[YearMonth] = None

    def matches(self, record: FinancialRecord) -> bool:
        """Evaluate the filter against a single record."""
        if self.scenario is not None and record.scenario != self.scenario:
            return False
        if self.version is not None and record.version != self.version:
            return False
        if self.account is not None and record.account != self.account:
            return False
        if self.department is not None and record.department != self.department:
            return False
        if self.type is not None and record.type != self.type:
            return False
        if self.upload_timestamp is not None and record.upload_timestamp != self.upload_timestamp:
            return False

        period = (record.year, record.month)
        if self.period_from is not None and period < self.period_from:
            return False
        if self.period_to is not None and period > self.period_to:
            return False

        return True


class RecordStore(ABC):
    """
    Abstract durable storage for the engine.

    Implementations:
        SqlRecordStore      - async SQLAlchemy session
        InMemoryRecordStore - process-local lists, for tests and scripting
    """

    # =========================================================================
    # Financial records
    # =========================================================================

    @abstractmethod
    async def add_records(self, records: List[FinancialRecord]) -> List[FinancialRecord]:
        """
        Persist a batch of records atomically.

        Assigns ids to the records and returns them. Raises StoreError if
        the batch could not be written; in that case nothing is stored.
        """
        pass

    @abstractmethod
    async def query(self, record_filter: RecordFilter) -> List[FinancialRecord]:
        """Return records matching the filter, oldest upload first."""
        pass

    async def all_records(self) -> List[FinancialRecord]:
        """Return every stored record."""
        return await self.query(RecordFilter())

    @abstractmethod
    async def distinct_scenarios(self) -> List[str]:
        """Sorted non-empty scenario names."""
        pass

    @abstractmethod
    async def distinct_accounts(self) -> List[str]:
        """Sorted non-empty account names."""
        pass

    @abstractmethod
    async def distinct_departments(self) -> List[str]:
        """Sorted non-empty departments."""
        pass

    # =========================================================================
    # Change history
    # =========================================================================

    @abstractmethod
    async def add_change_history(self, entry: ChangeHistory) -> ChangeHistory:
        """Append one audit entry."""
        pass

    @abstractmethod
    async def get_change_history(self, record_id: str) -> List[ChangeHistory]:
        """Audit entries for a record, newest first."""
        pass

    # =========================================================================
    # Lookup tables
    # =========================================================================

    @abstractmethod
    async def add_fx_rates(self, rates: List[FXRate]) -> List[FXRate]:
        """Persist a batch of FX rates."""
        pass

    @abstractmethod
    async def add_account_maps(self, maps: List[AccountMap]) -> List[AccountMap]:
        """Persist a batch of account maps."""
        pass

    @abstractmethod
    async def get_fx_rate(self, from_currency: str, to_currency: str, period: str) -> Optional[FXRate]:
        """First FX rate stored for the pair and period, if any."""
        pass

    @abstractmethod
    async def get_account_map(self, account_code: str) -> Optional[AccountMap]:
        """First account map stored for the code, if any."""
        pass

"""
Audit Service for the record change history.

Engine operations call this after a batch write has committed; it appends
one entry per created record.
"""
import logging
from datetime import datetime
from typing import List, Literal

from fpa.audit.models import ChangeAction, ChangeHistory
from fpa.store.base import RecordStore
from fpa.records.models import FinancialRecord

logger = logging.getLogger(__name__)


ActionType = Literal["Imported", "Cloned"]


class AuditService:
    """
    Service for appending change history entries.

    Usage:
        audit = AuditService(store, user_name="jane")
        await audit.log_imported(records, timestamp)
    """

    def __init__(self, store: RecordStore, user_name: str):
        self.store = store
        self.user_name = user_name

    # ==========================================================================
    # Core Logging Methods
    # ==========================================================================

    async def log(self, record_id: str, action: ActionType, timestamp: datetime) -> ChangeHistory:
        """Append a single change history entry."""
        entry = ChangeHistory(
            record_id=record_id,
            action=action,
            user_name=self.user_name,
            timestamp=timestamp,
        )
        return await self.store.add_change_history(entry)

    async def log_batch(
        self,
        records: List[FinancialRecord],
        action: ActionType,
        timestamp: datetime,
    ) -> List[ChangeHistory]:
        """
        Append one entry per record.

        Runs after the records are committed. A failing write propagates;
        records already stored are not rolled back.
        """
        entries = []
        for record in records:
            entries.append(await self.log(record.id, action, timestamp))
        logger.info(f"Logged {len(entries)} '{action}' change history entries for {self.user_name}")
        return entries

    # ==========================================================================
    # Convenience Methods
    # ==========================================================================

    async def log_imported(self, records: List[FinancialRecord], timestamp: datetime) -> List[ChangeHistory]:
        """Log records created by an upload."""
        return await self.log_batch(records, ChangeAction.IMPORTED, timestamp)

    async def log_cloned(self, records: List[FinancialRecord], timestamp: datetime) -> List[ChangeHistory]:
        """Log records created by a scenario clone."""
        return await self.log_batch(records, ChangeAction.CLONED, timestamp)

"""Record store backed by an async SQLAlchemy session."""
import logging
from typing import List, Optional

from sqlalchemy import select, and_, or_, desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fpa.audit.models import ChangeHistory
from fpa.errors import StoreError
from fpa.lookups.models import AccountMap, FXRate
from fpa.records.models import FinancialRecord
from fpa.store.base import RecordFilter, RecordStore

logger = logging.getLogger(__name__)


def _build_conditions(record_filter: RecordFilter) -> list:
    """Translate a RecordFilter into SQLAlchemy where-clauses."""
    conditions = []

    if record_filter.scenario is not None:
        conditions.append(FinancialRecord.scenario == record_filter.scenario)
    if record_filter.version is not None:
        conditions.append(FinancialRecord.version == record_filter.version)
    if record_filter.account is not None:
        conditions.append(FinancialRecord.account == record_filter.account)
    if record_filter.department is not None:
        conditions.append(FinancialRecord.department == record_filter.department)
    if record_filter.type is not None:
        conditions.append(FinancialRecord.type == record_filter.type)
    if record_filter.upload_timestamp is not None:
        conditions.append(FinancialRecord.upload_timestamp == record_filter.upload_timestamp)

    if record_filter.period_from is not None:
        from_year, from_month = record_filter.period_from
        conditions.append(
            or_(
                FinancialRecord.year > from_year,
                and_(FinancialRecord.year == from_year, FinancialRecord.month >= from_month),
            )
        )
    if record_filter.period_to is not None:
        to_year, to_month = record_filter.period_to
        conditions.append(
            or_(
                FinancialRecord.year < to_year,
                and_(FinancialRecord.year == to_year, FinancialRecord.month <= to_month),
            )
        )

    return conditions


class SqlRecordStore(RecordStore):
    """
    Store over a request-scoped AsyncSession.

    Each batch is flushed and committed once; any SQLAlchemy failure rolls
    the session back and surfaces as StoreError.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _commit_batch(self, items: list, label: str) -> list:
        try:
            self.db.add_all(items)
            await self.db.flush()
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to write {len(items)} {label}: {e}")
            raise StoreError(f"Failed to write {label}") from e
        return items

    async def _fetch(self, query) -> list:
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            logger.error(f"Record store query failed: {e}")
            raise StoreError("Record store query failed") from e
        return list(result.scalars().all())

    # =========================================================================
    # Financial records
    # =========================================================================

    async def add_records(self, records: List[FinancialRecord]) -> List[FinancialRecord]:
        return await self._commit_batch(records, "financial records")

    async def query(self, record_filter: RecordFilter) -> List[FinancialRecord]:
        query = select(FinancialRecord).order_by(FinancialRecord.upload_timestamp)
        conditions = _build_conditions(record_filter)
        if conditions:
            query = query.where(*conditions)
        return await self._fetch(query)

    async def _distinct(self, column) -> List[str]:
        query = (
            select(column)
            .distinct()
            .where(column.is_not(None), column != "")
            .order_by(column)
        )
        return await self._fetch(query)

    async def distinct_scenarios(self) -> List[str]:
        return await self._distinct(FinancialRecord.scenario)

    async def distinct_accounts(self) -> List[str]:
        return await self._distinct(FinancialRecord.account)

    async def distinct_departments(self) -> List[str]:
        return await self._distinct(FinancialRecord.department)

    # =========================================================================
    # Change history
    # =========================================================================

    async def add_change_history(self, entry: ChangeHistory) -> ChangeHistory:
        await self._commit_batch([entry], "change history entries")
        return entry

    async def get_change_history(self, record_id: str) -> List[ChangeHistory]:
        query = (
            select(ChangeHistory)
            .where(ChangeHistory.record_id == record_id)
            .order_by(desc(ChangeHistory.timestamp))
        )
        return await self._fetch(query)

    # =========================================================================
    # Lookup tables
    # =========================================================================

    async def add_fx_rates(self, rates: List[FXRate]) -> List[FXRate]:
        return await self._commit_batch(rates, "FX rates")

    async def add_account_maps(self, maps: List[AccountMap]) -> List[AccountMap]:
        return await self._commit_batch(maps, "account maps")

    async def get_fx_rate(self, from_currency: str, to_currency: str, period: str) -> Optional[FXRate]:
        query = (
            select(FXRate)
            .where(
                FXRate.from_currency == from_currency,
                FXRate.to_currency == to_currency,
                FXRate.period == period,
            )
            .limit(1)
        )
        rows = await self._fetch(query)
        return rows[0] if rows else None

    async def get_account_map(self, account_code: str) -> Optional[AccountMap]:
        query = select(AccountMap).where(AccountMap.account_code == account_code).limit(1)
        rows = await self._fetch(query)
        return rows[0] if rows else None

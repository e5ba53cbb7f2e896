"""Read-only record listings used by the records and reports routes."""
from typing import List, Optional

from fpa.audit.models import ChangeHistory
from fpa.errors import NotFoundError, ValidationError
from fpa.records.models import FinancialRecord
from fpa.store.base import RecordFilter, RecordStore


def _contains(value: Optional[str], needle: str) -> bool:
    return value is not None and needle.lower() in value.lower()


async def list_records(
    store: RecordStore,
    scenario: Optional[str] = None,
    account: Optional[str] = None,
    type: Optional[str] = None,
    department: Optional[str] = None,
) -> List[FinancialRecord]:
    """
    List records for browsing.

    Scenario, account and department are case-insensitive substring
    filters; type is a case-insensitive exact match. Newest upload first.
    """
    records = await store.all_records()

    if scenario:
        records = [r for r in records if _contains(r.scenario, scenario)]
    if account:
        records = [r for r in records if _contains(r.account, account)]
    if type:
        records = [r for r in records if r.type.lower() == type.lower()]
    if department:
        records = [r for r in records if _contains(r.department, department)]

    return sorted(records, key=lambda r: r.upload_timestamp, reverse=True)


async def get_by_type(store: RecordStore, type: str) -> List[FinancialRecord]:
    """Records of one type (exact match)."""
    return await store.query(RecordFilter(type=type))


async def get_by_scenario(store: RecordStore, scenario: str) -> List[FinancialRecord]:
    """Records of one scenario across all its versions."""
    return await store.query(RecordFilter(scenario=scenario))


async def get_latest_by_scenario(store: RecordStore, scenario: str) -> List[FinancialRecord]:
    """Records from the most recent upload or clone of a scenario."""
    if not scenario:
        raise ValidationError("Scenario parameter is required.")

    records = await store.query(RecordFilter(scenario=scenario))
    if not records:
        return []

    latest = max(r.upload_timestamp for r in records)
    return await store.query(RecordFilter(scenario=scenario, upload_timestamp=latest))


async def get_audit_trail(store: RecordStore, record_id: str) -> List[ChangeHistory]:
    """Change history for a record, newest first."""
    history = await store.get_change_history(record_id)
    if not history:
        raise NotFoundError(f"No audit trail found for record ID: {record_id}")
    return history

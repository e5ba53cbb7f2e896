"""
Scenario Cloner - derives a new scenario from an existing one.

Every record of the base scenario is copied into the new scenario under a
single freshly generated version, with matching adjustments compounded
onto the amount.

Concurrent clones of the same base scenario read whatever the store holds
at query time; there is no snapshot isolation between them. Passing
``base_version`` pins the read to a single stored version.
"""
import logging
from decimal import Decimal
from typing import List, Optional, Sequence

from fpa.audit.services import AuditService
from fpa.config import settings
from fpa.errors import NotFoundError, ValidationError
from fpa.records.models import FinancialRecord
from fpa.scenarios.schemas import Adjustment
from fpa.store.base import RecordFilter, RecordStore
from fpa.versions import generate_version, utc_now

logger = logging.getLogger(__name__)


def adjustment_matches(adjustment: Adjustment, record: FinancialRecord) -> bool:
    """Account OR department match; unset fields never match."""
    if adjustment.account and record.account == adjustment.account:
        return True
    if adjustment.department and record.department == adjustment.department:
        return True
    return False


def apply_adjustments(amount: Decimal, record: FinancialRecord, adjustments: Sequence[Adjustment]) -> Decimal:
    """Compound every matching adjustment onto the amount, in order."""
    for adjustment in adjustments:
        if adjustment_matches(adjustment, record):
            amount = amount * adjustment.factor
    return amount


async def clone_scenario(
    store: RecordStore,
    base_scenario: str,
    new_scenario: str,
    adjustments: Optional[Sequence[Adjustment]] = None,
    base_version: Optional[str] = None,
) -> str:
    """
    Clone a scenario into a new scenario/version.

    Args:
        store: Record store to read from and write to
        base_scenario: Scenario to copy (all versions unless base_version is given)
        new_scenario: Name of the derived scenario
        adjustments: Adjustments applied to matching records, in order
        base_version: Optional single version of the base scenario to copy

    Returns:
        The new version tag

    Raises:
        ValidationError: if either scenario name is empty
        NotFoundError: if the base scenario has no records
    """
    if not base_scenario or not new_scenario:
        raise ValidationError("BaseScenario and NewScenario are required.")

    adjustments = list(adjustments or [])

    base_records = await store.query(RecordFilter(scenario=base_scenario, version=base_version))
    if not base_records:
        raise NotFoundError(f"No records found for base scenario: {base_scenario}")

    created_at = utc_now()
    new_version = generate_version(created_at)

    cloned_records: List[FinancialRecord] = []
    for record in base_records:
        cloned_records.append(
            FinancialRecord(
                type=record.type,
                account=record.account,
                department=record.department,
                year=record.year,
                month=record.month,
                amount=apply_adjustments(Decimal(record.amount), record, adjustments),
                scenario=new_scenario,
                version=new_version,
                upload_timestamp=created_at,
            )
        )

    stored = await store.add_records(cloned_records)
    logger.info(
        f"Cloned {len(stored)} records from {base_scenario} into {new_scenario}/{new_version} "
        f"with {len(adjustments)} adjustments"
    )

    audit = AuditService(store, user_name=settings.SYSTEM_USER_NAME)
    await audit.log_cloned(stored, created_at)

    return new_version

"""Scenario Comparator - per-key deltas between two scenarios in a period."""
from collections import defaultdict
from decimal import Decimal, ROUND_HALF_EVEN
from typing import Dict, List, Optional, Tuple

from fpa.errors import ValidationError
from fpa.periods import parse_period
from fpa.records.models import FinancialRecord
from fpa.scenarios.schemas import ComparisonRow
from fpa.store.base import RecordFilter, RecordStore

GroupKey = Tuple[str, Optional[str]]

_TWO_PLACES = Decimal("0.01")


def _group_sums(records: List[FinancialRecord], include_department: bool) -> Dict[GroupKey, Decimal]:
    sums: Dict[GroupKey, Decimal] = defaultdict(Decimal)
    for record in records:
        key = (record.account, record.department if include_department else None)
        sums[key] += Decimal(record.amount)
    return sums


def percentage_change(base_amount: Decimal, delta: Decimal) -> Decimal:
    """Percent change rounded to two places; 0 when the base is 0."""
    if base_amount == 0:
        return Decimal("0.00")
    return (delta / base_amount * 100).quantize(_TWO_PLACES, rounding=ROUND_HALF_EVEN)


def _sort_key(key: GroupKey):
    account, department = key
    # None departments sort ahead of any named department
    return (account, department is not None, department or "")


async def compare_scenarios(
    store: RecordStore,
    base_scenario: str,
    target_scenario: str,
    period: str,
    include_department: bool = False,
) -> List[ComparisonRow]:
    """
    Compare two scenarios for one "YYYY-MM" period.

    An unparseable period applies no period filter.
    """
    if not base_scenario or not target_scenario:
        raise ValidationError("Both base and target scenarios are required.")
    if not period:
        raise ValidationError("Period parameter is required (e.g., '2024-07').")

    year_month = parse_period(period)
    base_records = await store.query(
        RecordFilter(scenario=base_scenario, period_from=year_month, period_to=year_month)
    )
    target_records = await store.query(
        RecordFilter(scenario=target_scenario, period_from=year_month, period_to=year_month)
    )

    base_sums = _group_sums(base_records, include_department)
    target_sums = _group_sums(target_records, include_department)

    rows = []
    for key in sorted(set(base_sums) | set(target_sums), key=_sort_key):
        account, department = key
        base_amount = base_sums.get(key, Decimal("0"))
        target_amount = target_sums.get(key, Decimal("0"))
        delta = target_amount - base_amount
        rows.append(
            ComparisonRow(
                account=account,
                department=department,
                base_amount=base_amount,
                target_amount=target_amount,
                delta=delta,
                percentage=percentage_change(base_amount, delta),
            )
        )

    return rows

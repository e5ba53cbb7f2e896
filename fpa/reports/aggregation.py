"""
Aggregation Engine - summary, monthly and drill-down views.

All three views are read-only. Empty string filters are treated the same
as absent ones.
"""
from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from fpa.periods import format_period, parse_period
from fpa.records.models import FinancialRecord
from fpa.reports.schemas import MonthlyRow, SummaryRow
from fpa.store.base import RecordFilter, RecordStore


def _none_first(value: Optional[str]):
    return (value is not None, value or "")


async def summary(
    store: RecordStore,
    scenario: Optional[str] = None,
    account: Optional[str] = None,
    department: Optional[str] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
) -> List[SummaryRow]:
    """
    Sum amounts per (account, department, scenario).

    A record's effective date is the first day of its month; both date
    bounds are inclusive. Rows are sorted by account, department (None
    first) and scenario.
    """
    records = await store.query(
        RecordFilter(
            scenario=scenario or None,
            account=account or None,
            department=department or None,
        )
    )

    totals: Dict[Tuple[str, Optional[str], str], Decimal] = defaultdict(Decimal)
    for record in records:
        effective = date(record.year, record.month, 1)
        if date_from is not None and effective < date_from:
            continue
        if date_to is not None and effective > date_to:
            continue
        totals[(record.account, record.department, record.scenario)] += Decimal(record.amount)

    ordered = sorted(
        totals.items(),
        key=lambda item: (item[0][0], _none_first(item[0][1]), item[0][2]),
    )
    return [
        SummaryRow(account=acct, department=dept, scenario=scen, total_amount=total)
        for (acct, dept, scen), total in ordered
    ]


async def monthly(
    store: RecordStore,
    account: Optional[str] = None,
    scenario: Optional[str] = None,
) -> List[MonthlyRow]:
    """Sum amounts per "YYYY-MM" period, ascending."""
    records = await store.query(RecordFilter(scenario=scenario or None, account=account or None))

    totals: Dict[str, Decimal] = defaultdict(Decimal)
    for record in records:
        totals[format_period(record.year, record.month)] += Decimal(record.amount)

    return [MonthlyRow(month=label, total=totals[label]) for label in sorted(totals)]


async def drilldown(
    store: RecordStore,
    scenario: str,
    account: str,
    period: Optional[str] = None,
    department: Optional[str] = None,
) -> List[FinancialRecord]:
    """
    Raw records for one scenario and account.

    A parseable "YYYY-MM" period restricts the result to that month; an
    empty or unparseable period applies no period filter.
    """
    year_month = parse_period(period)
    return await store.query(
        RecordFilter(
            scenario=scenario,
            account=account,
            department=department or None,
            period_from=year_month,
            period_to=year_month,
        )
    )


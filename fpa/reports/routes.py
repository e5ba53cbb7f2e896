"""Report routes: latest version, summary, monthly, drill-down, comparison."""
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from fpa.dependencies import get_store
from fpa.errors import ValidationError
from fpa.records import queries
from fpa.records.schemas import FinancialRecordResponse
from fpa.reports import aggregation
from fpa.reports.schemas import MonthlyRow, SummaryRow
from fpa.scenarios.comparison import compare_scenarios
from fpa.scenarios.schemas import ComparisonRow
from fpa.store.base import RecordStore

router = APIRouter()


@router.get("/latest", response_model=List[FinancialRecordResponse])
async def get_latest(
    scenario: Optional[str] = None,
    store: RecordStore = Depends(get_store),
):
    """Records from the most recent upload of a scenario."""
    return await queries.get_latest_by_scenario(store, scenario)


@router.get("/drilldown", response_model=List[FinancialRecordResponse])
async def get_drilldown(
    scenario: Optional[str] = None,
    account: Optional[str] = None,
    period: Optional[str] = None,
    department: Optional[str] = None,
    store: RecordStore = Depends(get_store),
):
    """Unaggregated records for one scenario, account and period."""
    if not scenario or not account or not period:
        raise ValidationError("Scenario, Account, and Period parameters are required.")
    return await aggregation.drilldown(store, scenario, account, period, department)


@router.get("/summary", response_model=List[SummaryRow])
async def get_summary(
    scenario: Optional[str] = None,
    account: Optional[str] = None,
    department: Optional[str] = None,
    date_from: Optional[date] = Query(default=None, alias="from"),
    date_to: Optional[date] = Query(default=None, alias="to"),
    store: RecordStore = Depends(get_store),
):
    """Totals per account, department and scenario."""
    return await aggregation.summary(store, scenario, account, department, date_from, date_to)


@router.get("/monthly", response_model=List[MonthlyRow])
async def get_monthly(
    account: Optional[str] = None,
    scenario: Optional[str] = None,
    store: RecordStore = Depends(get_store),
):
    """Totals per "YYYY-MM" period."""
    return await aggregation.monthly(store, account, scenario)


@router.get("/compare", response_model=List[ComparisonRow])
async def get_comparison(
    base_scenario: Optional[str] = Query(default=None, alias="baseScenario"),
    target_scenario: Optional[str] = Query(default=None, alias="targetScenario"),
    period: Optional[str] = None,
    include_department: bool = Query(default=False, alias="includeDepartment"),
    store: RecordStore = Depends(get_store),
):
    """Compare two scenarios for a period."""
    return await compare_scenarios(store, base_scenario, target_scenario, period, include_department)

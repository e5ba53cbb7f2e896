"""
Demo Data Seed

Creates a small planning dataset for local development:
- 10 account maps (balance sheet and P&L codes)
- 7 FX rates for 2024-11 and 2024-12
- Actual / Forecast / Budget scenarios, 2023-2024, 5 departments,
  2 records per department per month per scenario (720 records)

A fixed RNG seed keeps the generated amounts identical across runs.
"""
import logging
import random
from datetime import timedelta
from decimal import Decimal

from fpa.lookups.models import AccountMap, FXRate
from fpa.records.models import FinancialRecord
from fpa.store.base import RecordStore
from fpa.versions import utc_now

logger = logging.getLogger(__name__)

DEMO_VERSION = "v1.0"
DEMO_RNG_SEED = 42

DEMO_ACCOUNT_MAPS = [
    ("1000", "Cash and Cash Equivalents"),
    ("1100", "Accounts Receivable"),
    ("1200", "Inventory"),
    ("2000", "Accounts Payable"),
    ("2100", "Accrued Liabilities"),
    ("4000", "Sales Revenue"),
    ("5000", "Cost of Goods Sold"),
    ("6000", "Operating Expenses"),
    ("6100", "Marketing Expenses"),
    ("6200", "Administrative Expenses"),
]

DEMO_FX_RATES = [
    ("USD", "EUR", "0.85", "2024-12"),
    ("USD", "GBP", "0.75", "2024-12"),
    ("USD", "JPY", "110.50", "2024-12"),
    ("EUR", "USD", "1.18", "2024-12"),
    ("GBP", "USD", "1.33", "2024-12"),
    ("USD", "EUR", "0.84", "2024-11"),
    ("USD", "GBP", "0.76", "2024-11"),
]

DEMO_SCENARIOS = ["Actual", "Forecast", "Budget"]
DEMO_DEPARTMENTS = ["Sales", "Marketing", "Operations", "Finance", "HR"]
DEMO_ACCOUNTS = ["4000", "5000", "6000", "6100", "6200", "1000", "1100", "2000"]
DEMO_YEARS = [2023, 2024]


def account_type(account: str) -> str:
    """Category label implied by the leading digit of an account code."""
    if account.startswith("4"):
        return "Revenue"
    if account.startswith("5") or account.startswith("6"):
        return "Expense"
    if account.startswith("1"):
        return "Asset"
    return "Liability"


def _base_amount(rng: random.Random, record_type: str) -> int:
    if record_type == "Revenue":
        return rng.randint(50000, 199999)
    if record_type == "Expense":
        return rng.randint(10000, 49999)
    return rng.randint(5000, 99999)


def _scenario_variance(rng: random.Random, scenario: str) -> float:
    if scenario == "Actual":
        return 1.0
    if scenario == "Forecast":
        return rng.random() * 0.2 + 0.9
    return rng.random() * 0.3 + 0.85


def build_demo_records() -> list:
    """Generate the deterministic demo records (not yet stored)."""
    rng = random.Random(DEMO_RNG_SEED)
    now = utc_now()
    records = []

    for scenario in DEMO_SCENARIOS:
        for year in DEMO_YEARS:
            for month in range(1, 13):
                for department in DEMO_DEPARTMENTS:
                    for _ in range(2):
                        account = rng.choice(DEMO_ACCOUNTS)
                        record_type = account_type(account)
                        base = _base_amount(rng, record_type)
                        variance = _scenario_variance(rng, scenario)
                        noise = rng.random() * 0.2 + 0.9
                        amount = Decimal(str(base * variance * noise)).quantize(Decimal("0.01"))

                        records.append(
                            FinancialRecord(
                                type=record_type,
                                account=account,
                                department=department,
                                year=year,
                                month=month,
                                amount=amount,
                                scenario=scenario,
                                version=DEMO_VERSION,
                                upload_timestamp=now - timedelta(days=rng.randint(1, 29)),
                            )
                        )

    return records


async def seed_demo_data(store: RecordStore, force: bool = False) -> dict:
    """
    Seed lookup tables and demo records.

    Does nothing when the store already holds records or the demo
    account maps, unless force is set.

    Returns:
        dict with created entity counts
    """
    if not force and (
        await store.distinct_scenarios()
        or await store.get_account_map(DEMO_ACCOUNT_MAPS[0][0]) is not None
    ):
        logger.info("Demo data already present, skipping seed")
        return {"status": "exists"}

    account_maps = await store.add_account_maps(
        [AccountMap(account_code=code, account_name=name) for code, name in DEMO_ACCOUNT_MAPS]
    )
    fx_rates = await store.add_fx_rates(
        [
            FXRate(from_currency=src, to_currency=dst, rate=Decimal(rate), period=period)
            for src, dst, rate, period in DEMO_FX_RATES
        ]
    )
    records = await store.add_records(build_demo_records())

    result = {
        "status": "created",
        "account_maps": len(account_maps),
        "fx_rates": len(fx_rates),
        "records": len(records),
    }
    logger.info(f"Demo data seeded successfully: {result}")
    return result

"""Shared test fixtures and configuration for the FP&A service tests."""
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from fpa.dependencies import get_store
from fpa.lookups.models import AccountMap, FXRate
from fpa.main import app
from fpa.records.models import FinancialRecord
from fpa.store.memory import InMemoryRecordStore


UPLOADED_AT = datetime(2024, 8, 1, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def store() -> InMemoryRecordStore:
    """Create an empty in-memory record store."""
    return InMemoryRecordStore()


@pytest.fixture
def make_record() -> Callable[..., FinancialRecord]:
    """Factory for unsaved FinancialRecords with sensible defaults."""

    def _make(**overrides) -> FinancialRecord:
        fields = {
            "type": "Revenue",
            "account": "4000",
            "department": "Sales",
            "year": 2024,
            "month": 7,
            "amount": Decimal("100"),
            "scenario": "Actual",
            "version": "v1.0",
            "upload_timestamp": UPLOADED_AT,
        }
        fields.update(overrides)
        if not isinstance(fields["amount"], Decimal):
            fields["amount"] = Decimal(str(fields["amount"]))
        return FinancialRecord(**fields)

    return _make


@pytest.fixture
def account_map() -> Callable[[str, str], AccountMap]:
    def _make(code: str, name: str) -> AccountMap:
        return AccountMap(account_code=code, account_name=name)

    return _make


@pytest.fixture
def fx_rate() -> Callable[..., FXRate]:
    def _make(period: str, rate: str, from_currency: str = "EUR", to_currency: str = "USD") -> FXRate:
        return FXRate(
            from_currency=from_currency,
            to_currency=to_currency,
            rate=Decimal(rate),
            period=period,
        )

    return _make


@pytest_asyncio.fixture
async def client(store):
    """HTTP client against the app with the record store swapped for memory."""
    app.dependency_overrides[get_store] = lambda: store
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()

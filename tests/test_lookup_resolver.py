"""Tests for account-code and FX resolution."""
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from fpa.errors import NotFoundError, StoreError, ValidationError
from fpa.lookups import services
from fpa.lookups.resolver import LookupResolver


class TestResolveAccount:
    """Tests for LookupResolver.resolve_account."""

    @pytest.mark.asyncio
    async def test_mapped_code_resolves_to_name(self, store, account_map):
        await store.add_account_maps([account_map("1000", "Cash and Cash Equivalents")])
        resolver = LookupResolver(store)

        assert await resolver.resolve_account("1000") == "Cash and Cash Equivalents"

    @pytest.mark.asyncio
    async def test_unmapped_code_passes_through(self, store, account_map):
        await store.add_account_maps([account_map("1000", "Cash and Cash Equivalents")])
        resolver = LookupResolver(store)

        assert await resolver.resolve_account("9999") == "9999"

    @pytest.mark.asyncio
    async def test_first_mapping_wins(self, store, account_map):
        await store.add_account_maps([
            account_map("4000", "Sales Revenue"),
            account_map("4000", "Duplicate"),
        ])
        resolver = LookupResolver(store)

        assert await resolver.resolve_account("4000") == "Sales Revenue"


class TestConvertAmount:
    """Tests for LookupResolver.convert_amount."""

    @pytest.mark.asyncio
    async def test_rate_for_period_is_applied(self, store, fx_rate):
        await store.add_fx_rates([fx_rate("2024-12", "1.18")])
        resolver = LookupResolver(store)

        converted = await resolver.convert_amount(Decimal("100"), 2024, 12)

        assert converted == Decimal("118.00")

    @pytest.mark.asyncio
    async def test_missing_period_keeps_amount(self, store, fx_rate):
        await store.add_fx_rates([fx_rate("2024-12", "1.18")])
        resolver = LookupResolver(store)

        assert await resolver.convert_amount(Decimal("100"), 2024, 11) == Decimal("100")

    @pytest.mark.asyncio
    async def test_first_rate_wins(self, store, fx_rate):
        await store.add_fx_rates([fx_rate("2024-12", "1.18"), fx_rate("2024-12", "2.00")])
        resolver = LookupResolver(store)

        assert await resolver.convert_amount(Decimal("100"), 2024, 12) == Decimal("118.00")

    @pytest.mark.asyncio
    async def test_only_configured_pair_is_used(self, store, fx_rate):
        await store.add_fx_rates([fx_rate("2024-12", "0.85", from_currency="USD", to_currency="EUR")])
        resolver = LookupResolver(store)

        assert await resolver.convert_amount(Decimal("100"), 2024, 12) == Decimal("100")

    @pytest.mark.asyncio
    async def test_custom_pair(self, store, fx_rate):
        await store.add_fx_rates([fx_rate("2024-12", "0.75", from_currency="USD", to_currency="GBP")])
        resolver = LookupResolver(store, from_currency="USD", to_currency="GBP")

        assert await resolver.convert_amount(Decimal("200"), 2024, 12) == Decimal("150")

    @pytest.mark.asyncio
    async def test_no_rounding_is_applied(self, store, fx_rate):
        await store.add_fx_rates([fx_rate("2024-01", "1.23456789")])
        resolver = LookupResolver(store)

        assert await resolver.convert_amount(Decimal("3"), 2024, 1) == Decimal("3.70370367")

    @pytest.mark.asyncio
    async def test_store_failure_propagates(self, store):
        store.get_fx_rate = AsyncMock(side_effect=StoreError("down"))
        resolver = LookupResolver(store)

        with pytest.raises(StoreError):
            await resolver.convert_amount(Decimal("1"), 2024, 1)


class TestLookupServices:
    """Tests for lookup-table management."""

    @pytest.mark.asyncio
    async def test_empty_batches_are_rejected(self, store):
        with pytest.raises(ValidationError):
            await services.add_fx_rates(store, [])
        with pytest.raises(ValidationError):
            await services.add_account_maps(store, [])

    @pytest.mark.asyncio
    async def test_missing_entries_raise_not_found(self, store):
        with pytest.raises(NotFoundError):
            await services.get_fx_rate(store, "EUR", "USD", "2024-01")
        with pytest.raises(NotFoundError):
            await services.get_account_map(store, "1000")

    @pytest.mark.asyncio
    async def test_stored_entries_are_returned(self, store, fx_rate, account_map):
        await services.add_fx_rates(store, [fx_rate("2024-01", "1.1")])
        await services.add_account_maps(store, [account_map("1000", "Cash")])

        rate = await services.get_fx_rate(store, "EUR", "USD", "2024-01")
        mapping = await services.get_account_map(store, "1000")

        assert rate.rate == Decimal("1.1")
        assert rate.id.startswith("fxrate_")
        assert mapping.account_name == "Cash"

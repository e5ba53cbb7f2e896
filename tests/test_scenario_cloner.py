"""
Unit Tests for the Scenario Cloner.

Covers:
1. Plain copies keep every field except scenario/version/id
2. Account and department adjustments, including compounding
3. Adjustments with no match fields never apply
4. Error cases and the lack of snapshot isolation between clones
"""
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from fpa.audit.models import ChangeAction
from fpa.errors import NotFoundError, StoreError, ValidationError
from fpa.records.ingestion import process_upload
from fpa.records.schemas import RawRecord
from fpa.scenarios.cloner import adjustment_matches, clone_scenario
from fpa.scenarios.schemas import Adjustment
from fpa.store.base import RecordFilter


@pytest.fixture
def base_records(make_record):
    return [
        make_record(account="4000", department="Sales", amount="100"),
        make_record(account="4000", department="Marketing", amount="50", month=8),
        make_record(account="6000", department="Sales", amount="30", type="Expense"),
        make_record(account="6100", department="HR", amount="20", type="Expense", version="v2.0"),
    ]


async def cloned(store, scenario="WhatIf"):
    return await store.query(RecordFilter(scenario=scenario))


# =============================================================================
# TEST: PLAIN CLONE
# =============================================================================

class TestPlainClone:
    """Cloning without adjustments."""

    @pytest.mark.asyncio
    async def test_copies_all_records_of_all_versions(self, store, base_records):
        await store.add_records(base_records)

        await clone_scenario(store, "Actual", "WhatIf", [])

        copies = await cloned(store)
        assert len(copies) == len(base_records)
        for source, copy in zip(base_records, copies):
            assert (copy.type, copy.account, copy.department, copy.year, copy.month, copy.amount) == (
                source.type, source.account, source.department, source.year, source.month, source.amount,
            )
            assert copy.id != source.id

    @pytest.mark.asyncio
    async def test_new_scenario_and_single_new_version(self, store, base_records):
        await store.add_records(base_records)

        new_version = await clone_scenario(store, "Actual", "WhatIf")

        copies = await cloned(store)
        assert {c.scenario for c in copies} == {"WhatIf"}
        assert {c.version for c in copies} == {new_version}
        assert len({c.upload_timestamp for c in copies}) == 1
        assert new_version not in {"v1.0", "v2.0"}

    @pytest.mark.asyncio
    async def test_one_cloned_entry_per_record(self, store, base_records):
        await store.add_records(base_records)

        await clone_scenario(store, "Actual", "WhatIf")

        copies = await cloned(store)
        assert len(store.change_history) == len(copies)
        assert {e.record_id for e in store.change_history} == {c.id for c in copies}
        assert {e.action for e in store.change_history} == {ChangeAction.CLONED}
        assert {e.user_name for e in store.change_history} == {"System"}
        assert {e.timestamp for e in store.change_history} == {copies[0].upload_timestamp}

    @pytest.mark.asyncio
    async def test_base_scenario_is_untouched(self, store, base_records):
        await store.add_records(base_records)
        before = [(r.id, r.amount) for r in await store.query(RecordFilter(scenario="Actual"))]

        await clone_scenario(store, "Actual", "WhatIf", [Adjustment(account="4000", factor=Decimal("2"))])

        after = [(r.id, r.amount) for r in await store.query(RecordFilter(scenario="Actual"))]
        assert after == before

    @pytest.mark.asyncio
    async def test_base_version_pins_source(self, store, base_records):
        await store.add_records(base_records)

        await clone_scenario(store, "Actual", "WhatIf", base_version="v2.0")

        copies = await cloned(store)
        assert [c.account for c in copies] == ["6100"]


# =============================================================================
# TEST: ADJUSTMENTS
# =============================================================================

class TestAdjustments:
    """Multiplicative adjustments applied while cloning."""

    @pytest.mark.asyncio
    async def test_account_adjustment_only_hits_that_account(self, store, base_records):
        await store.add_records(base_records)

        await clone_scenario(store, "Actual", "WhatIf", [Adjustment(account="4000", factor=Decimal("1.1"))])

        amounts = {(c.account, c.department): c.amount for c in await cloned(store)}
        assert amounts[("4000", "Sales")] == Decimal("110")
        assert amounts[("4000", "Marketing")] == Decimal("55")
        assert amounts[("6000", "Sales")] == Decimal("30")
        assert amounts[("6100", "HR")] == Decimal("20")

    @pytest.mark.asyncio
    async def test_department_adjustment(self, store, base_records):
        await store.add_records(base_records)

        await clone_scenario(store, "Actual", "WhatIf", [Adjustment(department="Sales", factor=Decimal("0.5"))])

        amounts = {(c.account, c.department): c.amount for c in await cloned(store)}
        assert amounts[("4000", "Sales")] == Decimal("50")
        assert amounts[("6000", "Sales")] == Decimal("15")
        assert amounts[("4000", "Marketing")] == Decimal("50")

    @pytest.mark.asyncio
    async def test_matching_adjustments_compound_in_order(self, store, base_records):
        await store.add_records(base_records)
        adjustments = [
            Adjustment(account="4000", factor=Decimal("1.1")),
            Adjustment(department="Sales", factor=Decimal("2")),
        ]

        await clone_scenario(store, "Actual", "WhatIf", adjustments)

        amounts = {(c.account, c.department): c.amount for c in await cloned(store)}
        assert amounts[("4000", "Sales")] == Decimal("100") * Decimal("1.1") * Decimal("2")
        assert amounts[("4000", "Marketing")] == Decimal("55")
        assert amounts[("6000", "Sales")] == Decimal("60")

    @pytest.mark.asyncio
    async def test_account_or_department_matches_once(self, store, make_record):
        await store.add_records([make_record(account="4000", department="Sales", amount="100")])

        await clone_scenario(
            store, "Actual", "WhatIf", [Adjustment(account="4000", department="Sales", factor=Decimal("3"))]
        )

        assert (await cloned(store))[0].amount == Decimal("300")

    @pytest.mark.asyncio
    async def test_adjustment_without_match_fields_matches_nothing(self, store, base_records):
        await store.add_records(base_records)

        await clone_scenario(store, "Actual", "WhatIf", [Adjustment(account="", department=None, factor=Decimal("9"))])

        assert [c.amount for c in await cloned(store)] == [r.amount for r in base_records]

    def test_adjustment_matches_rules(self, make_record):
        record = make_record(account="4000", department=None)

        assert adjustment_matches(Adjustment(account="4000", factor=Decimal("1")), record)
        assert not adjustment_matches(Adjustment(account="5000", factor=Decimal("1")), record)
        assert not adjustment_matches(Adjustment(factor=Decimal("1")), record)
        assert not adjustment_matches(Adjustment(department="Sales", factor=Decimal("1")), record)


# =============================================================================
# TEST: ERRORS AND CONCURRENCY
# =============================================================================

class TestCloneFailures:
    """Error handling and isolation behaviour."""

    @pytest.mark.asyncio
    async def test_unknown_base_scenario(self, store):
        with pytest.raises(NotFoundError):
            await clone_scenario(store, "Missing", "WhatIf")

    @pytest.mark.asyncio
    async def test_empty_names_rejected(self, store):
        with pytest.raises(ValidationError):
            await clone_scenario(store, "", "WhatIf")
        with pytest.raises(ValidationError):
            await clone_scenario(store, "Actual", "")

    @pytest.mark.asyncio
    async def test_failed_write_logs_no_audit(self, store, base_records):
        await store.add_records(base_records)
        store.add_records = AsyncMock(side_effect=StoreError("boom"))

        with pytest.raises(StoreError):
            await clone_scenario(store, "Actual", "WhatIf")

        assert store.change_history == []

    @pytest.mark.asyncio
    async def test_clones_see_writes_that_land_mid_flight(self, store, make_record):
        """No snapshot isolation: a write racing the read is included in the clone."""
        await store.add_records([make_record(version="v1")])
        original_query = store.query

        async def query_with_racing_upload(record_filter):
            await process_upload(
                store,
                [RawRecord(type="Revenue", account="4000", year=2024, month=9, amount=Decimal("5"))],
                "Actual",
                "v2",
                "racer",
            )
            return await original_query(record_filter)

        store.query = query_with_racing_upload
        await clone_scenario(store, "Actual", "Unpinned")
        await clone_scenario(store, "Actual", "Pinned", base_version="v1")
        store.query = original_query

        assert len(await cloned(store, "Unpinned")) == 2
        assert len(await cloned(store, "Pinned")) == 1

    @pytest.mark.asyncio
    async def test_sequential_clones_get_distinct_versions(self, store, base_records):
        await store.add_records(base_records)

        first = await clone_scenario(store, "Actual", "WhatIf")
        second = await clone_scenario(store, "Actual", "WhatIf")

        assert first != second
        assert len(await cloned(store)) == 2 * len(base_records)

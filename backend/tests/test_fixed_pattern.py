from __future__ import annotations

from datetime import date

import pytest

from backend.core.schedule import generate_schedule, schedule_total
from backend.models import ContractTerms, FixedPattern, IncreaseKind


def test_fixed_percentage_compounds_from_previous_period(terms):
    rows = generate_schedule(terms, FixedPattern(fixedPercentage=10))

    assert [row.finalAmount for row in rows] == pytest.approx([100_000_000, 110_000_000, 121_000_000])
    assert schedule_total(rows) == pytest.approx(331_000_000)

    assert rows[0].increaseKind == IncreaseKind.NONE
    assert rows[0].increaseValue == 0
    for row in rows[1:]:
        assert row.increaseKind == IncreaseKind.PERCENTAGE
        assert row.increaseValue == 10
        # base amount stays the contract amount for display
        assert row.baseAmount == 100_000_000


def test_fixed_matches_closed_form():
    terms = ContractTerms(siteName="Shiraz", baseAmount=1000, startDate=date(2020, 6, 15), duration=6)
    rows = generate_schedule(terms, FixedPattern(fixedPercentage=7.5))

    assert len(rows) == 6
    for offset, row in enumerate(rows):
        assert row.finalAmount == pytest.approx(1000 * 1.075 ** offset)


def test_missing_percentage_gives_flat_schedule(terms):
    rows = generate_schedule(terms, FixedPattern())

    assert [row.finalAmount for row in rows] == [100_000_000] * 3
    assert all(row.increaseKind == IncreaseKind.NONE for row in rows)


def test_negative_percentage_flows_through(terms):
    rows = generate_schedule(terms, FixedPattern(fixedPercentage=-50))

    assert [row.finalAmount for row in rows] == pytest.approx([100_000_000, 50_000_000, 25_000_000])

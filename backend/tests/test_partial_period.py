from __future__ import annotations

from datetime import date
from math import isclose

import pytest

from backend.core.schedule import generate_schedule
from backend.models import (
    ContractTerms,
    FixedPattern,
    IncreaseKind,
    PartialPeriodPolicy,
    PeriodicPattern,
)


def make_terms(duration: float, base: float = 100_000_000) -> ContractTerms:
    return ContractTerms(siteName="Karaj", baseAmount=base, startDate=date(2024, 1, 1), duration=duration)


def test_proportional_partial_period():
    rows = generate_schedule(make_terms(2.5), FixedPattern(fixedPercentage=10), PartialPeriodPolicy.PROPORTIONAL)

    assert len(rows) == 3
    partial = rows[-1]
    assert partial.isPartial
    assert not any(row.isPartial for row in rows[:-1])
    assert partial.index == 3
    assert partial.finalAmount == pytest.approx(rows[1].finalAmount * 0.5)
    assert partial.baseAmount == pytest.approx(rows[1].finalAmount)
    assert partial.increaseKind == IncreaseKind.NONE
    assert partial.increaseValue == 0


def test_daily_partial_period_uses_365_day_year():
    rows = generate_schedule(make_terms(3.5), FixedPattern(fixedPercentage=10), PartialPeriodPolicy.DAILY)

    assert rows[2].finalAmount == pytest.approx(121_000_000)
    # round(0.5 * 365) rounds half up to 183 days
    assert rows[-1].finalAmount == pytest.approx((121_000_000 / 365) * 183)


def test_daily_partial_period_quarter_year():
    rows = generate_schedule(make_terms(1.25, base=365_000), FixedPattern(), "daily")

    assert rows[-1].finalAmount == pytest.approx(91_000)


def test_manual_partial_amount_is_used_as_is():
    rows = generate_schedule(make_terms(1.25), FixedPattern(), PartialPeriodPolicy.MANUAL, manual_amount=-777)

    assert rows[-1].finalAmount == -777


def test_partial_dates():
    rows = generate_schedule(make_terms(2.5), FixedPattern())

    assert rows[-1].periodStart == date(2026, 1, 1)
    # end is start date + whole years - 1 day
    assert rows[-1].periodEnd == date(2025, 12, 31)


def test_partial_without_full_periods_uses_contract_amount():
    rows = generate_schedule(make_terms(0.5, base=1000), FixedPattern(fixedPercentage=10))

    assert len(rows) == 1
    assert rows[0].index == 1
    assert rows[0].isPartial
    assert rows[0].periodStart == date(2024, 1, 1)
    assert isclose(rows[0].baseAmount, 1000)
    assert isclose(rows[0].finalAmount, 500)


def test_zero_last_payment_falls_back_to_contract_amount():
    rows = generate_schedule(
        make_terms(2.5, base=1000),
        PeriodicPattern(periodicInterval=2, periodicAmount=400),
    )

    assert [row.finalAmount for row in rows[:2]] == [400, 0]
    assert isclose(rows[-1].baseAmount, 1000)
    assert isclose(rows[-1].finalAmount, 500)


def test_whole_duration_has_no_partial_row():
    rows = generate_schedule(make_terms(3), FixedPattern(), PartialPeriodPolicy.MANUAL, manual_amount=5)

    assert len(rows) == 3
    assert not any(row.isPartial for row in rows)

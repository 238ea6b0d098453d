from __future__ import annotations

import logging
import math
from datetime import date
from typing import Callable, List, Optional, Sequence, Tuple

from backend.core.dates import add_years, day_after, day_before, fits_calendar
from backend.models import (
    ContractTerms,
    CustomPattern,
    FixedAmountsPattern,
    FixedPattern,
    IncreaseKind,
    PartialPeriodPolicy,
    PaymentPattern,
    PaymentYear,
    PeriodicPattern,
    PrepaymentPattern,
    ScheduleSummary,
    VariablePattern,
)

logger = logging.getLogger(__name__)

DAYS_IN_YEAR = 365

# custom_rule(index, previous_row) -> finalAmount for that period
CustomRule = Callable[[int, Optional[PaymentYear]], float]

# (increaseKind, increaseValue, finalAmount)
PeriodAmount = Tuple[IncreaseKind, float, float]


def _compound(previous: PaymentYear, percentage: float) -> PeriodAmount:
    return (
        IncreaseKind.PERCENTAGE,
        percentage,
        previous.finalAmount * (1 + percentage / 100),
    )


def _entry(values: Sequence[Optional[float]], position: int) -> Optional[float]:
    if 0 <= position < len(values):
        return values[position]
    return None


def _period_amount(
    index: int,
    pattern: PaymentPattern,
    base_amount: float,
    previous: Optional[PaymentYear],
    custom_rule: Optional[CustomRule],
) -> PeriodAmount:
    """Amount for full period ``index`` (1-based) under ``pattern``.

    Pattern parameters only take effect when set (non-zero); an unset
    parameter leaves the period flat at ``base_amount``.
    """
    flat: PeriodAmount = (IncreaseKind.NONE, 0.0, base_amount)

    if isinstance(pattern, FixedPattern):
        if pattern.fixedPercentage and previous is not None:
            return _compound(previous, pattern.fixedPercentage)
        return flat

    if isinstance(pattern, PrepaymentPattern):
        if (
            pattern.prepaymentYears
            and pattern.fixedPercentage
            and index > pattern.prepaymentYears
            and previous is not None
        ):
            return _compound(previous, pattern.fixedPercentage)
        return flat

    if isinstance(pattern, VariablePattern):
        # an absent or zero entry resets the period to the base amount,
        # it does not carry the previous amount forward
        percentage = _entry(pattern.variablePercentages, index - 2)
        if previous is not None and percentage:
            return _compound(previous, percentage)
        return flat

    if isinstance(pattern, FixedAmountsPattern):
        amount = _entry(pattern.fixedAmounts, index - 1)
        return (IncreaseKind.NONE, 0.0, amount or base_amount)

    if isinstance(pattern, PeriodicPattern):
        interval = pattern.periodicInterval
        if not (interval and pattern.periodicAmount):
            return flat
        pays = interval == 1 or index % interval == 1
        return (IncreaseKind.NONE, 0.0, pattern.periodicAmount if pays else 0.0)

    if isinstance(pattern, CustomPattern) and custom_rule is not None:
        return (IncreaseKind.NONE, 0.0, float(custom_rule(index, previous)))

    return flat


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _partial_amount(
    carried_amount: float,
    fraction: float,
    policy: PartialPeriodPolicy,
    manual_amount: float,
) -> float:
    if policy == PartialPeriodPolicy.PROPORTIONAL:
        return carried_amount * fraction
    if policy == PartialPeriodPolicy.DAILY:
        partial_days = _round_half_up(fraction * DAYS_IN_YEAR)
        return (carried_amount / DAYS_IN_YEAR) * partial_days
    return manual_amount


def is_complete(terms: ContractTerms) -> bool:
    """True when the terms carry enough information to build a schedule."""
    return bool(terms.siteName) and terms.baseAmount > 0 and terms.startDate is not None


def generate_schedule(
    terms: ContractTerms,
    pattern: PaymentPattern,
    partial_policy: PartialPeriodPolicy = PartialPeriodPolicy.PROPORTIONAL,
    manual_amount: float = 0.0,
    custom_rule: Optional[CustomRule] = None,
) -> List[PaymentYear]:
    """
    Build the ordered payment schedule for a contract.

    Per full period (1..floor(duration)):
      1) periodStart = startDate + (index - 1) calendar years.
      2) periodEnd   = startDate + index calendar years - 1 day.
      3) finalAmount from the pattern; compounding patterns grow the
         previous row's finalAmount, never the contract base amount.

    If duration has a fractional part, one partial row is appended whose
    amount follows ``partial_policy``.

    Incomplete terms (no site name, no start date, non-positive base
    amount or duration) give an empty schedule instead of an error, as
    does a duration running past the last representable calendar year.
    """
    if not is_complete(terms) or not math.isfinite(terms.duration) or terms.duration <= 0:
        return []

    partial_policy = PartialPeriodPolicy(partial_policy)
    start = terms.startDate
    base_amount = terms.baseAmount
    full_periods = math.floor(terms.duration)
    fraction = terms.duration - full_periods

    if not fits_calendar(start, full_periods):
        logger.debug("Duration %s from %s runs past year %d", terms.duration, start, date.max.year)
        return []

    schedule: List[PaymentYear] = []
    for index in range(1, full_periods + 1):
        previous = schedule[-1] if schedule else None
        kind, value, amount = _period_amount(index, pattern, base_amount, previous, custom_rule)
        schedule.append(
            PaymentYear(
                index=index,
                periodStart=add_years(start, index - 1),
                periodEnd=day_before(add_years(start, index)),
                baseAmount=base_amount,
                increaseKind=kind,
                increaseValue=value,
                finalAmount=amount,
            )
        )

    if fraction > 0:
        last_full = schedule[-1] if schedule else None
        # a zero last payment (e.g. periodic gap) also falls back to the base amount
        carried = (last_full.finalAmount if last_full else 0.0) or base_amount
        schedule.append(
            PaymentYear(
                index=full_periods + 1,
                periodStart=day_after(last_full.periodEnd) if last_full else start,
                periodEnd=day_before(add_years(start, full_periods)),
                baseAmount=carried,
                increaseKind=IncreaseKind.NONE,
                increaseValue=0.0,
                finalAmount=_partial_amount(carried, fraction, partial_policy, manual_amount),
                isPartial=True,
            )
        )

    logger.debug(
        "Generated %d periods for %r (pattern=%s, partial=%s)",
        len(schedule),
        terms.siteName,
        pattern.type,
        partial_policy.value if fraction > 0 else "n/a",
    )
    return schedule


def schedule_total(schedule: Sequence[PaymentYear]) -> float:
    return sum(row.finalAmount for row in schedule)


def summarize_schedule(schedule: Sequence[PaymentYear]) -> ScheduleSummary:
    """Headline figures for the summary card."""
    return ScheduleSummary(
        periodCount=len(schedule),
        fullPeriods=sum(1 for row in schedule if not row.isPartial),
        hasPartialPeriod=any(row.isPartial for row in schedule),
        payingPeriods=sum(1 for row in schedule if row.finalAmount != 0),
        total=schedule_total(schedule),
        peakAmount=max((row.finalAmount for row in schedule), default=0.0),
    )


__all__ = [
    "CustomRule",
    "DAYS_IN_YEAR",
    "generate_schedule",
    "is_complete",
    "schedule_total",
    "summarize_schedule",
]

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List

from backend.core.dates import fits_calendar
from backend.models import (
    ContractTerms,
    CustomPattern,
    FixedPattern,
    PartialPeriodPolicy,
    PaymentPattern,
    PeriodicPattern,
    PrepaymentPattern,
    VariablePattern,
)


@dataclass
class InputReview:
    """Advisory findings about a set of inputs.

    Nothing here blocks generation; the form shows the warnings next to
    the live schedule.
    """

    complete: bool
    warnings: List[str] = field(default_factory=list)


def _missing_fields(terms: ContractTerms) -> List[str]:
    missing: List[str] = []
    if not terms.siteName:
        missing.append("siteName")
    if terms.baseAmount <= 0:
        missing.append("baseAmount")
    if terms.startDate is None:
        missing.append("startDate")
    if not math.isfinite(terms.duration) or terms.duration <= 0:
        missing.append("duration")
    return missing


def _pattern_warnings(terms: ContractTerms, pattern: PaymentPattern) -> List[str]:
    warnings: List[str] = []
    full_periods = math.floor(terms.duration) if terms.duration > 0 else 0

    if isinstance(pattern, FixedPattern):
        if pattern.fixedPercentage < 0:
            warnings.append(f"fixed percentage {pattern.fixedPercentage}% decreases the amount every period")

    elif isinstance(pattern, PrepaymentPattern):
        if not pattern.prepaymentYears or not pattern.fixedPercentage:
            warnings.append("prepayment years or percentage not set; schedule is flat")
        elif pattern.prepaymentYears >= full_periods:
            warnings.append(
                f"prepayment window of {pattern.prepaymentYears} periods covers the whole contract"
            )
        if pattern.fixedPercentage < 0:
            warnings.append(f"fixed percentage {pattern.fixedPercentage}% decreases the amount every period")

    elif isinstance(pattern, VariablePattern):
        for offset, percentage in enumerate(pattern.variablePercentages):
            if percentage is not None and percentage < 0:
                warnings.append(f"period {offset + 2} percentage {percentage}% is negative")
        if full_periods > 1 and len(pattern.variablePercentages) < full_periods - 1:
            warnings.append(
                "variable percentages missing for some periods; those periods revert to the base amount"
            )

    elif isinstance(pattern, PeriodicPattern):
        if not pattern.periodicInterval or not pattern.periodicAmount:
            warnings.append("periodic interval or amount not set; schedule is flat")
        elif pattern.periodicInterval > full_periods:
            warnings.append(
                f"periodic interval of {pattern.periodicInterval} exceeds the {full_periods} full periods"
            )

    elif isinstance(pattern, CustomPattern):
        warnings.append("custom pattern is a placeholder; every period pays the base amount")

    return warnings


def review_inputs(
    terms: ContractTerms,
    pattern: PaymentPattern,
    partial_policy: PartialPeriodPolicy = PartialPeriodPolicy.PROPORTIONAL,
    manual_amount: float = 0.0,
) -> InputReview:
    missing = _missing_fields(terms)
    if missing:
        return InputReview(
            complete=False,
            warnings=[f"incomplete contract: {', '.join(missing)} required"],
        )
    if not fits_calendar(terms.startDate, math.floor(terms.duration)):
        return InputReview(
            complete=False,
            warnings=[f"duration of {terms.duration} periods runs past the supported calendar"],
        )

    warnings = _pattern_warnings(terms, pattern)

    has_partial = terms.duration % 1 != 0
    policy = PartialPeriodPolicy(partial_policy)
    if manual_amount and (not has_partial or policy != PartialPeriodPolicy.MANUAL):
        warnings.append("manual partial amount is ignored")
    if has_partial and policy == PartialPeriodPolicy.MANUAL and manual_amount < 0:
        warnings.append("manual partial amount is negative")

    return InputReview(complete=True, warnings=warnings)

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PartialPeriodPolicy(str, Enum):
    PROPORTIONAL = "proportional"
    DAILY = "daily"
    MANUAL = "manual"


class IncreaseKind(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"
    NONE = "none"


class ContractTerms(BaseModel):
    """Raw contract parameters as typed into the form.

    Nothing is constrained here: incomplete terms are legal and simply
    produce an empty schedule.
    """

    model_config = ConfigDict(extra="forbid")

    siteName: str = ""
    baseAmount: float = 0.0
    startDate: Optional[date] = None
    duration: float = Field(1.0, allow_inf_nan=False)

    @field_validator("startDate", mode="before")
    @classmethod
    def blank_date_is_missing(cls, value: object) -> object:
        # an untouched date input posts an empty string
        if isinstance(value, str) and not value.strip():
            return None
        return value


class FixedPattern(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: Literal["fixed"] = "fixed"
    fixedPercentage: float = 0.0


class PrepaymentPattern(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: Literal["prepayment"] = "prepayment"
    prepaymentYears: int = 0
    fixedPercentage: float = 0.0


class VariablePattern(BaseModel):
    """variablePercentages[0] applies to period 2, [1] to period 3, ..."""

    model_config = ConfigDict(extra="forbid")

    type: Literal["variable"] = "variable"
    variablePercentages: List[Optional[float]] = Field(default_factory=list)


class FixedAmountsPattern(BaseModel):
    """fixedAmounts[0] applies to period 1, [1] to period 2, ..."""

    model_config = ConfigDict(extra="forbid")

    type: Literal["fixed-amounts"] = "fixed-amounts"
    fixedAmounts: List[Optional[float]] = Field(default_factory=list)


class PeriodicPattern(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: Literal["periodic"] = "periodic"
    periodicInterval: int = Field(0, ge=0)
    periodicAmount: float = 0.0


class CustomPattern(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: Literal["custom"] = "custom"


PaymentPattern = Annotated[
    Union[
        FixedPattern,
        PrepaymentPattern,
        VariablePattern,
        FixedAmountsPattern,
        PeriodicPattern,
        CustomPattern,
    ],
    Field(discriminator="type"),
]


class PaymentYear(BaseModel):
    model_config = ConfigDict(extra="forbid")

    index: int
    periodStart: date
    periodEnd: date
    # amount before this period's increase, kept for display
    baseAmount: float
    increaseKind: IncreaseKind = IncreaseKind.NONE
    increaseValue: float = 0.0
    finalAmount: float
    isPartial: bool = False


class ScheduleSummary(BaseModel):
    model_config = ConfigDict(extra="forbid")

    periodCount: int
    fullPeriods: int
    hasPartialPeriod: bool
    payingPeriods: int
    total: float
    peakAmount: float

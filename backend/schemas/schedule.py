"""Data contracts for the schedule endpoint."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from backend.models import (
    ContractTerms,
    FixedPattern,
    PartialPeriodPolicy,
    PaymentPattern,
    PaymentYear,
    ScheduleSummary,
)


class ScheduleRequest(BaseModel):
    """Everything the form sends on each recalculation."""

    model_config = ConfigDict(extra="forbid")

    contract: ContractTerms
    pattern: PaymentPattern = Field(default_factory=FixedPattern)
    partialPolicy: PartialPeriodPolicy = PartialPeriodPolicy.PROPORTIONAL
    manualAmount: float = Field(
        0.0,
        description="Amount of the trailing partial period when partialPolicy is 'manual'.",
    )


class ScheduleResponse(BaseModel):
    """Generated schedule plus the figures the summary card displays."""

    schedule: List[PaymentYear]
    total: float
    summary: ScheduleSummary
    warnings: List[str] = Field(default_factory=list)

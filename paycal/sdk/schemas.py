"""Pydantic schemas for pay-cal inputs, rules and results.

Rule schemas use extra='forbid' so typos in a deadline rules file cause
clear errors rather than being silently ignored.
"""

from datetime import date
from enum import Enum
from typing import Annotated, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, Strict, model_validator

from .dates import DateLike, format_date, parse_date


# =============================================================================
# Enumerations
# =============================================================================


class Frequency(str, Enum):
    """Payroll frequency."""

    WEEKLY = "weekly"
    BI_WEEKLY = "bi-weekly"
    SEMI_MONTHLY = "semi monthly"
    MONTHLY = "monthly"


class ServiceModel(str, Enum):
    """Service tier; selects the deadline band table."""

    CORE = "Core"
    PREFERRED = "Preferred"


class EarlyAccessOption(str, Enum):
    """How far ahead of the first pay period early access starts."""

    NONE = "None"
    ONE_WEEK = "1 week"
    TWO_WEEKS = "2 weeks"
    THREE_WEEKS = "3 weeks"
    THIRTY_DAYS = "30 days"

    @property
    def offset_days(self) -> int:
        """Calendar-day shift applied to the first pay period begin date."""
        return _EARLY_ACCESS_OFFSETS[self]


# "30 days" is four weeks back, not thirty
_EARLY_ACCESS_OFFSETS = {
    EarlyAccessOption.NONE: 0,
    EarlyAccessOption.ONE_WEEK: -7,
    EarlyAccessOption.TWO_WEEKS: -14,
    EarlyAccessOption.THREE_WEEKS: -21,
    EarlyAccessOption.THIRTY_DAYS: -28,
}


# =============================================================================
# Deadline rules - validates config/deadline_rules.yaml
# =============================================================================


class DeadlineBand(BaseModel):
    """Employee-count range mapped to a paperwork deadline offset."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    min_employees: int = Field(..., ge=0)
    max_employees: int = Field(..., ge=0)
    business_days_offset: int = Field(
        ..., ge=0, description="Business days between paperwork deadline and first check date"
    )

    @model_validator(mode="after")
    def check_range(self) -> "DeadlineBand":
        if self.max_employees < self.min_employees:
            raise ValueError(
                f"max_employees ({self.max_employees}) < min_employees ({self.min_employees})"
            )
        return self

    def contains(self, employee_count: int) -> bool:
        return self.min_employees <= employee_count <= self.max_employees


class DeadlineRules(BaseModel):
    """Complete deadline rule set.

    Bands for each service model must start at 0 and be contiguous up to
    ``custom_timeline_employees - 1``. Headcounts at or above the threshold
    have no standard deadline.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    bands: Dict[ServiceModel, List[DeadlineBand]]
    custom_timeline_employees: int = Field(
        default=500, gt=0, description="Headcount requiring a custom timeline"
    )
    early_access_min_employees: int = Field(default=10, ge=0)
    early_access_deadline_business_days: int = Field(
        default=12, ge=0, description="Business days before the early access date"
    )
    minimum_lead_business_days: int = Field(
        default=8, ge=0, description="Latest deadline, in business days before pay period begin"
    )

    @model_validator(mode="after")
    def check_bands(self) -> "DeadlineRules":
        errors = []
        for model in ServiceModel:
            table = self.bands.get(model)
            if not table:
                errors.append(f"{model.value}: no bands defined")
                continue

            ordered = sorted(table, key=lambda b: b.min_employees)
            if ordered[0].min_employees != 0:
                errors.append(f"{model.value}: first band must start at 0 employees")
            for prev, band in zip(ordered, ordered[1:]):
                if band.min_employees != prev.max_employees + 1:
                    errors.append(
                        f"{model.value}: bands {prev.min_employees}-{prev.max_employees} and "
                        f"{band.min_employees}-{band.max_employees} are not contiguous"
                    )
            if ordered[-1].max_employees != self.custom_timeline_employees - 1:
                errors.append(
                    f"{model.value}: last band must end at {self.custom_timeline_employees - 1} employees"
                )
            self.bands[model] = ordered

        if errors:
            raise ValueError("; ".join(errors))
        return self


# =============================================================================
# Engine inputs and outputs
# =============================================================================

# Strings and timestamps are rejected; from_strings parses ISO text
InputDate = Annotated[date, Strict()]


class CalendarInputs(BaseModel):
    """Snapshot of everything the engine needs.

    Dates must be ``date`` objects; use ``from_strings`` for ISO strings.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    frequency: Frequency
    pay_begin: InputDate
    pay_end: InputDate
    first_check: InputDate
    benefits_start: InputDate
    employee_count: int = Field(..., ge=0)
    service_model: ServiceModel = ServiceModel.CORE
    early_access: EarlyAccessOption = EarlyAccessOption.NONE

    @classmethod
    def from_strings(
        cls,
        frequency: str,
        pay_begin: DateLike,
        pay_end: DateLike,
        first_check: DateLike,
        benefits_start: DateLike,
        employee_count: int,
        service_model: str = ServiceModel.CORE.value,
        early_access: str = EarlyAccessOption.NONE.value,
    ) -> "CalendarInputs":
        """Build inputs from ISO date strings.

        Raises:
            InvalidDateFormat: If any date is not yyyy-MM-dd.
        """
        return cls(
            frequency=Frequency(frequency),
            pay_begin=parse_date(pay_begin),
            pay_end=parse_date(pay_end),
            first_check=parse_date(first_check),
            benefits_start=parse_date(benefits_start),
            employee_count=employee_count,
            service_model=ServiceModel(service_model),
            early_access=EarlyAccessOption(early_access),
        )


class Period(BaseModel):
    """One pay period. Only the first period of a calendar carries a deadline."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    begin: date
    end: date
    check: date
    benefits_start: date
    deadline: Optional[date] = None

    @property
    def length_days(self) -> int:
        """Inclusive length in calendar days."""
        return (self.end - self.begin).days + 1


LabelMap = Dict[str, List[str]]


class CalendarResult(BaseModel):
    """Everything a presentation layer needs to render a calendar."""

    model_config = ConfigDict(extra="forbid")

    inputs: CalendarInputs
    periods: List[Period]
    label_map: LabelMap
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    early_access_date: Optional[date] = None
    deadline_offset: Optional[int] = Field(
        default=None, description="Tiered business-day offset (None if custom timeline)"
    )

    @property
    def deadline(self) -> Optional[date]:
        return self.periods[0].deadline if self.periods else None

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        """JSON-ready dict with ISO date strings."""
        data = self.model_dump(mode="json")
        data["deadline"] = format_date(self.deadline) if self.deadline else None
        data["valid"] = self.is_valid
        return data

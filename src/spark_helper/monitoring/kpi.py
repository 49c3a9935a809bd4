"""
KPI tests: a named numeric observation checked against a threshold.

A KpiTest is immutable and validated at construction. Evaluating it is
stateless; the monitor turns a batch of tests into a report section:

    	KPI: pctOfWhatever
    		Value: 0.06%
    		Must be less than 0.1%
    		Validated: true
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, List, NamedTuple, Optional

from ..validation import InvalidParameterError
from .report import ReportLine


class Comparator(str, Enum):
    """How the observed value is compared to the threshold."""
    GREATER_THAN = "greater-than"
    LESS_THAN = "less-than"
    EQUAL_TO = "equal-to"

    @property
    def sentence(self) -> str:
        return self.value.replace("-", " ")


class Unit(str, Enum):
    """Unit of a KPI value; percentages are printed with a ``%`` suffix."""
    PERCENTAGE = "pct"
    RAW_NUMBER = "nbr"


def _quoted_choices(enum_cls) -> List[str]:
    return [f'"{member.value}"' for member in enum_cls]


def _parse_comparator(comparator: Any) -> Comparator:
    try:
        return Comparator(comparator)
    except ValueError:
        first, second, third = _quoted_choices(Comparator)
        raise InvalidParameterError(
            f"The comparator can only be {first}, {second} or {third}, "
            f'but you used: "{comparator}".',
            field_name="comparator",
            value=comparator,
        )


def _parse_unit(unit: Any) -> Unit:
    try:
        return Unit(unit)
    except ValueError:
        percentage, raw_number = _quoted_choices(Unit)
        raise InvalidParameterError(
            f'The unit can only be {percentage} or {raw_number}, but you used: "{unit}".',
            field_name="unit",
            value=unit,
        )


def _parse_number(number: Any, field_name: str) -> float:
    try:
        return float(number)
    except (TypeError, ValueError):
        raise InvalidParameterError(
            f'The {field_name} must be a number, but you used: "{number}".',
            field_name=field_name,
            value=number,
        )


def _format_number(number: float) -> str:
    return repr(float(number))


@dataclass(frozen=True)
class KpiResult:
    """Outcome of one KPI evaluation, as kept in the KPI history."""

    evaluated_at: datetime
    suite: str
    name: str
    value: float
    comparator: str
    threshold: float
    unit: str
    validated: bool


@dataclass(frozen=True)
class KpiTest:
    """
    A KPI to validate against a threshold.

    Args:
        name: KPI name, as shown in the report
        value: Observed value
        comparator: "greater-than", "less-than" or "equal-to"
        threshold: Value the observation is compared to
        unit: "pct" for percentages, "nbr" for raw numbers

    Raises:
        InvalidParameterError: If the comparator or the unit is not one of the
            recognized values, or if the value or threshold is not a number
    """

    name: str
    value: float
    comparator: Comparator
    threshold: float
    unit: Unit

    def __post_init__(self):
        object.__setattr__(self, "comparator", _parse_comparator(self.comparator))
        object.__setattr__(self, "unit", _parse_unit(self.unit))
        object.__setattr__(self, "value", _parse_number(self.value, "value"))
        object.__setattr__(self, "threshold", _parse_number(self.threshold, "threshold"))

    def evaluate(self) -> bool:
        """Return whether the observed value satisfies the threshold."""
        if self.comparator is Comparator.GREATER_THAN:
            return self.value > self.threshold
        elif self.comparator is Comparator.LESS_THAN:
            return self.value < self.threshold
        return self.value == self.threshold

    def _with_unit(self, number: float) -> str:
        suffix = "%" if self.unit is Unit.PERCENTAGE else ""
        return _format_number(number) + suffix

    def report_lines(self) -> List[ReportLine]:
        return [
            ReportLine(f"KPI: {self.name}", indent=1),
            ReportLine(f"Value: {self._with_unit(self.value)}", indent=2),
            ReportLine(
                f"Must be {self.comparator.sentence} {self._with_unit(self.threshold)}",
                indent=2,
            ),
            ReportLine(f"Validated: {str(self.evaluate()).lower()}", indent=2),
        ]

    def format(self) -> str:
        """Return the four-line report block of this KPI (no trailing newline)."""
        return "\n".join(line.render() for line in self.report_lines())

    def to_result(self, suite: str, evaluated_at: datetime) -> KpiResult:
        return KpiResult(
            evaluated_at=evaluated_at,
            suite=suite,
            name=self.name,
            value=self.value,
            comparator=self.comparator.value,
            threshold=self.threshold,
            unit=self.unit.value,
            validated=self.evaluate(),
        )


class KpiBuildResult(NamedTuple):
    """Either a constructed KpiTest or the reason it could not be built."""
    test: Optional[KpiTest]
    error: Optional[InvalidParameterError]

    @property
    def ok(self) -> bool:
        return self.error is None


def build_kpi_test(
    name: str, value: float, comparator: Any, threshold: float, unit: Any
) -> KpiBuildResult:
    """
    Build a KpiTest without raising.

    Useful when KPI definitions come from user input (e.g. a config file) and
    invalid ones should be reported rather than abort the job.
    """
    try:
        return KpiBuildResult(KpiTest(name, value, comparator, threshold, unit), None)
    except InvalidParameterError as e:
        return KpiBuildResult(None, e)

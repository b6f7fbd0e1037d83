"""Value types shared by the loader, comparator, aggregator and report writer."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any


class Classification(str, Enum):
    """Outcome of comparing one metric against its baseline."""

    REGRESSION = "regression"
    IMPROVEMENT = "improvement"
    STABLE = "stable"
    MISSING_DATA = "missing_data"
    INVALID_DATA = "invalid_data"


@dataclass(frozen=True)
class MetricRecord:
    """A single measurement as written by a benchmark run.

    ``value`` keeps the textual form the number had in the source JSON so
    that ``1.50`` is reported as ``1.50`` and not ``1.5``.
    """

    test_name: str
    metric: str
    value: str | None

    @property
    def key(self) -> tuple[str, str]:
        return (self.test_name, self.metric)

    def to_dict(self) -> dict[str, Any]:
        return {"test_name": self.test_name, "metric": self.metric, "value": self.value}


_HUNDRED = Decimal(100)
_TWO_PLACES = Decimal("0.01")


def format_percent(percent_change: Decimal | None) -> str:
    """Render a fractional change as a percentage with two decimals."""
    if percent_change is None:
        return "n/a"
    percent = (percent_change * _HUNDRED).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)
    if percent == 0:
        percent = abs(percent)
    return f"{percent:.2f}"


@dataclass(frozen=True)
class ComparisonOutcome:
    """Classification of one (test, metric) pair for this run."""

    test_name: str
    metric: str
    baseline_value: str | None
    current_value: str | None
    percent_change: Decimal | None
    classification: Classification

    @property
    def key(self) -> str:
        return f"{self.test_name}.{self.metric}"

    def describe(self) -> str:
        baseline = self.baseline_value if self.baseline_value is not None else "missing"
        current = self.current_value if self.current_value is not None else "missing"
        if self.percent_change is None:
            return f"{self.key}: {baseline} -> {current} ({self.classification.value})"
        return (
            f"{self.key}: {baseline} -> {current} "
            f"({format_percent(self.percent_change)}% change)"
        )


@dataclass(frozen=True)
class ReportSummary:
    total: int = 0
    regressions: int = 0
    improvements: int = 0
    stable: int = 0
    missing_data: int = 0
    invalid_data: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "total_tests": self.total,
            "regressions": self.regressions,
            "improvements": self.improvements,
            "stable": self.stable,
            "missing_data": self.missing_data,
            "invalid_data": self.invalid_data,
        }


@dataclass(frozen=True)
class Report:
    """Final, immutable result of an ``analyze`` run."""

    timestamp: str
    baseline_source: str
    results_source: str
    regression_threshold: float
    improvement_threshold: float
    summary: ReportSummary = field(default_factory=ReportSummary)
    regressions: tuple[str, ...] = ()
    improvements: tuple[str, ...] = ()
    stable: tuple[str, ...] = ()
    missing_data: tuple[str, ...] = ()
    invalid_data: tuple[str, ...] = ()

    @property
    def passed(self) -> bool:
        return self.summary.regressions == 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "timestamp": self.timestamp,
            "baseline_file": self.baseline_source,
            "current_results_dir": self.results_source,
            "regression_threshold": self.regression_threshold,
            "improvement_threshold": self.improvement_threshold,
            "summary": self.summary.to_dict(),
            "regressions": list(self.regressions),
            "improvements": list(self.improvements),
            "stable": list(self.stable),
            "missing_data": list(self.missing_data),
            "invalid_data": list(self.invalid_data),
        }

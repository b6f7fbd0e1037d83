"""Threshold-based metric classification.

A metric is compared against its baseline by fractional change::

    percent_change = (current - baseline) / baseline

Whether a positive change is good or bad depends on the metric name: names
containing ``time`` or ``duration`` are lower-is-better, everything else
(throughput, counts, rates) is higher-is-better. Thresholds are strict, so a
change exactly equal to a threshold is stable.

Values must be non-negative decimals written as digits with an optional
fractional part (``12``, ``12.``, ``12.5``). Signs, exponents and leading dots
are rejected as ``invalid_data``.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

from .error_handling import ConfigurationError
from .models import Classification, ComparisonOutcome

NON_NEGATIVE_DECIMAL = re.compile(r"[0-9]+\.?[0-9]*")

LOWER_IS_BETTER_MARKERS = ("time", "duration")

_ZERO = Decimal(0)


def is_lower_better(metric_name: str) -> bool:
    """True for latency-style metrics, decided by a case-sensitive substring."""
    return any(marker in metric_name for marker in LOWER_IS_BETTER_MARKERS)


def parse_non_negative_decimal(value: str | None) -> Decimal | None:
    """Parse ``value`` as a non-negative decimal, ``None`` if it is not one."""
    if value is None or not NON_NEGATIVE_DECIMAL.fullmatch(value):
        return None
    try:
        return Decimal(value)
    except InvalidOperation:
        return None


def percent_change(baseline: Decimal, current: Decimal) -> Decimal:
    """Exact fractional change from ``baseline`` to ``current``.

    A non-positive baseline yields 0 rather than dividing by zero.
    """
    if baseline <= _ZERO:
        return _ZERO
    return (current - baseline) / baseline


def classify(
    metric_name: str,
    change: Decimal,
    regression_threshold: Decimal,
    improvement_threshold: Decimal,
) -> Classification:
    """Map a fractional change onto regression / improvement / stable."""
    if is_lower_better(metric_name):
        if change > regression_threshold:
            return Classification.REGRESSION
        if change < -improvement_threshold:
            return Classification.IMPROVEMENT
        return Classification.STABLE

    if change < -regression_threshold:
        return Classification.REGRESSION
    if change > improvement_threshold:
        return Classification.IMPROVEMENT
    return Classification.STABLE


def compare_values(
    metric_name: str,
    baseline_value: str | None,
    current_value: str | None,
    regression_threshold: float = 0.10,
    improvement_threshold: float = 0.05,
) -> tuple[Classification, Decimal | None]:
    """Classify one metric. Returns ``(classification, percent_change)``.

    ``percent_change`` is ``None`` for ``missing_data`` and ``invalid_data``.
    """
    if baseline_value is None or current_value is None:
        return Classification.MISSING_DATA, None

    baseline = parse_non_negative_decimal(baseline_value)
    current = parse_non_negative_decimal(current_value)
    if baseline is None or current is None:
        return Classification.INVALID_DATA, None

    change = percent_change(baseline, current)
    classification = classify(
        metric_name,
        change,
        _as_decimal(regression_threshold),
        _as_decimal(improvement_threshold),
    )
    return classification, change


def _as_decimal(value: float | Decimal) -> Decimal:
    # str() keeps 0.1 as Decimal("0.1") instead of its binary expansion
    return value if isinstance(value, Decimal) else Decimal(str(value))


class MetricComparator:
    """Classifies metrics with thresholds fixed for the whole run."""

    def __init__(
        self,
        regression_threshold: float = 0.10,
        improvement_threshold: float = 0.05,
    ):
        if regression_threshold < 0 or improvement_threshold < 0:
            raise ConfigurationError("Thresholds must be non-negative fractions")
        self.regression_threshold = regression_threshold
        self.improvement_threshold = improvement_threshold

    def compare(
        self,
        test_name: str,
        metric: str,
        baseline_value: str | None,
        current_value: str | None,
    ) -> ComparisonOutcome:
        classification, change = compare_values(
            metric,
            baseline_value,
            current_value,
            self.regression_threshold,
            self.improvement_threshold,
        )
        return ComparisonOutcome(
            test_name=test_name,
            metric=metric,
            baseline_value=baseline_value,
            current_value=current_value,
            percent_change=change,
            classification=classification,
        )

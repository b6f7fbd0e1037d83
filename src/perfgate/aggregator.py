"""Accumulates comparison outcomes into the run's report."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime

from .error_handling import log_warning_with_context
from .models import Classification, ComparisonOutcome, Report, ReportSummary, format_percent

logger = logging.getLogger(__name__)


class ReportAggregator:
    """Owns the per-category lists for one analysis run.

    Outcomes go in through ``record``; ``build_report`` hands out an
    immutable ``Report`` snapshot once the scan is finished.
    """

    def __init__(self) -> None:
        self._entries: dict[Classification, list[str]] = {
            classification: [] for classification in Classification
        }
        self.total = 0

    def record(self, outcome: ComparisonOutcome) -> None:
        self.total += 1
        classification = outcome.classification
        self._entries[classification].append(outcome.describe())

        change = format_percent(outcome.percent_change)
        if classification is Classification.REGRESSION:
            logger.error(f"📉 REGRESSION: {outcome.key} - {change}% change")
        elif classification is Classification.IMPROVEMENT:
            logger.info(f"📈 IMPROVEMENT: {outcome.key} - {change}% change")
        elif classification is Classification.MISSING_DATA:
            log_warning_with_context(
                f"Missing data for {outcome.key}",
                {"baseline": outcome.baseline_value, "current": outcome.current_value},
                logger,
            )
        elif classification is Classification.INVALID_DATA:
            log_warning_with_context(
                f"Invalid numeric data for {outcome.key}",
                {"baseline": outcome.baseline_value, "current": outcome.current_value},
                logger,
            )

    def record_all(self, outcomes: Iterable[ComparisonOutcome]) -> None:
        for outcome in outcomes:
            self.record(outcome)

    def count(self, classification: Classification) -> int:
        return len(self._entries[classification])

    def entries(self, classification: Classification) -> tuple[str, ...]:
        return tuple(self._entries[classification])

    @property
    def has_regressions(self) -> bool:
        return self.count(Classification.REGRESSION) > 0

    @property
    def exit_code(self) -> int:
        """Gate status: 1 iff any regression was recorded.

        Missing and invalid data points are reported but never fail the gate.
        """
        return 1 if self.has_regressions else 0

    def summary(self) -> ReportSummary:
        return ReportSummary(
            total=self.total,
            regressions=self.count(Classification.REGRESSION),
            improvements=self.count(Classification.IMPROVEMENT),
            stable=self.count(Classification.STABLE),
            missing_data=self.count(Classification.MISSING_DATA),
            invalid_data=self.count(Classification.INVALID_DATA),
        )

    def build_report(
        self,
        baseline_source: str,
        results_source: str,
        regression_threshold: float,
        improvement_threshold: float,
        timestamp: datetime | None = None,
    ) -> Report:
        if timestamp is None:
            timestamp = datetime.now().astimezone()

        return Report(
            timestamp=timestamp.isoformat(timespec="seconds"),
            baseline_source=baseline_source,
            results_source=results_source,
            regression_threshold=regression_threshold,
            improvement_threshold=improvement_threshold,
            summary=self.summary(),
            regressions=self.entries(Classification.REGRESSION),
            improvements=self.entries(Classification.IMPROVEMENT),
            stable=self.entries(Classification.STABLE),
            missing_data=self.entries(Classification.MISSING_DATA),
            invalid_data=self.entries(Classification.INVALID_DATA),
        )

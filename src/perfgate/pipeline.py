"""Regression gate pipeline.

    start -> check dependencies
          -> no baseline:  bootstrap baseline from current results -> exit 0
          -> baseline:     load results (none: fatal) -> compare every metric
                           -> aggregate -> write report -> exit 0 / 1

Fatal conditions raise ``PerfGateError`` subclasses. A problem with a single
metric never stops the scan; it is recorded as missing or invalid data.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from rich.console import Console

from .aggregator import ReportAggregator
from .baseline import BaselineStore
from .comparator import MetricComparator
from .config import RegressionConfig
from .error_handling import NoResultFilesError, log_info_with_context, log_warning_with_context
from .models import Classification, ComparisonOutcome, MetricRecord, Report
from .report import ReportGenerator
from .results import ResultLoader
from .system_tools import DependencyStatus, check_dependencies

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """What an ``analyze`` run produced."""

    exit_code: int
    report: Report | None = None
    report_path: Path | None = None
    bootstrapped: bool = False
    baseline_records: list[MetricRecord] = field(default_factory=list)


class RegressionPipeline:
    """Runs ``analyze`` and ``create-baseline`` for one configuration."""

    def __init__(
        self,
        config: RegressionConfig,
        generator: ReportGenerator | None = None,
        console: Console | None = None,
    ):
        self.config = config
        self.console = console or Console()
        self.generator = generator or ReportGenerator(console=self.console)
        self.loader = ResultLoader(config.results_dir, exclude=config.generated_files)
        self.baseline = BaselineStore(config.baseline_path)
        self._status: DependencyStatus | None = None

    def check_dependencies(self) -> DependencyStatus:
        if self._status is None:
            self._status = check_dependencies()
        return self._status

    def create_baseline(self) -> list[MetricRecord]:
        """Snapshot the current results as the new baseline."""
        self.check_dependencies()
        log_info_with_context(
            "Creating baseline from current results",
            {"results_dir": self.config.results_dir, "baseline": self.config.baseline_path},
            logger,
        )
        records = self.baseline.rebuild(self.loader)
        if not records:
            log_warning_with_context(
                "Baseline created without any metric records",
                {"results_dir": self.config.results_dir},
                logger,
            )
        return records

    def analyze(self) -> PipelineResult:
        """Compare current results to the baseline and write the report.

        Raises:
            DependencyError: If JSON processing is unavailable
            BaselineError: If the baseline exists but cannot be read
            NoResultFilesError: If there is nothing to analyze
            ReportWriteError: If the report cannot be written
        """
        self.check_dependencies()
        config = self.config

        log_info_with_context(
            "Analyzing benchmark results",
            {
                "baseline": config.baseline_path,
                "results_dir": config.results_dir,
                "regression_threshold": config.regression_threshold,
                "improvement_threshold": config.improvement_threshold,
            },
            logger,
        )

        if not self.baseline.exists():
            log_warning_with_context(
                "Baseline file not found, bootstrapping from current results",
                {"baseline": config.baseline_path},
                logger,
            )
            records = self.create_baseline()
            return PipelineResult(exit_code=0, bootstrapped=True, baseline_records=records)

        result_files = self.loader.result_files()
        if not result_files:
            raise NoResultFilesError(
                f"No benchmark result files found in {config.results_dir}",
                context={"results_dir": config.results_dir},
            )

        comparator = MetricComparator(config.regression_threshold, config.improvement_threshold)
        aggregator = ReportAggregator()

        for path in result_files:
            test_name = self.loader.test_name(path)
            for metric in self.loader.metric_names(path):
                aggregator.record(self._compare_one(comparator, path, test_name, metric))

        report = aggregator.build_report(
            baseline_source=str(config.baseline_path),
            results_source=str(config.results_dir),
            regression_threshold=config.regression_threshold,
            improvement_threshold=config.improvement_threshold,
        )
        report_path = self.generator.write(report, config.report_path)

        if aggregator.has_regressions:
            logger.error(f"❌ Found {report.summary.regressions} performance regressions")
        else:
            logger.info("✅ No performance regressions detected")

        return PipelineResult(
            exit_code=aggregator.exit_code,
            report=report,
            report_path=report_path,
        )

    def _compare_one(
        self, comparator: MetricComparator, path: Path, test_name: str, metric: str
    ) -> ComparisonOutcome:
        baseline_value = self.baseline.lookup(test_name, metric)
        current_value = self.loader.last_value(path, metric)
        try:
            return comparator.compare(test_name, metric, baseline_value, current_value)
        except Exception as e:  # one bad data point must not abort the scan
            log_warning_with_context(
                f"Comparison failed for {test_name}.{metric}", {"error": e}, logger
            )
            return ComparisonOutcome(
                test_name=test_name,
                metric=metric,
                baseline_value=baseline_value,
                current_value=current_value,
                percent_change=None,
                classification=Classification.INVALID_DATA,
            )

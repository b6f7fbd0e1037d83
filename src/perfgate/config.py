"""Configuration settings for perfgate."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path

from .error_handling import ConfigurationError

DEFAULT_RESULTS_DIR = Path("benchmark_results")
BASELINE_FILENAME = "baseline.json"
REPORT_FILENAME = "regression_report.json"

# Environment variables read by ``RegressionConfig.from_env``. The PERFGATE_
# prefixed form takes precedence over the bare name.
ENV_VARS = {
    "baseline_file": "BASELINE_FILE",
    "results_dir": "CURRENT_RESULTS_DIR",
    "output_file": "OUTPUT_FILE",
    "regression_threshold": "REGRESSION_THRESHOLD",
    "improvement_threshold": "IMPROVEMENT_THRESHOLD",
}
ENV_PREFIX = "PERFGATE_"

THRESHOLDS = {
    "regression": 0.10,  # 10% worse is a regression
    "improvement": 0.05,  # 5% better is an improvement
}


@dataclass(frozen=True)
class RegressionConfig:
    """Paths and thresholds fixed for a single gate run."""

    results_dir: Path = DEFAULT_RESULTS_DIR
    baseline_file: Path | None = None
    output_file: Path | None = None
    regression_threshold: float = THRESHOLDS["regression"]
    improvement_threshold: float = THRESHOLDS["improvement"]
    exclude: tuple[Path, ...] = field(default=(), compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "results_dir", Path(self.results_dir))
        for name in ("baseline_file", "output_file"):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, Path(value))

        for name in ("regression_threshold", "improvement_threshold"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigurationError(f"{name} must be a number, got {value!r}")
            if value < 0:
                raise ConfigurationError(f"{name} must be non-negative, got {value}")

    # Baseline and report default to living beside the results
    @property
    def baseline_path(self) -> Path:
        return self.baseline_file or self.results_dir / BASELINE_FILENAME

    @property
    def report_path(self) -> Path:
        return self.output_file or self.results_dir / REPORT_FILENAME

    @property
    def generated_files(self) -> tuple[Path, ...]:
        """Files written by perfgate that must never be read back as results."""
        return (self.baseline_path, self.report_path, *self.exclude)

    def with_overrides(self, **overrides: object) -> RegressionConfig:
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if not changes:
            return self
        return replace(self, **changes)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> RegressionConfig:
        """Build a config from environment variables, falling back to defaults."""
        if environ is None:
            environ = os.environ

        values: dict[str, object] = {}
        for attr, name in ENV_VARS.items():
            raw = (environ.get(ENV_PREFIX + name) or environ.get(name) or "").strip()
            if not raw:
                continue
            if attr.endswith("_threshold"):
                values[attr] = _parse_threshold(name, raw)
            else:
                values[attr] = Path(raw)

        return cls(**values)


def _parse_threshold(name: str, raw: str) -> float:
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"{name} must be a fraction such as 0.10, got {raw!r}", cause=e
        ) from e

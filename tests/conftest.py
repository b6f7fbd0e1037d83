import json
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Helpers for laying out a benchmark results directory
# ---------------------------------------------------------------------------


def write_result(results_dir: Path, test_name: str, *records: dict, shape: str = "jsonl") -> Path:
    """Write ``records`` to ``<results_dir>/<test_name>.json`` in the given shape.

    ``shape`` is one of ``object`` (single record), ``array`` or ``jsonl``
    (pretty-printed objects appended one after another, as the benchmark
    helpers do).
    """
    results_dir.mkdir(parents=True, exist_ok=True)
    path = results_dir / f"{test_name}.json"
    if shape == "object":
        assert len(records) == 1
        text = json.dumps(records[0])
    elif shape == "array":
        text = json.dumps(list(records), indent=2)
    elif shape == "jsonl":
        text = "".join(json.dumps(r, indent=2) + "\n" for r in records)
    else:
        raise ValueError(shape)
    path.write_text(text)
    return path


def write_baseline(path: Path, *records: dict) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(list(records), indent=2))
    return path


@pytest.fixture
def results_dir(tmp_path: Path) -> Path:
    path = tmp_path / "benchmark_results"
    path.mkdir()
    return path


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove perfgate environment overrides inherited from the caller."""
    for name in (
        "BASELINE_FILE",
        "CURRENT_RESULTS_DIR",
        "OUTPUT_FILE",
        "REGRESSION_THRESHOLD",
        "IMPROVEMENT_THRESHOLD",
    ):
        monkeypatch.delenv(name, raising=False)
        monkeypatch.delenv(f"PERFGATE_{name}", raising=False)

"""Benchmark result file loading.

Each benchmark test writes ``<test_name>.json`` into the results directory.
Three shapes are accepted for the file body:

- a single JSON object: ``{"metric": "duration_ms", "value": 115}``
- a JSON array of such objects
- a stream of JSON objects separated by whitespace (JSONL). Objects may span
  several lines, which is how the benchmark helpers append pretty-printed
  records.

Loading never raises for a missing or malformed file. Callers get an empty
record list and the comparator later reports the affected metrics as
``missing_data``.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from .error_handling import log_warning_with_context
from .models import MetricRecord

logger = logging.getLogger(__name__)

RESULT_SUFFIX = ".json"
TEMP_MARKER = ".tmp_"

_WHITESPACE = re.compile(r"\s*")


class NumberText(str):
    """A JSON number kept in the spelling it had in the source file."""

    def to_number(self) -> int | float:
        try:
            return int(self)
        except ValueError:
            return float(self)


_DECODER = json.JSONDecoder(parse_int=NumberText, parse_float=NumberText)


def decode_documents(text: str) -> list[Any]:
    """Decode every top-level JSON value in ``text``.

    Raises:
        json.JSONDecodeError: If any part of the text is not valid JSON
    """
    documents = []
    idx = _WHITESPACE.match(text, 0).end()
    while idx < len(text):
        document, idx = _DECODER.raw_decode(text, idx)
        documents.append(document)
        idx = _WHITESPACE.match(text, idx).end()
    return documents


def flatten_documents(documents: Iterable[Any]) -> list[dict[str, Any]]:
    """Expand top-level arrays and keep only JSON objects."""
    objects = []
    for document in documents:
        items = document if isinstance(document, list) else [document]
        objects.extend(item for item in items if isinstance(item, dict))
    return objects


def value_text(value: Any) -> str | None:
    """Return the textual form of a record value, ``None`` when absent."""
    if value is None:
        return None
    if isinstance(value, str):
        return str(value)
    # bools, objects and arrays are never numeric; keep a readable form
    return json.dumps(value)


class ResultLoader:
    """Reads per-test result files from a results directory."""

    def __init__(self, results_dir: Path, exclude: Iterable[Path] = ()):
        self.results_dir = Path(results_dir)
        self._excluded = {self._normalize(path) for path in exclude}
        self._cache: dict[Path, list[dict[str, Any]]] = {}

    @staticmethod
    def _normalize(path: Path) -> Path:
        return Path(path).resolve()

    def result_files(self) -> list[Path]:
        """List result files under the directory, sorted for stable reports."""
        if not self.results_dir.is_dir():
            logger.debug(f"Results directory does not exist: {self.results_dir}")
            return []

        files = []
        for path in sorted(self.results_dir.rglob(f"*{RESULT_SUFFIX}")):
            if not path.is_file() or TEMP_MARKER in path.name:
                continue
            if self._normalize(path) in self._excluded:
                logger.debug(f"Skipping generated file: {path}")
                continue
            files.append(path)
        return files

    @staticmethod
    def test_name(path: Path) -> str:
        return Path(path).stem

    def load_objects(self, path: Path) -> list[dict[str, Any]]:
        """Return every JSON object in ``path`` in file order."""
        path = Path(path)
        if path in self._cache:
            return self._cache[path]

        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug(f"Result file not found: {path}")
            return []
        except (OSError, UnicodeDecodeError) as e:
            log_warning_with_context(
                "Could not read result file", {"file": path, "error": e}, logger
            )
            return []

        try:
            objects = flatten_documents(decode_documents(text))
        except json.JSONDecodeError as e:
            log_warning_with_context(
                "Malformed result file ignored", {"file": path, "error": e}, logger
            )
            objects = []

        self._cache[path] = objects
        return objects

    def load_records(self, path: Path) -> list[MetricRecord]:
        """Return the metric records of ``path``; objects without a metric are skipped.

        Records are keyed by the file stem. A ``test_name`` field inside the
        file does not change which baseline entry a metric is compared with.
        """
        test_name = self.test_name(path)
        records = []
        for obj in self.load_objects(path):
            metric = obj.get("metric")
            if not isinstance(metric, str) or not metric:
                continue
            records.append(MetricRecord(test_name, metric, value_text(obj.get("value"))))
        return records

    def metric_names(self, path: Path) -> list[str]:
        """Distinct metric names in ``path`` in order of first appearance."""
        names = dict.fromkeys(record.metric for record in self.load_records(path))
        return list(names)

    def last_value(self, path: Path, metric: str) -> str | None:
        """Value of the last record for ``metric``; later records win."""
        value = None
        for record in self.load_records(path):
            if record.metric == metric:
                value = record.value
        return value

    def current_value(self, test_name: str, metric: str) -> str | None:
        """Look up ``metric`` in ``<results_dir>/<test_name>.json``."""
        return self.last_value(self.results_dir / f"{test_name}{RESULT_SUFFIX}", metric)

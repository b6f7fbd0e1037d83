"""Baseline snapshot storage.

The baseline is a flat JSON array of ``{"test_name", "metric", "value"}``
objects. It is not versioned: ``rebuild`` replaces it wholesale with the
records found in the current results directory.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .error_handling import BaselineError, BaselineWriteError, error_context
from .io import write_json
from .models import MetricRecord
from .results import (
    NumberText,
    ResultLoader,
    decode_documents,
    flatten_documents,
    value_text,
)

logger = logging.getLogger(__name__)


class BaselineStore:
    """Loads and looks up reference values by ``(test_name, metric)``."""

    def __init__(self, baseline_path: Path):
        self.baseline_path = Path(baseline_path)
        self._records: list[MetricRecord] | None = None
        self._index: dict[tuple[str, str], str | None] = {}

    def exists(self) -> bool:
        return self.baseline_path.is_file()

    def records(self) -> list[MetricRecord]:
        """Baseline entries in file order; empty when no baseline exists.

        Raises:
            BaselineError: If the file exists but is not a JSON array of objects
        """
        if self._records is None:
            self._load()
        return list(self._records)

    def _load(self) -> None:
        records: list[MetricRecord] = []
        if self.exists():
            with error_context(
                "read baseline", BaselineError, context={"path": self.baseline_path}, logger=logger
            ):
                text = self.baseline_path.read_text(encoding="utf-8")
                documents = decode_documents(text)

            if len(documents) != 1 or not isinstance(documents[0], list):
                raise BaselineError(
                    f"Baseline file must contain a single JSON array: {self.baseline_path}"
                )

            for obj in flatten_documents(documents):
                test_name = obj.get("test_name")
                metric = obj.get("metric")
                if not isinstance(test_name, str) or not isinstance(metric, str):
                    logger.debug(f"Ignoring baseline entry without test_name/metric: {obj}")
                    continue
                records.append(
                    MetricRecord(str(test_name), str(metric), value_text(obj.get("value")))
                )

            logger.info(f"Loaded {len(records)} baseline entries from {self.baseline_path}")
        else:
            logger.info(f"No baseline found at {self.baseline_path}")

        self._records = records
        # Later entries overwrite earlier ones: last match wins
        self._index = {record.key: record.value for record in records}

    def lookup(self, test_name: str, metric: str) -> str | None:
        """Reference value for ``(test_name, metric)``, ``None`` when absent."""
        if self._records is None:
            self._load()
        return self._index.get((test_name, metric))

    def rebuild(self, loader: ResultLoader) -> list[MetricRecord]:
        """Replace the baseline with every record of the current results.

        Objects are written as found, extra keys included, except that
        ``test_name`` is always set to the result file's stem. That is the key
        ``analyze`` looks values up by.

        Raises:
            BaselineWriteError: If the baseline file cannot be written
        """
        entries: list[dict[str, Any]] = []
        for path in loader.result_files():
            test_name = loader.test_name(path)
            for obj in loader.load_objects(path):
                if obj.get("test_name") not in (None, test_name):
                    logger.debug(
                        f"Replacing test_name {obj['test_name']!r} with {test_name!r} in {path}"
                    )
                entries.append({**obj, "test_name": test_name})

        with error_context(
            "write baseline",
            BaselineWriteError,
            context={"path": self.baseline_path},
            logger=logger,
        ):
            write_json(self.baseline_path, _restore_numbers(entries))

        logger.info(f"Baseline created: {self.baseline_path} ({len(entries)} entries)")
        self._records = None
        return self.records()


def _restore_numbers(value: Any) -> Any:
    """Turn numbers kept as text by the result decoder back into JSON numbers.

    A number is written back as a JSON number only when ``json`` reproduces
    its exact spelling. Anything else (``1.50``, ``1e3``, more digits than a
    float holds) is stored as a string, so the baseline value compares equal
    to the result it was taken from.
    """
    if isinstance(value, dict):
        return {k: _restore_numbers(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_restore_numbers(v) for v in value]
    if isinstance(value, NumberText):
        number = value.to_number()
        return number if json.dumps(number) == value else str(value)
    return value

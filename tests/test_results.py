"""Tests for result file loading across the three supported file shapes."""

import json
from pathlib import Path

import pytest

from conftest import write_result
from perfgate.results import ResultLoader, decode_documents, value_text


class TestDecodeDocuments:
    def test_single_object(self):
        assert decode_documents('{"metric": "a", "value": 1}') == [{"metric": "a", "value": "1"}]

    def test_concatenated_multiline_objects(self):
        text = '{\n  "metric": "a",\n  "value": 1\n}\n{\n  "metric": "a",\n  "value": 2.50\n}\n'
        documents = decode_documents(text)
        assert [d["value"] for d in documents] == ["1", "2.50"]

    def test_empty_text(self):
        assert decode_documents("  \n ") == []

    def test_trailing_garbage_is_an_error(self):
        with pytest.raises(json.JSONDecodeError):
            decode_documents('{"metric": "a"} oops')


class TestValueText:
    def test_numbers_keep_source_spelling(self):
        [doc] = decode_documents('{"value": 1.50}')
        assert value_text(doc["value"]) == "1.50"

    def test_strings_pass_through(self):
        assert value_text("42") == "42"

    def test_null_is_absent(self):
        assert value_text(None) is None

    def test_non_numeric_json_values(self):
        assert value_text(True) == "true"
        assert value_text([1]) == "[1]"


class TestResultLoader:
    @pytest.mark.parametrize("shape", ["object", "array", "jsonl"])
    def test_single_record_in_every_shape(self, results_dir: Path, shape: str):
        path = write_result(results_dir, "ingest", {"metric": "duration_ms", "value": 115}, shape=shape)
        loader = ResultLoader(results_dir)

        assert loader.metric_names(path) == ["duration_ms"]
        assert loader.last_value(path, "duration_ms") == "115"

    @pytest.mark.parametrize("shape", ["array", "jsonl"])
    def test_last_record_wins(self, results_dir: Path, shape: str):
        path = write_result(
            results_dir,
            "ingest",
            {"metric": "duration_ms", "value": 50},
            {"metric": "rows", "value": 10},
            {"metric": "duration_ms", "value": 60},
            shape=shape,
        )
        loader = ResultLoader(results_dir)

        assert loader.last_value(path, "duration_ms") == "60"
        assert loader.metric_names(path) == ["duration_ms", "rows"]

    def test_current_value_by_test_name(self, results_dir: Path):
        write_result(results_dir, "ingest", {"metric": "duration_ms", "value": "115"})
        loader = ResultLoader(results_dir)

        assert loader.current_value("ingest", "duration_ms") == "115"
        assert loader.current_value("ingest", "rows") is None
        assert loader.current_value("absent", "duration_ms") is None

    def test_malformed_file_yields_nothing(self, results_dir: Path):
        path = results_dir / "broken.json"
        path.write_text('{"metric": "duration_ms", "value": ')
        loader = ResultLoader(results_dir)

        assert loader.metric_names(path) == []
        assert loader.last_value(path, "duration_ms") is None

    def test_objects_without_metric_are_skipped(self, results_dir: Path):
        path = write_result(
            results_dir,
            "ingest",
            {"value": 1},
            {"metric": "", "value": 2},
            {"metric": "rows", "value": 3},
            shape="array",
        )
        assert ResultLoader(results_dir).metric_names(path) == ["rows"]

    def test_null_value_is_absent(self, results_dir: Path):
        path = write_result(results_dir, "ingest", {"metric": "rows", "value": None}, shape="object")
        assert ResultLoader(results_dir).last_value(path, "rows") is None

    def test_result_files_sorted_and_filtered(self, results_dir: Path):
        write_result(results_dir, "b_test", {"metric": "m", "value": 1})
        write_result(results_dir, "a_test", {"metric": "m", "value": 1})
        (results_dir / "notes.txt").write_text("not a result")
        (results_dir / "tmpabc.tmp_baseline.json").write_text("[]")
        baseline = results_dir / "baseline.json"
        baseline.write_text("[]")

        loader = ResultLoader(results_dir, exclude=[baseline])

        assert [p.name for p in loader.result_files()] == ["a_test.json", "b_test.json"]

    def test_result_files_recurse_into_subdirectories(self, results_dir: Path):
        write_result(results_dir / "nested", "deep", {"metric": "m", "value": 1})
        files = ResultLoader(results_dir).result_files()
        assert [ResultLoader.test_name(p) for p in files] == ["deep"]

    def test_missing_directory(self, tmp_path: Path):
        assert ResultLoader(tmp_path / "nope").result_files() == []

    def test_records_are_keyed_by_file_stem(self, results_dir: Path):
        path = write_result(
            results_dir,
            "ingest",
            {"metric": "rows", "value": 1},
            {"test_name": "other", "metric": "rows", "value": 2},
            {"test_name": None, "metric": "rows", "value": 3},
        )
        records = ResultLoader(results_dir).load_records(path)
        assert [(r.test_name, r.value) for r in records] == [
            ("ingest", "1"),
            ("ingest", "2"),
            ("ingest", "3"),
        ]

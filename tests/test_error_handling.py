"""Tests for the exception hierarchy and logging helpers."""

import logging

import pytest

from perfgate.error_handling import (
    BaselineError,
    BaselineWriteError,
    PerfGateError,
    ReportWriteError,
    error_context,
    handle_error,
    log_info_with_context,
    log_warning_with_context,
)


class TestPerfGateError:
    def test_message_includes_cause(self):
        error = PerfGateError("write failed", cause=OSError("disk full"))
        assert str(error) == "write failed (caused by: disk full)"

    def test_context_defaults_to_empty(self):
        assert PerfGateError("x").context == {}

    def test_hierarchy(self):
        assert issubclass(BaselineWriteError, BaselineError)
        assert issubclass(ReportWriteError, PerfGateError)


class TestHandleError:
    def test_reraises_transformed_error(self):
        original = ValueError("bad")
        with pytest.raises(ReportWriteError) as exc_info:
            handle_error(original, "write report", ReportWriteError, context={"path": "r.json"})

        error = exc_info.value
        assert error.cause is original
        assert exc_info.value.__cause__ is original
        assert error.context["path"] == "r.json"
        assert error.context["original_error_type"] == "ValueError"

    def test_logs_failure_at_error_level(self, caplog):
        with caplog.at_level(logging.ERROR):
            with pytest.raises(PerfGateError):
                handle_error(RuntimeError("boom"), "load baseline")

        assert "Load baseline failed: boom" in caplog.text
        assert caplog.records[-1].levelno == logging.ERROR


class TestErrorContext:
    def test_wraps_foreign_exceptions(self):
        with pytest.raises(BaselineError, match="Failed to read baseline"):
            with error_context("read baseline", BaselineError):
                raise OSError("nope")

    def test_passes_perfgate_errors_through(self):
        with pytest.raises(ReportWriteError):
            with error_context("read baseline", BaselineError):
                raise ReportWriteError("already typed")


class TestLogHelpers:
    def test_warning_with_context(self, caplog):
        with caplog.at_level(logging.WARNING):
            log_warning_with_context("Missing data", {"metric": "duration_ms"})
        assert "Missing data (context: metric=duration_ms)" in caplog.text

    def test_info_without_context(self, caplog):
        with caplog.at_level(logging.INFO):
            log_info_with_context("Analyzing")
        assert "Analyzing" in caplog.text

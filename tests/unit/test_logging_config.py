"""
Unit tests for logging setup
"""

import logging

import pytest

from edge_snapshot.logging_config import PerformanceLogger, configure_logging, setup_logging_from_config


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    logging.disable(logging.NOTSET)
    configure_logging()


class RecordingLogger:
    def __init__(self):
        self.calls = []

    def debug(self, event, **kw):
        self.calls.append(("debug", event, kw))

    def info(self, event, **kw):
        self.calls.append(("info", event, kw))


class TestConfigureLogging:
    def test_level(self):
        configure_logging(level="debug")
        assert logging.getLogger().level == logging.DEBUG

    def test_unknown_level_falls_back_to_warning(self):
        configure_logging(level="chatty")
        assert logging.getLogger().level == logging.WARNING

    def test_rotating_file(self, tmp_path):
        log_file = tmp_path / "logs" / "edge-snapshot.log"
        configure_logging(log_file=str(log_file))

        handlers = logging.getLogger().handlers
        assert len(handlers) == 2
        assert log_file.parent.is_dir()

    def test_debug_overrides_configured_level(self):
        setup_logging_from_config({"logging": {"level": "ERROR"}}, debug=True)
        assert logging.getLogger().level == logging.DEBUG

    def test_disabled(self):
        setup_logging_from_config({"logging": {"enabled": False}})
        assert logging.getLogger("edge_snapshot").isEnabledFor(logging.CRITICAL) is False


class TestPerformanceLogger:
    def test_success(self):
        log = RecordingLogger()
        with PerformanceLogger("get", logger=log) as perf:
            pass

        assert perf.duration >= 0
        assert [c[:2] for c in log.calls] == [("debug", "Operation started"), ("info", "Operation completed")]

    def test_failure_is_not_swallowed(self):
        log = RecordingLogger()
        with pytest.raises(RuntimeError):
            with PerformanceLogger("get", logger=log):
                raise RuntimeError("boom")

        assert log.calls[-1][1] == "Operation failed"
        assert log.calls[-1][2]["error"] == "boom"

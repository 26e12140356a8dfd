import logging

import pytest

from loopback_redirect.core.logging import (
    NOISY_LOGGERS,
    CorrelationFormatter,
    configure_root_logging,
    resolve_log_level,
    set_noisy_logger_levels,
)


def _record(msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestCorrelationFormatter:
    def test_adds_correlation_id(self):
        formatter = CorrelationFormatter("%(message)s")
        record = _record()
        record.correlation_id = "1234567890abcdef"

        assert formatter.format(record) == "[12345678] hello"

    def test_leaves_record_untouched(self):
        formatter = CorrelationFormatter("%(message)s")
        record = _record()
        record.correlation_id = "1234567890abcdef"

        formatter.format(record)

        assert record.msg == "hello"

    def test_without_correlation_id(self):
        formatter = CorrelationFormatter("%(message)s")

        assert formatter.format(_record()) == "hello"


class TestResolveLogLevel:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("debug", "DEBUG"),
            ("WARNING # quiet please", "WARNING"),
            ("verbose", "INFO"),
            ("", "INFO"),
        ],
    )
    def test_explicit(self, value, expected):
        assert resolve_log_level(value) == expected

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "ERROR")

        assert resolve_log_level() == "ERROR"

    def test_invalid_environment_falls_back(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "LOUD")

        assert resolve_log_level() == "INFO"


class TestNoisyLoggerLevels:
    def test_sets_warning_by_default(self):
        set_noisy_logger_levels("INFO")
        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_stays_debug_when_global_debug(self):
        set_noisy_logger_levels("DEBUG")
        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.DEBUG


@pytest.mark.usefixtures("restore_root_logging")
class TestConfigureRootLogging:
    def test_installs_single_handler(self):
        level = configure_root_logging("debug")

        root = logging.getLogger()
        assert level == "DEBUG"
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, CorrelationFormatter)

    def test_uses_environment_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "WARNING")

        assert configure_root_logging() == "WARNING"
        assert logging.getLogger().level == logging.WARNING

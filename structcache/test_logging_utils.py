"""
Tests for logging configuration, dood!
"""

import logging
from logging.handlers import TimedRotatingFileHandler

import pytest

from structcache.logging_utils import configureLogger, getLogLevelByStr, initLogging


@pytest.fixture
def restoreLoggers():
    """Restore root and test loggers after each test."""
    rootLogger = logging.getLogger()
    # pytest capture handlers are managed by pytest itself, keep only plain ones
    savedHandlers = [h for h in rootLogger.handlers if type(h) is logging.StreamHandler]
    savedLevel = rootLogger.level
    driverLevels = {name: logging.getLogger(name).level for name in ("pymemcache", "redis", "structcache.test")}

    yield

    for handler in rootLogger.handlers[:]:
        if type(handler) in (logging.StreamHandler, logging.FileHandler, TimedRotatingFileHandler):
            if handler not in savedHandlers:
                handler.close()
            rootLogger.removeHandler(handler)
    for handler in savedHandlers:
        rootLogger.addHandler(handler)
    rootLogger.setLevel(savedLevel)
    for name, level in driverLevels.items():
        localLogger = logging.getLogger(name)
        localLogger.setLevel(level)
        for handler in localLogger.handlers[:]:
            handler.close()
            localLogger.removeHandler(handler)
        localLogger.propagate = True


class TestGetLogLevelByStr:
    @pytest.mark.parametrize("value, expected", [("debug", logging.DEBUG), ("WARNING", logging.WARNING)])
    def testKnownLevels(self, value, expected):
        assert getLogLevelByStr(value) == expected

    def testUnknownLevel(self):
        assert getLogLevelByStr("chatty") is None
        assert getLogLevelByStr("chatty", logging.INFO) == logging.INFO

    def testNonLevelAttribute(self):
        # logging.basicConfig exists but is not a level
        assert getLogLevelByStr("basicConfig") is None


class TestConfigureLogger:
    def testConsoleHandler(self, restoreLoggers):
        localLogger = logging.getLogger("structcache.test")

        configureLogger(localLogger, {"level": "debug", "console": True, "console-level": "error", "propagate": False})

        assert localLogger.level == logging.DEBUG
        assert localLogger.propagate is False
        assert len(localLogger.handlers) == 1
        assert localLogger.handlers[0].level == logging.ERROR

    def testReconfigurationReplacesHandlers(self, restoreLoggers):
        localLogger = logging.getLogger("structcache.test")

        configureLogger(localLogger, {"console": True})
        configureLogger(localLogger, {"console": True})

        assert len(localLogger.handlers) == 1

    def testFileHandler(self, restoreLoggers, tmp_path):
        localLogger = logging.getLogger("structcache.test")
        logFile = tmp_path / "logs" / "cache.log"

        configureLogger(localLogger, {"level": "info", "file": str(logFile), "file-level": "warning"})
        localLogger.warning("stored hash user:1")
        for handler in localLogger.handlers:
            handler.flush()

        assert logFile.exists()
        assert "stored hash user:1" in logFile.read_text(encoding="utf-8")
        assert localLogger.handlers[0].level == logging.WARNING

    def testRotatingFileHandler(self, restoreLoggers, tmp_path):
        localLogger = logging.getLogger("structcache.test")

        configureLogger(localLogger, {"file": str(tmp_path / "cache.log"), "rotate": True})

        assert isinstance(localLogger.handlers[0], TimedRotatingFileHandler)


class TestInitLogging:
    def testDriverLoggersAreQuietened(self, restoreLoggers):
        initLogging({"level": "debug"})

        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("pymemcache").level == logging.WARNING
        assert logging.getLogger("redis").level == logging.WARNING

    def testPerLoggerConfig(self, restoreLoggers):
        initLogging({"level": "warning", "logger": {"structcache.test": {"level": "debug"}}})

        assert logging.getLogger().level == logging.WARNING
        assert logging.getLogger("structcache.test").level == logging.DEBUG

    def testDefaultsToInfo(self, restoreLoggers):
        initLogging({})

        assert logging.getLogger().level == logging.INFO

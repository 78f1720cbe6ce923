"""
Unit tests for fspaths.logger module.

setup_logging configures the "fspaths" package logger only. These tests
check which handlers it owns, that the host application's logging is left
as it was, and that records from the library modules come out formatted.
"""

import logging
import sys
from pathlib import Path

import pytest

from fspaths.config import LogConfig
from fspaths.logger import LOG_FORMAT, PACKAGE_LOGGER, setup_logging
from fspaths.path import Path as FsPath


def owned_handlers() -> list[logging.Handler]:
    return [h for h in logging.getLogger(PACKAGE_LOGGER).handlers if getattr(h, "_fspaths_owned", False)]


@pytest.fixture(autouse=True)
def isolated_package_logger():
    """Snapshot the package and root loggers, restore them afterwards."""
    pkg = logging.getLogger(PACKAGE_LOGGER)
    root = logging.getLogger()
    saved = (list(pkg.handlers), pkg.level, pkg.propagate, list(root.handlers), root.level)
    yield
    for handler in pkg.handlers:
        if handler not in saved[0]:
            handler.close()
    pkg.handlers[:] = saved[0]
    pkg.setLevel(saved[1])
    pkg.propagate = saved[2]
    root.handlers[:] = saved[3]
    root.setLevel(saved[4])


class TestHostLoggingUntouched:
    """The root logger belongs to whoever embeds the library."""

    def test_root_handlers_and_level_unchanged(self, tmp_path: Path):
        root = logging.getLogger()
        host_handler = logging.NullHandler()
        root.addHandler(host_handler)
        root.setLevel(logging.ERROR)
        before = list(root.handlers)

        setup_logging(LogConfig(level="DEBUG", file=str(tmp_path / "a.log"), console=True))

        assert root.handlers == before
        assert root.level == logging.ERROR

    def test_foreign_package_handler_survives_reconfiguration(self):
        pkg = logging.getLogger(PACKAGE_LOGGER)
        foreign = logging.NullHandler()
        pkg.addHandler(foreign)

        setup_logging(LogConfig(level="INFO", console=True))
        setup_logging(LogConfig(level="INFO", console=False))

        assert foreign in pkg.handlers
        assert owned_handlers() == []

    def test_returns_package_logger(self):
        result = setup_logging(LogConfig(console=False))
        assert result is logging.getLogger(PACKAGE_LOGGER)


class TestOwnedHandlers:
    """Which handlers a LogConfig produces."""

    def test_console_only(self):
        setup_logging(LogConfig(level="INFO", file="", console=True))

        (handler,) = owned_handlers()
        assert type(handler) is logging.StreamHandler
        assert handler.stream is sys.stderr

    def test_file_and_console(self, tmp_path: Path):
        log_file = tmp_path / "logs" / "deep" / "fspaths.log"

        setup_logging(LogConfig(level="INFO", file=str(log_file), console=True))

        kinds = sorted(type(h).__name__ for h in owned_handlers())
        assert kinds == ["FileHandler", "StreamHandler"]
        assert log_file.parent.is_dir()

    def test_reconfiguring_replaces_previous_handlers(self, tmp_path: Path):
        first = tmp_path / "first.log"
        setup_logging(LogConfig(level="INFO", file=str(first), console=True))
        setup_logging(LogConfig(level="INFO", file="", console=True))

        assert len(owned_handlers()) == 1
        assert not any(isinstance(h, logging.FileHandler) for h in owned_handlers())

    def test_no_handlers_keeps_propagation(self):
        setup_logging(LogConfig(level="INFO", file="", console=False))

        assert owned_handlers() == []
        assert logging.getLogger(PACKAGE_LOGGER).propagate is True

    def test_handlers_stop_propagation(self):
        setup_logging(LogConfig(level="INFO", console=True))
        assert logging.getLogger(PACKAGE_LOGGER).propagate is False


class TestLevel:
    """Level names from the [logging] section."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("DEBUG", logging.DEBUG),
            ("error", logging.ERROR),
            ("Info", logging.INFO),
            ("CHATTY", logging.WARNING),
        ],
    )
    def test_level_name_mapping(self, name: str, expected: int):
        setup_logging(LogConfig(level=name, console=True))

        assert logging.getLogger(PACKAGE_LOGGER).level == expected
        assert all(h.level == expected for h in owned_handlers())


class TestRecords:
    """Records emitted by the library modules."""

    def test_format_names_the_emitting_module(self):
        assert "%(name)s" in LOG_FORMAT
        assert "%(threadName)s" in LOG_FORMAT

    def test_path_debug_record_written_to_file(self, tmp_path: Path):
        log_file = tmp_path / "debug.log"
        setup_logging(LogConfig(level="DEBUG", file=str(log_file), console=False))

        FsPath(str(tmp_path / "made")).mkdir_all()
        for handler in owned_handlers():
            handler.flush()

        line = log_file.read_text(encoding="utf-8").splitlines()[0]
        assert " - DEBUG - " in line
        assert " - fspaths.path - Creating directory: " in line

    def test_records_below_level_are_dropped(self, tmp_path: Path):
        log_file = tmp_path / "quiet.log"
        setup_logging(LogConfig(level="WARNING", file=str(log_file), console=False))

        FsPath(str(tmp_path / "made")).mkdir_all()
        for handler in owned_handlers():
            handler.flush()

        assert log_file.read_text(encoding="utf-8") == ""

"""Unit tests for strview.logging: window tags and the flight recorder."""

import logging

import pytest

from strview.logging import WindowTagFilter, flight_recorder


def _record(name: str, level: int = logging.INFO, **extra) -> logging.LogRecord:
    return logging.makeLogRecord(
        {
            "name": name,
            "levelno": level,
            "levelname": logging.getLevelName(level),
            "msg": "message",
            **extra,
        }
    )


class TestWindowTagFilter:
    """Tags rendered in front of each console and recorder line."""

    @staticmethod
    @pytest.mark.parametrize(
        "window, tag", [((6, 5), "[6:11]"), ((0, 0), "[0:0]"), ((3, 1), "[3:4]")]
    )
    def test_window_extra(window, tag) -> None:
        """A ``window`` extra is shown as a half-open byte range."""
        record = _record("strview.entrypoints.cli.view_cmds", window=window)
        assert WindowTagFilter().filter(record)
        assert record.tag == tag

    @staticmethod
    def test_third_party_logger() -> None:
        """Foreign loggers are tagged with their top-level package."""
        record = _record("some.thirdparty.module")
        WindowTagFilter().filter(record)
        assert record.tag == "[some]"

    @staticmethod
    @pytest.mark.parametrize("name", ["strview", "strview.view"])
    def test_package_logger(name) -> None:
        """Package records without a window carry no tag."""
        record = _record(name)
        WindowTagFilter().filter(record)
        assert record.tag == ""

    @staticmethod
    def test_lookalike_name_is_third_party() -> None:
        """Only the package itself counts, not names that share its prefix."""
        record = _record("strview_extras.core")
        WindowTagFilter().filter(record)
        assert record.tag == "[strview_extras]"


class TestFlightRecorder:
    """The buffer behind ``--flight-recorder``."""

    @staticmethod
    def test_quiet_run_creates_no_file(tmp_path) -> None:
        """Records below WARNING stay in memory and are dropped on close."""
        path = tmp_path / "trace.log"
        recorder = flight_recorder(path)
        recorder.handle(_record("strview.view", logging.DEBUG))
        recorder.close()
        assert not path.exists()

    @staticmethod
    def test_warning_writes_buffer(tmp_path) -> None:
        """A WARNING writes every buffered record, window tags included."""
        path = tmp_path / "trace.log"
        recorder = flight_recorder(path)
        target = recorder.target
        recorder.handle(_record("strview.view", logging.DEBUG, window=(2, 3)))
        recorder.handle(_record("strview.view", logging.WARNING))
        recorder.close()
        target.close()
        lines = path.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 2
        assert "DEBUG" in lines[0] and "[2:5] message" in lines[0]
        assert "WARNING" in lines[1]

"""Unit tests for console thresholds, envelope tagging and handler wiring."""

import logging
from logging.handlers import MemoryHandler
from pathlib import Path

import pytest
from rich.logging import RichHandler

from enrolflow.logging import (
    NO_ENVELOPE,
    EnvelopeTagFilter,
    LoggingSettings,
    configure_logging,
    console_level,
    envelope_context,
    log_pipeline,
)

# pylint: disable=redefined-outer-name


@pytest.fixture
def restore_root_logger():
    """Put the root logger's handlers and level back after the test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(name: str = "enrolflow.service_layer.receiver") -> logging.LogRecord:
    return logging.makeLogRecord({"name": name, "msg": "hello", "levelno": logging.INFO})


@pytest.mark.parametrize(
    ("verbosity", "expected"),
    [
        (0, logging.WARNING),
        (1, logging.INFO),
        (2, logging.DEBUG),
        (5, logging.DEBUG),
        (-1, logging.ERROR),
        (-2, logging.CRITICAL),
        (-9, logging.CRITICAL),
    ],
)
def test_console_level(verbosity, expected):
    """One level per step from WARNING, clamped at both ends."""
    assert console_level(verbosity) == expected


def test_debug_overrides_verbosity():
    """Debug mode shows everything whatever -q says."""
    assert LoggingSettings(verbosity=-2, debug=True).console_level == logging.DEBUG
    assert LoggingSettings(verbosity=-2).console_level == logging.CRITICAL


def test_flight_recorder_follows_log_path():
    """No log path, no flight recorder."""
    assert not LoggingSettings().flight_recorder
    assert LoggingSettings(log_path=Path("latest.log")).flight_recorder


class TestEnvelopeTagFilter:
    """Records carry the envelope being handled and a library tag."""

    @staticmethod
    def test_outside_receiver():
        """Records logged outside an envelope get the placeholder tag."""
        record = _record()
        assert EnvelopeTagFilter().filter(record)
        assert record.envelope == NO_ENVELOPE
        assert record.library == ""

    @staticmethod
    def test_inside_envelope_context():
        """The tag names the envelope and is reset when the block ends."""
        tagger = EnvelopeTagFilter()
        with envelope_context("woo", "5001"):
            inside = _record()
            tagger.filter(inside)
            with envelope_context("xero", "INV-1"):
                nested = _record()
                tagger.filter(nested)
        after = _record()
        tagger.filter(after)
        assert (inside.envelope, nested.envelope, after.envelope) == (
            "woo/5001",
            "xero/INV-1",
            NO_ENVELOPE,
        )

    @staticmethod
    def test_reset_when_block_raises():
        """An exception inside the block does not leak the tag."""
        with pytest.raises(RuntimeError):
            with envelope_context("woo", "1"):
                raise RuntimeError("boom")
        record = _record()
        EnvelopeTagFilter().filter(record)
        assert record.envelope == NO_ENVELOPE

    @staticmethod
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("enrolflow", ""),
            ("enrolflow.adapters.payloads", ""),
            ("click_extra.logging", "[click_extra] "),
            ("urllib3", "[urllib3] "),
            ("enrolflowx", "[enrolflowx] "),
        ],
    )
    def test_library_tag(name, expected):
        """Only loggers outside the project are tagged."""
        record = _record(name)
        EnvelopeTagFilter().filter(record)
        assert record.library == expected


@pytest.mark.usefixtures("restore_root_logger")
class TestConfigureLogging:
    """Handlers installed on the root logger."""

    @staticmethod
    def test_console_only():
        """Without a log path only the console handler is installed."""
        handlers = configure_logging(LoggingSettings(verbosity=1))
        assert [type(h) for h in handlers] == [RichHandler]
        assert handlers[0].level == logging.INFO
        assert logging.getLogger().handlers == handlers
        assert logging.getLogger().level == logging.DEBUG

    @staticmethod
    def test_flight_recorder_keeps_envelope_trail(tmp_path):
        """DEBUG records are buffered and written, tagged, when a warning arrives."""
        path = tmp_path / "trail.log"
        handlers = configure_logging(LoggingSettings(log_path=path, flight_capacity=50))
        assert [type(h) for h in handlers] == [RichHandler, MemoryHandler]

        logger = logging.getLogger("enrolflow.tests")
        with envelope_context("woo", "7"):
            logger.debug("reading order")
        assert path.read_text(encoding="utf-8") == ""
        logger.warning("order 7 dead-lettered")

        lines = path.read_text(encoding="utf-8").splitlines()
        assert lines[0].endswith("[woo/7] reading order")
        assert lines[1].endswith("[-] order 7 dead-lettered")

    @staticmethod
    def test_logger_levels_applied():
        """Named loggers get their configured minimum level."""
        levels = {"enrolflow.tests.quiet": logging.ERROR}
        configure_logging(LoggingSettings(logger_levels=levels))
        assert logging.getLogger("enrolflow.tests.quiet").level == logging.ERROR


def test_log_pipeline(caplog):
    """The routed sources and trainer table origin are logged at INFO."""
    caplog.set_level(logging.INFO, logger="enrolflow")
    log_pipeline(
        logging.getLogger("enrolflow.tests"),
        sources=["woo", "xero"],
        trainer_count=2,
        trainers_origin="<packaged trainers.toml>",
    )
    assert caplog.messages == [
        "Routing sources: woo, xero",
        "Trainer table: 2 trainer(s) from <packaged trainers.toml>",
    ]

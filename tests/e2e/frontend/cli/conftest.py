"""Fixtures and helpers for end-to-end CLI tests.

Provides a test-only `log-demo` command that emits log records at every level
from a project logger and a third-party logger, fixtures to register it on
the `enrolflow` group, a CliRunner, an isolated filesystem, and a helper that
writes JSON-lines envelope files.
"""

import json
import logging
import re
from collections.abc import Callable
from pathlib import Path

import click
import pytest
from click.testing import CliRunner

from enrolflow.entrypoints.cli.main import enrolflow
from enrolflow.interfaces.envelope import IngestionEnvelope

# pylint: disable=redefined-outer-name


@click.command()
def log_demo():
    """Emit one record per level on 'enrolflow.demo' and a third-party logger."""
    logger = logging.getLogger("enrolflow.demo")
    logger.debug("This is a debug-level test message.")
    logger.info("This is an info-level test message.")
    logger.warning("This is a warning-level test message.")
    logger.error("This is an error-level test message.")
    logger.critical("This is a critical-level test message.")
    third_party_logger = logging.getLogger("some.thirdparty")
    third_party_logger.debug("This is a debug-level third-party test message.")
    third_party_logger.info("This is an info-level third-party test message.")
    third_party_logger.warning("This is a warning-level third-party test message.")
    logger.debug("This is a final debug-level test message.")


def _remove_command_everywhere(group: click.Group, name: str) -> None:
    """Remove a command from a group and any section registries Click-Extra keeps."""
    group.commands.pop(name, None)
    if hasattr(group, "_default_section"):
        group._default_section.commands.pop(name, None)  # pylint: disable=protected-access
    for sec in getattr(group, "_sections", []):
        getattr(sec, "commands", {}).pop(name, None)


def assert_in_output(pattern: str, output: str) -> None:
    """Assert that a regex pattern is found in the output string."""
    if not re.search(pattern, output, re.MULTILINE):
        raise AssertionError(f"Pattern '{pattern}' not found in output:\n{output}")


def assert_not_in_output(pattern: str, output: str) -> None:
    """Assert that a regex pattern is NOT found in the output string."""
    if re.search(pattern, output, re.MULTILINE):
        raise AssertionError(f"Pattern '{pattern}' found in output:\n{output}")


@pytest.fixture
def registered_log_demo():
    """Register the 'log-demo' command for the duration of a test."""
    enrolflow.add_command(log_demo, name="log-demo")
    try:
        yield
    finally:
        _remove_command_everywhere(enrolflow, "log-demo")


@pytest.fixture
def runner():
    """Return a Click CliRunner for invoking CLI commands in tests."""
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Run the test inside an isolated working directory."""
    with runner.isolated_filesystem():
        yield


@pytest.fixture
def write_envelopes() -> Callable[..., Path]:
    """Factory fixture: write envelopes (or raw lines) to a JSON-lines file."""

    def _write(lines: list[IngestionEnvelope | str], name: str = "envelopes.jsonl") -> Path:
        path = Path(name)
        path.write_text(
            "".join(
                (json.dumps(line.to_wire()) if isinstance(line, IngestionEnvelope) else line)
                + "\n"
                for line in lines
            ),
            encoding="utf-8",
        )
        return path

    return _write

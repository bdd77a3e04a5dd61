"""Fixtures and test helpers for end-to-end CLI tests.

Provides a test-only `log-demo` Click command that emits log messages, plus
fixtures to register that command, obtain a CliRunner, run tests within an
isolated filesystem, and write sample input files.
"""

import logging
from pathlib import Path

import click
import pytest
from click.testing import CliRunner

from strview.entrypoints.cli.main import strview

# pylint: disable=redefined-outer-name


@click.command()
def log_demo():
    """Emit representative log messages for CLI/flight-recorder tests."""
    logger = logging.getLogger("strview.demo")
    logger.debug("This is a debug-level test message.")
    logger.info("This is an info-level test message.")
    logger.warning("This is a warning-level test message.")
    logger.error("This is an error-level test message.")
    third_party_logger = logging.getLogger("some.thirdparty")
    third_party_logger.info("This is an info-level third-party test message.")
    third_party_logger.warning("This is a warning-level third-party test message.")
    logger.debug("This is a final debug-level test message.")


def _remove_command_everywhere(group, name: str) -> None:
    """Remove a command from a Click group and its internal sections."""
    group.commands.pop(name, None)
    if hasattr(group, "_default_section"):
        group._default_section.commands.pop(name, None)  # pylint: disable=protected-access
    for sec in getattr(group, "_sections", []):
        getattr(sec, "commands", {}).pop(name, None)


@pytest.fixture
def registered_log_demo():
    """Register the 'log-demo' command for the duration of a test."""
    strview.add_command(log_demo, name="log-demo")
    try:
        yield
    finally:
        _remove_command_everywhere(strview, "log-demo")
        logging.getLogger("some.thirdparty").setLevel(logging.NOTSET)


@pytest.fixture
def runner():
    """Return a Click CliRunner for invoking CLI commands in tests."""
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Provide an isolated filesystem context for tests using CliRunner."""
    with runner.isolated_filesystem():
        yield


@pytest.fixture
def greeting_file(fs) -> Path:  # pylint: disable=unused-argument
    """A file holding ``b"hello world"`` in the isolated filesystem."""
    path = Path("greeting.txt")
    path.write_bytes(b"hello world")
    return path


@pytest.fixture
def invoke(runner):
    """Invoke ``strview`` without writing a flight-recorder log."""

    def _invoke(*args: str, env: dict[str, str] | None = None):
        return runner.invoke(strview, ["--no-flight-recorder", *args], env=env)

    return _invoke

"""Fixtures for end-to-end tests of the `twotrack` command.

A test-only `log-demo` command is attached to the top-level group so the
logging options can be observed without running a scenario. Every test runs
inside an isolated filesystem with the twotrack environment variables cleared.
"""

import logging

import click
import pytest
from click.testing import CliRunner

from twotrack import config
from twotrack.entrypoints.cli.main import twotrack

# pylint: disable=redefined-outer-name,unused-argument

TWOTRACK_ENV_VARS = (
    config.CURRENCY_ENV,
    config.ID_GENERATOR_ENV,
    config.PROBLEM_TYPE_BASE_ENV,
    config.SEED_DEMO_DATA_ENV,
    "TWOTRACK_LOGGER_LEVEL",
    "TWOTRACK_LOG_PATH",
)


@click.command()
def log_demo():
    """Log one line per level on a project logger and a third-party logger.

    The final DEBUG line on `twotrack.demo` comes after the WARNING, so it
    only reaches the flight-recorder file on a forced flush.
    """
    logger = logging.getLogger("twotrack.demo")
    third_party = logging.getLogger("some.thirdparty")
    logger.debug("demo debug line")
    logger.info("demo info line")
    third_party.debug("third-party debug line")
    third_party.info("third-party info line")
    logger.warning("demo warning line")
    logger.error("demo error line")
    logger.critical("demo critical line")
    logger.debug("demo trailing debug line")


def _detach(group: click.Group, name: str) -> None:
    group.commands.pop(name, None)
    if hasattr(group, "_default_section"):
        group._default_section.commands.pop(name, None)  # pylint: disable=protected-access
    for section in getattr(group, "_sections", []):
        getattr(section, "commands", {}).pop(name, None)


@pytest.fixture
def registered_log_demo():
    """Attach `log-demo` to `twotrack` for one test."""
    twotrack.add_command(log_demo, name="log-demo")
    try:
        yield
    finally:
        _detach(twotrack, "log-demo")


@pytest.fixture
def runner(monkeypatch):
    """A CliRunner with no twotrack settings inherited from the real environment."""
    for name in TWOTRACK_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Run the test inside `runner.isolated_filesystem()`."""
    with runner.isolated_filesystem():
        yield

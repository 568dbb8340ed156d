"""Fixtures for end-to-end CLI logging tests.

Registers a test-only ``log-demo`` command on the ``eqcontract`` group that
logs one message per level, and runs every test in an isolated filesystem.
"""

import logging

import click
import pytest
from click.testing import CliRunner

from eqcontract.entrypoints.cli.main import eqcontract

# pylint: disable=redefined-outer-name


@click.command()
def log_demo():
    """Log on 'eqcontract.demo' and on a third-party logger."""
    logger = logging.getLogger("eqcontract.demo")
    logger.debug("demo debug message")
    logger.info("demo info message")
    logger.warning("demo warning message")
    logger.error("demo error message")
    logger.critical("demo critical message")
    third_party = logging.getLogger("some.thirdparty")
    third_party.debug("third-party debug message")
    third_party.info("third-party info message")
    third_party.warning("third-party warning message")
    logger.debug("demo trailing debug message")


def _unregister(group: click.Group, name: str) -> None:
    group.commands.pop(name, None)
    # click-extra keeps its own per-section command registries.
    if hasattr(group, "_default_section"):
        group._default_section.commands.pop(name, None)  # pylint: disable=protected-access
    for section in getattr(group, "_sections", []):
        getattr(section, "commands", {}).pop(name, None)


@pytest.fixture
def registered_log_demo():
    """Make ``eqcontract log-demo`` available for one test."""
    eqcontract.add_command(log_demo, name="log-demo")
    try:
        yield
    finally:
        _unregister(eqcontract, "log-demo")


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Run the test inside ``runner.isolated_filesystem()``."""
    with runner.isolated_filesystem():
        yield

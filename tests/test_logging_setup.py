"""Tests for logging configuration."""

import io
import logging

import pytest

from quickynab.cli.main import cli
from quickynab.logging_setup import configure_logging, get_logger


def package_handlers():
    return [
        h
        for h in logging.getLogger("quickynab").handlers
        if not isinstance(h, logging.NullHandler)
    ]


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    configure_logging("WARNING")


def test_reconfigure_replaces_handler():
    first, second = io.StringIO(), io.StringIO()

    configure_logging("DEBUG", stream=first)
    configure_logging("ERROR", stream=second)
    get_logger("quickynab.test").error("boom")

    assert len(package_handlers()) == 1
    assert logging.getLogger("quickynab").level == logging.ERROR
    assert first.getvalue() == ""
    assert "ERROR quickynab.test: boom" in second.getvalue()


def test_level_from_environment(monkeypatch):
    monkeypatch.setenv("QUICKYNAB_LOG_LEVEL", "info")

    configure_logging(stream=io.StringIO())

    assert logging.getLogger("quickynab").level == logging.INFO


def test_verbose_flag_applies_on_every_invocation(cli_runner, registry):
    cli_runner.invoke(cli, ["dialects", "list"], obj={"registry": registry})
    assert logging.getLogger("quickynab").level == logging.WARNING

    cli_runner.invoke(cli, ["-v", "dialects", "list"], obj={"registry": registry})
    assert logging.getLogger("quickynab").level == logging.DEBUG
    assert len(package_handlers()) == 1

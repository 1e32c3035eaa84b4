"""Test the shared logger."""
import io
import logging

import pytest

from arithmetic_calculator.common import logger as log_module
from arithmetic_calculator.common.evaluator import evaluate
from arithmetic_calculator.common.logger import logger, set_verbosity


@pytest.fixture
def log_stream(monkeypatch) -> io.StringIO:
    """Redirect the package log handler to an in-memory stream."""
    stream = io.StringIO()
    monkeypatch.setattr(log_module.handler, "stream", stream)
    yield stream
    set_verbosity(False)


def test_logger_is_quiet_by_default(log_stream) -> None:
    """Debug records are dropped unless verbosity is enabled."""
    set_verbosity(False)
    evaluate(1, "+", 2)
    assert log_stream.getvalue() == ""


def test_logger_writes_debug_records(log_stream, capsys) -> None:
    """With verbosity enabled, evaluation details go to the log handler only."""
    set_verbosity(True)
    evaluate(10, "/", 0)

    assert capsys.readouterr().out == ""
    assert "DEBUG" in log_stream.getvalue()
    assert "10 / 0" in log_stream.getvalue()


def test_set_verbosity_levels() -> None:
    """set_verbosity toggles between DEBUG and WARNING."""
    set_verbosity(True)
    assert logger.level == logging.DEBUG
    set_verbosity(False)
    assert logger.level == logging.WARNING

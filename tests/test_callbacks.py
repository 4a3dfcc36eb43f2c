"""Tests for operation callbacks."""

import logging
from unittest.mock import MagicMock

from models.enums import OperationKind, OperationStatus
from workflow.callbacks import LoggingCallback, OperationCallback, RichStatusCallback
from workflow.state import OperationResult


def test_implementations_satisfy_protocol():
    assert isinstance(LoggingCallback(), OperationCallback)
    assert isinstance(RichStatusCallback(console=MagicMock()), OperationCallback)


def test_logging_callback_logs_errors(caplog):
    cb = LoggingCallback()
    with caplog.at_level(logging.INFO, logger="workflow.callbacks"):
        cb.on_operation_complete(OperationResult(OperationKind.HUMANIZE, "c1", OperationStatus.SUCCEEDED, "done"))
        cb.on_operation_error(OperationResult(OperationKind.TWEAK, "c1", OperationStatus.FAILED, "stale"))
    assert "humanize complete: done" in caplog.text
    assert "tweak failed: stale" in caplog.text


def test_rich_status_starts_and_stops_spinner():
    console = MagicMock()
    cb = RichStatusCallback(console=console)
    cb.on_operation_start(OperationKind.GENERATE_PLAN, None)
    console.status.assert_called_once()
    status = console.status.return_value
    status.start.assert_called_once()

    cb.on_operation_complete(OperationResult(OperationKind.GENERATE_PLAN, None, OperationStatus.SUCCEEDED, "Planned"))
    status.stop.assert_called_once()
    assert "Planned" in console.print.call_args.args[0]

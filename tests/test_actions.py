"""Behaviour of the ingestion hook wrapped around rotation steps."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from rotation_ingest.config import IngestionProperties
from rotation_ingest.gateway.base import IngestionGateway, StatusEntry
from rotation_ingest.rotation.actions import (
    ActionDecorator,
    CompositeStep,
    FileRenameStep,
    RotationStep,
    decorate_action,
)

PROPERTIES = IngestionProperties(database="logs", table="AppLogs")


class _RecordingGateway(IngestionGateway):
    def __init__(self, events: list[str], *, fail_submit: bool = False, fail_close: bool = False) -> None:
        self.events = events
        self.fail_submit = fail_submit
        self.fail_close = fail_close
        self.submissions: list[tuple[str, IngestionProperties]] = []
        self.close_calls = 0

    def submit(self, path: str | Path, properties: IngestionProperties) -> list[StatusEntry]:
        self.events.append("submit")
        self.submissions.append((str(path), properties))
        if self.fail_submit:
            raise OSError("connection reset")
        return [StatusEntry("Succeeded", "Unknown", "None"), StatusEntry("Pending", "Transient", "Busy")]

    def close(self) -> None:
        self.close_calls += 1
        if self.fail_close:
            raise IOError("already gone")


class _Step:
    def __init__(self, events: list[str], result: bool = True, *, fail_close: bool = False) -> None:
        self.events = events
        self.result = result
        self.fail_close = fail_close
        self.run_calls = 0
        self.execute_calls = 0
        self.close_calls = 0

    def run(self) -> None:
        self.run_calls += 1

    def execute(self) -> bool:
        self.events.append("execute")
        self.execute_calls += 1
        return self.result

    def is_complete(self) -> bool:
        return self.execute_calls > 0

    def close(self) -> None:
        self.close_calls += 1
        if self.fail_close:
            raise RuntimeError("step close failed")


@pytest.mark.parametrize("result", [True, False])
def test_execute_submits_once_before_base_and_returns_base_result(result: bool) -> None:
    events: list[str] = []
    gateway = _RecordingGateway(events)
    step = _Step(events, result)

    action = decorate_action(step, "app.log.1", gateway, PROPERTIES)

    assert action.execute() is result
    assert events == ["submit", "execute"]
    assert gateway.submissions == [("app.log.1", PROPERTIES)]


@pytest.mark.parametrize("result", [True, False])
def test_submission_failure_is_absorbed(result: bool, caplog: pytest.LogCaptureFixture) -> None:
    events: list[str] = []
    gateway = _RecordingGateway(events, fail_submit=True)
    step = _Step(events, result)
    action = ActionDecorator(step, "app.log.1", gateway, PROPERTIES)

    with caplog.at_level(logging.ERROR, logger="rotation_ingest"):
        assert action.execute() is result

    assert step.execute_calls == 1
    assert events == ["submit", "execute"]
    assert "Error ingesting file app.log.1" in caplog.text
    assert "connection reset" in caplog.text


def test_status_entries_logged_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("tests.rotation_ingest.actions")
    action = ActionDecorator(_Step([]), "app.log.1", _RecordingGateway([]), PROPERTIES, logger=logger)

    with caplog.at_level(logging.DEBUG, logger=logger.name):
        action.execute()

    messages = [record.getMessage() for record in caplog.records if record.name == logger.name]
    assert messages == [
        "Ingestion status Succeeded, ingestion failure status Unknown, ingestion error code None",
        "Ingestion status Pending, ingestion failure status Transient, ingestion error code Busy",
    ]
    assert all(record.levelno == logging.DEBUG for record in caplog.records if record.name == logger.name)


def test_run_and_is_complete_forward_without_ingestion() -> None:
    events: list[str] = []
    gateway = _RecordingGateway(events)
    step = _Step(events)
    action = ActionDecorator(step, "app.log.1", gateway, PROPERTIES)

    action.run()

    assert step.run_calls == 1
    assert gateway.submissions == []
    assert action.is_complete() is False
    action.execute()
    assert action.is_complete() is True


def test_close_closes_step_then_gateway_once() -> None:
    gateway = _RecordingGateway([])
    step = _Step([])
    action = ActionDecorator(step, "app.log.1", gateway, PROPERTIES)

    action.close()
    action.close()

    assert step.close_calls == 1
    assert gateway.close_calls == 1


def test_gateway_close_failure_is_logged_as_warning(caplog: pytest.LogCaptureFixture) -> None:
    gateway = _RecordingGateway([], fail_close=True)
    step = _Step([])
    action = ActionDecorator(step, "app.log.1", gateway, PROPERTIES)

    with caplog.at_level(logging.WARNING, logger="rotation_ingest"):
        action.close()

    assert step.close_calls == 1
    assert gateway.close_calls == 1
    assert any(
        record.levelno == logging.WARNING and "Error closing ingestion gateway" in record.getMessage()
        for record in caplog.records
    )


def test_gateway_is_closed_even_when_step_close_fails() -> None:
    gateway = _RecordingGateway([])
    step = _Step([], fail_close=True)
    action = ActionDecorator(step, "app.log.1", gateway, PROPERTIES)

    with pytest.raises(RuntimeError, match="step close failed"):
        action.close()

    assert step.close_calls == 1
    assert gateway.close_calls == 1


def test_concrete_steps_satisfy_protocol(tmp_path: Path) -> None:
    rename = FileRenameStep(tmp_path / "a", tmp_path / "b")
    action = ActionDecorator(rename, "a", _RecordingGateway([]), PROPERTIES)

    assert isinstance(rename, RotationStep)
    assert isinstance(CompositeStep([rename]), RotationStep)
    assert isinstance(action, RotationStep)


def test_file_rename_step(tmp_path: Path) -> None:
    source = tmp_path / "app.log"
    source.write_text("payload")
    destination = tmp_path / "archive" / "app.log.1"
    step = FileRenameStep(source, destination)

    assert step.is_complete() is False
    assert step.execute() is True
    assert step.is_complete() is True
    assert not source.exists()
    assert destination.read_text() == "payload"


def test_file_rename_step_missing_source(tmp_path: Path) -> None:
    step = FileRenameStep(tmp_path / "missing.log", tmp_path / "missing.log.1")

    assert step.execute() is False
    assert step.is_complete() is True


def test_run_executes_once_and_respects_close(tmp_path: Path) -> None:
    source = tmp_path / "app.log"
    source.write_text("payload")
    step = FileRenameStep(source, tmp_path / "app.log.1")

    step.close()
    step.run()
    assert source.exists()

    reopened = FileRenameStep(source, tmp_path / "app.log.1")
    reopened.run()
    assert not source.exists()
    assert reopened.is_complete() is True


def test_composite_step_reports_conjunction(tmp_path: Path) -> None:
    present = tmp_path / "app.log.1"
    present.write_text("one")
    composite = CompositeStep(
        [
            FileRenameStep(tmp_path / "app.log.2", tmp_path / "app.log.3"),
            FileRenameStep(present, tmp_path / "app.log.2"),
        ]
    )

    assert composite.execute() is False
    assert (tmp_path / "app.log.2").read_text() == "one"
    assert composite.is_complete() is True

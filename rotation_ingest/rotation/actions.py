"""Rotation steps and the decorator that adds ingestion to a step."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Protocol, Sequence, runtime_checkable

from rotation_ingest.config import IngestionProperties
from rotation_ingest.gateway.base import IngestionGateway, attempt_close, attempt_submission
from rotation_ingest.utils.logger import get_logger

LOGGER = get_logger(__name__)


@runtime_checkable
class RotationStep(Protocol):
    """A unit of rotation work, e.g. renaming or compressing a file."""

    def run(self) -> None:
        ...  # pragma: no cover - protocol definition

    def execute(self) -> bool:
        ...  # pragma: no cover - protocol definition

    def is_complete(self) -> bool:
        ...  # pragma: no cover - protocol definition

    def close(self) -> None:
        ...  # pragma: no cover - protocol definition


class _BaseStep:
    """Shared ``run``/``is_complete``/``close`` behaviour for concrete steps."""

    def __init__(self) -> None:
        self._complete = False
        self._closed = False

    def execute(self) -> bool:  # pragma: no cover - overridden
        raise NotImplementedError

    def run(self) -> None:
        if self._closed or self._complete:
            return
        self.execute()

    def is_complete(self) -> bool:
        return self._complete

    def close(self) -> None:
        self._closed = True


class FileRenameStep(_BaseStep):
    """Rename ``source`` to ``destination``, replacing any existing file."""

    def __init__(self, source: str | Path, destination: str | Path) -> None:
        super().__init__()
        self.source = Path(source)
        self.destination = Path(destination)

    def execute(self) -> bool:
        try:
            if not self.source.exists():
                LOGGER.debug("Nothing to rename, %s does not exist", self.source)
                return False
            self.destination.parent.mkdir(parents=True, exist_ok=True)
            os.replace(self.source, self.destination)
            LOGGER.debug("Renamed %s to %s", self.source, self.destination)
            return True
        except OSError as exc:
            LOGGER.error("Unable to rename %s to %s: %s", self.source, self.destination, exc)
            return False
        finally:
            self._complete = True

    def __repr__(self) -> str:
        return f"FileRenameStep({str(self.source)!r} -> {str(self.destination)!r})"


class CompositeStep(_BaseStep):
    """Execute several steps in order; succeeds only if every step does."""

    def __init__(self, steps: Sequence[RotationStep]) -> None:
        super().__init__()
        self.steps = list(steps)

    def execute(self) -> bool:
        status = True
        for step in self.steps:
            # Later renames still run so the window does not stall on one bad file.
            status = step.execute() and status
        self._complete = True
        return status

    def close(self) -> None:
        super().close()
        for step in self.steps:
            step.close()


class ActionDecorator:
    """Wrap a rotation step so that ``file_name`` is ingested before it executes.

    ``run`` and ``is_complete`` are pure delegates. ``execute`` submits the file
    to the gateway, logs whatever the gateway reports, and then returns the
    wrapped step's own result, so a failed submission never changes the outcome
    of the rotation. ``close`` closes the wrapped step and then the gateway.
    """

    def __init__(
        self,
        delegate: RotationStep,
        file_name: str,
        gateway: IngestionGateway,
        properties: IngestionProperties,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self.delegate = delegate
        self.file_name = file_name
        self.gateway = gateway
        self.properties = properties
        self.logger = logger or LOGGER
        self._closed = False

    def run(self) -> None:
        self.delegate.run()

    def execute(self) -> bool:
        outcome = attempt_submission(self.gateway, self.file_name, self.properties)
        for entry in outcome.statuses:
            self.logger.debug(
                "Ingestion status %s, ingestion failure status %s, ingestion error code %s",
                entry.status,
                entry.failure_status,
                entry.error_code,
            )
        if not outcome.ok:
            assert outcome.error is not None
            self.logger.error(
                "Error ingesting file %s: %s",
                self.file_name,
                outcome.error.cause,
                exc_info=outcome.error.cause,
            )
        return self.delegate.execute()

    def is_complete(self) -> bool:
        return self.delegate.is_complete()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self.delegate.close()
        finally:
            self._close_gateway()

    def _close_gateway(self) -> None:
        error = attempt_close(self.gateway)
        if error is not None:
            self.logger.warning("Error closing ingestion gateway: %s", error.cause, exc_info=error.cause)

    def __repr__(self) -> str:
        return f"ActionDecorator({self.delegate!r}, file_name={self.file_name!r})"


def decorate_action(
    delegate: RotationStep,
    file_name: str,
    gateway: IngestionGateway,
    properties: IngestionProperties,
    *,
    logger: logging.Logger | None = None,
) -> ActionDecorator:
    """Return ``delegate`` wrapped with an ingestion hook on ``execute``."""

    return ActionDecorator(delegate, file_name, gateway, properties, logger=logger)


__all__ = [
    "ActionDecorator",
    "CompositeStep",
    "FileRenameStep",
    "RotationStep",
    "decorate_action",
]

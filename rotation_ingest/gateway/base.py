"""Ingestion gateway interface and the submission result type."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from rotation_ingest.config import AuthMode, IngestionProperties
from rotation_ingest.errors import CloseError, SubmissionError


@dataclass(frozen=True, slots=True)
class StatusEntry:
    """One status record reported back by the ingestion endpoint."""

    status: str
    failure_status: str = ""
    error_code: str = ""


class IngestionGateway(ABC):
    """Owns one live session to a remote ingestion service."""

    @abstractmethod
    def submit(self, path: str | Path, properties: IngestionProperties) -> list[StatusEntry]:
        """Upload ``path`` to the target described by ``properties``."""

    @abstractmethod
    def close(self) -> None:
        """Release the underlying session."""


GatewayFactory = Callable[[str, AuthMode], IngestionGateway]


@dataclass(slots=True)
class SubmissionOutcome:
    """Result of a single submission attempt."""

    statuses: list[StatusEntry] = field(default_factory=list)
    error: SubmissionError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def attempt_submission(
    gateway: IngestionGateway, path: str | Path, properties: IngestionProperties
) -> SubmissionOutcome:
    """Submit ``path`` and turn any failure into a failed outcome.

    The status collection is materialised inside the guarded block, so a
    gateway that fails lazily while its statuses are read is reported the same
    way as one that fails on submit.
    """

    try:
        statuses = list(gateway.submit(path, properties))
    except Exception as exc:
        return SubmissionOutcome(error=SubmissionError(str(path), exc))
    return SubmissionOutcome(statuses=statuses)


def attempt_close(gateway: IngestionGateway) -> CloseError | None:
    """Close ``gateway`` and return the failure instead of raising it."""

    try:
        gateway.close()
    except Exception as exc:
        return CloseError(exc)
    return None


__all__ = [
    "GatewayFactory",
    "IngestionGateway",
    "StatusEntry",
    "SubmissionOutcome",
    "attempt_close",
    "attempt_submission",
]

"""Remote ingestion gateways."""

from __future__ import annotations

from rotation_ingest.gateway.base import (
    GatewayFactory,
    IngestionGateway,
    StatusEntry,
    SubmissionOutcome,
    attempt_close,
    attempt_submission,
)
from rotation_ingest.gateway.http_gateway import HttpIngestionGateway

__all__ = [
    "GatewayFactory",
    "HttpIngestionGateway",
    "IngestionGateway",
    "StatusEntry",
    "SubmissionOutcome",
    "attempt_close",
    "attempt_submission",
]

"""Public interface for the rotation_ingest package."""

from __future__ import annotations

import logging
from importlib import metadata as importlib_metadata
from typing import Any, Mapping

from rotation_ingest.config import (
    AppCredentialsAuth,
    IdentityAuth,
    IngestionMapping,
    IngestionProperties,
    MappingKind,
    RotationConfig,
)
from rotation_ingest.errors import (
    CloseError,
    InitializationError,
    RotationIngestError,
    SubmissionError,
)
from rotation_ingest.gateway import GatewayFactory, HttpIngestionGateway, IngestionGateway, StatusEntry
from rotation_ingest.rotation import (
    ActionDecorator,
    IndexRolloverPolicy,
    RolloverContext,
    RolloverDescriptionDecorator,
    RolloverPolicy,
)
from rotation_ingest.rotation.policy import DEFAULT_WINDOW_SIZE, MIN_WINDOW_SIZE
from rotation_ingest.strategy import IngestingRotationStrategy

__all__ = [
    "__version__",
    "ActionDecorator",
    "AppCredentialsAuth",
    "CloseError",
    "HttpIngestionGateway",
    "IdentityAuth",
    "IndexRolloverPolicy",
    "IngestingRotationStrategy",
    "IngestionGateway",
    "IngestionMapping",
    "IngestionProperties",
    "InitializationError",
    "MappingKind",
    "RolloverContext",
    "RolloverDescriptionDecorator",
    "RotationConfig",
    "RotationIngestError",
    "StatusEntry",
    "SubmissionError",
    "create_strategy",
]

try:
    __version__ = importlib_metadata.version("rotation-ingest")
except importlib_metadata.PackageNotFoundError:  # pragma: no cover - fallback for local runs
    __version__ = "0.1.0"


def create_strategy(
    options: Mapping[str, Any],
    *,
    base_policy: RolloverPolicy | None = None,
    gateway_factory: GatewayFactory | None = None,
    logger: logging.Logger | None = None,
) -> IngestingRotationStrategy:
    """Build a strategy from flat option names, as found in handler configs.

    Besides the :meth:`RotationConfig.from_mapping` keys, ``fileIndexMin`` and
    ``fileIndexMax`` size the default index window when no ``base_policy`` is
    given.
    """

    config = RotationConfig.from_mapping(options)
    if base_policy is None:
        base_policy = IndexRolloverPolicy(
            min_index=int(options.get("fileIndexMin", MIN_WINDOW_SIZE)),
            max_index=int(options.get("fileIndexMax", DEFAULT_WINDOW_SIZE)),
        )
    return IngestingRotationStrategy.initialize(
        config,
        base_policy=base_policy,
        gateway_factory=gateway_factory,
        logger=logger,
    )

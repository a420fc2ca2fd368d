"""Rotation strategy that ingests every rotated log file."""

from __future__ import annotations

import logging
from typing import Optional

from rotation_ingest.config import IngestionProperties, RotationConfig
from rotation_ingest.errors import InitializationError
from rotation_ingest.gateway.base import GatewayFactory, IngestionGateway, attempt_close
from rotation_ingest.gateway.http_gateway import HttpIngestionGateway
from rotation_ingest.rotation.description import (
    RolloverContext,
    RolloverDescriptionDecorator,
    decorate_rollover,
)
from rotation_ingest.rotation.policy import IndexRolloverPolicy, RolloverPolicy
from rotation_ingest.utils.logger import get_logger

LOGGER = get_logger(__name__)


class IngestingRotationStrategy:
    """Delegate file selection to a base policy and hook ingestion into the result.

    One gateway is opened per strategy and shared by every rotation it
    produces. Use :meth:`initialize` to build an instance from a
    :class:`RotationConfig`.
    """

    __slots__ = ("config", "base_policy", "gateway", "properties", "logger")

    def __init__(
        self,
        config: RotationConfig,
        base_policy: RolloverPolicy,
        gateway: IngestionGateway,
        properties: IngestionProperties,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config = config
        self.base_policy = base_policy
        self.gateway = gateway
        self.properties = properties
        self.logger = logger or LOGGER

    @classmethod
    def initialize(
        cls,
        config: RotationConfig,
        *,
        base_policy: Optional[RolloverPolicy] = None,
        gateway_factory: Optional[GatewayFactory] = None,
        logger: logging.Logger | None = None,
    ) -> "IngestingRotationStrategy":
        """Open the gateway and bind the ingestion properties.

        Raises :class:`InitializationError` when the gateway cannot be opened.
        """

        log = logger or LOGGER
        factory = gateway_factory or HttpIngestionGateway.open
        try:
            gateway = factory(config.endpoint, config.auth)
        except Exception as exc:
            log.error("Could not initialize ingest client for %s", config.endpoint, exc_info=exc)
            raise InitializationError(f"Could not initialize ingest client: {exc}") from exc

        properties = config.ingestion_properties()
        if properties.mapping is not None:
            log.info(
                "Using mapping %s of type %s",
                properties.mapping.name,
                properties.mapping.kind.value,
            )
        elif bool((config.mapping_name or "").strip()) != bool((config.mapping_kind or "").strip()):
            log.warning("Ignoring incomplete mapping: both mappingName and mappingKind are required")

        return cls(
            config,
            base_policy or IndexRolloverPolicy(),
            gateway,
            properties,
            logger=logger,
        )

    def rotate(self, context: RolloverContext) -> Optional[RolloverDescriptionDecorator]:
        """Return the base rotation with ingestion hooked onto its rename step."""

        description = self.base_policy.rollover(context)
        if description is None:
            return None
        return decorate_rollover(description, self.gateway, self.properties, logger=self.logger)

    def close(self) -> None:
        """Close the shared gateway; failures are logged, never raised."""

        error = attempt_close(self.gateway)
        if error is not None:
            self.logger.warning("Error closing ingestion gateway: %s", error.cause, exc_info=error.cause)


__all__ = ["IngestingRotationStrategy"]

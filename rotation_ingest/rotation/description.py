"""Rollover descriptions and the decorator that hooks ingestion into them."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable

from rotation_ingest.config import IngestionProperties
from rotation_ingest.gateway.base import IngestionGateway
from rotation_ingest.rotation.actions import ActionDecorator, RotationStep, decorate_action


@dataclass(frozen=True, slots=True)
class RolloverContext:
    """The active file a rotation is requested for."""

    file_name: str


@runtime_checkable
class RolloverDescription(Protocol):
    """Outcome of one rotation decision."""

    @property
    def active_file_name(self) -> str:
        ...  # pragma: no cover - protocol definition

    @property
    def append(self) -> bool:
        ...  # pragma: no cover - protocol definition

    @property
    def synchronous(self) -> Optional[RotationStep]:
        ...  # pragma: no cover - protocol definition

    @property
    def asynchronous(self) -> Optional[RotationStep]:
        ...  # pragma: no cover - protocol definition


@dataclass(frozen=True, slots=True)
class SimpleRolloverDescription:
    """Plain value implementation of :class:`RolloverDescription`."""

    active_file_name: str
    append: bool = False
    synchronous: Optional[RotationStep] = None
    asynchronous: Optional[RotationStep] = None


class RolloverDescriptionDecorator:
    """Present ``delegate`` with its rename step wrapped in an ingestion hook.

    The asynchronous (compression) step is handed through untouched and the
    destination is always opened for append, since the remote table only ever
    grows.
    """

    def __init__(
        self,
        delegate: RolloverDescription,
        gateway: IngestionGateway,
        properties: IngestionProperties,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self.delegate = delegate
        base_step = delegate.synchronous
        self._synchronous: ActionDecorator | None = None
        if base_step is not None:
            self._synchronous = decorate_action(
                base_step,
                delegate.active_file_name,
                gateway,
                properties,
                logger=logger,
            )

    @property
    def active_file_name(self) -> str:
        return self.delegate.active_file_name

    @property
    def append(self) -> bool:
        return True

    @property
    def synchronous(self) -> ActionDecorator | None:
        return self._synchronous

    @property
    def asynchronous(self) -> Optional[RotationStep]:
        return self.delegate.asynchronous


def decorate_rollover(
    delegate: RolloverDescription,
    gateway: IngestionGateway,
    properties: IngestionProperties,
    *,
    logger: logging.Logger | None = None,
) -> RolloverDescriptionDecorator:
    """Return ``delegate`` with ingestion hooked onto its synchronous step."""

    return RolloverDescriptionDecorator(delegate, gateway, properties, logger=logger)


__all__ = [
    "RolloverContext",
    "RolloverDescription",
    "RolloverDescriptionDecorator",
    "SimpleRolloverDescription",
    "decorate_rollover",
]

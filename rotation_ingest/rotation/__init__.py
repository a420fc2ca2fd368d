"""Rotation steps, descriptions and base policies."""

from __future__ import annotations

from rotation_ingest.rotation.actions import (
    ActionDecorator,
    CompositeStep,
    FileRenameStep,
    RotationStep,
    decorate_action,
)
from rotation_ingest.rotation.description import (
    RolloverContext,
    RolloverDescription,
    RolloverDescriptionDecorator,
    SimpleRolloverDescription,
    decorate_rollover,
)
from rotation_ingest.rotation.policy import IndexRolloverPolicy, RolloverPolicy

__all__ = [
    "ActionDecorator",
    "CompositeStep",
    "FileRenameStep",
    "IndexRolloverPolicy",
    "RolloverContext",
    "RolloverDescription",
    "RolloverDescriptionDecorator",
    "RolloverPolicy",
    "RotationStep",
    "SimpleRolloverDescription",
    "decorate_action",
    "decorate_rollover",
]

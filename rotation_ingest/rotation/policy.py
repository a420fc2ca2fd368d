"""Base rotation policies that decide which files move where."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol

from rotation_ingest.rotation.actions import CompositeStep, FileRenameStep
from rotation_ingest.rotation.description import (
    RolloverContext,
    RolloverDescription,
    SimpleRolloverDescription,
)
from rotation_ingest.utils.logger import get_logger

LOGGER = get_logger(__name__)

MIN_WINDOW_SIZE = 1
DEFAULT_WINDOW_SIZE = 3


class RolloverPolicy(Protocol):
    """Contract for the policy wrapped by the ingesting strategy."""

    def rollover(self, context: RolloverContext) -> Optional[RolloverDescription]:
        ...  # pragma: no cover - protocol definition


class IndexRolloverPolicy:
    """Fixed window policy: ``app.log`` becomes ``app.log.1``, older files shift up.

    Backups are kept at indices ``min_index..max_index``; the file at
    ``max_index`` is dropped to make room. Shifting the existing backups happens
    while the rotation is decided, and the rename of the active file is
    returned as the synchronous step so it can be hooked by callers.
    """

    def __init__(self, min_index: int = MIN_WINDOW_SIZE, max_index: int = DEFAULT_WINDOW_SIZE) -> None:
        if min_index < 1:
            raise ValueError("min_index must be at least 1")
        if max_index < min_index:
            raise ValueError("max_index must not be smaller than min_index")
        self.min_index = min_index
        self.max_index = max_index

    @staticmethod
    def backup_name(file_name: str | Path, index: int) -> Path:
        path = Path(file_name)
        return path.with_name(f"{path.name}.{index}")

    def rollover(self, context: RolloverContext) -> Optional[SimpleRolloverDescription]:
        active = Path(context.file_name)
        if not active.exists():
            LOGGER.debug("Skipping rollover, %s does not exist", active)
            return None

        oldest = self.backup_name(active, self.max_index)
        if oldest.exists():
            try:
                oldest.unlink()
            except OSError as exc:
                LOGGER.error("Unable to delete oldest backup %s: %s", oldest, exc)
        shifts = [
            FileRenameStep(self.backup_name(active, index), self.backup_name(active, index + 1))
            for index in range(self.max_index - 1, self.min_index - 1, -1)
            if self.backup_name(active, index).exists()
        ]
        if shifts and not CompositeStep(shifts).execute():
            LOGGER.warning("Some backups of %s could not be shifted", active)

        return SimpleRolloverDescription(
            active_file_name=str(active),
            append=False,
            synchronous=FileRenameStep(active, self.backup_name(active, self.min_index)),
            asynchronous=None,
        )


__all__ = ["DEFAULT_WINDOW_SIZE", "IndexRolloverPolicy", "MIN_WINDOW_SIZE", "RolloverPolicy"]

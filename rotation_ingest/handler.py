"""Logging handler that rotates through an :class:`IngestingRotationStrategy`."""

from __future__ import annotations

from logging.handlers import RotatingFileHandler
from typing import Any, Mapping

from rotation_ingest.rotation.description import RolloverContext
from rotation_ingest.strategy import IngestingRotationStrategy
from rotation_ingest.utils.logger import get_logger

LOGGER = get_logger(__name__)


class IngestingRotatingFileHandler(RotatingFileHandler):
    """Size based rotating handler whose rollovers are ingested remotely.

    ``strategy`` may be an initialised strategy or a mapping of option names,
    which lets ``logging.config.dictConfig`` build the handler directly::

        "handlers": {
            "file": {
                "class": "rotation_ingest.handler.IngestingRotatingFileHandler",
                "filename": "app.log",
                "maxBytes": 10485760,
                "strategy": {"endpoint": "https://ingest.example.com", ...},
            }
        }
    """

    def __init__(
        self,
        filename: str,
        strategy: IngestingRotationStrategy | Mapping[str, Any],
        maxBytes: int = 0,
        encoding: str | None = None,
        delay: bool = False,
    ) -> None:
        owns_strategy = not isinstance(strategy, IngestingRotationStrategy)
        if owns_strategy:
            from rotation_ingest import create_strategy

            strategy = create_strategy(strategy)
        self.strategy = strategy
        try:
            super().__init__(filename, mode="a", maxBytes=maxBytes, encoding=encoding, delay=delay)
        except BaseException:
            if owns_strategy:
                self.strategy.close()
            raise

    def doRollover(self) -> None:
        if self.stream:
            self.stream.close()
            self.stream = None  # type: ignore[assignment]

        description = self.strategy.rotate(RolloverContext(self.baseFilename))
        if description is not None:
            # Steps are not closed here: closing one would close the shared gateway.
            renamed = True
            if description.synchronous is not None:
                renamed = description.synchronous.execute()
            if renamed:
                if description.asynchronous is not None:
                    description.asynchronous.run()
                self.mode = "a" if description.append else "w"
            else:
                # Appending would keep the file oversized and re-trigger rollover on every record.
                LOGGER.warning("Rollover of %s failed, truncating the active file", self.baseFilename)
                self.mode = "w"

        if not self.delay:
            self.stream = self._open()

    def close(self) -> None:
        try:
            super().close()
        finally:
            self.strategy.close()


__all__ = ["IngestingRotatingFileHandler"]

"""Exception hierarchy for rotation_ingest."""

from __future__ import annotations


class RotationIngestError(Exception):
    """Base class for every error raised by this package."""


class InitializationError(RotationIngestError):
    """The ingestion gateway could not be opened; the strategy is unusable."""


class SubmissionError(RotationIngestError):
    """Submitting a rotated file to the gateway failed."""

    def __init__(self, file_name: str, cause: BaseException) -> None:
        super().__init__(f"Error ingesting file {file_name}: {cause}")
        self.file_name = file_name
        self.cause = cause


class CloseError(RotationIngestError):
    """Releasing the ingestion gateway failed."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"Error closing ingestion gateway: {cause}")
        self.cause = cause


__all__ = ["CloseError", "InitializationError", "RotationIngestError", "SubmissionError"]

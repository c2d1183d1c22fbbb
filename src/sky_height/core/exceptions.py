"""Exception hierarchy and failure taxonomy for the measurement pipeline.

Pipeline stages never raise these to the caller. They are created at the stage
that detects the problem and travel as data inside a `Failure`. Only genuine
programming errors (a handler returning a non-Result, or crashing) surface as
raised `PipelineError` / `InvariantViolationError`.
"""

from __future__ import annotations

from enum import StrEnum

from sky_height.constants import GENERIC_ERROR_MESSAGE, NO_MEASUREMENT_MESSAGE


class ErrorKind(StrEnum):
    """Distinct, recoverable failure kinds.

    All kinds currently share one user-facing message but stay separate so
    callers can tell them apart.
    """

    ANCHOR_NOT_FOUND = "AnchorNotFound"
    DECODE_FAILURE = "DecodeFailure"
    HEIGHT_KEY_NOT_FOUND = "HeightKeyNotFound"
    HEIGHT_VALUE_NOT_FOUND = "HeightValueNotFound"
    SCALE_KEY_NOT_FOUND = "ScaleKeyNotFound"
    SCALE_VALUE_NOT_FOUND = "ScaleValueNotFound"
    PRECONDITION_ERROR = "PreconditionError"


class SkyHeightError(Exception):
    """Base exception for sky_height errors."""


class MeasurementError(SkyHeightError):
    """A classified, recoverable failure of one measurement attempt."""

    def __init__(self, kind: ErrorKind, detail: str | None = None) -> None:
        """Initialize with the failure kind and an optional diagnostic detail.

        Args:
            kind: Which stage condition triggered the failure.
            detail: Developer-facing context. Never shown to end users.
        """
        self.kind = kind
        self.detail = detail
        message = f"{kind.value}: {detail}" if detail else kind.value
        super().__init__(message)

    @property
    def user_message(self) -> str:
        """Text suitable for a transient, dismissable notice."""
        return GENERIC_ERROR_MESSAGE


class PreconditionError(MeasurementError):
    """Raised (as data) when a simulation is requested with no prior measurement."""

    def __init__(self, detail: str | None = "no prior measurement") -> None:  # noqa: D107
        super().__init__(ErrorKind.PRECONDITION_ERROR, detail)

    @property
    def user_message(self) -> str:  # noqa: D102
        return NO_MEASUREMENT_MESSAGE


class PipelineError(SkyHeightError):
    """Raised when a stage crashes instead of returning a Result."""

    def __init__(
        self, message: str, stage_name: str, underlying_error: Exception
    ) -> None:
        """Initialize with the failing stage and the original exception."""
        self.stage_name = stage_name
        self.underlying_error = underlying_error
        super().__init__(f"Stage '{stage_name}' failed: {message}")


class InvariantViolationError(SkyHeightError):
    """Raised when the pipeline breaks one of its structural guarantees."""

    def __init__(self, message: str, stage_name: str | None = None) -> None:  # noqa: D107
        self.stage_name = stage_name
        super().__init__(message)


class ConfigurationError(SkyHeightError):
    """Raised when configuration values fail validation"""  # noqa: D415

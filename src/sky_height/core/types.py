"""Core data types that flow through and out of the pipeline.

This module defines the immutable values a measurement produces. Every value
is created fresh per invocation and carries no identity beyond the call; the
final `CalculationResult` is the only one handed back to the caller.
"""

from __future__ import annotations

import dataclasses
import typing

# --- Result Monad for Robust Error Handling ---
# Stages return Success|Failure instead of raising, so every failure path is
# an explicit, testable value.

TSuccess = typing.TypeVar("TSuccess")
TFailure = typing.TypeVar("TFailure", bound=Exception)


@dataclasses.dataclass(frozen=True, slots=True)
class Success(typing.Generic[TSuccess]):
    """A successful result in the pipeline."""

    value: TSuccess


@dataclasses.dataclass(frozen=True, slots=True)
class Failure(typing.Generic[TFailure]):
    """A failure in the pipeline, containing the error."""

    error: TFailure


Result = Success[TSuccess] | Failure[TFailure]

# --- Measurement Values ---


@dataclasses.dataclass(frozen=True, slots=True)
class ExtractedFields:
    """The two numbers recovered from the decoded plaintext.

    `height` is observed roughly in [-2.0, 2.0]; `scale` as a small positive
    fraction. Neither range is enforced.
    """

    height: float
    scale: float


@dataclasses.dataclass(frozen=True, slots=True)
class DerivedValues:
    """Formula outputs.

    `shortest` and `tallest` are the formula evaluated at height -R and +R
    respectively, so `shortest` is numerically the larger of the two.
    """

    current: float
    tallest: float
    shortest: float


@dataclasses.dataclass(frozen=True, slots=True)
class RawFields:
    """Pre-formula numbers kept for diagnostic display."""

    height_raw: float
    scale_raw: float


@dataclasses.dataclass(frozen=True, slots=True)
class CalculationResult:
    """A completed measurement.

    The ordering ``tallest >= current >= shortest`` is not guaranteed. Values
    are passed through unvalidated, including NaN or infinities.
    """

    current: float
    tallest: float
    shortest: float
    scale: float
    timestamp: int  # epoch milliseconds, fixed at assembly
    raw_fields: RawFields
    note: str = ""

    def with_note(self, note: str) -> CalculationResult:
        """Return a copy carrying a user-edited note; the timestamp is kept."""
        return dataclasses.replace(self, note=note.strip())

    def to_dict(self) -> dict[str, typing.Any]:
        """Return a JSON-ready mapping using the external field names."""
        return {
            "current": self.current,
            "tallest": self.tallest,
            "shortest": self.shortest,
            "scale": self.scale,
            "timestamp": self.timestamp,
            "note": self.note,
            "json": {
                "height_raw": self.raw_fields.height_raw,
                "scale_raw": self.raw_fields.scale_raw,
            },
        }


ExtremeKind = typing.Literal["tall", "short"]


@dataclasses.dataclass(frozen=True, slots=True)
class SimulationOutcome:
    """One simulated draw using a random height and a measured scale."""

    value: float
    height: float
    extreme: ExtremeKind | None = None

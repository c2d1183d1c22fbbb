"""Core types, commands and exceptions for the measurement pipeline."""

from .commands import (
    DecodedCommand,
    EvaluatedCommand,
    ExtractedCommand,
    HeightCommand,
    InitialCommand,
    LocatedCommand,
    NormalizedCommand,
    ScaleTier,
)
from .exceptions import (
    ConfigurationError,
    ErrorKind,
    InvariantViolationError,
    MeasurementError,
    PipelineError,
    PreconditionError,
    SkyHeightError,
)
from .types import (
    CalculationResult,
    DerivedValues,
    ExtractedFields,
    Failure,
    RawFields,
    Result,
    SimulationOutcome,
    Success,
)

__all__ = [  # noqa: RUF022
    # Results
    "Success",
    "Failure",
    "Result",
    # Values
    "ExtractedFields",
    "DerivedValues",
    "RawFields",
    "CalculationResult",
    "SimulationOutcome",
    # Commands
    "InitialCommand",
    "LocatedCommand",
    "NormalizedCommand",
    "DecodedCommand",
    "HeightCommand",
    "ExtractedCommand",
    "EvaluatedCommand",
    "ScaleTier",
    # Errors
    "ErrorKind",
    "SkyHeightError",
    "MeasurementError",
    "PreconditionError",
    "PipelineError",
    "InvariantViolationError",
    "ConfigurationError",
]

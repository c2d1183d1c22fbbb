"""Decode-and-derive pipeline for encoded height payloads."""

import importlib.metadata
import logging

from sky_height.config import FrozenConfig, ResolvedConfig, resolve_config
from sky_height.core.exceptions import (
    ConfigurationError,
    ErrorKind,
    InvariantViolationError,
    MeasurementError,
    PipelineError,
    PreconditionError,
    SkyHeightError,
)
from sky_height.core.types import (
    CalculationResult,
    DerivedValues,
    ExtractedFields,
    Failure,
    RawFields,
    Result,
    SimulationOutcome,
    Success,
)
from sky_height.executor import MeasurementExecutor, create_executor
from sky_height.formatting import format_value, summary_text
from sky_height.frontdoor import decode_and_calculate
from sky_height.simulation import SimulationSession, simulate
from sky_height.telemetry import TelemetryContext, TelemetryReporter

# Version handling
try:
    __version__ = importlib.metadata.version("sky-height")
except importlib.metadata.PackageNotFoundError:
    __version__ = "development"

# Set up a null handler for the library's root logger.
# This prevents 'No handler found' errors if the consuming app has no logging configured.
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Public API
__all__ = [  # noqa: RUF022
    # Front door
    "decode_and_calculate",
    "simulate",
    "SimulationSession",
    # Executor
    "MeasurementExecutor",
    "create_executor",
    # Configuration
    "resolve_config",
    "ResolvedConfig",
    "FrozenConfig",
    # Results and values
    "Success",
    "Failure",
    "Result",
    "CalculationResult",
    "ExtractedFields",
    "DerivedValues",
    "RawFields",
    "SimulationOutcome",
    # Errors
    "ErrorKind",
    "SkyHeightError",
    "MeasurementError",
    "PreconditionError",
    "PipelineError",
    "InvariantViolationError",
    "ConfigurationError",
    # Display
    "format_value",
    "summary_text",
    # Telemetry (extension points)
    "TelemetryContext",
    "TelemetryReporter",
]

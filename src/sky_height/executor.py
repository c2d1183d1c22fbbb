"""The primary entry point for running the measurement pipeline.

The executor runs each handler in order and stops at the first `Failure`,
which is returned as-is so the caller always receives exactly one of a
`CalculationResult` or a classified `MeasurementError`. A handler that
raises or returns something other than a Result is a programming error and
is raised, not folded into a failure.
"""

from __future__ import annotations

from collections.abc import Iterable
import logging
import os
from typing import TYPE_CHECKING, Any

from sky_height.config import FrozenConfig, default_config
from sky_height.core.commands import InitialCommand
from sky_height.core.exceptions import (
    InvariantViolationError,
    MeasurementError,
    PipelineError,
)
from sky_height.core.types import CalculationResult, Failure, Result, Success
from sky_height.pipeline.decoder import BlockDecoder
from sky_height.pipeline.extractors import HeightExtractor, ScaleExtractor
from sky_height.pipeline.formula import FormulaEvaluator
from sky_height.pipeline.locator import PayloadLocator
from sky_height.pipeline.normalizer import BlockNormalizer
from sky_height.pipeline.result_builder import ResultAssembler
from sky_height.telemetry import TelemetryContext, TelemetryReporter

if TYPE_CHECKING:
    from sky_height.pipeline.base import BaseHandler

logger = logging.getLogger(__name__)


class MeasurementExecutor:
    """Executes a raw payload through the pipeline of handlers.

    Handlers are stateless, so one executor can be shared freely between
    callers and threads.
    """

    def __init__(
        self,
        config: FrozenConfig,
        pipeline_handlers: Iterable[BaseHandler[Any, Any, MeasurementError]]
        | None = None,
        *,
        validate: bool | None = None,
        reporters: Iterable[TelemetryReporter] = (),
    ):
        """Initialize the executor with configuration.

        Args:
            config: Configuration for the pipeline (FrozenConfig).
            pipeline_handlers: Optional list of handlers to override the default pipeline.
            validate: Enable dev-time validation (overrides SKY_HEIGHT_PIPELINE_VALIDATE).
            reporters: Telemetry reporters; only used when telemetry is enabled.
        """
        self.config = config
        self._validate = (
            validate
            if validate is not None
            else os.getenv("SKY_HEIGHT_PIPELINE_VALIDATE") == "1"
        )
        self._reporters = tuple(reporters)
        handlers = list(pipeline_handlers or self._build_default_pipeline())
        if not handlers:
            raise ValueError("Pipeline may not be empty; provide at least one handler.")
        self._pipeline = tuple(handlers)

    def _build_default_pipeline(self) -> list[Any]:
        return [
            PayloadLocator(),
            BlockNormalizer(),
            BlockDecoder(),
            HeightExtractor(),
            ScaleExtractor(),
            FormulaEvaluator(),
            ResultAssembler(validate=self._validate),
        ]

    def execute(self, raw: str) -> Result[CalculationResult, MeasurementError]:
        """Run one payload through every stage.

        Args:
            raw: Arbitrary caller text expected to contain the encoded block.

        Returns:
            ``Success(CalculationResult)`` or the first stage ``Failure``.

        Raises:
            PipelineError: If a handler raises instead of returning a Result.
            InvariantViolationError: If a handler returns a non-Result, or the
                pipeline ends without a `CalculationResult`.
        """
        current: Any = InitialCommand(raw=raw, config=self.config)
        ctx = TelemetryContext(*self._reporters)
        stage_name = None

        for handler in self._pipeline:
            stage_name = type(handler).__name__
            with ctx("pipeline.stage", stage=stage_name):
                try:
                    result = handler.handle(current)
                except Exception as e:
                    raise PipelineError(str(e), stage_name, e) from e

            if not isinstance(result, Success | Failure):
                raise InvariantViolationError(
                    "Handler returned a non-Result value; expected Success|Failure.",
                    stage_name=stage_name,
                )

            if isinstance(result, Failure):
                kind = getattr(result.error, "kind", None)
                logger.debug("Stage %s failed: %s", stage_name, result.error)
                ctx.count("pipeline.failure", stage=stage_name, kind=str(kind))
                return result
            current = result.value

        if not isinstance(current, CalculationResult):
            raise InvariantViolationError(
                "Pipeline ended without a CalculationResult; ensure the final "
                "stage is a ResultAssembler.",
                stage_name=stage_name,
            )
        ctx.count("pipeline.success")
        return Success(current)

    @property
    def stage_names(self) -> tuple[str, ...]:
        """Return the current pipeline's stage names in execution order."""
        return tuple(type(h).__name__ for h in self._pipeline)


def create_executor(
    config: FrozenConfig | None = None,
    *,
    validate: bool | None = None,
    reporters: Iterable[TelemetryReporter] = (),
) -> MeasurementExecutor:
    """Create an executor, resolving configuration if none is given.

    Args:
        config: Optional configuration object.
        validate: Enable dev-time validation (overrides SKY_HEIGHT_PIPELINE_VALIDATE).
        reporters: Telemetry reporters.

    Returns:
        An instance of MeasurementExecutor.
    """
    # This is the only place where ambient configuration is resolved.
    final_config = config if config is not None else default_config()
    return MeasurementExecutor(final_config, validate=validate, reporters=reporters)

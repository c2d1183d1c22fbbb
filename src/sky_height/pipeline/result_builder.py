"""Result assembly: the terminal stage of the pipeline.

The assembler is the only place that reads the wall clock. Everything else in
a `CalculationResult` is a deterministic function of the raw input.
"""

from collections.abc import Callable
import logging
import math
import time

from sky_height.core.commands import EvaluatedCommand
from sky_height.core.exceptions import MeasurementError
from sky_height.core.types import CalculationResult, RawFields, Result, Success
from sky_height.pipeline.base import BaseHandler

logger = logging.getLogger(__name__)


def epoch_millis() -> int:
    """Current wall-clock time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


class ResultAssembler(
    BaseHandler[EvaluatedCommand, CalculationResult, MeasurementError]
):
    """Packages derived values into a `CalculationResult`.

    No validation is applied: non-finite values pass through untouched and
    display code is responsible for guarding them. With ``validate`` enabled
    such values are logged, never altered.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], int] | None = None,
        validate: bool = False,
    ) -> None:
        """Initialize the assembler.

        Args:
            clock: Zero-argument callable returning epoch milliseconds;
                defaults to the wall clock.
            validate: Log non-finite outputs (development aid).
        """
        self._clock = clock
        self._validate = validate

    def handle(
        self, command: EvaluatedCommand
    ) -> Result[CalculationResult, MeasurementError]:
        fields = command.fields
        derived = command.derived
        result = CalculationResult(
            current=derived.current,
            tallest=derived.tallest,
            shortest=derived.shortest,
            scale=fields.scale,
            timestamp=self._clock() if self._clock else epoch_millis(),
            raw_fields=RawFields(height_raw=fields.height, scale_raw=fields.scale),
        )
        if self._validate:
            self._warn_non_finite(result)
        return Success(result)

    @staticmethod
    def _warn_non_finite(result: CalculationResult) -> None:
        for name in ("current", "tallest", "shortest", "scale"):
            value = getattr(result, name)
            if not math.isfinite(value):
                logger.warning("Non-finite %s in assembled result: %r", name, value)

"""Formula evaluation stage.

    current  = A - B*scale - C*height
    shortest = A - B*scale - C*(-R)
    tallest  = A - B*scale - C*(+R)

`shortest` and `tallest` depend only on scale: they are the formula at the
two ends of the assumed height domain [-R, R]. With C and R positive this
makes `shortest` the numerically larger value. The naming is kept exactly as
the upstream model defines it. `current` is not clamped, so an out-of-domain
height lands outside the two bounds.
"""

from sky_height.constants import (
    BASE_OFFSET,
    HEIGHT_BOUND,
    HEIGHT_COEFFICIENT,
    SCALE_COEFFICIENT,
)
from sky_height.core.commands import EvaluatedCommand, ExtractedCommand
from sky_height.core.exceptions import MeasurementError
from sky_height.core.types import DerivedValues, ExtractedFields, Result, Success
from sky_height.pipeline.base import BaseHandler


def height_formula(height: float, scale: float) -> float:
    """Evaluate the calibrated formula for one height."""
    return BASE_OFFSET - SCALE_COEFFICIENT * scale - HEIGHT_COEFFICIENT * height


def derive(fields: ExtractedFields) -> DerivedValues:
    """Compute current, tallest and shortest from the extracted fields."""
    return DerivedValues(
        current=height_formula(fields.height, fields.scale),
        tallest=height_formula(HEIGHT_BOUND, fields.scale),
        shortest=height_formula(-HEIGHT_BOUND, fields.scale),
    )


class FormulaEvaluator(
    BaseHandler[ExtractedCommand, EvaluatedCommand, MeasurementError]
):
    """Pure arithmetic; always succeeds."""

    def handle(
        self, command: ExtractedCommand
    ) -> Result[EvaluatedCommand, MeasurementError]:
        return Success(EvaluatedCommand(extracted=command, derived=derive(command.fields)))

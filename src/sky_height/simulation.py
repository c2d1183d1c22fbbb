"""Derived simulation: the measurement formula with a random height.

Each draw replaces the decoded height with ``h ~ Uniform(-R, R)`` and keeps
the scale of the most recent successful measurement. Draws are independent;
the only state is what the caller chooses to keep, which `SimulationSession`
packages for convenience.
"""

from __future__ import annotations

import logging
import random

from sky_height.config import FrozenConfig
from sky_height.constants import DEFAULT_EXTREME_THRESHOLD, HEIGHT_BOUND
from sky_height.core.exceptions import PreconditionError
from sky_height.core.types import (
    CalculationResult,
    ExtremeKind,
    Failure,
    Result,
    SimulationOutcome,
    Success,
)
from sky_height.pipeline.formula import height_formula

logger = logging.getLogger(__name__)


def classify_extreme(height: float, threshold: float) -> ExtremeKind | None:
    """Flag draws at or beyond the threshold on either side."""
    if height >= threshold:
        return "tall"
    if height <= -threshold:
        return "short"
    return None


def simulate(
    last_result: CalculationResult | None,
    *,
    rng: random.Random | None = None,
    extreme_threshold: float = DEFAULT_EXTREME_THRESHOLD,
) -> Result[SimulationOutcome, PreconditionError]:
    """Draw one simulated value using the scale of ``last_result``.

    Args:
        last_result: The most recent successful measurement, or None.
        rng: Random source; the module-level generator when omitted.
        extreme_threshold: Absolute height marking an extreme draw.

    Returns:
        ``Success(SimulationOutcome)``, or ``Failure(PreconditionError)`` when
        there is no prior measurement.
    """
    if last_result is None:
        return Failure(PreconditionError())

    source = rng if rng is not None else random
    height = source.random() * (2 * HEIGHT_BOUND) - HEIGHT_BOUND
    return Success(
        SimulationOutcome(
            value=height_formula(height, last_result.scale),
            height=height,
            extreme=classify_extreme(height, extreme_threshold),
        )
    )


class SimulationSession:
    """Caller-owned holder for the last measurement and the draw counter.

    Recording a new measurement resets the counter. Failed draws do not
    count.
    """

    def __init__(
        self,
        config: FrozenConfig | None = None,
        *,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize an empty session.

        Args:
            config: Supplies the seed and the extreme threshold when given.
            rng: Explicit random source; takes precedence over the seed.
        """
        seed = config.simulation_seed if config is not None else None
        self._rng = rng if rng is not None else random.Random(seed)
        self._threshold = (
            config.extreme_threshold if config is not None else DEFAULT_EXTREME_THRESHOLD
        )
        self.last_result: CalculationResult | None = None
        self.count = 0

    def record(self, result: CalculationResult) -> None:
        """Adopt a new measurement and start counting from zero."""
        self.last_result = result
        self.count = 0

    def draw(self) -> Result[SimulationOutcome, PreconditionError]:
        """Run one simulation against the recorded measurement."""
        outcome = simulate(
            self.last_result, rng=self._rng, extreme_threshold=self._threshold
        )
        if isinstance(outcome, Success):
            self.count += 1
            logger.debug("Simulation draw #%d: %r", self.count, outcome.value)
        return outcome

"""Convenience helpers for the common one-shot operations.

These functions provide a minimal entrypoint over the underlying executor
and simulation, without changing core behavior.
"""

from __future__ import annotations

from functools import cache

from sky_height.config import FrozenConfig
from sky_height.core.exceptions import MeasurementError
from sky_height.core.types import CalculationResult, Result
from sky_height.executor import MeasurementExecutor, create_executor


@cache
def _ambient_executor() -> MeasurementExecutor:
    # Resolved on first use only; failed resolutions are not cached
    return create_executor()


def decode_and_calculate(
    raw: str,
    *,
    cfg: FrozenConfig | None = None,
) -> Result[CalculationResult, MeasurementError]:
    """Decode a raw payload and derive the measurement.

    Args:
        raw: Arbitrary text containing the encoded block.
        cfg: Optional frozen configuration. If omitted, the ambient
            configuration is resolved once per process and reused, so later
            changes to ``SKY_HEIGHT_*`` or ``pyproject.toml`` are not seen.
            Pass ``cfg`` explicitly to keep the call free of file and
            environment access.

    Returns:
        ``Success(CalculationResult)`` or ``Failure(MeasurementError)``.

    Raises:
        ConfigurationError: If ``cfg`` is omitted and the ambient settings
            are invalid.
        ConfigFileError: If ``cfg`` is omitted and the nearest
            ``pyproject.toml`` cannot be parsed.

    Example:
        ```python
        result = decode_and_calculate(pasted_text)
        if isinstance(result, Success):
            print(result.value.current)
        else:
            print(result.error.kind)
        ```
    """
    executor = create_executor(cfg) if cfg is not None else _ambient_executor()
    return executor.execute(raw)

"""Field extraction stages: recover height and scale from the plaintext.

The plaintext is free text, not JSON. Each field is found by locating a
case-insensitive marker and reading a numeric token somewhere after it. Both
extractors search the full plaintext independently; they do not share a
cursor.

The scale grammar tries three tiers in a fixed order and the search window of
the last tier is a calibration choice. Neither should be loosened without
evidence about the upstream format.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import math
import re

from sky_height.constants import (
    HEIGHT_MARKER,
    SCALE_INTEGER_DIVISOR,
    SCALE_INTEGER_MAX_DIGITS,
    SCALE_INTEGER_WINDOW,
    SCALE_MARKER,
)
from sky_height.core.commands import (
    DecodedCommand,
    ExtractedCommand,
    HeightCommand,
    ScaleTier,
)
from sky_height.core.exceptions import ErrorKind, MeasurementError
from sky_height.core.types import ExtractedFields, Failure, Result, Success
from sky_height.pipeline.base import BaseHandler

logger = logging.getLogger(__name__)

_FLAGS = re.IGNORECASE | re.ASCII

_HEIGHT_KEY = re.compile(re.escape(HEIGHT_MARKER), _FLAGS)
_HEIGHT_VALUE = re.compile(r"(-?\d*\.\d+|-?\d+\.?\d*)", re.ASCII)

_SCALE_KEY = re.compile(re.escape(SCALE_MARKER), _FLAGS)
_SCALE_SCIENTIFIC = re.compile(r'[":]*(-?\d+\.?\d*)[eE]([-+]?\d+)', re.ASCII)
_SCALE_DECIMAL = re.compile(r'[":]*(-?\d*\.\d+)', re.ASCII)
# Lazy prefix: skip any leading non-digits, stop at the first digit run.
# The prefix never crosses a line terminator (\n, \r, U+2028, U+2029), so a
# line break before the digits is a miss.
_SCALE_INTEGER = re.compile(
    rf"[^\n\r\u2028\u2029]*?(\d{{1,{SCALE_INTEGER_MAX_DIGITS}}})", re.ASCII
)


@dataclass(frozen=True, slots=True)
class ScaleMatch:
    """A parsed scale value and the tier that produced it."""

    value: float
    tier: ScaleTier


def _power_of_ten(mantissa: float, exponent: float) -> float:
    # Overflow saturates to a signed infinity (or NaN for a zero mantissa)
    try:
        return mantissa * 10.0**exponent
    except OverflowError:
        return mantissa * math.inf


def _after_marker(plaintext: str, marker: re.Pattern[str]) -> str | None:
    """Return the text following the first marker match, or None if absent."""
    match = marker.search(plaintext)
    if match is None:
        return None
    return plaintext[match.end() :]


def parse_height(plaintext: str) -> Result[float, MeasurementError]:
    """Read the first signed decimal token after the height marker."""
    area = _after_marker(plaintext, _HEIGHT_KEY)
    if area is None:
        return Failure(MeasurementError(ErrorKind.HEIGHT_KEY_NOT_FOUND))

    match = _HEIGHT_VALUE.search(area)
    if match is None:
        return Failure(MeasurementError(ErrorKind.HEIGHT_VALUE_NOT_FOUND))
    return Success(float(match.group(1)))


def match_scale(area: str) -> ScaleMatch | None:
    """Apply the three scale grammars to the text after the scale marker.

    1. Scientific notation: ``mantissa * 10 ** exponent``.
    2. Plain decimal with a point.
    3. A bare 1-10 digit integer within the first 30 characters, read as a
       fixed-point fraction scaled by 1e9.

    The first tier that matches anywhere in its search area wins, even if a
    later tier would match earlier in the text.
    """
    scientific = _SCALE_SCIENTIFIC.search(area)
    if scientific:
        mantissa = float(scientific.group(1))
        exponent = float(scientific.group(2))
        return ScaleMatch(_power_of_ten(mantissa, exponent), "scientific")

    decimal = _SCALE_DECIMAL.search(area)
    if decimal:
        return ScaleMatch(float(decimal.group(1)), "decimal")

    integer = _SCALE_INTEGER.match(area[:SCALE_INTEGER_WINDOW])
    if integer:
        return ScaleMatch(int(integer.group(1)) / SCALE_INTEGER_DIVISOR, "integer")

    return None


def parse_scale(plaintext: str) -> Result[ScaleMatch, MeasurementError]:
    """Locate the scale marker and resolve its value through the tiers."""
    area = _after_marker(plaintext, _SCALE_KEY)
    if area is None:
        return Failure(MeasurementError(ErrorKind.SCALE_KEY_NOT_FOUND))

    found = match_scale(area)
    if found is None:
        return Failure(
            MeasurementError(ErrorKind.SCALE_VALUE_NOT_FOUND, "no scale tier matched")
        )
    return Success(found)


class HeightExtractor(BaseHandler[DecodedCommand, HeightCommand, MeasurementError]):
    """Recovers the height field."""

    def handle(self, command: DecodedCommand) -> Result[HeightCommand, MeasurementError]:
        result = parse_height(command.plaintext)
        if isinstance(result, Failure):
            return result
        return Success(HeightCommand(decoded=command, height=result.value))


class ScaleExtractor(BaseHandler[HeightCommand, ExtractedCommand, MeasurementError]):
    """Recovers the scale field and completes the extracted fields."""

    def handle(
        self, command: HeightCommand
    ) -> Result[ExtractedCommand, MeasurementError]:
        result = parse_scale(command.decoded.plaintext)
        if isinstance(result, Failure):
            return result

        found = result.value
        logger.debug("Scale resolved via %s tier: %r", found.tier, found.value)
        return Success(
            ExtractedCommand(
                with_height=command,
                fields=ExtractedFields(height=command.height, scale=found.value),
                scale_tier=found.tier,
            )
        )

"""Payload location stage of the pipeline."""

import logging

from sky_height.constants import ANCHOR_TOKEN
from sky_height.core.commands import InitialCommand, LocatedCommand
from sky_height.core.exceptions import ErrorKind, MeasurementError
from sky_height.core.types import Failure, Result, Success
from sky_height.pipeline.base import BaseHandler

logger = logging.getLogger(__name__)


class PayloadLocator(BaseHandler[InitialCommand, LocatedCommand, MeasurementError]):
    """Slices the candidate block out of arbitrary surrounding text.

    The block starts at the anchor and runs to the end of the input. The anchor
    is not stripped: it is itself valid base64 and part of what gets decoded.
    """

    def __init__(self, anchor: str = ANCHOR_TOKEN) -> None:
        """Initialize with the literal anchor token."""
        self._anchor = anchor

    def handle(
        self, command: InitialCommand
    ) -> Result[LocatedCommand, MeasurementError]:
        """Find the anchor and return everything from it onwards."""
        start = command.raw.find(self._anchor)
        if start == -1:
            logger.debug("Anchor %r not found in %d chars", self._anchor, len(command.raw))
            return Failure(
                MeasurementError(ErrorKind.ANCHOR_NOT_FOUND, "anchor token absent")
            )
        return Success(LocatedCommand(initial=command, block=command.raw[start:]))

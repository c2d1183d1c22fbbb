"""Block normalization stage: URL-safe base64 to padded standard base64."""

from sky_height.core.commands import LocatedCommand, NormalizedCommand
from sky_height.core.exceptions import MeasurementError
from sky_height.core.types import Result, Success
from sky_height.pipeline.base import BaseHandler

_URL_SAFE_TO_STANDARD = str.maketrans({"-": "+", "_": "/"})


def normalize_block(block: str) -> str:
    """Rewrite a base64 block into the padded standard alphabet.

    ``-`` becomes ``+``, ``_`` becomes ``/`` and ``=`` is appended until the
    length is a multiple of four. Nothing else is touched: whitespace and any
    other stray character stay in place and make the decoder fail. Never
    fails itself.
    """
    text = block.translate(_URL_SAFE_TO_STANDARD)
    remainder = len(text) % 4
    if remainder:
        text += "=" * (4 - remainder)
    return text


class BlockNormalizer(
    BaseHandler[LocatedCommand, NormalizedCommand, MeasurementError]
):
    """Pure string rewrite; always succeeds."""

    def handle(
        self, command: LocatedCommand
    ) -> Result[NormalizedCommand, MeasurementError]:
        return Success(
            NormalizedCommand(located=command, block=normalize_block(command.block))
        )

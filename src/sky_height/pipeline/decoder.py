"""Decoding stage: normalized base64 block to searchable plaintext."""

import base64
import binascii
import logging

from sky_height.core.commands import DecodedCommand, NormalizedCommand
from sky_height.core.exceptions import ErrorKind, MeasurementError
from sky_height.core.types import Failure, Result, Success
from sky_height.pipeline.base import BaseHandler

logger = logging.getLogger(__name__)


class BlockDecoder(BaseHandler[NormalizedCommand, DecodedCommand, MeasurementError]):
    """Strict base64 decode; every malformed block becomes a DecodeFailure.

    Bytes map to text through the configured codec. The default, latin-1,
    maps each byte to one character and cannot fail, so binary noise around
    the fields does not prevent the marker search.
    """

    def handle(
        self, command: NormalizedCommand
    ) -> Result[DecodedCommand, MeasurementError]:
        encoding = command.located.initial.config.plaintext_encoding
        try:
            data = base64.b64decode(command.block, validate=True)
            plaintext = data.decode(encoding)
        except (binascii.Error, ValueError, LookupError) as e:
            # UnicodeDecodeError is a ValueError; LookupError covers a config
            # built without validation that names a bytes-to-bytes codec
            logger.debug("Block of %d chars failed to decode: %s", len(command.block), e)
            return Failure(MeasurementError(ErrorKind.DECODE_FAILURE, str(e)))
        return Success(DecodedCommand(normalized=command, plaintext=plaintext))

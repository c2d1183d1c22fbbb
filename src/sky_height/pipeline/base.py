"""Base protocol for pipeline handlers."""

from typing import Protocol, TypeVar

from sky_height.core.exceptions import SkyHeightError
from sky_height.core.types import Result

# Contravariant input (handlers can accept supertypes), invariant output
T_In = TypeVar("T_In", contravariant=True)
T_Out = TypeVar("T_Out")
T_Error = TypeVar("T_Error", bound=SkyHeightError)


class BaseHandler(Protocol[T_In, T_Out, T_Error]):
    """Protocol for synchronous pipeline handlers.

    Each handler performs a single transformation on the command object,
    making it easy to test and reason about. Handlers hold no per-call state.
    """

    def handle(self, command: T_In) -> Result[T_Out, T_Error]:
        """Process a command object.

        Args:
            command: The input command state from the previous pipeline stage.

        Returns:
            A Result object containing either the next command state or an error.
        """
        ...

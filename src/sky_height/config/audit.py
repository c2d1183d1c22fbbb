"""Configuration source tracking.

This module provides the SourceMap system for tracking where each configuration
value originated.
"""

from .types import ConfigOrigin, SourceMap


class SourceTracker:
    """Tracks the origin of configuration values during resolution.

    This class builds up a SourceMap as configuration is resolved from
    multiple sources.
    """

    def __init__(self) -> None:
        """Initialize an empty source tracker."""
        self._origins: dict[str, ConfigOrigin] = {}

    def set_origin(self, field: str, origin: ConfigOrigin) -> None:
        """Record the origin of a configuration field."""
        self._origins[field] = origin

    def get_source_map(self) -> SourceMap:
        """Get the current source map.

        Returns:
            Mapping of field names to their origins (a copy).
        """
        return dict(self._origins)

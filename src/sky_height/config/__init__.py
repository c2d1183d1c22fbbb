"""Configuration management for the sky_height pipeline.

Resolve-once, freeze-then-flow:
- ResolvedConfig: Post-resolution configuration with audit metadata
- FrozenConfig: Immutable configuration attached to pipeline commands
- SourceMap: Audit tracking of configuration value origins
"""

from .api import default_config, resolve_config
from .audit import SourceTracker
from .file_loader import ConfigFileError, FileConfigLoader
from .resolver import ConfigResolver
from .schema import SkyHeightSettings
from .types import ConfigOrigin, FrozenConfig, ResolvedConfig, SourceMap

__all__ = [  # noqa: RUF022
    # Main API
    "resolve_config",
    "default_config",
    # Core types
    "ResolvedConfig",
    "FrozenConfig",
    "SourceMap",
    "ConfigOrigin",
    # Advanced usage
    "SkyHeightSettings",
    "ConfigResolver",
    "FileConfigLoader",
    "ConfigFileError",
    "SourceTracker",
]

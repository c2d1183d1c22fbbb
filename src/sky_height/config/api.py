"""Public API for the configuration system."""

from pathlib import Path
from typing import Any

from .resolver import ConfigResolver
from .types import FrozenConfig, ResolvedConfig

# Global resolver instance for efficient reuse
_resolver = ConfigResolver()


def resolve_config(
    programmatic: dict[str, Any] | None = None,
    *,
    project_root: Path | None = None,
) -> ResolvedConfig:
    """Resolve configuration from all sources with proper precedence.

    This is the main entry point for configuration resolution. It merges
    configuration from multiple sources according to the documented precedence:
    Programmatic > Environment > Project file > Defaults

    Args:
        programmatic: Dictionary of programmatic overrides (highest precedence).
                     Only known configuration fields are used.
        project_root: Directory to search for pyproject.toml. If None,
                     searches current directory and parents.

    Returns:
        ResolvedConfig with merged values and source tracking for audit.

    Raises:
        ConfigurationError: If configuration validation fails.
        ConfigFileError: If the configuration file exists but is malformed.

    Example:
        config = resolve_config({"simulation_seed": 7})
        frozen = config.to_frozen()
    """
    return _resolver.resolve(programmatic, project_root=project_root)


def default_config() -> FrozenConfig:
    """Resolve from the ambient sources and freeze in one step."""
    return resolve_config().to_frozen()

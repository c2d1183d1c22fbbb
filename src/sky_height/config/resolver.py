"""Configuration resolution with precedence handling.

This module implements the core resolution algorithm that merges configuration
from multiple sources according to the documented precedence order:
Programmatic > Environment > Project file > Defaults
"""

import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from sky_height.core.exceptions import ConfigurationError

from .audit import SourceTracker
from .env_loader import EnvironmentConfigLoader
from .file_loader import FileConfigLoader
from .schema import SkyHeightSettings
from .types import ResolvedConfig

logger = logging.getLogger(__name__)


class ConfigResolver:
    """Resolves configuration from multiple sources with proper precedence."""

    def __init__(self) -> None:
        """Initialize the configuration resolver."""
        self.file_loader = FileConfigLoader()
        self.env_loader = EnvironmentConfigLoader()

    def resolve(
        self,
        programmatic: dict[str, Any] | None = None,
        *,
        project_root: Path | None = None,
    ) -> ResolvedConfig:
        """Resolve configuration from all sources with proper precedence.

        Args:
            programmatic: Programmatic overrides (highest precedence)
            project_root: Directory to search for pyproject.toml

        Returns:
            ResolvedConfig with merged values and source tracking.

        Raises:
            ConfigurationError: If validation fails.
            ConfigFileError: If the project file is malformed.
        """
        source_tracker = SourceTracker()
        merged_config: dict[str, Any] = {}

        # Step 1: Start with schema defaults (no env lookup)
        for field, info in SkyHeightSettings.model_fields.items():
            merged_config[field] = info.default
            source_tracker.set_origin(field, "default")

        # Step 2: Apply project file configuration
        project_config = self.file_loader.load_project_config(project_root)
        self._apply(merged_config, project_config, source_tracker, "file")

        # Step 3: Apply environment variables
        try:
            env_config = self.env_loader.load_env_config()
        except ValueError as e:
            raise ConfigurationError(f"Environment configuration error: {e}") from e
        self._apply(merged_config, env_config, source_tracker, "env")

        # Step 4: Apply programmatic overrides (highest precedence)
        if programmatic:
            self._apply(merged_config, programmatic, source_tracker, "programmatic")

        # Step 5: Validate the final configuration using Pydantic
        try:
            final_config = SkyHeightSettings(**merged_config).to_dict()
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed: {e}") from e

        resolved = ResolvedConfig(
            **final_config,
            origin=source_tracker.get_source_map(),
        )
        logger.debug("Resolved configuration:\n%s", resolved.audit())
        return resolved

    @staticmethod
    def _apply(
        merged: dict[str, Any],
        values: dict[str, Any],
        tracker: SourceTracker,
        origin: Any,
    ) -> None:
        for field, value in values.items():
            if field in merged:  # Only override known fields
                merged[field] = value
                tracker.set_origin(field, origin)

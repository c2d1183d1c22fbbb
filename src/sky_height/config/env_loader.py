"""Environment variable configuration loading.

This module handles loading configuration from environment variables with
the SKY_HEIGHT_ prefix, with type coercion delegated to the settings schema.
"""

import os
from typing import Any

from .schema import SkyHeightSettings

ENV_VARS = {
    "SKY_HEIGHT_PLAINTEXT_ENCODING": "plaintext_encoding",
    "SKY_HEIGHT_SIMULATION_SEED": "simulation_seed",
    "SKY_HEIGHT_EXTREME_THRESHOLD": "extreme_threshold",
    "SKY_HEIGHT_DISPLAY_PRECISION": "display_precision",
}


class EnvironmentConfigLoader:
    """Loads configuration from SKY_HEIGHT_* environment variables."""

    def load_env_config(self) -> dict[str, Any]:
        """Load configuration from environment variables.

        Returns:
            Dictionary of configuration values found in environment.
            Only includes fields that are actually set (not defaults).

        Raises:
            ValueError: If environment variables contain invalid values.
        """
        env_values = {
            field_name: os.environ[env_var]
            for env_var, field_name in ENV_VARS.items()
            if env_var in os.environ
        }
        if not env_values:
            return {}

        try:
            settings = SkyHeightSettings(**env_values)
        except Exception as e:
            env_var_list = [
                f"{env_var}={os.environ[env_var]}"
                for env_var, field_name in ENV_VARS.items()
                if field_name in env_values
            ]
            raise ValueError(
                f"Invalid environment variable values: {', '.join(env_var_list)}. "
                f"Error: {e}"
            ) from e

        return {field_name: getattr(settings, field_name) for field_name in env_values}

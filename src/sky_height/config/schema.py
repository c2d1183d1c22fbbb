"""Configuration schema and validation using Pydantic.

This module defines the settings schema that validates and coerces configuration
values from various sources (environment, files, programmatic) into the correct
types with proper defaults.

The calibration constants of the formula are deliberately not part of this
schema; they live in `sky_height.constants` and are not tunable.
"""

import codecs
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sky_height.constants import (
    DEFAULT_DISPLAY_PRECISION,
    DEFAULT_EXTREME_THRESHOLD,
    DEFAULT_PLAINTEXT_ENCODING,
    HEIGHT_BOUND,
)


class SkyHeightSettings(BaseSettings):
    """Pydantic settings schema for sky_height configuration.

    This handles validation, type coercion, and default values for all
    configuration fields. It integrates with environment variables using
    the SKY_HEIGHT_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="SKY_HEIGHT_",
        env_file=None,
        case_sensitive=False,
        extra="ignore",  # Ignore unknown env vars for forward compatibility
    )

    plaintext_encoding: str = Field(
        default=DEFAULT_PLAINTEXT_ENCODING,
        description="Codec used to turn decoded bytes into searchable text",
        min_length=1,
    )

    simulation_seed: int | None = Field(
        default=None,
        description="Seed for the simulation RNG; None draws from system entropy",
    )

    extreme_threshold: float = Field(
        default=DEFAULT_EXTREME_THRESHOLD,
        description="Absolute simulated height at or beyond which a draw is extreme",
        gt=0.0,
        le=HEIGHT_BOUND,
    )

    display_precision: int = Field(
        default=DEFAULT_DISPLAY_PRECISION,
        description="Digits after the decimal point in formatted output",
        ge=0,
        le=12,
    )

    @field_validator("plaintext_encoding")
    @classmethod
    def check_codec(cls, v: str) -> str:
        """Accept only codecs that turn bytes into text.

        Bytes-to-bytes codecs such as ``hex`` or ``base64`` are known to
        `codecs.lookup` but fail in `bytes.decode` with a `LookupError`.
        """
        try:
            info = codecs.lookup(v)
        except LookupError:
            raise ValueError(f"Unknown text encoding: {v!r}") from None
        if not info._is_text_encoding:  # noqa: SLF001
            raise ValueError(f"Not a text encoding: {v!r}")
        return v

    @field_validator("simulation_seed", mode="before")
    @classmethod
    def blank_seed_is_none(cls, v: Any) -> Any:
        """Treat an empty string (e.g. ``SKY_HEIGHT_SIMULATION_SEED=``) as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary suitable for SourceMap annotation."""
        return {
            "plaintext_encoding": self.plaintext_encoding,
            "simulation_seed": self.simulation_seed,
            "extreme_threshold": self.extreme_threshold,
            "display_precision": self.display_precision,
        }

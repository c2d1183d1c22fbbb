"""Typed command states that flow through the pipeline.

These dataclasses define the shape of our data as it is transformed by
each stage of the pipeline. Each state wraps the one before it, so a later
stage can still reach the raw input or the decoded plaintext for diagnostics.
"""

from __future__ import annotations

import dataclasses
import typing

from .types import DerivedValues, ExtractedFields

if typing.TYPE_CHECKING:
    from sky_height.config import FrozenConfig

ScaleTier = typing.Literal["scientific", "decimal", "integer"]


@dataclasses.dataclass(frozen=True, slots=True)
class InitialCommand:
    """The initial state of a request, created by the caller."""

    raw: str
    config: FrozenConfig

    def __post_init__(self) -> None:
        """Validate InitialCommand invariants."""
        if not isinstance(self.raw, str):
            raise TypeError(f"raw: must be str, got {type(self.raw).__name__}")


@dataclasses.dataclass(frozen=True, slots=True)
class LocatedCommand:
    """The candidate block: RawInput from the anchor (inclusive) to the end."""

    initial: InitialCommand
    block: str


@dataclasses.dataclass(frozen=True, slots=True)
class NormalizedCommand:
    """The candidate block rewritten to the standard, padded base64 alphabet."""

    located: LocatedCommand
    block: str


@dataclasses.dataclass(frozen=True, slots=True)
class DecodedCommand:
    """The decoded plaintext, searched positionally by the extractors."""

    normalized: NormalizedCommand
    plaintext: str

    @property
    def config(self) -> FrozenConfig:  # noqa: D102
        return self.normalized.located.initial.config


@dataclasses.dataclass(frozen=True, slots=True)
class HeightCommand:
    """Plaintext with the height field recovered."""

    decoded: DecodedCommand
    height: float


@dataclasses.dataclass(frozen=True, slots=True)
class ExtractedCommand:
    """Both fields recovered, plus which scale grammar matched."""

    with_height: HeightCommand
    fields: ExtractedFields
    scale_tier: ScaleTier


@dataclasses.dataclass(frozen=True, slots=True)
class EvaluatedCommand:
    """Fields plus formula outputs, ready for assembly."""

    extracted: ExtractedCommand
    derived: DerivedValues

    @property
    def fields(self) -> ExtractedFields:  # noqa: D102
        return self.extracted.fields

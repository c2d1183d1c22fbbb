"""Pipeline stages, in execution order."""

from .decoder import BlockDecoder
from .extractors import HeightExtractor, ScaleExtractor, ScaleMatch, match_scale
from .formula import FormulaEvaluator, derive, height_formula
from .locator import PayloadLocator
from .normalizer import BlockNormalizer, normalize_block
from .result_builder import ResultAssembler

__all__ = [  # noqa: RUF022
    "PayloadLocator",
    "BlockNormalizer",
    "BlockDecoder",
    "HeightExtractor",
    "ScaleExtractor",
    "FormulaEvaluator",
    "ResultAssembler",
    # Pure helpers
    "normalize_block",
    "match_scale",
    "ScaleMatch",
    "derive",
    "height_formula",
]

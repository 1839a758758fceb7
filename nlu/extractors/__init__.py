"""NLU Extractors - извлечение сущностей."""

from .base import Extractor
from .corpus_extractor import CorpusExtractor
from .boolean_extractor import BooleanExtractor, BOOLEAN_DIMENSION
from .regex_extractor import RegexExtractor
from .composite_extractor import CompositeExtractor

__all__ = [
    "Extractor",
    "CorpusExtractor",
    "BooleanExtractor",
    "BOOLEAN_DIMENSION",
    "RegexExtractor",
    "CompositeExtractor",
]

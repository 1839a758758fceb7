from .corpus import Corpus, NormalizationOptions
from .boolean_corpus import BooleanCorpus

__all__ = [
    "Corpus",
    "NormalizationOptions",
    "BooleanCorpus",
]

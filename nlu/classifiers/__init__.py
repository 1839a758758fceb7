"""NLU Classifiers - классификаторы намерений."""

from .base import Classifier
from .intent_classifier import KeywordClassifier
from .http_classifier import HttpClassifier

__all__ = [
    "Classifier",
    "KeywordClassifier",
    "HttpClassifier",
]

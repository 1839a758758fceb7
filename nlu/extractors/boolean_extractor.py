"""Boolean extractor: detects yes/no answers."""

from typing import Any

from config.constants import DEFAULT_LOCALE
from nlu.corpora import BooleanCorpus
from nlu.models import EntityValue
from .corpus_extractor import CorpusExtractor

BOOLEAN_DIMENSION = "system:boolean"


class BooleanExtractor(CorpusExtractor):
    """Извлекает ответы "да"/"нет" в измерении system:boolean."""

    def __init__(self, locale: str = DEFAULT_LOCALE):
        super().__init__(dimension=BOOLEAN_DIMENSION, corpus=BooleanCorpus(locale))

    def get_entity(self, value: Any) -> EntityValue:
        return EntityValue(value=value, type="boolean")

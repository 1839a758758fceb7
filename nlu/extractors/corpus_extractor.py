"""
Corpus Extractor.

Извлекает слова словаря из предложения: найденное слово вырезается,
поиск повторяется на остатке, пока остаток не пуст или совпадений нет.
"""

import logging
from typing import Any, List, Optional

from nlu.corpora import Corpus, NormalizationOptions
from nlu.models import Entity, EntityValue, STRING_TYPE
from utils.logger import setup_logger
from .base import Extractor

logger = setup_logger(name="corpus_extractor", level=logging.INFO)


class CorpusExtractor(Extractor):
    """
    Извлекатель сущностей одного измерения по словарю.

    Слова пробуются в порядке объявления в словаре, поэтому
    раньше объявленные синонимы имеют приоритет.
    """

    def __init__(
        self,
        dimension: str,
        corpus: Corpus,
        options: Optional[NormalizationOptions] = None,
    ):
        self.dimension = dimension
        self.corpus = corpus
        self.options = options

    async def compute(self, sentence: str) -> List[Entity]:
        logger.debug(f"compute {sentence!r}")
        normalized_sentence = self.corpus.normalize(sentence, self.options)
        return self.compute_entities(normalized_sentence, self.corpus.get_words(), [])

    def get_remainder(self, sentence: str, word: str) -> Optional[str]:
        """
        Вырезать слово из предложения, если оно стоит отдельным словом.

        Args:
            sentence: Нормализованное предложение
            word: Нормализованное слово

        Returns:
            Остаток предложения или None, если слова нет или оно
            склеено с соседними символами
        """
        if not word:
            return None
        start = sentence.find(word)
        if start < 0:
            return None
        if start > 0 and sentence[start - 1] != " ":
            return None

        end = start + len(word)
        if end < len(sentence) and sentence[end] != " ":
            return None

        return sentence[:start] + sentence[end:]

    def get_entity(self, value: Any) -> EntityValue:
        return EntityValue(value=value, type=STRING_TYPE)

    def compute_entities(self, sentence: str, words: List[str], entities: List[Entity]) -> List[Entity]:
        """
        Извлечение сущностей: найденное слово вырезается, и поиск
        начинается заново с начала словаря на остатке.

        Args:
            sentence: Оставшаяся часть предложения
            words: Слова словаря
            entities: Уже найденные сущности

        Returns:
            Список сущностей
        """
        normalized_words = [self.corpus.normalize(word, self.options) for word in words]
        while sentence:
            for normalized_word in normalized_words:
                remainder = self.get_remainder(sentence, normalized_word)
                if remainder is not None:
                    value = self.corpus.get_value(normalized_word, self.options)
                    entities.append(Entity(dim=self.dimension, values=[self.get_entity(value)]))
                    sentence = remainder
                    break
            else:
                break
        return entities

"""Regex extractor."""

import re
from typing import List, Union

from nlu.models import Entity, EntityValue, STRING_TYPE
from .base import Extractor


class RegexExtractor(Extractor):
    """
    Извлекает все совпадения регулярного выражения.

    Значение сущности - первая группа, если она есть, иначе всё совпадение.
    """

    def __init__(self, dimension: str, pattern: Union[str, re.Pattern]):
        self.dimension = dimension
        self.pattern = re.compile(pattern, re.IGNORECASE) if isinstance(pattern, str) else pattern

    async def compute(self, sentence: str) -> List[Entity]:
        entities = []
        for match in self.pattern.finditer(sentence):
            value = match.group(1) if match.groups() else match.group(0)
            entities.append(Entity(dim=self.dimension, values=[EntityValue(value=value, type=STRING_TYPE)]))
        return entities

"""Classifier interface."""

from abc import ABC, abstractmethod
from typing import List

from nlu.models import ClassifierResult, Entity


class Classifier(ABC):
    """
    Классификатор намерений.

    Возвращает кандидатов, упорядоченных по убыванию уверенности.
    """

    async def init(self):
        """Подготовка модели."""

    async def close(self):
        """Освобождение ресурсов."""

    @abstractmethod
    async def compute(self, sentence: str, entities: List[Entity]) -> List[ClassifierResult]:
        pass

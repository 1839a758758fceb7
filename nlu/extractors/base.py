"""Base class for entity extractors."""

from abc import ABC, abstractmethod
from typing import List

from nlu.models import Entity


class Extractor(ABC):
    """Абстрактный извлекатель сущностей."""

    @abstractmethod
    async def compute(self, sentence: str) -> List[Entity]:
        """Извлечь сущности из предложения."""
        pass

"""Composite extractor: runs several extractors over one sentence."""

import asyncio
import logging
from typing import List, Sequence

from nlu.models import Entity
from utils.logger import setup_logger
from .base import Extractor

logger = setup_logger(name="composite_extractor", level=logging.INFO)


class CompositeExtractor(Extractor):
    """
    Объединяет результаты нескольких извлекателей.

    Извлекатели запускаются параллельно, результаты склеиваются
    в порядке извлекателей.
    """

    def __init__(self, extractors: Sequence[Extractor]):
        self.extractors = list(extractors)

    async def compute(self, sentence: str) -> List[Entity]:
        logger.debug(f"compute {sentence!r}")
        results = await asyncio.gather(*(e.compute(sentence) for e in self.extractors))
        return [entity for entities in results for entity in entities]

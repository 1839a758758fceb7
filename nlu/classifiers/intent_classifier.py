"""
Keyword Intent Classifier.

Классификатор намерений на основе регулярных выражений,
работает без внешних сервисов.
"""

import logging
import re
from typing import Dict, List, Optional, Sequence

import numpy as np

from nlu.models import ClassifierResult, Entity
from utils.logger import setup_logger
from .base import Classifier

logger = setup_logger(name="intent_classifier", level=logging.INFO)

# Вес одного совпадения шаблона или сущности
MATCH_SCORE = 0.5


class KeywordClassifier(Classifier):
    """
    Классификатор намерений на основе правил.

    Каждое совпадение шаблона (и каждая сущность из ожидаемых
    измерений) увеличивает счёт намерения, счета нормализуются softmax.
    """

    def __init__(
        self,
        patterns: Dict[str, Sequence[str]],
        intent_entities: Optional[Dict[str, Sequence[str]]] = None,
    ):
        self.patterns = patterns
        self.intent_entities = intent_entities or {}
        self.compiled_patterns: Dict[str, List[re.Pattern]] = {}
        for intent, intent_patterns in self.patterns.items():
            self.compiled_patterns[intent] = [
                re.compile(pattern, re.IGNORECASE) for pattern in intent_patterns
            ]

    async def compute(self, sentence: str, entities: List[Entity]) -> List[ClassifierResult]:
        """
        Классификация текста.

        Args:
            sentence: Входной текст
            entities: Сущности, извлечённые из текста

        Returns:
            Кандидаты по убыванию уверенности
        """
        text = sentence.strip()
        dims = [e.dim for e in entities]

        scores = {}
        for intent, patterns in self.compiled_patterns.items():
            score = 0.0
            for pattern in patterns:
                matches = pattern.findall(text)
                if matches:
                    score += len(matches) * MATCH_SCORE
            if score > 0:
                score += MATCH_SCORE * sum(dims.count(dim) for dim in self.intent_entities.get(intent, ()))
                scores[intent] = score

        if not scores:
            logger.debug(f"no intent for {text!r}")
            return []

        names, raw_scores = zip(*sorted(scores.items(), key=lambda x: x[1], reverse=True))
        raw_scores = np.array(raw_scores)
        # Нормализация softmax со сдвигом на максимум
        exps = np.exp(raw_scores - raw_scores.max())
        normalized = exps / np.sum(exps)

        return [
            ClassifierResult(name=name, value=float(score))
            for name, score in zip(names, normalized)
        ]

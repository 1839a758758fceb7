from typing import List

from config.config import BrainConfig, Config, NluConfig, QnaConfig
from nlu.classifiers import Classifier
from nlu.models import ClassifierResult, Entity


class StubClassifier(Classifier):
    """Классификатор с заранее заданным ответом, запоминает вызовы."""

    def __init__(self, results: List[ClassifierResult] = None):
        self.results = results or []
        self.calls = []

    async def compute(self, sentence: str, entities: List[Entity]) -> List[ClassifierResult]:
        self.calls.append((sentence, entities))
        return list(self.results)


class StubQna:
    """Сервис QnA с заранее заданным ответом."""

    def __init__(self, qnas=None, error: Exception = None):
        self.qnas = qnas or []
        self.error = error
        self.calls = []

    async def get_matching_qnas(self, sentence: str):
        self.calls.append(sentence)
        if self.error:
            raise self.error
        return list(self.qnas)

    async def close(self):
        pass


def make_config(threshold=0.5, when=None, strict=False, multi_intent=False) -> Config:
    qna = QnaConfig(WHEN=when, STRICT=strict, APP_ID="app", APP_KEY="key") if when else None
    return Config(
        BRAIN=BrainConfig(),
        NLU=NluConfig(INTENT_THRESHOLD=threshold, QNA=qna),
        MULTI_INTENT=multi_intent,
    )

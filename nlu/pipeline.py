"""
NLU Pipeline - основной пайплайн обработки сообщений.

Объединяет извлечение сущностей, классификатор намерений и сервис QnA.
"""

import inspect
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Union

from config.config import Config
from config.constants import MAX_INTENTS, MAX_INTENTS_MULTI, QNA_INTENT_NAME
from nlu.classifiers import Classifier, HttpClassifier
from nlu.extractors import BooleanExtractor, CompositeExtractor, Extractor
from nlu.models import ClassifierResult, Intent, IntentType, NLUResult
from nlu.qna import QnaClient
from utils.errors import AuthenticationError, ConfigurationError
from utils.logger import setup_logger

logger = setup_logger(name="nlu_pipeline", level=logging.INFO)

IntentFilter = Callable[
    [List[ClassifierResult], Optional[Dict[str, Any]]],
    Union[List[str], Awaitable[List[str]]],
]


class NLUPipeline:
    """
    Главный пайплайн обработки естественного языка.

    Порядок классификатора и QnA задаётся настройкой NLU_QNA_WHEN:
    - before: сначала QnA, классификатор только если ответа нет
    - after: сначала классификатор, QnA только если намерений нет
    Без настроенного QnA работает только классификатор.
    """

    def __init__(
        self,
        config: Config,
        classifier: Optional[Classifier] = None,
        extractors: Optional[Sequence[Extractor]] = None,
        qna: Optional[QnaClient] = None,
        intent_filter: Optional[IntentFilter] = None,
    ):
        logger.debug("constructor")
        self.config = config
        threshold = config.NLU.INTENT_THRESHOLD
        if threshold is None:
            raise ConfigurationError("Missing intentThreshold in nlu configuration")
        self.intent_threshold = threshold
        self.intent_filter = intent_filter or self.default_intent_filter

        if classifier is None:
            if not config.NLU.CLASSIFIER_URL:
                raise ConfigurationError("No classifier configured, set NLU_CLASSIFIER_URL")
            classifier = HttpClassifier(config.NLU.CLASSIFIER_URL)
        self.classifier = classifier

        # Пользовательские извлекатели + системные
        self.extractor = CompositeExtractor(
            list(extractors or []) + [BooleanExtractor(locale=config.LOCALE)]
        )

        self.qna = None
        if config.NLU.QNA:
            self.qna = qna or QnaClient(config.NLU.QNA)

    async def init(self):
        logger.debug("init")
        await self.classifier.init()

    async def close(self):
        """Закрытие ресурсов."""
        await self.classifier.close()
        if self.qna:
            await self.qna.close()

    def default_intent_filter(
        self,
        intents: List[ClassifierResult],
        context: Optional[Dict[str, Any]] = None,
    ) -> List[str]:
        """Оставить намерения с уверенностью выше порога."""
        return [intent.name for intent in intents if intent.value > self.intent_threshold]

    async def compute(self, sentence: str, context: Optional[Dict[str, Any]] = None) -> NLUResult:
        """
        Обработать сообщение пользователя.

        Args:
            sentence: Текст сообщения
            context: Необязательный контекст (brain, user_id), передаётся в фильтр намерений

        Returns:
            NLUResult с намерениями и сущностями
        """
        logger.debug(f"compute {sentence!r}")
        qna_config = self.config.NLU.QNA
        if not qna_config:
            return await self.compute_with_classifier(sentence, context)

        logger.debug(f"compute: qna when={qna_config.WHEN} strict={qna_config.STRICT}")
        if qna_config.WHEN == "before":
            intents = await self.compute_with_qna(sentence)
            if intents:
                return NLUResult(intents=intents)
            return await self.compute_with_classifier(sentence, context)

        classifier_result = await self.compute_with_classifier(sentence, context)
        if classifier_result.intents:
            return classifier_result
        intents = await self.compute_with_qna(sentence)
        if intents:
            return NLUResult(intents=intents)
        # Сущности сохраняются, чтобы диалоги на их основе могли продолжиться
        return NLUResult(intents=[], entities=classifier_result.entities)

    async def compute_with_qna(self, sentence: str) -> List[Intent]:
        """
        Намерения из сервиса QnA.

        В строгом режиме ответ принимается, только если он единственный.
        """
        logger.debug(f"compute_with_qna {sentence!r}")
        try:
            qnas = await self.qna.get_matching_qnas(sentence)
        except Exception as e:
            logger.error(f"Could not classify with QnA: {e}")
            if getattr(e, "status_code", None) == 403:
                raise AuthenticationError() from e
            raise
        logger.debug(f"compute_with_qna: {len(qnas)} qnas")

        strict = self.config.NLU.QNA.STRICT
        if (strict and len(qnas) == 1) or (not strict and len(qnas) > 0):
            return [
                Intent(
                    name=QNA_INTENT_NAME,
                    type=IntentType.QNA,
                    answers=[[{"value": qnas[0]["answer"]}]],
                )
            ]
        return []

    async def compute_with_classifier(
        self,
        sentence: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> NLUResult:
        """Намерения классификатора и сущности."""
        logger.debug(f"compute_with_classifier {sentence!r}")
        entities = await self.extractor.compute(sentence)
        logger.debug(f"compute_with_classifier: entities {entities}")

        candidates = await self.classifier.compute(sentence, entities)
        logger.debug(f"compute_with_classifier: non filtered intents {candidates}")

        names = self.intent_filter(candidates, context)
        if inspect.isawaitable(names):
            names = await names
        names = list(names)[:MAX_INTENTS_MULTI if self.config.MULTI_INTENT else MAX_INTENTS]
        logger.debug(f"compute_with_classifier: filtered intents {names}")

        intents = [Intent(name=name, type=IntentType.INTENT) for name in names]
        return NLUResult(intents=intents, entities=entities)

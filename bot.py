"""
Bot - связывает хранилище и NLU для обработки одного сообщения.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from brain import Brain, create_brain
from config.config import Config, load_config
from nlu import NLUPipeline, NLUResult
from nlu.classifiers import Classifier
from nlu.extractors import Extractor
from utils.logger import configure_logging, setup_logger

logger = setup_logger(name="bot", level=logging.INFO)


class Bot:
    """
    Бот: хранилище + понимание сообщений.

    Любая ошибка при обработке пробрасывается вызывающему,
    частичный результат не возвращается.
    """

    def __init__(self, config: Config, brain: Brain, nlu: NLUPipeline):
        self.config = config
        self.brain = brain
        self.nlu = nlu
        self.log: List[Dict[str, Any]] = []

    async def init(self):
        await self.brain.init()
        await self.nlu.init()
        logger.info("Бот успешно инициализирован")

    async def close(self):
        await self.nlu.close()
        await self.brain.close()

    async def respond(self, user_id: str, sentence: str) -> NLUResult:
        """
        Обработать сообщение пользователя.

        Args:
            user_id: ID пользователя
            sentence: Текст сообщения

        Returns:
            NLUResult для диалогового движка
        """
        logger.debug(f"respond {user_id} {sentence!r}")
        await self.brain.init_user_if_necessary(user_id)
        context = {"brain": self.brain, "user_id": user_id}
        return await self.nlu.compute(sentence, context)

    async def play(self, user_id: str, sentences: Sequence[str]) -> List[NLUResult]:
        """Последовательно обработать сообщения и записать их в журнал."""
        results = []
        for sentence in sentences:
            self.log.append({"user": user_id, "sentence": sentence})
            result = await self.respond(user_id, sentence)
            self.log.append({"user": user_id, "result": result})
            results.append(result)
        return results


def create_bot(
    config: Optional[Config] = None,
    classifier: Optional[Classifier] = None,
    extractors: Optional[Sequence[Extractor]] = None,
) -> Bot:

    config = config or load_config()
    configure_logging(config.LOG_LEVEL, config.LOG_FILE)

    brain = create_brain(config.BRAIN)
    nlu = NLUPipeline(config, classifier=classifier, extractors=extractors)

    return Bot(config, brain, nlu)

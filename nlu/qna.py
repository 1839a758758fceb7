"""
QnA Client - поиск ответов в базе вопросов и ответов.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from config.config import QnaConfig
from config.constants import API_TIMEOUT_SECONDS
from utils.errors import ConfigurationError, QnaError
from utils.logger import setup_logger

logger = setup_logger(name="qna_client", level=logging.INFO)


class QnaClient:
    """
    Клиент сервиса QnA.

    Возвращает подходящие пары вопрос/ответ, лучшая - первая.
    """

    def __init__(
        self,
        config: QnaConfig,
        timeout: float = API_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not config.APP_ID or not config.APP_KEY:
            raise ConfigurationError(
                "BOTFUEL_APP_ID and BOTFUEL_APP_KEY are required for using the QnA service"
            )
        self.url = config.URL
        self.app_id = config.APP_ID
        self.app_key = config.APP_KEY
        self.timeout = timeout
        self.transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                transport=self.transport,
                headers={"App-Id": self.app_id, "App-Key": self.app_key},
            )
        return self._client

    async def close(self):
        if self._client:
            await self._client.aclose()
            self._client = None

    async def get_matching_qnas(self, sentence: str) -> List[Dict[str, Any]]:
        """
        Найти ответы для предложения.

        Args:
            sentence: Текст сообщения

        Returns:
            Список словарей с ключом "answer"

        Raises:
            QnaError: Сервис ответил ошибкой, код в status_code
        """
        client = await self._get_client()
        response = await client.post(self.url, json={"sentence": sentence})
        if response.status_code >= 400:
            raise QnaError(
                f"QnA service responded with status {response.status_code}",
                status_code=response.status_code,
            )
        return response.json()

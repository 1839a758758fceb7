"""
HTTP Classifier.

Клиент удалённого классификатора (сервис обучения бота).
"""

import logging
from typing import Dict, List, Optional

import httpx

from config.constants import API_TIMEOUT_SECONDS
from nlu.models import ClassifierResult, Entity
from utils.errors import ClassifierError
from utils.logger import setup_logger
from .base import Classifier

logger = setup_logger(name="http_classifier", level=logging.INFO)


class HttpClassifier(Classifier):
    """
    Классификатор, обращающийся к внешнему сервису по HTTP.

    Запрос: POST {"sentence", "entities"}.
    Ответ: список {"name" | "label", "value" | "prediction"}.
    """

    def __init__(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        timeout: float = API_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.headers = headers or {}
        self.timeout = timeout
        self.transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                transport=self.transport,
            )
        return self._client

    async def init(self):
        await self._get_client()

    async def close(self):
        if self._client:
            await self._client.aclose()
            self._client = None

    async def compute(self, sentence: str, entities: List[Entity]) -> List[ClassifierResult]:
        client = await self._get_client()
        payload = {
            "sentence": sentence,
            "entities": [
                {"dim": e.dim, "values": [{"value": v.value, "type": v.type} for v in e.values]}
                for e in entities
            ],
        }

        response = await client.post(self.url, json=payload, headers=self.headers)
        if response.status_code >= 400:
            logger.error(f"Ошибка классификатора: {response.status_code}")
            raise ClassifierError(
                f"Classifier responded with status {response.status_code}",
                status_code=response.status_code,
            )

        results = [
            ClassifierResult(
                name=item.get("name") or item.get("label"),
                value=float(item.get("value", item.get("prediction", 0.0))),
            )
            for item in response.json()
        ]
        return sorted(results, key=lambda r: r.value, reverse=True)

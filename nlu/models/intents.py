"""Intent models for NLU."""

from enum import Enum
from typing import Any, Dict, List, Optional
from dataclasses import dataclass

from config.constants import QNA_INTENT_NAME
from utils.errors import SdkError


class IntentType(str, Enum):
    """
    Источник намерения.

    Attributes:
        INTENT: Намерение от классификатора
        QNA: Ответ из базы вопросов и ответов
    """
    INTENT = "Intent"
    QNA = "QnA"


@dataclass(frozen=True)
class Intent:
    """
    Распознанное намерение пользователя.

    Attributes:
        type: Источник намерения (обязателен)
        name: Имя намерения
        label: Метка из обучающих данных, используется как имя по умолчанию
        resolve_prompt: Текст уточняющего вопроса
        answers: Группы ответов, только для QnA
    """
    type: Optional[IntentType] = None
    name: Optional[str] = None
    label: Optional[str] = None
    resolve_prompt: Optional[str] = None
    answers: Optional[List[List[Dict[str, Any]]]] = None

    def __post_init__(self):
        if not self.type:
            raise SdkError("Intent constructor: data must contain type")
        try:
            intent_type = IntentType(self.type)
        except ValueError:
            raise SdkError(f"Intent constructor: unknown type {self.type!r}")
        # Для QnA имя по умолчанию "qnas", остальным нужно имя или метка
        if intent_type != IntentType.QNA and not (self.name or self.label):
            raise SdkError("Intent constructor: data must contain label or name")

        object.__setattr__(self, "type", intent_type)
        if not self.name:
            object.__setattr__(self, "name", QNA_INTENT_NAME if self.is_qna() else self.label)
        if not self.is_qna():
            object.__setattr__(self, "answers", None)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Intent":
        return cls(
            type=data.get("type"),
            name=data.get("name"),
            label=data.get("label"),
            resolve_prompt=data.get("resolve_prompt"),
            answers=data.get("answers"),
        )

    def is_qna(self) -> bool:
        """Проверяет, получено ли намерение из QnA."""
        return self.type == IntentType.QNA


@dataclass
class ClassifierResult:
    """
    Кандидат классификатора.

    Attributes:
        name: Имя намерения
        value: Уверенность, сравнивается с порогом
    """
    name: str
    value: float

"""
NLU (Natural Language Understanding) модуль.

Обеспечивает понимание пользовательских запросов:
- Классификация намерений (intents)
- Поиск ответов в базе QnA
- Извлечение сущностей по словарям
"""

from .models import (
    Intent,
    IntentType,
    ClassifierResult,
    Entity,
    EntityValue,
    NLUResult,
)
from .qna import QnaClient
from .pipeline import NLUPipeline

__all__ = [
    # Models
    "Intent",
    "IntentType",
    "ClassifierResult",
    "Entity",
    "EntityValue",
    "NLUResult",
    # Pipeline
    "QnaClient",
    "NLUPipeline",
]

"""NLU Models - dataclasses для работы с NLU."""

from .intents import Intent, IntentType, ClassifierResult
from .entities import Entity, EntityValue, STRING_TYPE
from .result import NLUResult

__all__ = [
    "Intent",
    "IntentType",
    "ClassifierResult",
    "Entity",
    "EntityValue",
    "STRING_TYPE",
    "NLUResult",
]

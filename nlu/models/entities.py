"""Entity models for NLU."""

from typing import List, Any
from dataclasses import dataclass, field

STRING_TYPE = "string"


@dataclass
class EntityValue:
    """Значение сущности и его тип."""
    value: Any
    type: str = STRING_TYPE


@dataclass
class Entity:
    """
    Сущность, извлечённая из текста.

    Attributes:
        dim: Измерение (категория), например "city" или "system:boolean"
        values: Найденные значения
    """
    dim: str
    values: List[EntityValue] = field(default_factory=list)

    @property
    def value(self) -> Any:
        """Первое значение сущности."""
        return self.values[0].value if self.values else None

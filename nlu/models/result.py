"""NLU result model."""

from dataclasses import dataclass, field
from typing import List, Optional

from .entities import Entity
from .intents import Intent


@dataclass
class NLUResult:
    """
    Результат обработки сообщения NLU пайплайном.

    Пустой список намерений при найденных сущностях - нормальный исход.
    """
    intents: List[Intent] = field(default_factory=list)
    entities: List[Entity] = field(default_factory=list)

    @property
    def intent(self) -> Optional[Intent]:
        """Лучшее намерение или None."""
        return self.intents[0] if self.intents else None

    def get_entities(self, dim: str) -> List[Entity]:
        """Получить все сущности определённого измерения."""
        return [e for e in self.entities if e.dim == dim]

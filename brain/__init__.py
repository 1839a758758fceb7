"""
Brain - хранилище пользователей, разговоров и глобальных данных бота.
"""

from typing import Optional

from config.config import BrainConfig
from utils.errors import ConfigurationError

from .models import User, Conversation, DialogsData
from .base import Brain
from .memory_brain import MemoryBrain
from .sqlite_brain import SqliteBrain

BRAINS = {
    "memory": MemoryBrain,
    "sqlite": SqliteBrain,
}


def create_brain(config: Optional[BrainConfig] = None) -> Brain:
    """Создать хранилище, выбранное в конфигурации."""
    config = config or BrainConfig()
    brain_class = BRAINS.get(config.NAME)
    if brain_class is None:
        raise ConfigurationError(f"Unknown brain {config.NAME!r}")
    return brain_class(config)


__all__ = [
    "User",
    "Conversation",
    "DialogsData",
    "Brain",
    "MemoryBrain",
    "SqliteBrain",
    "create_brain",
]

"""Models for users and conversations stored by the brain."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from config.constants import DIALOGS_KEY, NEW_CONVERSATION_FLAG


@dataclass
class DialogsData:
    """
    Состояние диалогового движка внутри одного разговора.

    Attributes:
        stack: Стек активных диалогов
        previous: Уже завершённые диалоги
        is_new_conversation: Флаг, требующий начать новый разговор перед сохранением
    """
    stack: List[Any] = field(default_factory=list)
    previous: List[Any] = field(default_factory=list)
    is_new_conversation: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data = {"stack": list(self.stack), "previous": list(self.previous)}
        if self.is_new_conversation:
            data[NEW_CONVERSATION_FLAG] = True
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "DialogsData":
        data = data or {}
        return cls(
            stack=list(data.get("stack", [])),
            previous=list(data.get("previous", [])),
            is_new_conversation=bool(data.get(NEW_CONVERSATION_FLAG, False)),
        )


@dataclass
class Conversation:
    """
    Один разговор пользователя.

    Разговоры не удаляются: просроченный остаётся в истории,
    а текущим становится новый, добавленный в конец.
    """
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=datetime.now)
    dialogs: DialogsData = field(default_factory=DialogsData)
    values: Dict[str, Any] = field(default_factory=dict)

    def get(self, key: str) -> Any:
        """Получить значение по ключу в рамках разговора."""
        if key == DIALOGS_KEY:
            return self.dialogs
        return self.values.get(key)

    def set(self, key: str, value: Any):
        """Установить значение по ключу в рамках разговора."""
        if key == DIALOGS_KEY:
            self.dialogs = value if isinstance(value, DialogsData) else DialogsData.from_dict(value)
        else:
            self.values[key] = value

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "created_at": self.created_at.isoformat(),
            "dialogs": self.dialogs.to_dict(),
            "values": self.values,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Conversation":
        return cls(
            id=data["id"],
            created_at=datetime.fromisoformat(data["created_at"]),
            dialogs=DialogsData.from_dict(data.get("dialogs")),
            values=dict(data.get("values") or {}),
        )


@dataclass
class User:
    """
    Пользователь бота.

    Attributes:
        user_id: Внешний уникальный идентификатор
        conversations: Разговоры в порядке создания
        created_at: Время первого обращения
        values: Данные в рамках пользователя
    """
    user_id: str
    conversations: List[Conversation] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.now)
    values: Dict[str, Any] = field(default_factory=dict)

    @property
    def last_conversation(self) -> Optional[Conversation]:
        return self.conversations[-1] if self.conversations else None

    def get(self, key: str) -> Any:
        return self.values.get(key)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id,
            "conversations": [c.to_dict() for c in self.conversations],
            "created_at": self.created_at.isoformat(),
            "values": self.values,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        return cls(
            user_id=data["user_id"],
            conversations=[Conversation.from_dict(c) for c in data.get("conversations", [])],
            created_at=datetime.fromisoformat(data["created_at"]),
            values=dict(data.get("values") or {}),
        )

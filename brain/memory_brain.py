"""In-memory brain, used by default and in tests."""

import copy
import logging
from typing import Any, Dict, List, Optional

from brain.base import Brain
from brain.models import Conversation, User
from config.config import BrainConfig
from utils.errors import UserNotFoundError
from utils.logger import setup_logger

logger = setup_logger(name="memory_brain", level=logging.INFO)


class MemoryBrain(Brain):
    """
    Хранилище в памяти процесса.

    Данные теряются при перезапуске. Наружу отдаются копии, поэтому
    изменения попадают в хранилище только через его методы.
    """

    def __init__(self, config: Optional[BrainConfig] = None):
        super().__init__(config)
        self.users: Dict[str, User] = {}
        self.values: Dict[str, Any] = {}

    async def clean(self):
        logger.debug("clean")
        self.users = {}
        self.values = {}
        self._reset_locks()

    def _get(self, user_id: str) -> User:
        user = self.users.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def has_user(self, user_id: str) -> bool:
        return user_id in self.users

    async def add_user(self, user_id: str) -> User:
        logger.debug(f"add_user {user_id}")
        user = self.users.setdefault(user_id, self.get_user_init_value(user_id))
        return copy.deepcopy(user)

    async def get_user(self, user_id: str) -> User:
        return copy.deepcopy(self._get(user_id))

    async def get_all_users(self) -> List[User]:
        return copy.deepcopy(list(self.users.values()))

    async def add_conversation(self, user_id: str) -> Conversation:
        conversation = self.get_conversation_init_value()
        self._get(user_id).conversations.append(conversation)
        return copy.deepcopy(conversation)

    async def get_last_conversation(self, user_id: str) -> Optional[Conversation]:
        return copy.deepcopy(self._get(user_id).last_conversation)

    async def user_set(self, user_id: str, key: str, value: Any) -> User:
        user = self._get(user_id)
        user.values[key] = copy.deepcopy(value)
        return copy.deepcopy(user)

    async def save_conversation(self, user_id: str, conversation: Conversation):
        conversations = self._get(user_id).conversations
        for index, stored in enumerate(conversations):
            if stored.id == conversation.id:
                conversations[index] = copy.deepcopy(conversation)
                return
        logger.warning(f"save_conversation: разговор {conversation.id} не найден у {user_id}")

    async def bot_get(self, key: str) -> Any:
        return copy.deepcopy(self.values.get(key))

    async def bot_set(self, key: str, value: Any) -> Any:
        self.values[key] = copy.deepcopy(value)
        return value

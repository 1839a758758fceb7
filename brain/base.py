"""
Brain - хранилище пользователей и разговоров.

Часть методов работает в рамках пользователя, часть - в рамках
последнего (текущего) разговора пользователя. Разговор считается
текущим, пока не истекла настроенная длительность.
"""

import asyncio
import logging
import weakref
from datetime import datetime, timedelta
from typing import Any, List, Optional

from brain.models import Conversation, DialogsData, User
from config.config import BrainConfig
from config.constants import DIALOGS_KEY, NEW_CONVERSATION_FLAG
from utils.errors import MissingImplementationError
from utils.logger import setup_logger

logger = setup_logger(name="brain", level=logging.INFO)


class Brain:
    """
    Базовый класс хранилища.

    Конкретные реализации переопределяют методы, которые здесь
    бросают MissingImplementationError. Операции "создать, если нет"
    выполняются под блокировкой конкретного пользователя.
    """

    def __init__(self, config: Optional[BrainConfig] = None):
        config = config or BrainConfig()
        self.conversation_duration = timedelta(seconds=config.CONVERSATION_DURATION)
        # Блокировка живёт, пока её кто-то держит или ждёт
        self._user_locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()

    def _lock_for(self, user_id: str) -> asyncio.Lock:
        lock = self._user_locks.get(user_id)
        if lock is None:
            lock = self._user_locks[user_id] = asyncio.Lock()
        return lock

    def _reset_locks(self):
        self._user_locks = weakref.WeakValueDictionary()

    async def init(self):
        """Инициализация хранилища. Повторный вызов безопасен."""
        logger.debug("init")

    async def close(self):
        """Освобождение ресурсов."""

    async def clean(self):
        """Очистить хранилище."""
        raise MissingImplementationError()

    def get_user_init_value(self, user_id: str) -> User:
        """Новый пользователь сразу получает один пустой разговор."""
        return User(user_id=user_id, conversations=[self.get_conversation_init_value()])

    def get_conversation_init_value(self) -> Conversation:
        return Conversation(dialogs=DialogsData(stack=[], previous=[]))

    # Пользователи

    async def has_user(self, user_id: str) -> bool:
        raise MissingImplementationError()

    async def add_user(self, user_id: str) -> User:
        raise MissingImplementationError()

    async def get_user(self, user_id: str) -> User:
        raise MissingImplementationError()

    async def get_all_users(self) -> List[User]:
        raise MissingImplementationError()

    async def add_user_if_necessary(self, user_id: str):
        """Добавить пользователя, если его ещё нет."""
        logger.debug(f"add_user_if_necessary {user_id}")
        async with self._lock_for(user_id):
            if not await self.has_user(user_id):
                await self.add_user(user_id)

    async def init_user_if_necessary(self, user_id: str) -> Conversation:
        """Создать пользователя и актуальный разговор при необходимости."""
        await self.add_user_if_necessary(user_id)
        return await self.init_last_conversation_if_necessary(user_id)

    # Разговоры

    async def add_conversation(self, user_id: str) -> Conversation:
        raise MissingImplementationError()

    async def get_last_conversation(self, user_id: str) -> Optional[Conversation]:
        """Последний разговор пользователя или None, если разговоров нет."""
        raise MissingImplementationError()

    def is_conversation_valid(
        self,
        conversation: Optional[Conversation],
        now: Optional[datetime] = None,
    ) -> bool:
        """Разговор актуален, пока с момента создания не прошла его длительность."""
        if conversation is None:
            return False
        now = now or datetime.now()
        return now - conversation.created_at < self.conversation_duration

    async def init_last_conversation_if_necessary(self, user_id: str) -> Conversation:
        """
        Вернуть актуальный разговор, начав новый, если последний отсутствует
        или истёк.
        """
        async with self._lock_for(user_id):
            return await self._get_current_conversation(user_id)

    async def _get_current_conversation(self, user_id: str) -> Conversation:
        conversation = await self.get_last_conversation(user_id)
        if not self.is_conversation_valid(conversation):
            logger.debug(f"init_last_conversation_if_necessary: new conversation for {user_id}")
            conversation = await self.add_conversation(user_id)
        return conversation

    # Данные в рамках пользователя

    async def user_get(self, user_id: str, key: str) -> Any:
        logger.debug(f"user_get {user_id} {key}")
        user = await self.get_user(user_id)
        return user.get(key)

    async def user_set(self, user_id: str, key: str, value: Any) -> User:
        raise MissingImplementationError()

    # Данные в рамках текущего разговора

    async def conversation_get(self, user_id: str, key: str) -> Any:
        logger.debug(f"conversation_get {user_id} {key}")
        conversation = await self.init_last_conversation_if_necessary(user_id)
        return conversation.get(key)

    async def conversation_set(self, user_id: str, key: str, value: Any) -> Conversation:
        """
        Сохранить значение в текущем разговоре.

        Если значение несёт флаг is_new_conversation, сначала начинается
        новый разговор, а флаг снимается перед сохранением.
        """
        logger.debug(f"conversation_set {user_id} {key}")
        async with self._lock_for(user_id):
            if _pop_new_conversation_flag(value):
                logger.debug(f"conversation_set: forced new conversation for {user_id}")
                await self.add_conversation(user_id)
            conversation = await self._get_current_conversation(user_id)
            conversation.set(key, value)
            await self.save_conversation(user_id, conversation)
            return conversation

    async def save_conversation(self, user_id: str, conversation: Conversation):
        """Сохранить изменённый разговор пользователя."""
        raise MissingImplementationError()

    async def get_dialogs(self, user_id: str) -> DialogsData:
        return await self.conversation_get(user_id, DIALOGS_KEY)

    async def set_dialogs(self, user_id: str, dialogs: DialogsData):
        await self.conversation_set(user_id, DIALOGS_KEY, dialogs)

    # Глобальные данные бота

    async def bot_get(self, key: str) -> Any:
        raise MissingImplementationError()

    async def bot_set(self, key: str, value: Any) -> Any:
        raise MissingImplementationError()


def _pop_new_conversation_flag(value: Any) -> bool:
    if isinstance(value, DialogsData):
        flag = value.is_new_conversation
        value.is_new_conversation = False
        return flag
    if isinstance(value, dict):
        return bool(value.pop(NEW_CONVERSATION_FLAG, False))
    return False

"""
SQLite brain - хранение пользователей и разговоров в SQLite.

Каждый разговор хранится отдельной строкой, порядок разговоров
пользователя задаётся автоинкрементным seq.
"""

import json
import logging
import os
from datetime import datetime
from typing import Any, List, Optional

import aiosqlite

from brain.base import Brain
from brain.models import Conversation, DialogsData, User
from config.config import BrainConfig
from utils.errors import UserNotFoundError
from utils.logger import setup_logger

logger = setup_logger(name="sqlite_brain", level=logging.INFO)


class SqliteBrain(Brain):
    """
    Хранилище на базе aiosqlite.

    Создание пользователя выполняется через INSERT OR IGNORE,
    поэтому одновременные первые сообщения не создают дубликатов.
    """

    def __init__(self, config: Optional[BrainConfig] = None):
        config = config or BrainConfig(NAME="sqlite")
        super().__init__(config)
        self.db_path = config.DB_PATH
        self._initialized = False

    async def init(self):
        """Инициализация таблиц в БД."""
        if self._initialized:
            return

        db_dir = os.path.dirname(self.db_path)
        if db_dir and not os.path.exists(db_dir):
            os.makedirs(db_dir)

        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("""
                CREATE TABLE IF NOT EXISTS users (
                    user_id TEXT PRIMARY KEY,
                    user_values TEXT,
                    created_at TIMESTAMP NOT NULL
                )
            """)
            await db.execute("""
                CREATE TABLE IF NOT EXISTS conversations (
                    seq INTEGER PRIMARY KEY AUTOINCREMENT,
                    id TEXT UNIQUE NOT NULL,
                    user_id TEXT NOT NULL,
                    dialogs TEXT,
                    conversation_values TEXT,
                    created_at TIMESTAMP NOT NULL,
                    FOREIGN KEY (user_id) REFERENCES users(user_id)
                )
            """)
            await db.execute("""
                CREATE TABLE IF NOT EXISTS bot_values (
                    key TEXT PRIMARY KEY,
                    value TEXT
                )
            """)
            await db.execute(
                "CREATE INDEX IF NOT EXISTS idx_conversations_user ON conversations(user_id, seq)"
            )
            await db.commit()

        self._initialized = True
        logger.info(f"SqliteBrain инициализирован: {self.db_path}")

    async def clean(self):
        await self.init()
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("DELETE FROM conversations")
            await db.execute("DELETE FROM users")
            await db.execute("DELETE FROM bot_values")
            await db.commit()
        self._reset_locks()

    async def has_user(self, user_id: str) -> bool:
        await self.init()
        async with aiosqlite.connect(self.db_path) as db:
            async with db.execute(
                "SELECT 1 FROM users WHERE user_id = ?", (user_id,)
            ) as cursor:
                row = await cursor.fetchone()
        return row is not None

    async def add_user(self, user_id: str) -> User:
        await self.init()
        user = self.get_user_init_value(user_id)
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "INSERT OR IGNORE INTO users (user_id, user_values, created_at) VALUES (?, ?, ?)",
                (user_id, json.dumps(user.values), user.created_at.isoformat()),
            )
            if cursor.rowcount == 1:
                for conversation in user.conversations:
                    await self._insert_conversation(db, user_id, conversation)
            else:
                logger.debug(f"add_user: {user_id} уже существует")
            await db.commit()
        return await self.get_user(user_id)

    async def get_user(self, user_id: str) -> User:
        await self.init()
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            async with db.execute(
                "SELECT * FROM users WHERE user_id = ?", (user_id,)
            ) as cursor:
                row = await cursor.fetchone()
            if row is None:
                raise UserNotFoundError(user_id)
            conversations = await self._fetch_conversations(db, user_id)
        return self._deserialize_user(dict(row), conversations)

    async def get_all_users(self) -> List[User]:
        await self.init()
        users = []
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            async with db.execute("SELECT * FROM users ORDER BY created_at") as cursor:
                rows = await cursor.fetchall()
            for row in rows:
                conversations = await self._fetch_conversations(db, row["user_id"])
                users.append(self._deserialize_user(dict(row), conversations))
        return users

    async def add_conversation(self, user_id: str) -> Conversation:
        await self.init()
        conversation = self.get_conversation_init_value()
        async with aiosqlite.connect(self.db_path) as db:
            await self._ensure_user(db, user_id)
            await self._insert_conversation(db, user_id, conversation)
            await db.commit()
        return conversation

    async def get_last_conversation(self, user_id: str) -> Optional[Conversation]:
        await self.init()
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            await self._ensure_user(db, user_id)
            async with db.execute(
                "SELECT * FROM conversations WHERE user_id = ? ORDER BY seq DESC LIMIT 1",
                (user_id,),
            ) as cursor:
                row = await cursor.fetchone()
        return self._deserialize_conversation(dict(row)) if row else None

    async def user_set(self, user_id: str, key: str, value: Any) -> User:
        # Чтение и запись значений пользователя под одной блокировкой
        async with self._lock_for(user_id):
            user = await self.get_user(user_id)
            user.values[key] = value
            async with aiosqlite.connect(self.db_path) as db:
                await db.execute(
                    "UPDATE users SET user_values = ? WHERE user_id = ?",
                    (json.dumps(user.values, ensure_ascii=False), user_id),
                )
                await db.commit()
        return user

    async def save_conversation(self, user_id: str, conversation: Conversation):
        await self.init()
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                "UPDATE conversations SET dialogs = ?, conversation_values = ? WHERE id = ? AND user_id = ?",
                (
                    json.dumps(conversation.dialogs.to_dict(), ensure_ascii=False),
                    json.dumps(conversation.values, ensure_ascii=False),
                    conversation.id,
                    user_id,
                ),
            )
            await db.commit()

    async def bot_get(self, key: str) -> Any:
        await self.init()
        async with aiosqlite.connect(self.db_path) as db:
            async with db.execute(
                "SELECT value FROM bot_values WHERE key = ?", (key,)
            ) as cursor:
                row = await cursor.fetchone()
        return json.loads(row[0]) if row else None

    async def bot_set(self, key: str, value: Any) -> Any:
        await self.init()
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                "INSERT OR REPLACE INTO bot_values (key, value) VALUES (?, ?)",
                (key, json.dumps(value, ensure_ascii=False)),
            )
            await db.commit()
        return value

    async def _ensure_user(self, db: aiosqlite.Connection, user_id: str):
        async with db.execute("SELECT 1 FROM users WHERE user_id = ?", (user_id,)) as cursor:
            if await cursor.fetchone() is None:
                raise UserNotFoundError(user_id)

    async def _insert_conversation(self, db: aiosqlite.Connection, user_id: str, conversation: Conversation):
        await db.execute(
            """
            INSERT INTO conversations (id, user_id, dialogs, conversation_values, created_at)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                conversation.id,
                user_id,
                json.dumps(conversation.dialogs.to_dict(), ensure_ascii=False),
                json.dumps(conversation.values, ensure_ascii=False),
                conversation.created_at.isoformat(),
            ),
        )

    async def _fetch_conversations(self, db: aiosqlite.Connection, user_id: str) -> List[Conversation]:
        async with db.execute(
            "SELECT * FROM conversations WHERE user_id = ? ORDER BY seq", (user_id,)
        ) as cursor:
            rows = await cursor.fetchall()
        return [self._deserialize_conversation(dict(row)) for row in rows]

    def _deserialize_conversation(self, row: dict) -> Conversation:
        """Десериализация разговора из БД."""
        return Conversation(
            id=row["id"],
            created_at=datetime.fromisoformat(row["created_at"]),
            dialogs=DialogsData.from_dict(json.loads(row.get("dialogs") or "{}")),
            values=json.loads(row.get("conversation_values") or "{}"),
        )

    def _deserialize_user(self, row: dict, conversations: List[Conversation]) -> User:
        """Десериализация пользователя из БД."""
        return User(
            user_id=row["user_id"],
            conversations=conversations,
            created_at=datetime.fromisoformat(row["created_at"]),
            values=json.loads(row.get("user_values") or "{}"),
        )

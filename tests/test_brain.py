import asyncio
from datetime import datetime, timedelta

import pytest

from brain import Brain, Conversation, DialogsData, MemoryBrain, create_brain, SqliteBrain
from config.config import BrainConfig
from config.constants import DIALOGS_KEY
from utils.errors import ConfigurationError, MissingImplementationError, UserNotFoundError


class SlowMemoryBrain(MemoryBrain):
    """Хранилище, уступающее управление между проверкой и созданием."""

    def __init__(self, config=None):
        super().__init__(config)
        self.add_user_calls = 0
        self.add_conversation_calls = 0

    async def has_user(self, user_id):
        await asyncio.sleep(0.01)
        return await super().has_user(user_id)

    async def add_user(self, user_id):
        self.add_user_calls += 1
        return await super().add_user(user_id)

    async def get_last_conversation(self, user_id):
        await asyncio.sleep(0.01)
        return await super().get_last_conversation(user_id)

    async def add_conversation(self, user_id):
        self.add_conversation_calls += 1
        return await super().add_conversation(user_id)


def test_conversation_init_value_is_fresh(brain):
    first = brain.get_conversation_init_value()
    second = brain.get_conversation_init_value()
    assert first.dialogs.stack == [] and first.dialogs.previous == []
    assert first.id != second.id


def test_user_init_value_has_one_conversation(brain):
    user = brain.get_user_init_value("u1")
    assert user.user_id == "u1"
    assert len(user.conversations) == 1


def test_conversation_validity_boundary(brain):
    now = datetime.now()
    assert brain.is_conversation_valid(None) is False
    fresh = Conversation(created_at=now - timedelta(seconds=59))
    assert brain.is_conversation_valid(fresh, now=now) is True
    boundary = Conversation(created_at=now - timedelta(seconds=60))
    assert brain.is_conversation_valid(boundary, now=now) is False
    expired = Conversation(created_at=now - timedelta(seconds=61))
    assert brain.is_conversation_valid(expired, now=now) is False


async def test_concurrent_first_contact_creates_one_user():
    brain = SlowMemoryBrain()
    await asyncio.gather(
        brain.add_user_if_necessary("u1"),
        brain.add_user_if_necessary("u1"),
    )
    assert brain.add_user_calls == 1
    assert len(await brain.get_all_users()) == 1


async def test_concurrent_init_last_conversation_adds_one_conversation():
    brain = SlowMemoryBrain(BrainConfig(CONVERSATION_DURATION=60))
    await brain.add_user("u1")
    brain.users["u1"].conversations[0].created_at -= timedelta(seconds=120)

    first, second = await asyncio.gather(
        brain.init_last_conversation_if_necessary("u1"),
        brain.init_last_conversation_if_necessary("u1"),
    )
    assert brain.add_conversation_calls == 1
    assert first.id == second.id
    user = await brain.get_user("u1")
    assert len(user.conversations) == 2


async def test_expired_conversation_is_kept_as_history(brain):
    await brain.add_user("u1")
    old = brain.users["u1"].conversations[0]
    old.created_at -= timedelta(seconds=120)

    current = await brain.init_last_conversation_if_necessary("u1")
    assert current.id != old.id
    user = await brain.get_user("u1")
    assert [c.id for c in user.conversations] == [old.id, current.id]


async def test_valid_conversation_is_reused(brain):
    conversation = await brain.init_user_if_necessary("u1")
    again = await brain.init_last_conversation_if_necessary("u1")
    assert again.id == conversation.id


async def test_user_scope(brain):
    await brain.add_user_if_necessary("u1")
    await brain.user_set("u1", "name", "Alice")
    assert await brain.user_get("u1", "name") == "Alice"
    assert await brain.user_get("u1", "missing") is None


async def test_conversation_scope_is_reset_by_new_conversation(brain):
    await brain.init_user_if_necessary("u1")
    await brain.conversation_set("u1", "city", "paris")
    assert await brain.conversation_get("u1", "city") == "paris"

    await brain.add_conversation("u1")
    assert await brain.conversation_get("u1", "city") is None


async def test_dialogs_new_conversation_flag(brain):
    first = await brain.init_user_if_necessary("u1")
    dialogs = DialogsData(stack=[{"name": "greetings"}], previous=[], is_new_conversation=True)

    await brain.set_dialogs("u1", dialogs)

    user = await brain.get_user("u1")
    assert len(user.conversations) == 2
    assert user.conversations[0].id == first.id
    stored = await brain.get_dialogs("u1")
    assert stored.stack == [{"name": "greetings"}]
    assert stored.is_new_conversation is False


async def test_conversation_set_strips_flag_from_dict(brain):
    await brain.init_user_if_necessary("u1")
    await brain.conversation_set(
        "u1", DIALOGS_KEY, {"stack": [], "previous": ["done"], "is_new_conversation": True}
    )
    user = await brain.get_user("u1")
    assert len(user.conversations) == 2
    dialogs = await brain.conversation_get("u1", DIALOGS_KEY)
    assert dialogs.previous == ["done"]
    assert dialogs.is_new_conversation is False


async def test_bot_scope(brain):
    assert await brain.bot_get("greeting") is None
    await brain.bot_set("greeting", {"text": "hello"})
    assert await brain.bot_get("greeting") == {"text": "hello"}


async def test_unknown_user_is_not_found(brain):
    with pytest.raises(UserNotFoundError):
        await brain.get_user("nobody")
    with pytest.raises(UserNotFoundError):
        await brain.conversation_get("nobody", "key")


async def test_clean(brain):
    await brain.add_user_if_necessary("u1")
    await brain.bot_set("k", 1)
    await brain.clean()
    assert await brain.get_all_users() == []
    assert await brain.bot_get("k") is None


async def test_clean_releases_user_locks(brain):
    await asyncio.gather(*(brain.init_user_if_necessary(f"u{i}") for i in range(100)))
    await brain.clean()
    assert len(brain._user_locks) == 0


async def test_idle_user_locks_are_dropped(brain):
    for i in range(100):
        await brain.add_user_if_necessary(f"u{i}")
    assert len(brain._user_locks) == 0


async def test_stored_values_are_not_shared_with_callers(brain):
    await brain.init_user_if_necessary("u1")
    tags = ["a"]
    await brain.user_set("u1", "tags", tags)
    tags.append("b")
    assert await brain.user_get("u1", "tags") == ["a"]

    user = await brain.get_user("u1")
    user.values["tags"].append("c")
    assert await brain.user_get("u1", "tags") == ["a"]

    city = {"name": "paris"}
    await brain.conversation_set("u1", "city", city)
    city["name"] = "lyon"
    stored = await brain.conversation_get("u1", "city")
    assert stored == {"name": "paris"}
    stored["name"] = "nice"
    assert await brain.conversation_get("u1", "city") == {"name": "paris"}


@pytest.mark.parametrize("method, args", [
    ("clean", ()),
    ("has_user", ("u1",)),
    ("add_user", ("u1",)),
    ("get_user", ("u1",)),
    ("get_all_users", ()),
    ("add_conversation", ("u1",)),
    ("get_last_conversation", ("u1",)),
    ("user_set", ("u1", "k", "v")),
    ("bot_get", ("k",)),
    ("bot_set", ("k", "v")),
])
async def test_base_brain_reports_missing_implementation(method, args):
    brain = Brain()
    with pytest.raises(MissingImplementationError):
        await getattr(brain, method)(*args)


async def test_missing_implementation_surfaces_through_helpers():
    brain = Brain()
    with pytest.raises(MissingImplementationError):
        await brain.add_user_if_necessary("u1")


def test_create_brain():
    assert isinstance(create_brain(BrainConfig(NAME="memory")), MemoryBrain)
    assert isinstance(create_brain(BrainConfig(NAME="sqlite", DB_PATH="db/test.db")), SqliteBrain)
    with pytest.raises(ConfigurationError):
        create_brain(BrainConfig(NAME="redis"))

import pytest

from brain import MemoryBrain
from config.config import BrainConfig


@pytest.fixture
def brain():
    return MemoryBrain(BrainConfig(CONVERSATION_DURATION=60))

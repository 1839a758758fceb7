from dataclasses import dataclass, field
from typing import Optional

from config.constants import (
    BRAIN_NAMES,
    DEFAULT_BRAIN_DB_PATH,
    DEFAULT_CONVERSATION_DURATION_SECONDS,
    DEFAULT_LOCALE,
    QNA_API_URL,
    QNA_WHEN_VALUES,
)
from utils.errors import ConfigurationError


@dataclass
class BrainConfig:
    """Настройки хранилища пользователей и диалогов"""
    NAME: str = "memory"
    DB_PATH: str = DEFAULT_BRAIN_DB_PATH
    # Длительность жизни диалога в секундах
    CONVERSATION_DURATION: float = DEFAULT_CONVERSATION_DURATION_SECONDS


@dataclass
class QnaConfig:
    """Настройки сервиса QnA"""
    WHEN: str = "after"
    STRICT: bool = False
    APP_ID: Optional[str] = None
    APP_KEY: Optional[str] = None
    URL: str = QNA_API_URL


@dataclass
class NluConfig:
    """Настройки NLU"""
    # Обязательный порог уверенности, None означает "не задан"
    INTENT_THRESHOLD: Optional[float] = None
    QNA: Optional[QnaConfig] = None
    CLASSIFIER_URL: Optional[str] = None


@dataclass
class Config:
    """Конфигурация приложения из переменных окружения"""
    BRAIN: BrainConfig = field(default_factory=BrainConfig)
    NLU: NluConfig = field(default_factory=NluConfig)
    MULTI_INTENT: bool = False
    LOCALE: str = DEFAULT_LOCALE

    # Настройки логирования
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None


def _parse_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None or value == "":
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _parse_float(name: str, value: Optional[str]) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {value!r}")


def load_config() -> Config:
    """
    Загрузка конфигурации из переменных окружения

    Returns:
        Config: Объект конфигурации

    Raises:
        ConfigurationError: Если значение переменной некорректно
    """
    import os
    from dotenv import load_dotenv

    load_dotenv()

    brain_name = os.getenv("BRAIN_NAME", "memory")
    if brain_name not in BRAIN_NAMES:
        raise ConfigurationError(
            f"BRAIN_NAME must be one of {', '.join(BRAIN_NAMES)}, got {brain_name!r}"
        )

    duration = _parse_float("BRAIN_CONVERSATION_DURATION", os.getenv("BRAIN_CONVERSATION_DURATION"))

    qna = None
    qna_when = os.getenv("NLU_QNA_WHEN")
    if qna_when:
        if qna_when not in QNA_WHEN_VALUES:
            raise ConfigurationError(
                f"NLU_QNA_WHEN must be one of {', '.join(QNA_WHEN_VALUES)}, got {qna_when!r}"
            )
        qna = QnaConfig(
            WHEN=qna_when,
            STRICT=_parse_bool(os.getenv("NLU_QNA_STRICT")),
            APP_ID=os.getenv("BOTFUEL_APP_ID"),
            APP_KEY=os.getenv("BOTFUEL_APP_KEY"),
            URL=os.getenv("NLU_QNA_URL", QNA_API_URL),
        )

    return Config(
        BRAIN=BrainConfig(
            NAME=brain_name,
            DB_PATH=os.getenv("BRAIN_DB_PATH", DEFAULT_BRAIN_DB_PATH),
            CONVERSATION_DURATION=duration if duration is not None else DEFAULT_CONVERSATION_DURATION_SECONDS,
        ),
        NLU=NluConfig(
            INTENT_THRESHOLD=_parse_float("NLU_INTENT_THRESHOLD", os.getenv("NLU_INTENT_THRESHOLD")),
            QNA=qna,
            CLASSIFIER_URL=os.getenv("NLU_CLASSIFIER_URL") or None,
        ),
        MULTI_INTENT=_parse_bool(os.getenv("MULTI_INTENT")),
        LOCALE=os.getenv("LOCALE", DEFAULT_LOCALE),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO"),
        LOG_FILE=os.getenv("LOG_FILE") or None,
    )

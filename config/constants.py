"""
Статичные константы приложения

Здесь должны быть только константы, которые:
- Не изменяются между окружениями (dev/prod)
- Не являются секретами
- Определяют поведение приложения
"""

# Хранилище
BRAIN_NAMES = ("memory", "sqlite")
DEFAULT_BRAIN_DB_PATH = "db/brain.db"
DEFAULT_CONVERSATION_DURATION_SECONDS = 24 * 60 * 60

# Ключ данных диалогового движка в рамках диалога
DIALOGS_KEY = "_dialogs"
NEW_CONVERSATION_FLAG = "is_new_conversation"

# NLU
DEFAULT_LOCALE = "en"
QNA_WHEN_VALUES = ("before", "after")
QNA_INTENT_NAME = "qnas"
MAX_INTENTS = 1
MAX_INTENTS_MULTI = 2

# Таймауты внешних сервисов
API_TIMEOUT_SECONDS = 30

# Botfuel API (статичные данные)
QNA_API_URL = "https://api.botfuel.io/qna/api/v1/bots/classify"

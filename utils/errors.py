"""
Иерархия ошибок бота.
"""

from typing import Optional


class BotError(Exception):
    """Базовая ошибка бота."""


class ConfigurationError(BotError):
    """Отсутствует или некорректна обязательная настройка. Фатальна при запуске."""


class AuthenticationError(BotError):
    """Внешний сервис отклонил учётные данные (HTTP 403)."""

    def __init__(self, message: str = "Authentication failed, check your app credentials"):
        super().__init__(message)


class MissingImplementationError(BotError):
    """Абстрактный метод не переопределён в конкретной реализации."""

    def __init__(self, message: str = "Missing implementation"):
        super().__init__(message)


class SdkError(BotError):
    """Некорректные данные при построении объектов SDK."""


class ServiceError(BotError):
    """Ошибка внешнего HTTP-сервиса."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class QnaError(ServiceError):
    """Ошибка сервиса QnA."""


class ClassifierError(ServiceError):
    """Ошибка удалённого классификатора."""


class UserNotFoundError(BotError):
    """Пользователь отсутствует в хранилище."""

    def __init__(self, user_id: str):
        super().__init__(f"User {user_id!r} not found")
        self.user_id = user_id


from .logger import setup_logger, configure_logging
from .errors import (
    BotError,
    ConfigurationError,
    AuthenticationError,
    MissingImplementationError,
    SdkError,
    ServiceError,
    QnaError,
    ClassifierError,
    UserNotFoundError,
)

__all__ = [
    'setup_logger',
    'configure_logging',
    'BotError',
    'ConfigurationError',
    'AuthenticationError',
    'MissingImplementationError',
    'SdkError',
    'ServiceError',
    'QnaError',
    'ClassifierError',
    'UserNotFoundError',
]

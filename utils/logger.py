"""
Настройка логирования для модулей бота.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Имена логгеров, созданных через setup_logger
_LOGGER_NAMES = set()


def setup_logger(
    name: str,
    log_file: Optional[str] = None,
    level: Union[int, str] = logging.INFO,
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 3,
) -> logging.Logger:
    """
    Создание логгера с выводом в консоль и (опционально) в файл с ротацией.

    Args:
        name: Имя логгера
        log_file: Путь к файлу логов
        level: Уровень логирования
        max_bytes: Максимальный размер файла до ротации
        backup_count: Количество хранимых архивов

    Returns:
        logging.Logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    _LOGGER_NAMES.add(name)

    # Повторный вызов не должен дублировать обработчики
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def configure_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None):
    """
    Применить уровень и общий файл логов ко всем логгерам модулей.

    Args:
        level: Уровень логирования
        log_file: Путь к файлу логов с ротацией
    """
    file_handler = None
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)
        file_handler = RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    for name in list(_LOGGER_NAMES):
        logger = logging.getLogger(name)
        logger.setLevel(level)
        if file_handler and not any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
            logger.addHandler(file_handler)

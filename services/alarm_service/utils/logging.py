# services/alarm_service/utils/logging.py

import sys
from loguru import logger
from config import settings


def setup_logging():
    """
    Настраивает loguru-логгер для alarm-сервиса.

    Логи пишутся в stdout в общем для сервисов формате,
    уровень берётся из LOG_LEVEL (config.py/.env).
    """
    logger.remove()

    fmt = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
        "<level>{message}</level>"
    )

    logger.add(
        sys.stdout,
        colorize=True,
        format=fmt,
        level=settings.LOG_LEVEL.upper(),
        enqueue=True,
        backtrace=False,
        diagnose=False,
    )

    logger.debug(f"📜 Logging initialized for alarm_service (level={settings.LOG_LEVEL.upper()})")
    return logger

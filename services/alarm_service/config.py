# services/alarm_service/config.py

import os
from pathlib import Path
from typing import FrozenSet

from pydantic import field_validator
from pydantic_settings import BaseSettings


SERVICE_DIR = Path(__file__).resolve().parent
DATA_DIR = SERVICE_DIR / "data"


class Settings(BaseSettings):
    """
    Конфигурация Alarm Service — read-only API по справочнику аварий
    и журналу аварийных событий.
    """

    # --- Основная информация ---
    SERVICE_NAME: str = "Alarm Service"
    VERSION: str = "1.0.0"
    ENV: str = os.getenv("ENV", "dev")

    # --- Исходные данные (JSON, загружаются один раз при старте) ---
    ALARMS_FILE: str = os.getenv("ALARMS_FILE", str(DATA_DIR / "alarms.json"))
    ALARM_LOG_FILE: str = os.getenv("ALARM_LOG_FILE", str(DATA_DIR / "alarmlog.json"))

    # --- Политики агрегации ---
    # all  — считаем все paging-события (8..14)
    # sent — только PagingSentToUser
    PAGING_COUNT_MODE: str = os.getenv("PAGING_COUNT_MODE", "all")

    # Классы аварий, исключаемые из подсчёта активаций (через запятую)
    EXCLUDED_ALARM_CLASSES: str = os.getenv("EXCLUDED_ALARM_CLASSES", "")

    # --- Логирование ---
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @field_validator("PAGING_COUNT_MODE")
    @classmethod
    def _check_paging_mode(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in ("all", "sent"):
            raise ValueError("PAGING_COUNT_MODE must be 'all' or 'sent'")
        return v

    @property
    def excluded_alarm_classes(self) -> FrozenSet[str]:
        return frozenset(
            c.strip() for c in self.EXCLUDED_ALARM_CLASSES.split(",") if c.strip()
        )


settings = Settings()

# services/alarm_service/storage.py

from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple

from fastapi import HTTPException
from pydantic import TypeAdapter, ValidationError

from config import settings
from schemas import AlarmDefinition, AlarmLogEntry
from utils.logging import setup_logging

logger = setup_logging()

_alarms_adapter = TypeAdapter(list[AlarmDefinition])
_alarm_log_adapter = TypeAdapter(list[AlarmLogEntry])


class SourceDataError(Exception):
    """Исходные файлы не читаются или не проходят проверку формы. Фатально для старта."""


class AlarmCatalog:
    """
    Справочник аварий с поиском по alarmId.
    Строится один раз при загрузке и больше не меняется.
    """

    def __init__(self, definitions: Iterable[AlarmDefinition]):
        by_id = {}
        for definition in definitions:
            if definition.alarm_id in by_id:
                raise SourceDataError(f"Duplicate alarmId in catalog: {definition.alarm_id}")
            by_id[definition.alarm_id] = definition
        self._by_id: Mapping[int, AlarmDefinition] = MappingProxyType(by_id)

    def lookup(self, alarm_id: int) -> Optional[AlarmDefinition]:
        """Возвращает описание аварии или None, если id нет в справочнике."""
        return self._by_id.get(alarm_id)

    def __contains__(self, alarm_id: int) -> bool:
        return alarm_id in self._by_id

    def __iter__(self):
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)


@dataclass(frozen=True)
class AlarmData:
    """Неизменяемый снимок исходных данных: справочник + журнал в исходном порядке."""
    catalog: AlarmCatalog
    alarm_log: Tuple[AlarmLogEntry, ...]


def _read(path: Path, adapter: TypeAdapter, name: str) -> list:
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise SourceDataError(f"Cannot read {name} from {path}: {e}") from e
    try:
        return adapter.validate_json(raw)
    except ValidationError as e:
        raise SourceDataError(f"Malformed {name} in {path}: {e}") from e


def load_alarm_data(alarms_file: str, alarm_log_file: str) -> AlarmData:
    """Читает alarms.json и alarmlog.json и собирает из них снимок."""
    definitions = _read(Path(alarms_file), _alarms_adapter, "alarms")
    entries = _read(Path(alarm_log_file), _alarm_log_adapter, "alarm log")

    data = AlarmData(catalog=AlarmCatalog(definitions), alarm_log=tuple(entries))
    logger.info(
        f"📥 Loaded {len(data.catalog)} alarm definitions and "
        f"{len(data.alarm_log)} log entries"
    )
    return data


# Текущий опубликованный снимок. Перезагрузка = новый снимок + замена ссылки.
_current: Optional[AlarmData] = None


def publish(data: AlarmData) -> None:
    global _current
    _current = data


def reset() -> None:
    global _current
    _current = None


def is_ready() -> bool:
    return _current is not None


def init_data() -> AlarmData:
    """Загружает данные по путям из config.py и публикует снимок."""
    data = load_alarm_data(settings.ALARMS_FILE, settings.ALARM_LOG_FILE)
    publish(data)
    return data


def get_alarm_data() -> AlarmData:
    """Зависимость FastAPI: текущий снимок данных."""
    data = _current
    if data is None:
        raise HTTPException(status_code=503, detail="Alarm data is not loaded")
    return data

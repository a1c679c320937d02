from typing import List

from fastapi import APIRouter, Depends

from aggregation import activations_per_alarm, activations_per_station, replay_status
from config import settings
from schemas import (
    ActivationRecord,
    AlarmLogEntry,
    AlarmOut,
    StationActivationCount,
    StatusSnapshot,
)
from storage import AlarmData, get_alarm_data
from utils.logging import setup_logging

logger = setup_logging()

# Пути без префикса: имена эндпойнтов совпадают с исходной системой
router = APIRouter(tags=["alarms"])


# ---------- Справочник и журнал ----------

@router.get("/alarms", response_model=List[AlarmOut], name="Alarms")
async def list_alarms(data: AlarmData = Depends(get_alarm_data)):
    """Справочник аварий в формате {id, station, number, class, text}."""
    return [
        AlarmOut(
            id=alarm.alarm_id,
            station=alarm.station,
            number=alarm.alarm_number,
            alarm_class=alarm.alarm_class,
            text=alarm.alarm_text,
        )
        for alarm in data.catalog
    ]


@router.get("/alarmLog", response_model=List[AlarmLogEntry], name="AlarmLog")
async def list_alarm_log(data: AlarmData = Depends(get_alarm_data)):
    """Журнал аварий как есть, в исходном порядке."""
    return list(data.alarm_log)


# ---------- Статистика ----------

@router.get("/act_per_alarm", response_model=List[ActivationRecord])
async def act_per_alarm(data: AlarmData = Depends(get_alarm_data)):
    """
    Количество записей журнала по каждой аварии, по убыванию.
    Записи с неизвестным alarmId пропускаются (пишется предупреждение в лог).
    """
    records = activations_per_alarm(
        data.catalog, data.alarm_log, settings.excluded_alarm_classes
    )
    logger.debug(f"📊 act_per_alarm: {len(records)} alarms")
    return records


@router.get("/act_per_station", response_model=List[StationActivationCount])
async def act_per_station(data: AlarmData = Depends(get_alarm_data)):
    """Количество записей журнала по станциям, по убыванию."""
    counts = activations_per_station(
        data.catalog, data.alarm_log, settings.excluded_alarm_classes
    )
    logger.debug(f"📊 act_per_station: {len(counts)} stations")
    return counts


@router.get("/status", response_model=StatusSnapshot)
async def status(data: AlarmData = Depends(get_alarm_data)):
    """Итоговый статус после прогона всего журнала."""
    return replay_status(data.alarm_log, settings.PAGING_COUNT_MODE)

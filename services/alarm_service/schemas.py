from datetime import datetime
from enum import IntEnum
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


# ------------------------------------------------------------
#  СПРАВОЧНИКИ
# ------------------------------------------------------------

class LoggedAlarmEvent(IntEnum):
    """Тип события в журнале аварий (числовые коды исходной системы)."""
    OFF = 0
    ON = 1
    ACKED = 2
    BLOCKED = 3
    UNBLOCKED = 4
    ACKED_LOCALLY = 5
    CAUSE = 6
    RESET = 7
    PAGING_SENT_TO_USER = 8
    PAGING_USER_SMS_RECEIVED = 9
    PAGING_SENT_SMS_TO_USER = 10
    PAGING_SENT_MAIL_TO_USER = 11
    PAGING_SENT_PUSH_TO_USER = 12
    PAGING_USER_PUSH_RECEIVED = 13
    PAGING_USER_PUSH_READ = 14

    @property
    def is_paging(self) -> bool:
        return LoggedAlarmEvent.PAGING_SENT_TO_USER <= self <= LoggedAlarmEvent.PAGING_USER_PUSH_READ


# ------------------------------------------------------------
#  ИСХОДНЫЕ ДАННЫЕ (alarms.json / alarmlog.json)
# ------------------------------------------------------------

class AlarmDefinition(BaseModel):
    """
    Описание аварии из справочника.
    Во входных файлах поля в PascalCase (AlarmId, Station, ...),
    camelCase тоже принимается.
    """
    alarm_id: int = Field(validation_alias=AliasChoices("AlarmId", "alarmId", "alarm_id"))
    station: str = Field(validation_alias=AliasChoices("Station", "station"))
    alarm_number: int = Field(
        validation_alias=AliasChoices("AlarmNumber", "alarmNumber", "alarm_number"),
        description="Отображаемый номер аварии (не обязательно уникальный)",
    )
    alarm_class: str = Field(
        validation_alias=AliasChoices("AlarmClass", "alarmClass", "alarm_class"),
        description="Класс/критичность аварии",
    )
    alarm_text: str = Field(validation_alias=AliasChoices("AlarmText", "alarmText", "alarm_text"))

    model_config = ConfigDict(frozen=True)


class AlarmLogEntry(BaseModel):
    """
    Одна запись журнала аварий.
    alarmId может ссылаться на отсутствующую в справочнике аварию.
    """
    alarm_id: int = Field(
        validation_alias=AliasChoices("AlarmId", "alarmId", "alarm_id"),
        serialization_alias="alarmId",
    )
    event: LoggedAlarmEvent = Field(validation_alias=AliasChoices("Event", "event"))
    ack_by: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("AckBy", "ackBy", "ack_by"),
        serialization_alias="ackBy",
    )
    date: datetime = Field(validation_alias=AliasChoices("Date", "date"))

    model_config = ConfigDict(frozen=True)


# ------------------------------------------------------------
#  DTO ОТВЕТОВ
# ------------------------------------------------------------

class AlarmOut(BaseModel):
    """Элемент ответа /alarms — переименованная проекция AlarmDefinition."""
    id: int
    station: str
    number: int
    alarm_class: str = Field(alias="class")
    text: str

    model_config = ConfigDict(populate_by_name=True)


class ActivationRecord(BaseModel):
    """Количество записей журнала по одной аварии (/act_per_alarm)."""
    alarm_id: int = Field(alias="alarmId")
    station: str
    label: str = Field(description="Текст аварии")
    count: int = Field(ge=1, description="Количество записей журнала по аварии")

    model_config = ConfigDict(populate_by_name=True)


class StationActivationCount(BaseModel):
    """Количество записей журнала по станции (/act_per_station)."""
    station: str
    count: int = Field(ge=1)


class StatusSnapshot(BaseModel):
    """Итог прогона журнала (/status)."""
    active_alarms: int = Field(alias="activeAlarms", description="Аварий во включённом состоянии")
    activations: int = Field(description="Количество переходов в On")
    pagings: int = Field(description="Количество paging-событий")

    model_config = ConfigDict(populate_by_name=True)

# services/alarm_service/aggregation.py
"""
Агрегации поверх снимка данных: активации по авариям, по станциям
и итоговый статус по прогону журнала.

Все функции чистые: результат строится заново на каждый вызов,
исходные коллекции не изменяются.
"""

from typing import AbstractSet, Dict, Iterable, List

from schemas import (
    ActivationRecord,
    AlarmDefinition,
    AlarmLogEntry,
    LoggedAlarmEvent,
    StationActivationCount,
    StatusSnapshot,
)
from storage import AlarmCatalog
from utils.logging import setup_logging

logger = setup_logging()

PAGING_MODE_ALL = "all"
PAGING_MODE_SENT = "sent"
PAGING_MODES = (PAGING_MODE_ALL, PAGING_MODE_SENT)


def _resolved(
    catalog: AlarmCatalog,
    alarm_log: Iterable[AlarmLogEntry],
    excluded_classes: AbstractSet[str],
    source: str,
):
    """
    Отдаёт описания аварий для записей журнала в исходном порядке.
    Записи без описания в справочнике пропускаются, в конце пишется предупреждение.
    """
    unresolved: Dict[int, int] = {}
    for entry in alarm_log:
        definition = catalog.lookup(entry.alarm_id)
        if definition is None:
            unresolved[entry.alarm_id] = unresolved.get(entry.alarm_id, 0) + 1
            continue
        if definition.alarm_class in excluded_classes:
            continue
        yield definition

    if unresolved:
        logger.warning(
            f"⚠️ {source}: skipped {sum(unresolved.values())} log entries "
            f"with unknown alarmId {sorted(unresolved)}"
        )


def activations_per_alarm(
    catalog: AlarmCatalog,
    alarm_log: Iterable[AlarmLogEntry],
    excluded_classes: AbstractSet[str] = frozenset(),
) -> List[ActivationRecord]:
    """
    Считает записи журнала по каждой аварии.

    Порядок: по убыванию count, при равенстве — в порядке первого появления
    в журнале. Аварии без записей в ответ не попадают.
    """
    counts: Dict[int, int] = {}
    definitions: Dict[int, AlarmDefinition] = {}

    for definition in _resolved(catalog, alarm_log, excluded_classes, "act_per_alarm"):
        if definition.alarm_id not in counts:
            definitions[definition.alarm_id] = definition
            counts[definition.alarm_id] = 1
        else:
            counts[definition.alarm_id] += 1

    records = [
        ActivationRecord(
            alarm_id=alarm_id,
            station=definitions[alarm_id].station,
            label=definitions[alarm_id].alarm_text,
            count=count,
        )
        for alarm_id, count in counts.items()
    ]
    # sorted() стабилен и при reverse=True
    return sorted(records, key=lambda r: r.count, reverse=True)


def activations_per_station(
    catalog: AlarmCatalog,
    alarm_log: Iterable[AlarmLogEntry],
    excluded_classes: AbstractSet[str] = frozenset(),
) -> List[StationActivationCount]:
    """
    Считает записи журнала по станциям.
    Порядок: по убыванию count, при равенстве — по алфавиту.
    """
    counts: Dict[str, int] = {}
    for definition in _resolved(catalog, alarm_log, excluded_classes, "act_per_station"):
        counts[definition.station] = counts.get(definition.station, 0) + 1

    by_name = [
        StationActivationCount(station=station, count=counts[station])
        for station in sorted(counts)
    ]
    return sorted(by_name, key=lambda s: s.count, reverse=True)


def _is_counted_paging(event: LoggedAlarmEvent, paging_mode: str) -> bool:
    if paging_mode == PAGING_MODE_SENT:
        return event == LoggedAlarmEvent.PAGING_SENT_TO_USER
    return event.is_paging


def replay_status(
    alarm_log: Iterable[AlarmLogEntry],
    paging_mode: str = PAGING_MODE_ALL,
) -> StatusSnapshot:
    """
    Прогоняет журнал по порядку и возвращает итоговый статус.

    - On для неактивной аварии: авария становится активной, +1 activation.
      Повторный On — без изменений.
    - Off для активной аварии: авария снимается. Off для неактивной — без изменений.
    - paging-события увеличивают pagings (все 8..14 при mode="all",
      только PagingSentToUser при mode="sent").
    - остальные события на статус не влияют.

    Справочник не используется, поэтому неизвестные alarmId учитываются как есть.
    """
    if paging_mode not in PAGING_MODES:
        raise ValueError(f"Unknown paging mode: {paging_mode!r}")

    active_ids = set()
    active_alarms = 0
    activations = 0
    pagings = 0

    for entry in alarm_log:
        if entry.event == LoggedAlarmEvent.ON and entry.alarm_id not in active_ids:
            active_ids.add(entry.alarm_id)
            active_alarms += 1
            activations += 1
        elif entry.event == LoggedAlarmEvent.OFF and entry.alarm_id in active_ids:
            active_ids.remove(entry.alarm_id)
            active_alarms -= 1
        elif _is_counted_paging(entry.event, paging_mode):
            pagings += 1

    return StatusSnapshot(
        active_alarms=active_alarms,
        activations=activations,
        pagings=pagings,
    )

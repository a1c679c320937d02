from datetime import datetime, timedelta
from pathlib import Path
import sys

import pytest

SVC_DIR = Path(__file__).resolve().parents[1]
if str(SVC_DIR) not in sys.path:
    sys.path.insert(0, str(SVC_DIR))

from schemas import AlarmDefinition, AlarmLogEntry, LoggedAlarmEvent
from storage import AlarmCatalog, AlarmData


T0 = datetime(2023, 3, 1, 6, 0, 0)


def make_alarm(alarm_id, station="StationA", text=None, alarm_class="A", number=None):
    return AlarmDefinition(
        alarm_id=alarm_id,
        station=station,
        alarm_number=number if number is not None else 100 + alarm_id,
        alarm_class=alarm_class,
        alarm_text=text or f"Alarm {alarm_id}",
    )


def make_log(*pairs):
    """(alarm_id, event) -> записи журнала с возрастающим временем."""
    return tuple(
        AlarmLogEntry(
            alarm_id=alarm_id,
            event=event,
            ack_by="",
            date=T0 + timedelta(seconds=i),
        )
        for i, (alarm_id, event) in enumerate(pairs)
    )


@pytest.fixture
def catalog() -> AlarmCatalog:
    return AlarmCatalog([
        make_alarm(1, station="StationA", text="High Temp"),
        make_alarm(2, station="StationB", text="Low Pressure", alarm_class="B"),
        make_alarm(3, station="StationA", text="Door Open", alarm_class="C"),
        make_alarm(4, station="StationC", text="Power Failure"),
    ])


@pytest.fixture
def alarm_data(catalog) -> AlarmData:
    On, Off = LoggedAlarmEvent.ON, LoggedAlarmEvent.OFF
    return AlarmData(
        catalog=catalog,
        alarm_log=make_log(
            (1, On),
            (1, LoggedAlarmEvent.PAGING_SENT_TO_USER),
            (2, On),
            (99, On),
            (2, LoggedAlarmEvent.ACKED),
            (1, Off),
            (3, On),
            (2, Off),
        ),
    )

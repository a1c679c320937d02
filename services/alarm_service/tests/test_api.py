import pytest
from fastapi.testclient import TestClient

import storage
from config import settings
from main import app
from storage import get_alarm_data


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def test_health_and_ready(client) -> None:
    assert client.get("/health").json() == {"status": "ok", "service": "alarm_service"}
    assert client.get("/ready").json() == {"status": "ready"}


def test_not_ready_before_data_is_published() -> None:
    storage.reset()
    c = TestClient(app)  # без контекстного менеджера startup не выполняется

    assert c.get("/ready").status_code == 503
    assert c.get("/status").status_code == 503


def test_alarms_projection(client) -> None:
    alarms = client.get("/alarms").json()

    assert len(alarms) == 7
    assert alarms[0] == {
        "id": 1,
        "station": "Pump Station North",
        "number": 101,
        "class": "A",
        "text": "High temperature pump 1",
    }


def test_alarm_log_is_returned_in_source_order(client) -> None:
    log = client.get("/alarmLog").json()

    assert len(log) == 26
    assert log[0] == {
        "alarmId": 1,
        "event": 1,
        "ackBy": "",
        "date": "2023-03-01T06:12:44",
    }
    assert log[16]["alarmId"] == 99


def test_act_per_alarm_on_bundled_data(client) -> None:
    records = client.get("/act_per_alarm").json()

    assert [r["alarmId"] for r in records] == [5, 1, 7, 4, 6, 3, 2]
    assert records[0] == {
        "alarmId": 5,
        "station": "Treatment Plant",
        "label": "Chlorine dosing failure",
        "count": 7,
    }


def test_act_per_station_on_bundled_data(client) -> None:
    counts = client.get("/act_per_station").json()

    assert counts == [
        {"station": "Treatment Plant", "count": 9},
        {"station": "Pump Station North", "count": 7},
        {"station": "Booster Station West", "count": 5},
        {"station": "Reservoir East", "count": 4},
    ]


def test_status_on_bundled_data(client) -> None:
    assert client.get("/status").json() == {
        "activeAlarms": 3,
        "activations": 6,
        "pagings": 8,
    }


def test_endpoints_use_published_snapshot(client, alarm_data) -> None:
    app.dependency_overrides[get_alarm_data] = lambda: alarm_data

    assert client.get("/status").json() == {"activeAlarms": 2, "activations": 4, "pagings": 1}
    assert [r["alarmId"] for r in client.get("/act_per_alarm").json()] == [1, 2, 3]
    assert client.get("/act_per_station").json() == [
        {"station": "StationA", "count": 4},
        {"station": "StationB", "count": 3},
    ]


def test_status_with_sent_paging_mode(client, monkeypatch) -> None:
    monkeypatch.setattr(settings, "PAGING_COUNT_MODE", "sent")

    # в журнале два PagingSentToUser (аварии 1 и 5)
    assert client.get("/status").json() == {
        "activeAlarms": 3,
        "activations": 6,
        "pagings": 2,
    }


def test_excluded_classes_applied_to_activation_endpoints(client, monkeypatch) -> None:
    monkeypatch.setattr(settings, "EXCLUDED_ALARM_CLASSES", "A")

    assert [r["alarmId"] for r in client.get("/act_per_alarm").json()] == [7, 4, 6, 2]
    assert client.get("/act_per_station").json() == [
        {"station": "Booster Station West", "count": 5},
        {"station": "Reservoir East", "count": 3},
        {"station": "Treatment Plant", "count": 2},
        {"station": "Pump Station North", "count": 1},
    ]
    # прогон журнала справочник не использует
    assert client.get("/status").json()["activations"] == 6

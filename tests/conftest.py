import json

import pytest

from railbook import config
from railbook.booking import BookingService
from railbook.catalog import TrainCatalog

TRAINS = [
    {
        "id": "T1",
        "number": "101",
        "seats": [[0, 0], [0, 0]],
        "stations": ["a", "b", "c"],
        "station_times": {"a": "08:00:00", "b": "09:30:00", "c": "11:15:00"},
    },
    {
        "id": "T2",
        "number": "202",
        "seats": [[0, 0, 0], [1, 0, 0]],
        "stations": ["c", "b", "a"],
        "station_times": {"c": "12:00:00", "b": "13:00:00", "a": "14:00:00"},
    },
    {
        "id": "T3",
        "number": "303",
        "seats": [[0]],
        "stations": ["a", "d"],
        "station_times": {"a": "07:00:00", "d": "07:45:00"},
    },
]


@pytest.fixture(autouse=True)
def fast_hashing(monkeypatch):
    monkeypatch.setattr(config, "BCRYPT_ROUNDS", 4)


@pytest.fixture
def trains_path(tmp_path):
    path = tmp_path / "trains.json"
    path.write_text(json.dumps(TRAINS))
    return str(path)


@pytest.fixture
def users_path(tmp_path):
    path = tmp_path / "users.json"
    path.write_text("[]")
    return str(path)


@pytest.fixture
def catalog(trains_path):
    return TrainCatalog(trains_path)


@pytest.fixture
def service(users_path, catalog):
    return BookingService(users_path, catalog)


@pytest.fixture
def signed_in(service):
    assert service.register("alice", "s3cret")
    return service

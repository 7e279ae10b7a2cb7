from datetime import time

import pytest

from railbook.models import Ticket, Train, User


def test_station_names_are_lower_cased_on_construction():
    train = Train(
        id="T9",
        number="909",
        seats=[[0]],
        stations=["Delhi", " AGRA "],
        station_times={"DELHI": "06:00", "Agra": time(8, 30)},
    )
    assert train.stations == ["delhi", "agra"]
    assert train.station_times == {"delhi": time(6, 0), "agra": time(8, 30)}
    assert train.departure_time("Delhi") == time(6, 0)


def test_train_without_timetable_is_allowed():
    train = Train(id="T1", number="101", seats=[[0, 0], [0, 0]], stations=["a", "b", "c"])
    assert train.station_times == {}
    assert train.departure_time("a") is None


def test_timetable_must_cover_every_station():
    with pytest.raises(ValueError):
        Train(id="T1", number="101", seats=[[0]], stations=["a", "b"], station_times={"a": "08:00"})


def test_seat_cells_are_restricted_to_zero_and_one():
    with pytest.raises(ValueError):
        Train(id="T1", number="101", seats=[[0, 2]], stations=["a"])


def test_seat_helpers():
    train = Train(id="T1", number="101", seats=[[0, 1, 0], [1]], stations=["a"])
    assert train.row_count == 2
    assert train.column_count(0) == 3
    assert train.column_count(1) == 1
    assert train.is_seat_free(0, 0)
    assert not train.is_seat_free(0, 1)
    assert train.free_seat_count() == 2


def test_find_ticket_returns_index():
    train = Train(id="T1", number="101", seats=[[0]], stations=["a", "b"])
    tickets = [Ticket(id=f"k{i}", user_id="u1", source="a", destination="b", travel_date="2024-05-01", train=train) for i in range(3)]
    user = User(id="u1", name="alice", password_hash="x", tickets_booked=tickets)
    assert user.find_ticket("k2") == 2
    assert user.find_ticket("missing") is None


def test_ticket_describe_mentions_journey():
    train = Train(id="T1", number="101", seats=[[0]], stations=["a", "b"])
    ticket = Ticket(id="k1", user_id="u1", source="a", destination="b", travel_date="2024-05-01", train=train)
    text = ticket.describe()
    assert "k1" in text
    assert "from a to b on 2024-05-01" in text
    assert "101" in text

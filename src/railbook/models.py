from dataclasses import dataclass, field
from datetime import time
from typing import Dict, List, Optional

from railbook.utils import normalize_station


@dataclass
class Train:
    id: str
    number: str
    seats: List[List[int]]
    stations: List[str]
    station_times: Dict[str, time] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.stations = [normalize_station(name) for name in self.stations]
        times: Dict[str, time] = {}
        for name, value in self.station_times.items():
            if isinstance(value, str):
                value = time.fromisoformat(value)
            times[normalize_station(name)] = value
        self.station_times = times
        # a train without a timetable is allowed
        if times and (set(self.stations) != set(times) or len(self.stations) != len(times)):
            raise ValueError(f"train {self.id}: station times do not match stations")
        for row in self.seats:
            if any(cell not in (0, 1) for cell in row):
                raise ValueError(f"train {self.id}: seat cells must be 0 or 1")

    @property
    def row_count(self) -> int:
        return len(self.seats)

    def column_count(self, row: int) -> int:
        return len(self.seats[row])

    def is_seat_free(self, row: int, col: int) -> bool:
        return self.seats[row][col] == 0

    def free_seat_count(self) -> int:
        return sum(row.count(0) for row in self.seats)

    def departure_time(self, station: str) -> Optional[time]:
        return self.station_times.get(normalize_station(station))


@dataclass
class Ticket:
    id: str
    user_id: str
    source: str
    destination: str
    travel_date: str
    train: Train

    def describe(self) -> str:
        return (
            f"Ticket ID: {self.id} belongs to user {self.user_id} "
            f"from {self.source} to {self.destination} on {self.travel_date} "
            f"(train {self.train.number})"
        )


@dataclass
class User:
    id: str
    name: str
    password_hash: str
    tickets_booked: List[Ticket] = field(default_factory=list)

    def find_ticket(self, ticket_id: str) -> Optional[int]:
        for index, ticket in enumerate(self.tickets_booked):
            if ticket.id == ticket_id:
                return index
        return None

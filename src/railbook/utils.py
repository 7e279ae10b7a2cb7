import uuid
from typing import List


def new_id() -> str:
    return str(uuid.uuid4())


def normalize_station(name: str) -> str:
    return name.strip().lower()


def render_seats(seats: List[List[int]]) -> str:
    lines = []
    for index, row in enumerate(seats):
        cells = " ".join("X" if cell else "." for cell in row)
        lines.append(f"{index:>3} {cells}")
    return "\n".join(lines)

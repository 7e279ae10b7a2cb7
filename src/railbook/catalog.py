import logging
from typing import List, Optional

from railbook.models import Train
from railbook.store import RecordStore
from railbook.utils import normalize_station

logger = logging.getLogger(__name__)


class TrainCatalog:
    def __init__(self, location: str, store: RecordStore[Train] | None = None) -> None:
        self.location = location
        self.store = store or RecordStore(Train)
        self._trains: List[Train] = self.store.load(location)
        logger.info("train catalog loaded with %d trains from %s", len(self._trains), location)

    def __len__(self) -> int:
        return len(self._trains)

    @property
    def trains(self) -> List[Train]:
        return list(self._trains)

    def _index_of(self, train_id: str) -> Optional[int]:
        wanted = train_id.lower()
        for index, train in enumerate(self._trains):
            if train.id.lower() == wanted:
                return index
        return None

    def get(self, train_id: str) -> Optional[Train]:
        index = self._index_of(train_id)
        return None if index is None else self._trains[index]

    def add_or_update(self, train: Train) -> None:
        index = self._index_of(train.id)
        if index is None:
            self._trains.append(train)
            logger.info("added train %s (%s)", train.id, train.number)
        else:
            self._trains[index] = train
            logger.info("updated train %s (%s)", train.id, train.number)
        self.store.save(self.location, self._trains)

    def find_by_number(self, number: str) -> Optional[Train]:
        for train in self._trains:
            if train.number == number:
                return train
        return None

    def search(self, source: str, destination: str) -> List[Train]:
        source = normalize_station(source)
        destination = normalize_station(destination)
        return [train for train in self._trains if _runs_between(train, source, destination)]


def _runs_between(train: Train, source: str, destination: str) -> bool:
    if source not in train.stations or destination not in train.stations:
        return False
    return train.stations.index(source) < train.stations.index(destination)

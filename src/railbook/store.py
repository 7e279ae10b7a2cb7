import logging
import os
import tempfile
from typing import Generic, List, Type, TypeVar

from pydantic import TypeAdapter

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StorageError(Exception):
    pass


class RecordStore(Generic[T]):
    """Reads and writes a whole collection of one record type as a JSON array."""

    def __init__(self, record_type: Type[T]) -> None:
        self.record_type = record_type
        self._adapter = TypeAdapter(List[record_type])

    def load(self, location: str) -> List[T]:
        try:
            with open(location, "rb") as handle:
                raw = handle.read()
        except OSError as exc:
            raise StorageError(f"cannot read {location}: {exc}") from exc
        try:
            records = self._adapter.validate_json(raw)
        except ValueError as exc:
            raise StorageError(f"malformed {self.record_type.__name__} records in {location}: {exc}") from exc
        logger.debug("loaded %d %s records from %s", len(records), self.record_type.__name__, location)
        return records

    def save(self, location: str, records: List[T]) -> None:
        payload = self._adapter.dump_json(records, indent=2)
        directory = os.path.dirname(os.path.abspath(location))
        tmp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".railbook-", suffix=".tmp")
            with os.fdopen(fd, "wb") as handle:
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_path, location)
        except OSError as exc:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StorageError(f"cannot write {location}: {exc}") from exc
        logger.debug("saved %d %s records to %s", len(records), self.record_type.__name__, location)

    def ensure(self, location: str) -> None:
        if not os.path.exists(location):
            self.save(location, [])

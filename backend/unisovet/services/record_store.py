"""
In-memory record collections mirrored to one persistent slot each.

A store holds an immutable tuple snapshot. Every mutation builds a new
tuple, swaps it in and saves the serialized list synchronously. Mutations
are total: unknown ids are no-ops and storage failures stay inside the
persistent store.
"""

import logging
import threading
import uuid
from dataclasses import replace
from typing import Any, Dict, Generic, Iterable, Optional, Tuple, Type, TypeVar

from unisovet.domain.entities import Record
from unisovet.domain.interfaces import IKeyValueStore

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Record)


class RecordStore(Generic[R]):
    def __init__(
        self,
        key: str,
        record_cls: Type[R],
        persistent_store: IKeyValueStore,
        seed: Iterable[R] = (),
    ):
        self.key = key
        self.record_cls = record_cls
        self.persistent_store = persistent_store
        self._lock = threading.Lock()
        self._records: Tuple[R, ...] = self._load(tuple(seed))

    def _load(self, seed: Tuple[R, ...]) -> Tuple[R, ...]:
        raw = self.persistent_store.load(self.key, None)
        if raw is None:
            return seed
        if not isinstance(raw, list):
            logger.warning(
                "Storage slot is not a list, using seed data",
                extra={"context": {"key": self.key}},
            )
            return seed
        try:
            return tuple(self.record_cls.from_dict(item) for item in raw)
        except (TypeError, ValueError) as e:
            logger.warning(
                "Storage slot holds invalid records, using seed data",
                extra={"context": {"key": self.key, "error": str(e)}},
            )
            return seed

    def _commit(self, records: Tuple[R, ...]) -> None:
        self._records = records
        self.persistent_store.save(self.key, [r.to_dict() for r in records])

    def _new_id(self) -> str:
        taken = {r.id for r in self._records}
        while True:
            candidate = str(uuid.uuid4())
            if candidate not in taken:
                return candidate

    def all(self) -> Tuple[R, ...]:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(self._records)

    def get(self, record_id: str) -> Optional[R]:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def add(self, values: Dict[str, Any]) -> R:
        """Create a record from field values, assigning a fresh id."""
        fields = {k: v for k, v in values.items() if k != "id"}
        with self._lock:
            record = self.record_cls(id=self._new_id(), **fields)
            self._commit(self._records + (record,))
        logger.info(
            "Record added",
            extra={"context": {"key": self.key, "record_id": record.id}},
        )
        return record

    def update(self, record: R) -> None:
        """Replace the record with the same id; no-op when the id is absent."""
        with self._lock:
            if not any(r.id == record.id for r in self._records):
                logger.debug(
                    "Update ignored, record not found",
                    extra={"context": {"key": self.key, "record_id": record.id}},
                )
                return
            self._commit(
                tuple(record if r.id == record.id else r for r in self._records)
            )
        logger.info(
            "Record updated",
            extra={"context": {"key": self.key, "record_id": record.id}},
        )

    def update_fields(self, record_id: str, **changes: Any) -> None:
        """Replace a record with a copy carrying ``changes``; no-op when absent."""
        current = self.get(record_id)
        if current is None:
            return
        self.update(replace(current, **changes))

    def delete(self, record_id: str) -> None:
        """Remove the record with ``record_id``; no-op when absent."""
        with self._lock:
            remaining = tuple(r for r in self._records if r.id != record_id)
            if len(remaining) == len(self._records):
                logger.debug(
                    "Delete ignored, record not found",
                    extra={"context": {"key": self.key, "record_id": record_id}},
                )
                return
            self._commit(remaining)
        logger.info(
            "Record deleted",
            extra={"context": {"key": self.key, "record_id": record_id}},
        )

"""
Key/value persistence for the clinic collections.

Each collection lives in one named slot as JSON text. Reads fall back to the
caller's default and writes are best-effort: a failed write is logged and the
in-memory collection keeps its new value.
"""

import json
import logging
from typing import Any, Callable, Optional

from sqlalchemy.orm import Session

from unisovet.db.base import StorageSlot
from unisovet.db.session import SessionLocal
from unisovet.domain.interfaces import IKeyValueStore

logger = logging.getLogger(__name__)


class PersistentStore(IKeyValueStore):
    def __init__(self, session_factory: Optional[Callable[[], Session]] = None):
        self.session_factory = session_factory or SessionLocal

    def load(self, key: str, default: Any) -> Any:
        try:
            with self.session_factory() as db:
                slot = db.get(StorageSlot, key)
                raw = slot.value if slot is not None else None
        except Exception as e:
            logger.warning(
                "Storage unavailable, using default value",
                extra={"context": {"key": key, "error": str(e)}},
            )
            return default

        if raw is None:
            logger.debug("Storage slot empty", extra={"context": {"key": key}})
            return default

        try:
            return json.loads(raw)
        except (TypeError, ValueError) as e:
            logger.warning(
                "Storage slot holds unparseable data, using default value",
                extra={"context": {"key": key, "error": str(e)}},
            )
            return default

    def save(self, key: str, value: Any) -> None:
        try:
            payload = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            logger.error(
                "Failed to serialize storage slot",
                extra={"context": {"key": key, "error": str(e)}},
            )
            return

        try:
            with self.session_factory() as db:
                slot = db.get(StorageSlot, key)
                if slot is None:
                    db.add(StorageSlot(key=key, value=payload))
                else:
                    slot.value = payload
                db.commit()
        except Exception as e:
            logger.error(
                "Failed to write storage slot",
                extra={"context": {"key": key, "error": str(e)}},
                exc_info=True,
            )
            return

        logger.debug(
            "Storage slot saved",
            extra={"context": {"key": key, "size": len(payload)}},
        )

"""
Data Transfer Objects (DTOs) emitted by the record editors.

An editor submit produces exactly one of two request types, so the caller
never has to inspect the payload to tell a new record from an edit.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Union

from unisovet.domain.entities import Record


@dataclass(frozen=True)
class CreateRequest:
    """Field values for a record that does not exist yet (no id)."""

    values: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if "id" in self.values:
            raise ValueError("CreateRequest must not carry an id")


@dataclass(frozen=True)
class UpdateRequest:
    """Full replacement for an existing record, keyed by its id."""

    record: Record

    def __post_init__(self):
        if not self.record.id:
            raise ValueError("UpdateRequest requires a record id")

    @property
    def record_id(self) -> str:
        return self.record.id


RecordRequest = Union[CreateRequest, UpdateRequest]

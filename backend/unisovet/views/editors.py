"""
Record editors: form state for creating or editing one record.

An editor stages field edits in a draft dataclass. The draft is reset from
the target record (edit mode) or from empty defaults (create mode) whenever
the target changes. ``submit()`` checks required fields, emits a
CreateRequest or UpdateRequest to the submit callback and closes the editor.
"""

import logging
from dataclasses import dataclass, fields, replace
from typing import Any, Callable, ClassVar, Dict, Iterable, List, Optional, Tuple, Type

from unisovet.core.exceptions import FormValidationError
from unisovet.domain.entities import (
    Appointment,
    AppointmentStatus,
    Client,
    InventoryCategory,
    InventoryItem,
    InventoryUnit,
    Pet,
    Record,
    Supplier,
    parse_iso_datetime,
    to_iso_timestamp,
)
from unisovet.schemas.dtos import CreateRequest, RecordRequest, UpdateRequest

logger = logging.getLogger(__name__)


def _coerce_number(value: Any):
    """Mirror a numeric input: '' becomes 0, integral values stay ints."""
    if isinstance(value, bool):
        raise ValueError("Valor numérico inválido")
    if isinstance(value, (int, float)):
        number = value
    else:
        text = str(value).strip().replace(",", ".")
        if not text:
            return 0
        try:
            number = float(text)
        except ValueError as e:
            raise ValueError(f"Valor numérico inválido: {value}") from e
    if isinstance(number, float) and number.is_integer():
        return int(number)
    return number


# ---------------------------------------------------------------------------
# Drafts
# ---------------------------------------------------------------------------


@dataclass
class ClientDraft:
    name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""


@dataclass
class PetDraft:
    owner_id: str = ""
    name: str = ""
    species: str = ""
    breed: str = ""
    birth_date: str = ""


@dataclass
class AppointmentDraft:
    client_id: str = ""
    pet_id: str = ""
    date: str = ""
    reason: str = ""
    status: AppointmentStatus = AppointmentStatus.SCHEDULED


@dataclass
class InventoryDraft:
    name: str = ""
    category: InventoryCategory = InventoryCategory.FOOD
    quantity: float = 0
    unit: InventoryUnit = InventoryUnit.UNIT
    supplier_id: str = ""
    last_purchase_date: str = ""
    low_stock_threshold: float = 0


@dataclass
class SupplierDraft:
    name: str = ""
    contact_person: str = ""
    phone: str = ""
    email: str = ""


# ---------------------------------------------------------------------------
# Editors
# ---------------------------------------------------------------------------


class RecordEditor:
    """Base editor. Subclasses set the record class, draft class and rules."""

    record_cls: ClassVar[Type[Record]] = Record
    draft_cls: ClassVar[type] = object
    required: ClassVar[Tuple[str, ...]] = ()
    numeric: ClassVar[Tuple[str, ...]] = ()
    enums: ClassVar[Dict[str, type]] = {}

    def __init__(
        self,
        on_submit: Optional[Callable[[RecordRequest], Any]] = None,
        on_close: Optional[Callable[[], None]] = None,
    ):
        self.on_submit = on_submit
        self.on_close = on_close
        self.target: Optional[Record] = None
        self.draft = self.draft_cls()
        self.is_open = False
        self.last_result: Any = None

    @property
    def is_editing(self) -> bool:
        return self.target is not None

    def field_names(self) -> List[str]:
        return [f.name for f in fields(self.draft_cls)]

    def load(self, record: Optional[Record] = None, force: bool = False) -> None:
        """Open the editor on ``record`` (None for a new record).

        The draft is rebuilt when the target changes, or always with ``force``.
        """
        self.is_open = True
        if not force and record is self.target:
            return
        self.target = record
        self.draft = self._draft_from(record) if record is not None else self.draft_cls()

    def reset(self) -> None:
        self.load(None, force=True)

    def _draft_from(self, record: Record):
        return self.draft_cls(
            **{name: getattr(record, name) for name in self.field_names()}
        )

    def set(self, field_name: str, value: Any) -> None:
        if field_name not in self.field_names():
            raise KeyError(f"Campo desconhecido: {field_name}")
        if field_name in self.numeric:
            value = _coerce_number(value)
        elif field_name in self.enums:
            value = self.enums[field_name](value)
        elif value is None:
            value = ""
        else:
            value = str(value)
        setattr(self.draft, field_name, value)

    def update(self, values: Dict[str, Any]) -> None:
        """Stage several fields at once; unknown keys are ignored."""
        known = set(self.field_names())
        for name, value in values.items():
            if name in known:
                self.set(name, value)

    def missing_fields(self) -> List[str]:
        missing = []
        for name in self.required:
            value = getattr(self.draft, name)
            if isinstance(value, str) and not value.strip():
                missing.append(name)
        return missing

    def values(self) -> Dict[str, Any]:
        return {name: getattr(self.draft, name) for name in self.field_names()}

    def build_request(self) -> RecordRequest:
        missing = self.missing_fields()
        if missing:
            raise FormValidationError(missing)
        values = self.values()
        if self.target is not None:
            return UpdateRequest(self.record_cls(id=self.target.id, **values))
        return CreateRequest(values)

    def submit(self) -> RecordRequest:
        """Validate, hand the request to ``on_submit`` and close the editor."""
        request = self.build_request()
        self.last_result = None
        if self.on_submit is not None:
            self.last_result = self.on_submit(request)
        self.close()
        return request

    def close(self) -> None:
        self.is_open = False
        self.target = None
        self.draft = self.draft_cls()
        if self.on_close is not None:
            self.on_close()

    def options(self) -> Dict[str, List[Dict[str, str]]]:
        """Choices for select inputs, keyed by field name."""
        return {
            name: [{"value": member.value, "label": member.value} for member in enum]
            for name, enum in self.enums.items()
        }

    def state(self) -> dict:
        return {
            "isOpen": self.is_open,
            "mode": "edit" if self.is_editing else "create",
            "targetId": self.target.id if self.target is not None else None,
            "draft": {
                k: (v.value if hasattr(v, "value") else v)
                for k, v in self.values().items()
            },
            "options": self.options(),
        }


class ClientEditor(RecordEditor):
    record_cls = Client
    draft_cls = ClientDraft
    required = ("name", "email", "phone")


class PetEditor(RecordEditor):
    record_cls = Pet
    draft_cls = PetDraft
    required = ("owner_id", "name", "species")

    def __init__(self, clients: Callable[[], Iterable[Client]] = tuple, **kwargs):
        super().__init__(**kwargs)
        self.clients = clients

    def options(self):
        opts = super().options()
        opts["owner_id"] = [{"value": c.id, "label": c.name} for c in self.clients()]
        return opts


class AppointmentEditor(RecordEditor):
    record_cls = Appointment
    draft_cls = AppointmentDraft
    required = ("client_id", "pet_id", "date", "reason")
    enums = {"status": AppointmentStatus}

    def __init__(
        self,
        clients: Callable[[], Iterable[Client]] = tuple,
        pets: Callable[[], Iterable[Pet]] = tuple,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.clients = clients
        self.pets = pets

    def set(self, field_name: str, value: Any) -> None:
        previous_client = self.draft.client_id
        super().set(field_name, value)
        # The pet choice depends on the client; a new client clears it.
        if field_name == "client_id" and self.draft.client_id != previous_client:
            self.draft.pet_id = ""

    def update(self, values: Dict[str, Any]) -> None:
        # Client first, so a pet given in the same batch survives the reset.
        if "client_id" in values:
            self.set("client_id", values["client_id"])
            values = {k: v for k, v in values.items() if k != "client_id"}
        super().update(values)

    def missing_fields(self) -> List[str]:
        missing = super().missing_fields()
        if "date" not in missing and self._normalized_date() is None:
            missing.append("date")
        return missing

    def _normalized_date(self) -> Optional[str]:
        moment = parse_iso_datetime(self.draft.date)
        if moment is None:
            return None
        return to_iso_timestamp(moment)

    def values(self) -> Dict[str, Any]:
        values = super().values()
        normalized = self._normalized_date()
        if normalized is not None:
            values["date"] = normalized
        return values

    def options(self):
        opts = super().options()
        opts["client_id"] = [{"value": c.id, "label": c.name} for c in self.clients()]
        opts["pet_id"] = [
            {"value": p.id, "label": p.name}
            for p in self.pets()
            if p.owner_id == self.draft.client_id
        ]
        return opts


class InventoryEditor(RecordEditor):
    record_cls = InventoryItem
    draft_cls = InventoryDraft
    required = ("name", "supplier_id", "last_purchase_date")
    numeric = ("quantity", "low_stock_threshold")
    enums = {"category": InventoryCategory, "unit": InventoryUnit}

    def __init__(self, suppliers: Callable[[], Iterable[Supplier]] = tuple, **kwargs):
        super().__init__(**kwargs)
        self.suppliers = suppliers

    def _draft_from(self, record: InventoryItem):
        draft = super()._draft_from(record)
        # Date inputs only hold the calendar day.
        return replace(draft, last_purchase_date=record.last_purchase_date.split("T")[0])

    def options(self):
        opts = super().options()
        opts["supplier_id"] = [{"value": s.id, "label": s.name} for s in self.suppliers()]
        return opts


class SupplierEditor(RecordEditor):
    record_cls = Supplier
    draft_cls = SupplierDraft
    required = ("name", "contact_person", "phone", "email")

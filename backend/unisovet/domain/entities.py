"""
Domain entities - Pure business logic, no framework dependencies.

Each record is an immutable dataclass identified by an opaque string id.
Updates are whole-value replacements (``dataclasses.replace``), so a record
held by one collection is never mutated through another reference.

Records serialize to the camelCase keys used by the persisted slots
(``ownerId``, ``lastPurchaseDate`` ...).
"""

from dataclasses import dataclass, fields
from datetime import datetime, timezone
from enum import Enum
from typing import Any, ClassVar, Dict, Optional

from unisovet.core.config import APP_TZ

UNKNOWN_LABEL = "Desconhecido"


class AppointmentStatus(str, Enum):
    SCHEDULED = "Agendado"
    COMPLETED = "Concluído"
    CANCELLED = "Cancelado"


class InventoryCategory(str, Enum):
    FOOD = "Ração"
    HYGIENE = "Higiene"
    MEDICINE = "Medicamento"
    ACCESSORY = "Acessório"
    OTHER = "Outro"


class InventoryUnit(str, Enum):
    UNIT = "un"
    KG = "kg"
    GRAM = "g"
    LITER = "L"
    MILLILITER = "mL"
    BOX = "cx"


def parse_iso_datetime(value: str) -> Optional[datetime]:
    """Parse an ISO timestamp (``Z`` suffix accepted); naive values are APP_TZ."""
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=APP_TZ)
    return parsed


def to_iso_timestamp(moment: datetime) -> str:
    """Format a datetime as a UTC ISO timestamp with millisecond precision."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    utc = moment.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


@dataclass(frozen=True)
class Record:
    """Base for all clinic records.

    Subclasses declare ``JSON_KEYS`` for the fields whose persisted key
    differs from the Python attribute name.
    """

    JSON_KEYS: ClassVar[Dict[str, str]] = {}
    KIND: ClassVar[str] = "record"

    id: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Enum):
                value = value.value
            data[self.JSON_KEYS.get(f.name, f.name)] = value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        """Build a record from its persisted form.

        Raises:
            ValueError / TypeError: when a field has an invalid value
        """
        if not isinstance(data, dict):
            raise TypeError(f"{cls.__name__} must be decoded from a mapping")
        kwargs = {}
        for f in fields(cls):
            key = cls.JSON_KEYS.get(f.name, f.name)
            if key in data:
                kwargs[f.name] = data[key]
            elif f.name in data:
                kwargs[f.name] = data[f.name]
        return cls(**kwargs)

    @classmethod
    def fields_from_payload(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        """Map a request payload (camelCase or snake_case keys) to field names.

        ``id`` and unknown keys are dropped.
        """
        by_key = {}
        for f in fields(cls):
            if f.name == "id":
                continue
            by_key[f.name] = f.name
            by_key[cls.JSON_KEYS.get(f.name, f.name)] = f.name
        return {by_key[k]: v for k, v in data.items() if k in by_key}


@dataclass(frozen=True)
class Client(Record):
    """A clinic client (pet owner)."""

    KIND: ClassVar[str] = "Cliente"

    name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""


@dataclass(frozen=True)
class Pet(Record):
    """A pet that belongs to one client."""

    JSON_KEYS: ClassVar[Dict[str, str]] = {
        "owner_id": "ownerId",
        "birth_date": "birthDate",
    }
    KIND: ClassVar[str] = "Pet"

    owner_id: str = ""
    name: str = ""
    species: str = ""
    breed: str = ""
    birth_date: str = ""


@dataclass(frozen=True)
class Appointment(Record):
    """An appointment of a client's pet. ``date`` is an ISO timestamp."""

    JSON_KEYS: ClassVar[Dict[str, str]] = {
        "client_id": "clientId",
        "pet_id": "petId",
    }
    KIND: ClassVar[str] = "Agendamento"

    client_id: str = ""
    pet_id: str = ""
    date: str = ""
    reason: str = ""
    status: AppointmentStatus = AppointmentStatus.SCHEDULED

    def __post_init__(self):
        object.__setattr__(self, "status", AppointmentStatus(self.status))

    @property
    def scheduled_at(self) -> Optional[datetime]:
        return parse_iso_datetime(self.date)

    def is_upcoming(self, now: datetime) -> bool:
        """Scheduled and dated strictly after ``now``."""
        when = self.scheduled_at
        if when is None or self.status != AppointmentStatus.SCHEDULED:
            return False
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        return when > now


@dataclass(frozen=True)
class InventoryItem(Record):
    """Domain entity for inventory management."""

    JSON_KEYS: ClassVar[Dict[str, str]] = {
        "supplier_id": "supplierId",
        "last_purchase_date": "lastPurchaseDate",
        "low_stock_threshold": "lowStockThreshold",
    }
    KIND: ClassVar[str] = "Item"

    name: str = ""
    category: InventoryCategory = InventoryCategory.FOOD
    quantity: float = 0
    unit: InventoryUnit = InventoryUnit.UNIT
    supplier_id: str = ""
    last_purchase_date: str = ""
    low_stock_threshold: float = 0

    def __post_init__(self):
        object.__setattr__(self, "category", InventoryCategory(self.category))
        object.__setattr__(self, "unit", InventoryUnit(self.unit))
        for name in ("quantity", "low_stock_threshold"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise TypeError(f"{name} must be a number")

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.low_stock_threshold


@dataclass(frozen=True)
class Supplier(Record):
    """A supplier of inventory items."""

    JSON_KEYS: ClassVar[Dict[str, str]] = {"contact_person": "contactPerson"}
    KIND: ClassVar[str] = "Fornecedor"

    name: str = ""
    contact_person: str = ""
    phone: str = ""
    email: str = ""

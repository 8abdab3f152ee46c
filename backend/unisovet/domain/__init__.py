"""
Domain package - Pure business logic layer.

This package contains:
- entities.py: Clinic records (clients, pets, appointments, inventory, suppliers)
- interfaces.py: Storage and remote service contracts
"""

from .entities import (
    UNKNOWN_LABEL,
    Appointment,
    AppointmentStatus,
    Client,
    InventoryCategory,
    InventoryItem,
    InventoryUnit,
    Pet,
    Record,
    Supplier,
)
from .interfaces import IKeyValueStore, ITextCompletionService

__all__ = [
    # Domain entities
    "Record",
    "Client",
    "Pet",
    "Appointment",
    "InventoryItem",
    "Supplier",
    # Enums
    "AppointmentStatus",
    "InventoryCategory",
    "InventoryUnit",
    "UNKNOWN_LABEL",
    # Interfaces
    "IKeyValueStore",
    "ITextCompletionService",
]

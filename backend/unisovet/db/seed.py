"""
Seed dataset used when a storage slot holds no value yet.

Appointment dates are relative to the moment the dataset is built: one
scheduled visit two days ahead and one completed check-up five days ago.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from unisovet.domain.entities import (
    Appointment,
    AppointmentStatus,
    Client,
    InventoryCategory,
    InventoryItem,
    InventoryUnit,
    Pet,
    Supplier,
    to_iso_timestamp,
)

CLIENTS_KEY = "patpetshop_clients"
PETS_KEY = "patpetshop_pets"
APPOINTMENTS_KEY = "patpetshop_appointments"
INVENTORY_KEY = "patpetshop_inventory"
SUPPLIERS_KEY = "patpetshop_suppliers"

SLOT_KEYS = (CLIENTS_KEY, PETS_KEY, APPOINTMENTS_KEY, INVENTORY_KEY, SUPPLIERS_KEY)


def seed_clients() -> List[Client]:
    return [
        Client(
            id="1",
            name="João da Silva",
            email="joao.silva@example.com",
            phone="(11) 98765-4321",
            address="Rua das Flores, 123, São Paulo, SP",
        ),
        Client(
            id="2",
            name="Maria Oliveira",
            email="maria.oliveira@example.com",
            phone="(21) 91234-5678",
            address="Avenida Copacabana, 456, Rio de Janeiro, RJ",
        ),
    ]


def seed_pets() -> List[Pet]:
    return [
        Pet(id="p1", owner_id="1", name="Rex", species="Cachorro", breed="Labrador", birth_date="2020-05-10"),
        Pet(id="p2", owner_id="1", name="Mimi", species="Gato", breed="Siamês", birth_date="2021-01-15"),
        Pet(id="p3", owner_id="2", name="Pingo", species="Cachorro", breed="Poodle", birth_date="2019-11-20"),
    ]


def seed_appointments(now: Optional[datetime] = None) -> List[Appointment]:
    now = now or datetime.now(timezone.utc)
    return [
        Appointment(
            id="a1",
            client_id="1",
            pet_id="p1",
            date=to_iso_timestamp(now + timedelta(days=2)),
            reason="Vacina anual",
            status=AppointmentStatus.SCHEDULED,
        ),
        Appointment(
            id="a2",
            client_id="2",
            pet_id="p3",
            date=to_iso_timestamp(now - timedelta(days=5)),
            reason="Check-up de rotina",
            status=AppointmentStatus.COMPLETED,
        ),
    ]


def seed_suppliers() -> List[Supplier]:
    return [
        Supplier(
            id="s1",
            name="PetFood Inc.",
            contact_person="Carlos Mendes",
            phone="(11) 5555-1234",
            email="vendas@petfoodinc.com",
        ),
        Supplier(
            id="s2",
            name="CleanPet",
            contact_person="Ana Costa",
            phone="(21) 5555-5678",
            email="contato@cleanpet.com",
        ),
    ]


def seed_inventory() -> List[InventoryItem]:
    return [
        InventoryItem(
            id="i1",
            name="Ração Seca para Cães Adultos",
            category=InventoryCategory.FOOD,
            quantity=4,
            unit=InventoryUnit.KG,
            supplier_id="s1",
            last_purchase_date="2024-05-10",
            low_stock_threshold=5,
        ),
        InventoryItem(
            id="i2",
            name="Shampoo Hipoalergênico",
            category=InventoryCategory.HYGIENE,
            quantity=2,
            unit=InventoryUnit.UNIT,
            supplier_id="s2",
            last_purchase_date="2024-05-20",
            low_stock_threshold=3,
        ),
        InventoryItem(
            id="i3",
            name="Ração Úmida para Gatos",
            category=InventoryCategory.FOOD,
            quantity=48,
            unit=InventoryUnit.UNIT,
            supplier_id="s1",
            last_purchase_date="2024-06-01",
            low_stock_threshold=12,
        ),
    ]


def build_seed_dataset(now: Optional[datetime] = None) -> Dict[str, list]:
    """Return the seed records for every slot, keyed by slot name."""
    return {
        CLIENTS_KEY: seed_clients(),
        PETS_KEY: seed_pets(),
        APPOINTMENTS_KEY: seed_appointments(now),
        INVENTORY_KEY: seed_inventory(),
        SUPPLIERS_KEY: seed_suppliers(),
    }

"""
Integration tests for state surviving a restart through the SQL-backed slots.
"""

import json

import pytest

from unisovet.db.base import StorageSlot
from unisovet.db.seed import CLIENTS_KEY, INVENTORY_KEY, SLOT_KEYS
from unisovet.db.session import SessionLocal
from unisovet.services.shell import ClinicShell

pytestmark = pytest.mark.database


def test_records_survive_a_new_shell(persistent_store, fake_completion):
    shell = ClinicShell(persistent_store, fake_completion)
    created = shell.add_client({"name": "Pedro", "email": "p@x.com", "phone": "1"})
    shell.delete_inventory_item("i2")

    reopened = ClinicShell(persistent_store, fake_completion)

    assert reopened.clients.get(created.id).name == "Pedro"
    assert [i.id for i in reopened.inventory] == ["i1", "i3"]


def test_slots_hold_camel_case_json(persistent_store, fake_completion):
    shell = ClinicShell(persistent_store, fake_completion)
    shell.update_inventory_item(shell.inventory.get("i1"))

    stored = persistent_store.load(INVENTORY_KEY, None)
    assert stored[0]["supplierId"] == "s1"
    assert stored[0]["lowStockThreshold"] == 5
    assert stored[0]["category"] == "Ração"


def test_slot_text_is_the_serialized_collection(persistent_store, fake_completion):
    shell = ClinicShell(persistent_store, fake_completion)
    shell.add_client({"name": "Joana Araújo", "email": "j@x.com", "phone": "1"})

    with SessionLocal() as db:
        slot = db.get(StorageSlot, CLIENTS_KEY)

    assert slot.value == json.dumps(
        [c.to_dict() for c in shell.clients.all()], ensure_ascii=False
    )


def test_corrupt_slot_falls_back_to_seed(persistent_store, fake_completion):
    with SessionLocal() as db:
        db.add(StorageSlot(key=CLIENTS_KEY, value="[{broken"))
        db.commit()

    shell = ClinicShell(persistent_store, fake_completion)
    assert [c.id for c in shell.clients] == ["1", "2"]


def test_api_writes_reach_the_database(client, persistent_store):
    client.post(
        "/suppliers/",
        json={
            "name": "VetMed",
            "contactPerson": "Paula",
            "phone": "(15) 3333-0000",
            "email": "paula@vetmed.com",
        },
    )
    stored = persistent_store.load("patpetshop_suppliers", [])
    assert [s["name"] for s in stored] == ["PetFood Inc.", "CleanPet", "VetMed"]


def test_every_collection_writes_its_own_slot(persistent_store, fake_completion):
    shell = ClinicShell(persistent_store, fake_completion)
    shell.update_client(shell.clients.get("1"))
    shell.update_pet(shell.pets.get("p1"))
    shell.update_appointment(shell.appointments.get("a1"))
    shell.update_inventory_item(shell.inventory.get("i1"))
    shell.update_supplier(shell.suppliers.get("s1"))

    for key in SLOT_KEYS:
        assert persistent_store.load(key, None), key

"""
Integration tests for the inventory endpoints: search, low-stock flag,
numeric input handling and supplier contact lookup.
"""

import pytest

pytestmark = pytest.mark.api

NEW_ITEM = {
    "name": "Coleira Antipulgas",
    "category": "Acessório",
    "quantity": "7",
    "unit": "un",
    "supplierId": "s2",
    "lastPurchaseDate": "2024-06-01",
    "lowStockThreshold": "2",
}


def test_list_flags_low_stock(client):
    body = client.get("/inventory/").get_json()
    flags = {row["id"]: row["lowStock"] for row in body["data"]}
    assert flags == {"i1": True, "i2": True, "i3": False}


def test_search_is_case_insensitive(client):
    body = client.get("/inventory/", query_string={"q": "ração"}).get_json()
    assert [row["id"] for row in body["data"]] == ["i1", "i3"]


def test_create_item_coerces_numbers(client):
    response = client.post("/inventory/", json=NEW_ITEM)
    data = response.get_json()["data"]

    assert response.status_code == 201
    assert data["quantity"] == 7
    assert data["lowStockThreshold"] == 2
    assert data["category"] == "Acessório"
    assert data["lowStock"] is False
    assert data["supplierName"] == "CleanPet"


def test_create_item_with_invalid_number_is_rejected(client):
    response = client.post("/inventory/", json=dict(NEW_ITEM, quantity="sete"))
    assert response.status_code == 400
    assert len(client.get("/inventory/").get_json()["data"]) == 3


def test_create_item_with_unknown_category_is_rejected(client):
    response = client.post("/inventory/", json=dict(NEW_ITEM, category="Brinquedo"))
    assert response.status_code == 400


def test_restock_clears_low_stock(client):
    response = client.put("/inventory/i1", json={"quantity": 20})
    data = response.get_json()["data"]
    assert data["lowStock"] is False
    assert data["name"] == "Ração Seca para Cães Adultos"


def test_supplier_contact(client):
    response = client.get("/inventory/i1/supplier-contact")
    data = response.get_json()["data"]

    assert response.status_code == 200
    assert data["company"] == "PetFood Inc."
    assert data["phoneLink"] == "tel:(11) 5555-1234"


def test_supplier_contact_after_supplier_deleted(client):
    client.delete("/suppliers/s1", query_string={"confirm": "true"})

    response = client.get("/inventory/i1/supplier-contact")
    body = response.get_json()

    assert response.status_code == 404
    assert body["data"] == {"company": "Desconhecido", "supplierId": "s1"}
    row = client.get("/inventory/i1").get_json()["data"]
    assert row["supplierName"] == "Desconhecido"


def test_supplier_contact_for_unknown_item(client):
    assert client.get("/inventory/i99/supplier-contact").status_code == 404


def test_delete_item_with_confirmation(client):
    pending = client.delete("/inventory/i2")
    assert pending.status_code == 409
    assert pending.get_json()["message"] == "Tem certeza que deseja excluir este item?"

    confirmed = client.delete("/inventory/i2", query_string={"confirm": "true"})
    assert confirmed.status_code == 200
    assert client.get("/inventory/i2").status_code == 404

"""
Unit tests for the record editors.

Covers the create/update request split, required-field validation, draft
reset on target change and the per-editor input rules.
"""

from unittest.mock import Mock

import pytest

from unisovet.core.exceptions import FormValidationError
from unisovet.db.seed import seed_clients, seed_inventory, seed_pets, seed_suppliers
from unisovet.domain.entities import (
    AppointmentStatus,
    Client,
    InventoryCategory,
    InventoryItem,
    parse_iso_datetime,
    to_iso_timestamp,
)
from unisovet.schemas.dtos import CreateRequest, UpdateRequest
from unisovet.views.editors import (
    AppointmentEditor,
    ClientEditor,
    InventoryEditor,
    PetEditor,
    SupplierEditor,
)

pytestmark = pytest.mark.views


@pytest.fixture
def on_submit():
    return Mock(return_value=None)


class TestClientEditor:
    def test_new_record_submits_create_request(self, on_submit):
        editor = ClientEditor(on_submit=on_submit)
        editor.load(None)
        editor.update({"name": "Pedro", "email": "pedro@x.com", "phone": "(15) 1234"})

        request = editor.submit()

        assert isinstance(request, CreateRequest)
        assert request.values == {
            "name": "Pedro",
            "email": "pedro@x.com",
            "phone": "(15) 1234",
            "address": "",
        }
        on_submit.assert_called_once_with(request)
        assert editor.is_open is False
        assert editor.draft.name == ""

    def test_existing_record_submits_update_request(self, on_submit):
        client = seed_clients()[0]
        editor = ClientEditor(on_submit=on_submit)
        editor.load(client)
        editor.set("phone", "(11) 90000-0000")

        request = editor.submit()

        assert isinstance(request, UpdateRequest)
        assert request.record_id == client.id
        assert request.record.phone == "(11) 90000-0000"
        assert request.record.name == client.name
        assert request.record.address == client.address

    def test_missing_required_fields_block_submit(self, on_submit):
        editor = ClientEditor(on_submit=on_submit)
        editor.load(None)
        editor.set("name", "Pedro")
        editor.set("email", "   ")

        with pytest.raises(FormValidationError) as exc_info:
            editor.submit()

        assert exc_info.value.missing_fields == ["email", "phone"]
        on_submit.assert_not_called()
        assert editor.is_open is True

    def test_draft_survives_reload_of_same_target(self):
        client = seed_clients()[0]
        editor = ClientEditor()
        editor.load(client)
        editor.set("name", "Rascunho")

        editor.load(client)

        assert editor.draft.name == "Rascunho"

    def test_draft_resets_when_target_changes(self):
        first, second = seed_clients()
        editor = ClientEditor()
        editor.load(first)
        editor.set("name", "Rascunho")

        editor.load(second)
        assert editor.draft.name == second.name

        editor.load(None)
        assert editor.draft.name == ""

    def test_unknown_field_is_rejected(self):
        with pytest.raises(KeyError):
            ClientEditor().set("cpf", "123")

    def test_close_discards_draft_and_notifies(self):
        on_close = Mock()
        editor = ClientEditor(on_close=on_close)
        editor.load(seed_clients()[0])

        editor.close()

        assert editor.target is None
        assert editor.draft.name == ""
        on_close.assert_called_once_with()


class TestPetEditor:
    def test_owner_options_list_clients(self):
        editor = PetEditor(clients=seed_clients)
        owners = editor.options()["owner_id"]
        assert owners == [
            {"value": "1", "label": "João da Silva"},
            {"value": "2", "label": "Maria Oliveira"},
        ]

    def test_owner_is_required(self):
        editor = PetEditor()
        editor.load(None)
        editor.update({"name": "Bolt", "species": "Cachorro"})
        assert editor.missing_fields() == ["owner_id"]


class TestAppointmentEditor:
    @pytest.fixture
    def editor(self):
        editor = AppointmentEditor(clients=seed_clients, pets=seed_pets)
        editor.load(None)
        return editor

    def test_changing_client_clears_pet(self, editor):
        editor.set("client_id", "1")
        editor.set("pet_id", "p1")

        editor.set("client_id", "2")

        assert editor.draft.pet_id == ""

    def test_batch_update_keeps_pet_given_before_client(self, editor):
        editor.update({"pet_id": "p3", "client_id": "2"})
        assert editor.draft.pet_id == "p3"

    def test_pet_options_follow_selected_client(self, editor):
        editor.set("client_id", "1")
        assert [p["value"] for p in editor.options()["pet_id"]] == ["p1", "p2"]

        editor.set("client_id", "2")
        assert [p["value"] for p in editor.options()["pet_id"]] == ["p3"]

    def test_date_is_normalized_to_utc_timestamp(self, editor):
        editor.update(
            {
                "client_id": "1",
                "pet_id": "p1",
                "date": "2024-06-15T10:30:00-03:00",
                "reason": "Vacina",
            }
        )

        request = editor.build_request()

        assert request.values["date"] == "2024-06-15T13:30:00.000Z"
        assert request.values["status"] is AppointmentStatus.SCHEDULED

    def test_naive_date_matches_stored_reading(self, editor):
        naive = "2024-06-15T10:30:00"
        editor.update(
            {"client_id": "1", "pet_id": "p1", "date": naive, "reason": "Vacina"}
        )

        request = editor.build_request()

        assert request.values["date"] == to_iso_timestamp(parse_iso_datetime(naive))

    def test_unparseable_date_counts_as_missing(self, editor):
        editor.update(
            {"client_id": "1", "pet_id": "p1", "date": "amanhã", "reason": "Vacina"}
        )
        assert editor.missing_fields() == ["date"]

    def test_status_is_validated(self, editor):
        editor.set("status", "Concluído")
        assert editor.draft.status is AppointmentStatus.COMPLETED
        with pytest.raises(ValueError):
            editor.set("status", "Pendente")


class TestInventoryEditor:
    def test_edit_draft_keeps_only_the_calendar_day(self):
        item = InventoryItem(
            id="i9",
            name="Coleira",
            supplier_id="s1",
            last_purchase_date="2024-05-10T00:00:00.000Z",
        )
        editor = InventoryEditor()
        editor.load(item)
        assert editor.draft.last_purchase_date == "2024-05-10"

    @pytest.mark.parametrize(
        "raw, expected",
        [("", 0), ("3", 3), ("2.5", 2.5), ("1,5", 1.5), (7, 7), (4.0, 4)],
    )
    def test_numeric_inputs_are_coerced(self, raw, expected):
        editor = InventoryEditor()
        editor.set("quantity", raw)
        assert editor.draft.quantity == expected

    def test_invalid_number_is_rejected(self):
        with pytest.raises(ValueError):
            InventoryEditor().set("low_stock_threshold", "muitos")

    def test_category_is_validated(self):
        editor = InventoryEditor()
        editor.set("category", "Higiene")
        assert editor.draft.category is InventoryCategory.HYGIENE
        with pytest.raises(ValueError):
            editor.set("category", "Brinquedo")

    def test_update_request_carries_numbers(self, on_submit):
        item = seed_inventory()[0]
        editor = InventoryEditor(suppliers=seed_suppliers, on_submit=on_submit)
        editor.load(item)
        editor.set("quantity", "10")

        request = editor.submit()

        assert request.record.quantity == 10
        assert request.record.is_low_stock is False
        assert request.record.last_purchase_date == "2024-05-10"

    def test_supplier_options_list_suppliers(self):
        editor = InventoryEditor(suppliers=seed_suppliers)
        assert [s["label"] for s in editor.options()["supplier_id"]] == [
            "PetFood Inc.",
            "CleanPet",
        ]


def test_supplier_editor_requires_every_field():
    editor = SupplierEditor()
    editor.load(None)
    editor.set("name", "VetMed")
    assert editor.missing_fields() == ["contact_person", "phone", "email"]


def test_editor_state_reports_mode_and_draft():
    editor = ClientEditor()
    editor.load(Client(id="1", name="João"))
    state = editor.state()
    assert state["mode"] == "edit"
    assert state["targetId"] == "1"
    assert state["draft"]["name"] == "João"

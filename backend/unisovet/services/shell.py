"""
Clinic shell: owns every record store, the list views, the dashboard and
the virtual assistant, and exposes the mutation functions the views call.
"""

import logging
from datetime import datetime
from enum import Enum
from typing import Dict, Optional

from unisovet.core.config import DEFAULT_CLINIC_PHONE
from unisovet.core.exceptions import InvalidReferenceError
from unisovet.db.seed import (
    APPOINTMENTS_KEY,
    CLIENTS_KEY,
    INVENTORY_KEY,
    PETS_KEY,
    SUPPLIERS_KEY,
    build_seed_dataset,
)
from unisovet.domain.entities import (
    Appointment,
    AppointmentStatus,
    Client,
    InventoryItem,
    Pet,
    Supplier,
)
from unisovet.domain.interfaces import IKeyValueStore, ITextCompletionService
from unisovet.schemas.dtos import CreateRequest, RecordRequest, UpdateRequest
from unisovet.services.assistant_service import VirtualAssistant
from unisovet.services.dashboard_service import DashboardSummary, build_dashboard
from unisovet.services.record_store import RecordStore
from unisovet.views.editors import (
    AppointmentEditor,
    ClientEditor,
    InventoryEditor,
    PetEditor,
    SupplierEditor,
)
from unisovet.views.list_views import (
    AppointmentListView,
    ClientListView,
    InventoryListView,
    ListView,
    PetListView,
    SupplierListView,
)

logger = logging.getLogger(__name__)


class Page(str, Enum):
    DASHBOARD = "dashboard"
    CLIENTS = "clients"
    APPOINTMENTS = "appointments"
    INVENTORY = "inventory"
    SUPPLIERS = "suppliers"


PAGE_TITLES = {
    Page.DASHBOARD: "Dashboard",
    Page.CLIENTS: "Clientes",
    Page.APPOINTMENTS: "Agendamentos",
    Page.INVENTORY: "Estoque",
    Page.SUPPLIERS: "Fornecedores",
}


class ClinicShell:
    def __init__(
        self,
        persistent_store: IKeyValueStore,
        completion_service: ITextCompletionService,
        now: Optional[datetime] = None,
        clinic_phone: str = DEFAULT_CLINIC_PHONE,
    ):
        seed = build_seed_dataset(now)

        self.clients = RecordStore(CLIENTS_KEY, Client, persistent_store, seed[CLIENTS_KEY])
        self.pets = RecordStore(PETS_KEY, Pet, persistent_store, seed[PETS_KEY])
        self.appointments = RecordStore(
            APPOINTMENTS_KEY, Appointment, persistent_store, seed[APPOINTMENTS_KEY]
        )
        self.inventory = RecordStore(
            INVENTORY_KEY, InventoryItem, persistent_store, seed[INVENTORY_KEY]
        )
        self.suppliers = RecordStore(
            SUPPLIERS_KEY, Supplier, persistent_store, seed[SUPPLIERS_KEY]
        )

        self.client_view = ClientListView(
            self.clients,
            self.pets,
            ClientEditor(),
            self._submit_handler(self.add_client, self.update_client),
            self.delete_client,
        )
        self.pet_view = PetListView(
            self.pets,
            self.clients,
            PetEditor(clients=self.clients.all),
            self._submit_handler(self.add_pet, self.update_pet),
            self.delete_pet,
        )
        self.appointment_view = AppointmentListView(
            self.appointments,
            self.clients,
            self.pets,
            AppointmentEditor(clients=self.clients.all, pets=self.pets.all),
            self._submit_handler(self.add_appointment, self.update_appointment),
            self.delete_appointment,
        )
        self.inventory_view = InventoryListView(
            self.inventory,
            self.suppliers,
            InventoryEditor(suppliers=self.suppliers.all),
            self._submit_handler(self.add_inventory_item, self.update_inventory_item),
            self.delete_inventory_item,
        )
        self.supplier_view = SupplierListView(
            self.suppliers,
            SupplierEditor(),
            self._submit_handler(self.add_supplier, self.update_supplier),
            self.delete_supplier,
        )

        self.assistant = VirtualAssistant(
            completion_service, self.context_snapshot, phone=clinic_phone
        )
        self.current_page = Page.DASHBOARD

    # -- navigation -------------------------------------------------------

    def navigate(self, page) -> Page:
        """Switch page; unknown pages land on the dashboard."""
        try:
            self.current_page = Page(page)
        except ValueError:
            logger.info("Unknown page requested", extra={"context": {"page": str(page)}})
            self.current_page = Page.DASHBOARD
        return self.current_page

    def toggle_assistant(self) -> bool:
        return self.assistant.toggle()

    @property
    def views(self) -> Dict[str, ListView]:
        return {
            "clients": self.client_view,
            "pets": self.pet_view,
            "appointments": self.appointment_view,
            "inventory": self.inventory_view,
            "suppliers": self.supplier_view,
        }

    def dashboard(self, now: Optional[datetime] = None) -> DashboardSummary:
        return build_dashboard(
            self.clients.all(),
            self.pets.all(),
            self.appointments.all(),
            now=now,
            inventory=self.inventory.all(),
        )

    def context_snapshot(self):
        return self.clients.all(), self.pets.all(), self.appointments.all()

    # -- request dispatch -------------------------------------------------

    def submit(self, kind: str, request: RecordRequest):
        """Dispatch an editor request to the page named ``kind``."""
        try:
            view = self.views[kind]
        except KeyError:
            raise ValueError(f"Unknown record page: {kind}") from None
        return view.submit_handler(request)

    @staticmethod
    def _submit_handler(create, update):
        def handle(request: RecordRequest):
            if isinstance(request, UpdateRequest):
                update(request.record)
                return request.record
            if isinstance(request, CreateRequest):
                return create(request.values)
            raise TypeError(f"Unsupported request: {type(request).__name__}")

        return handle

    # -- clients ----------------------------------------------------------

    def add_client(self, values) -> Client:
        return self.clients.add(values)

    def update_client(self, client: Client) -> None:
        self.clients.update(client)

    def delete_client(self, client_id: str) -> None:
        # Pets and appointments of the client are left in place.
        self.clients.delete(client_id)

    # -- pets -------------------------------------------------------------

    def add_pet(self, values) -> Pet:
        owner_id = values.get("owner_id", "")
        if self.clients.get(owner_id) is None:
            raise InvalidReferenceError(f"Cliente '{owner_id}' não encontrado")
        return self.pets.add(values)

    def update_pet(self, pet: Pet) -> None:
        self.pets.update(pet)

    def delete_pet(self, pet_id: str) -> None:
        self.pets.delete(pet_id)

    # -- appointments -----------------------------------------------------

    def add_appointment(self, values) -> Appointment:
        client_id = values.get("client_id", "")
        pet = self.pets.get(values.get("pet_id", ""))
        if self.clients.get(client_id) is None:
            raise InvalidReferenceError(f"Cliente '{client_id}' não encontrado")
        if pet is None or pet.owner_id != client_id:
            raise InvalidReferenceError("Pet não pertence ao cliente selecionado")
        return self.appointments.add(values)

    def update_appointment(self, appointment: Appointment) -> None:
        self.appointments.update(appointment)

    def update_appointment_status(self, appointment_id: str, status) -> None:
        self.appointments.update_fields(appointment_id, status=AppointmentStatus(status))

    def delete_appointment(self, appointment_id: str) -> None:
        self.appointments.delete(appointment_id)

    # -- inventory --------------------------------------------------------

    def add_inventory_item(self, values) -> InventoryItem:
        return self.inventory.add(values)

    def update_inventory_item(self, item: InventoryItem) -> None:
        self.inventory.update(item)

    def delete_inventory_item(self, item_id: str) -> None:
        self.inventory.delete(item_id)

    # -- suppliers --------------------------------------------------------

    def add_supplier(self, values) -> Supplier:
        return self.suppliers.add(values)

    def update_supplier(self, supplier: Supplier) -> None:
        self.suppliers.update(supplier)

    def delete_supplier(self, supplier_id: str) -> None:
        # Inventory items keep their supplier id and resolve it as unknown.
        self.suppliers.delete(supplier_id)

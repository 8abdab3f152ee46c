"""
List views: searchable tables over one record store.

A list view filters its collection with a case-insensitive substring match,
renders display rows (dangling references show as "Desconhecido"), owns the
modal editor for add/edit and only deletes after an explicit confirmation.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional

from unisovet.core.exceptions import RecordNotFoundError
from unisovet.domain.entities import (
    UNKNOWN_LABEL,
    Appointment,
    AppointmentStatus,
    Client,
    InventoryItem,
    Pet,
    Record,
    Supplier,
)
from unisovet.schemas.dtos import RecordRequest
from unisovet.services.record_store import RecordStore
from unisovet.views.editors import RecordEditor

logger = logging.getLogger(__name__)


def _names_by_id(records: Iterable[Record]) -> Dict[str, str]:
    return {r.id: getattr(r, "name", "") for r in records}


class ListView:
    """Base list view. Subclasses choose the searchable text of a record."""

    title = ""
    delete_prompt = "Tem certeza que deseja excluir este registro?"
    empty_message = "Nenhum registro encontrado."

    def __init__(
        self,
        store: RecordStore,
        editor: RecordEditor,
        submit_handler: Callable[[RecordRequest], Any],
        delete_handler: Callable[[str], None],
    ):
        self.store = store
        self.editor = editor
        self.submit_handler = submit_handler
        self.delete_handler = delete_handler
        self.search_term = ""
        self.pending_delete_id: Optional[str] = None
        self.is_modal_open = False
        # Held by callers across open-then-submit and filter-then-rows
        self.lock = threading.RLock()
        self.editor.on_submit = self.submit_handler
        self.editor.on_close = self._on_editor_closed

    # -- search -----------------------------------------------------------

    def search_text(self, record: Record) -> List[str]:
        return [getattr(record, "name", "")]

    def matches(self, record: Record, term: str) -> bool:
        needle = term.lower()
        return any(needle in (text or "").lower() for text in self.search_text(record))

    def search(self, term: Optional[str]) -> List[Record]:
        self.search_term = term or ""
        return self.filtered()

    def filtered(self) -> List[Record]:
        term = self.search_term
        records = list(self.store.all())
        if not term:
            return records
        return [r for r in records if self.matches(r, term)]

    def row(self, record: Record) -> Dict[str, Any]:
        return record.to_dict()

    def rows(self) -> List[Dict[str, Any]]:
        return [self.row(r) for r in self.filtered()]

    # -- modal editor -----------------------------------------------------

    def open_add(self) -> RecordEditor:
        self.editor.reset()
        self.is_modal_open = True
        return self.editor

    def open_edit(self, record_id: str) -> RecordEditor:
        record = self.store.get(record_id)
        if record is None:
            raise RecordNotFoundError(self.store.record_cls.KIND, record_id)
        self.editor.load(record)
        self.is_modal_open = True
        return self.editor

    def close_modal(self) -> None:
        if self.editor.is_open:
            self.editor.close()
        self.is_modal_open = False

    def _on_editor_closed(self) -> None:
        self.is_modal_open = False

    @property
    def modal_title(self) -> str:
        kind = self.store.record_cls.KIND
        return f"Editar {kind}" if self.editor.is_editing else f"Adicionar {kind}"

    # -- delete with confirmation -----------------------------------------

    def request_delete(self, record_id: str) -> str:
        """Stage a delete and return the confirmation prompt."""
        self.pending_delete_id = record_id
        return self.delete_prompt

    def confirm_delete(self) -> bool:
        record_id = self.pending_delete_id
        self.pending_delete_id = None
        if record_id is None:
            return False
        self.delete_handler(record_id)
        return True

    def cancel_delete(self) -> None:
        self.pending_delete_id = None

    def delete_with_confirmation(
        self, record_id: str, confirm: Callable[[str], bool]
    ) -> bool:
        """Ask ``confirm`` with the prompt; delete only on a yes."""
        prompt = self.request_delete(record_id)
        if confirm(prompt):
            return self.confirm_delete()
        self.cancel_delete()
        logger.debug(
            "Delete cancelled by user",
            extra={"context": {"key": self.store.key, "record_id": record_id}},
        )
        return False

    def state(self) -> dict:
        rows = self.rows()
        return {
            "title": self.title,
            "searchTerm": self.search_term,
            "rows": rows,
            "emptyMessage": self.empty_message if not rows else None,
            "modal": {
                "isOpen": self.is_modal_open,
                "title": self.modal_title,
                "editor": self.editor.state(),
            },
            "pendingDelete": self.pending_delete_id,
        }


class ClientListView(ListView):
    title = "Clientes"
    delete_prompt = "Tem certeza que deseja excluir este cliente?"
    empty_message = "Nenhum cliente encontrado."

    def __init__(self, store: RecordStore, pets: RecordStore, *args, **kwargs):
        super().__init__(store, *args, **kwargs)
        self.pets = pets

    def search_text(self, record: Client) -> List[str]:
        return [record.name, record.email, record.phone]

    def row(self, record: Client) -> Dict[str, Any]:
        row = record.to_dict()
        row["pets"] = [
            {"id": p.id, "name": p.name, "species": p.species}
            for p in self.pets.all()
            if p.owner_id == record.id
        ]
        return row


class PetListView(ListView):
    title = "Pets"
    delete_prompt = "Tem certeza que deseja excluir este pet?"
    empty_message = "Nenhum pet encontrado."

    def __init__(self, store: RecordStore, clients: RecordStore, *args, **kwargs):
        super().__init__(store, *args, **kwargs)
        self.clients = clients

    def owner_name(self, owner_id: str) -> str:
        return _names_by_id(self.clients.all()).get(owner_id, UNKNOWN_LABEL)

    def search_text(self, record: Pet) -> List[str]:
        return [record.name, record.species, record.breed, self.owner_name(record.owner_id)]

    def row(self, record: Pet) -> Dict[str, Any]:
        row = record.to_dict()
        row["ownerName"] = self.owner_name(record.owner_id)
        return row


class AppointmentListView(ListView):
    title = "Agendamentos"
    delete_prompt = "Tem certeza que deseja excluir este agendamento?"
    empty_message = "Nenhum agendamento encontrado."

    def __init__(
        self,
        store: RecordStore,
        clients: RecordStore,
        pets: RecordStore,
        *args,
        **kwargs,
    ):
        super().__init__(store, *args, **kwargs)
        self.clients = clients
        self.pets = pets
        self.status_filter: Optional[AppointmentStatus] = None

    def set_status_filter(self, status: Optional[str]) -> None:
        self.status_filter = AppointmentStatus(status) if status else None

    def search_text(self, record: Appointment) -> List[str]:
        return [
            record.reason,
            _names_by_id(self.clients.all()).get(record.client_id, UNKNOWN_LABEL),
            _names_by_id(self.pets.all()).get(record.pet_id, UNKNOWN_LABEL),
        ]

    def filtered(self) -> List[Appointment]:
        records = super().filtered()
        if self.status_filter is not None:
            records = [r for r in records if r.status == self.status_filter]
        # Most recent first; unparseable dates sink to the end.
        return sorted(records, key=lambda a: a.date or "", reverse=True)

    def row(self, record: Appointment) -> Dict[str, Any]:
        row = record.to_dict()
        row["clientName"] = _names_by_id(self.clients.all()).get(
            record.client_id, UNKNOWN_LABEL
        )
        row["petName"] = _names_by_id(self.pets.all()).get(record.pet_id, UNKNOWN_LABEL)
        return row


@dataclass(frozen=True)
class SupplierContact:
    company: str
    contact_person: str
    phone: str
    email: str

    def to_dict(self) -> dict:
        return {
            "company": self.company,
            "contactPerson": self.contact_person,
            "phone": self.phone,
            "email": self.email,
            "phoneLink": f"tel:{self.phone}",
            "emailLink": f"mailto:{self.email}",
        }


class InventoryListView(ListView):
    title = "Gestão de Estoque"
    delete_prompt = "Tem certeza que deseja excluir este item?"
    empty_message = "Nenhum item encontrado."

    def __init__(self, store: RecordStore, suppliers: RecordStore, *args, **kwargs):
        super().__init__(store, *args, **kwargs)
        self.suppliers = suppliers

    @staticmethod
    def is_low_stock(item: InventoryItem) -> bool:
        return item.is_low_stock

    def supplier_name(self, supplier_id: str) -> str:
        supplier = self.suppliers.get(supplier_id)
        return supplier.name if supplier is not None else UNKNOWN_LABEL

    def contact_supplier(self, supplier_id: str) -> Optional[SupplierContact]:
        """Contact details of the linked supplier, None when it no longer exists."""
        supplier = self.suppliers.get(supplier_id)
        if supplier is None:
            logger.info(
                "Supplier contact requested for unknown supplier",
                extra={"context": {"supplier_id": supplier_id}},
            )
            return None
        return SupplierContact(
            company=supplier.name,
            contact_person=supplier.contact_person,
            phone=supplier.phone,
            email=supplier.email,
        )

    def row(self, record: InventoryItem) -> Dict[str, Any]:
        row = record.to_dict()
        row["lowStock"] = self.is_low_stock(record)
        row["supplierName"] = self.supplier_name(record.supplier_id)
        return row


class SupplierListView(ListView):
    title = "Fornecedores"
    delete_prompt = "Tem certeza que deseja excluir este fornecedor?"
    empty_message = "Nenhum fornecedor encontrado."

    def search_text(self, record: Supplier) -> List[str]:
        return [record.name, record.contact_person]

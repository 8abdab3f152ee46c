"""
Inventory controller for handling HTTP requests.

This controller:
- Handles HTTP concerns only
- Delegates to the inventory list view (low-stock flag, supplier lookup)
"""

from flask import Blueprint

from unisovet.controllers.record_helpers import (
    create_record,
    delete_record,
    get_record,
    get_shell,
    list_records,
    update_record,
)
from unisovet.core.api_utils import api_response
from unisovet.core.limiter_config import READ_LIMIT, WRITE_LIMIT, limiter
from unisovet.domain.entities import UNKNOWN_LABEL, InventoryItem

inventory_bp = Blueprint("inventory", __name__, url_prefix="/inventory")


@inventory_bp.route("/", methods=["GET"])
@limiter.limit(READ_LIMIT)
def list_inventory():
    """List inventory items with lowStock and supplierName; ?q= filters by name."""
    return list_records(get_shell().inventory_view)


@inventory_bp.route("/<item_id>", methods=["GET"])
@limiter.limit(READ_LIMIT)
def get_inventory_item(item_id):
    return get_record(get_shell().inventory_view, item_id)


@inventory_bp.route("/", methods=["POST"])
@limiter.limit(WRITE_LIMIT)
def add_inventory():
    """Add a new inventory item."""
    return create_record(get_shell().inventory_view, InventoryItem)


@inventory_bp.route("/<item_id>", methods=["PUT"])
@limiter.limit(WRITE_LIMIT)
def update_inventory(item_id):
    """Update an inventory item."""
    return update_record(get_shell().inventory_view, InventoryItem, item_id)


@inventory_bp.route("/<item_id>", methods=["DELETE"])
@limiter.limit(WRITE_LIMIT)
def delete_inventory(item_id):
    """Delete an inventory item (requires ?confirm=true)."""
    return delete_record(get_shell().inventory_view, item_id)


@inventory_bp.route("/<item_id>/supplier-contact", methods=["GET"])
@limiter.limit(READ_LIMIT)
def supplier_contact(item_id):
    """Contact details of the supplier linked to an item."""
    view = get_shell().inventory_view
    item = view.store.get(item_id)
    if item is None:
        return api_response(False, "Item não encontrado", None, 404)

    contact = view.contact_supplier(item.supplier_id)
    if contact is None:
        return api_response(
            False,
            f"Fornecedor {UNKNOWN_LABEL}",
            {"company": UNKNOWN_LABEL, "supplierId": item.supplier_id},
            404,
        )
    return api_response(True, f"Contato - {contact.company}", contact.to_dict())

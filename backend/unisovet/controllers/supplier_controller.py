"""
Supplier controller for handling HTTP requests.
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
from unisovet.core.limiter_config import READ_LIMIT, WRITE_LIMIT, limiter
from unisovet.domain.entities import Supplier

supplier_bp = Blueprint("supplier", __name__, url_prefix="/suppliers")


@supplier_bp.route("/", methods=["GET"])
@limiter.limit(READ_LIMIT)
def list_suppliers():
    """List suppliers, filtered by ?q= on company or contact name."""
    return list_records(get_shell().supplier_view)


@supplier_bp.route("/<supplier_id>", methods=["GET"])
@limiter.limit(READ_LIMIT)
def get_supplier(supplier_id):
    return get_record(get_shell().supplier_view, supplier_id)


@supplier_bp.route("/", methods=["POST"])
@limiter.limit(WRITE_LIMIT)
def add_supplier():
    return create_record(get_shell().supplier_view, Supplier)


@supplier_bp.route("/<supplier_id>", methods=["PUT"])
@limiter.limit(WRITE_LIMIT)
def update_supplier(supplier_id):
    return update_record(get_shell().supplier_view, Supplier, supplier_id)


@supplier_bp.route("/<supplier_id>", methods=["DELETE"])
@limiter.limit(WRITE_LIMIT)
def delete_supplier(supplier_id):
    """Delete a supplier (requires ?confirm=true). Linked items show it as unknown."""
    return delete_record(get_shell().supplier_view, supplier_id)

"""
Client controller for handling HTTP requests.

This controller:
- Handles HTTP concerns only
- Delegates to the clients list view held by the clinic shell
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
from unisovet.domain.entities import Client

client_bp = Blueprint("client", __name__, url_prefix="/clients")


@client_bp.route("/", methods=["GET"])
@limiter.limit(READ_LIMIT)
def list_clients():
    """List clients, optionally filtered by ?q= (name, email or phone)."""
    return list_records(get_shell().client_view)


@client_bp.route("/<client_id>", methods=["GET"])
@limiter.limit(READ_LIMIT)
def get_client(client_id):
    return get_record(get_shell().client_view, client_id)


@client_bp.route("/", methods=["POST"])
@limiter.limit(WRITE_LIMIT)
def add_client():
    """Add a new client."""
    return create_record(get_shell().client_view, Client)


@client_bp.route("/<client_id>", methods=["PUT"])
@limiter.limit(WRITE_LIMIT)
def update_client(client_id):
    """Update a client; fields missing from the body keep their values."""
    return update_record(get_shell().client_view, Client, client_id)


@client_bp.route("/<client_id>", methods=["DELETE"])
@limiter.limit(WRITE_LIMIT)
def delete_client(client_id):
    """Delete a client (requires ?confirm=true). Its pets are kept."""
    return delete_record(get_shell().client_view, client_id)

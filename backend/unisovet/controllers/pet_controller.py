"""
Pet controller for handling HTTP requests.
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
from unisovet.domain.entities import Pet

pet_bp = Blueprint("pet", __name__, url_prefix="/pets")


@pet_bp.route("/", methods=["GET"])
@limiter.limit(READ_LIMIT)
def list_pets():
    """List pets with their owner's name."""
    return list_records(get_shell().pet_view)


@pet_bp.route("/<pet_id>", methods=["GET"])
@limiter.limit(READ_LIMIT)
def get_pet(pet_id):
    return get_record(get_shell().pet_view, pet_id)


@pet_bp.route("/", methods=["POST"])
@limiter.limit(WRITE_LIMIT)
def add_pet():
    """Add a pet; ownerId must be an existing client."""
    return create_record(get_shell().pet_view, Pet)


@pet_bp.route("/<pet_id>", methods=["PUT"])
@limiter.limit(WRITE_LIMIT)
def update_pet(pet_id):
    return update_record(get_shell().pet_view, Pet, pet_id)


@pet_bp.route("/<pet_id>", methods=["DELETE"])
@limiter.limit(WRITE_LIMIT)
def delete_pet(pet_id):
    return delete_record(get_shell().pet_view, pet_id)

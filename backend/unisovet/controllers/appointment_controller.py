"""
Appointment controller for handling HTTP requests.
"""

from flask import Blueprint, request

from unisovet.controllers.record_helpers import (
    create_record,
    delete_record,
    get_record,
    get_shell,
    list_records,
    update_record,
)
from unisovet.core.api_utils import api_response, get_json_payload
from unisovet.core.limiter_config import READ_LIMIT, WRITE_LIMIT, limiter
from unisovet.domain.entities import Appointment, AppointmentStatus

appointment_bp = Blueprint("appointment", __name__, url_prefix="/appointments")


@appointment_bp.route("/", methods=["GET"])
@limiter.limit(READ_LIMIT)
def list_appointments():
    """List appointments (most recent first); ?q= search, ?status= filter."""
    view = get_shell().appointment_view
    with view.lock:
        try:
            view.set_status_filter(request.args.get("status"))
        except ValueError:
            return api_response(False, "Status inválido", None, 400)
        return list_records(view)


@appointment_bp.route("/<appointment_id>", methods=["GET"])
@limiter.limit(READ_LIMIT)
def get_appointment(appointment_id):
    return get_record(get_shell().appointment_view, appointment_id)


@appointment_bp.route("/", methods=["POST"])
@limiter.limit(WRITE_LIMIT)
def add_appointment():
    """Schedule an appointment; the pet must belong to the client."""
    return create_record(get_shell().appointment_view, Appointment)


@appointment_bp.route("/<appointment_id>", methods=["PUT"])
@limiter.limit(WRITE_LIMIT)
def update_appointment(appointment_id):
    return update_record(get_shell().appointment_view, Appointment, appointment_id)


@appointment_bp.route("/<appointment_id>/status", methods=["PATCH"])
@limiter.limit(WRITE_LIMIT)
def change_status(appointment_id):
    """Set the status of an appointment. Any status may follow any other."""
    shell = get_shell()
    if shell.appointments.get(appointment_id) is None:
        return api_response(False, "Agendamento não encontrado", None, 404)

    status = get_json_payload().get("status", "")
    try:
        shell.update_appointment_status(appointment_id, AppointmentStatus(status))
    except ValueError:
        return api_response(
            False,
            "Status inválido",
            {"allowed": [s.value for s in AppointmentStatus]},
            400,
        )

    updated = shell.appointments.get(appointment_id)
    return api_response(
        True, "Status atualizado", shell.appointment_view.row(updated), 200
    )


@appointment_bp.route("/<appointment_id>", methods=["DELETE"])
@limiter.limit(WRITE_LIMIT)
def delete_appointment(appointment_id):
    return delete_record(get_shell().appointment_view, appointment_id)

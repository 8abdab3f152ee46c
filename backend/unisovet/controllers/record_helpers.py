"""
Shared request handling for the record pages (clients, pets, appointments,
inventory, suppliers).

Every write goes through the page's list view and its editor, so the HTTP
surface follows the same add/edit/confirm-delete flow as the views. The
view lock is held for the whole flow since Flask serves requests on
several threads against the one shared view.
"""

import logging
from typing import Type

from flask import current_app, request

from unisovet.core.api_utils import api_response, get_json_payload, is_confirmed
from unisovet.core.exceptions import (
    FormValidationError,
    InvalidReferenceError,
    RecordNotFoundError,
)
from unisovet.domain.entities import Record
from unisovet.services.shell import ClinicShell
from unisovet.views.list_views import ListView

logger = logging.getLogger(__name__)

SHELL_EXTENSION = "unisovet_shell"


def get_shell() -> ClinicShell:
    return current_app.extensions[SHELL_EXTENSION]


def list_records(view: ListView):
    with view.lock:
        rows = view.search(request.args.get("q", ""))
        return api_response(
            True,
            view.empty_message if not rows else f"{len(rows)} registro(s)",
            [view.row(r) for r in rows],
        )


def get_record(view: ListView, record_id: str):
    record = view.store.get(record_id)
    if record is None:
        return api_response(False, f"{view.store.record_cls.KIND} não encontrado", None, 404)
    return api_response(True, "OK", view.row(record))


def _submit_editor(view: ListView, record_cls: Type[Record], payload: dict):
    view.editor.update(record_cls.fields_from_payload(payload))
    view.editor.submit()
    return view.editor.last_result


def create_record(view: ListView, record_cls: Type[Record]):
    payload = get_json_payload()
    with view.lock:
        view.open_add()
        try:
            created = _submit_editor(view, record_cls, payload)
        except FormValidationError as e:
            view.close_modal()
            return api_response(False, str(e), {"missingFields": e.missing_fields}, 400)
        except (InvalidReferenceError, ValueError, KeyError) as e:
            view.close_modal()
            return api_response(False, f"Falha no cadastro: {e}", None, 400)
    return api_response(True, f"{record_cls.KIND} cadastrado com sucesso", view.row(created), 201)


def update_record(view: ListView, record_cls: Type[Record], record_id: str):
    payload = get_json_payload()
    with view.lock:
        try:
            view.open_edit(record_id)
        except RecordNotFoundError as e:
            return api_response(False, str(e), None, 404)
        try:
            updated = _submit_editor(view, record_cls, payload)
        except FormValidationError as e:
            view.close_modal()
            return api_response(False, str(e), {"missingFields": e.missing_fields}, 400)
        except (ValueError, KeyError) as e:
            view.close_modal()
            return api_response(False, f"Falha na atualização: {e}", None, 400)
    return api_response(True, f"{record_cls.KIND} atualizado com sucesso", view.row(updated))


def delete_record(view: ListView, record_id: str):
    kind = view.store.record_cls.KIND
    if view.store.get(record_id) is None:
        return api_response(False, f"{kind} não encontrado", None, 404)

    confirmed = is_confirmed()
    with view.lock:
        deleted = view.delete_with_confirmation(record_id, lambda _prompt: confirmed)
    if not deleted:
        return api_response(
            False,
            view.delete_prompt,
            {"confirmationRequired": True, "id": record_id},
            409,
        )
    return api_response(True, f"{kind} excluído", None, 200)

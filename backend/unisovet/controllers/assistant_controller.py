"""
Assistant controller - chat panel for the virtual assistant "Uni".
"""

import logging

from flask import Blueprint

from unisovet.controllers.record_helpers import get_shell
from unisovet.core.api_utils import api_response, get_json_payload
from unisovet.core.limiter_config import ASSISTANT_LIMIT, READ_LIMIT, limiter

logger = logging.getLogger(__name__)

assistant_bp = Blueprint("assistant", __name__, url_prefix="/assistant")


@assistant_bp.route("/", methods=["GET"])
@limiter.limit(READ_LIMIT)
def assistant_state():
    return api_response(True, "OK", get_shell().assistant.state())


@assistant_bp.route("/open", methods=["POST"])
@limiter.limit(READ_LIMIT)
def open_panel():
    assistant = get_shell().assistant
    assistant.open()
    return api_response(True, "Assistente aberto", assistant.state())


@assistant_bp.route("/close", methods=["POST"])
@limiter.limit(READ_LIMIT)
def close_panel():
    assistant = get_shell().assistant
    assistant.close()
    return api_response(True, "Assistente fechado", assistant.state())


@assistant_bp.route("/toggle", methods=["POST"])
@limiter.limit(READ_LIMIT)
def toggle_panel():
    assistant = get_shell().assistant
    assistant.toggle()
    return api_response(True, "OK", assistant.state())


@assistant_bp.route("/messages", methods=["POST"])
@limiter.limit(ASSISTANT_LIMIT)
def send_message():
    """
    Send one user message and return the updated transcript.

    Status codes:
        200: Message sent (the reply may be the apology text)
        400: Empty message
        409: Another message is still waiting for a reply
    """
    assistant = get_shell().assistant
    text = str(get_json_payload().get("message", "") or "")

    if not text.strip():
        return api_response(False, "Mensagem vazia", assistant.state(), 400)

    if not assistant.send(text):
        logger.info(
            "Assistant message rejected while busy",
            extra={"context": {"length": len(text)}},
        )
        return api_response(
            False, "Aguarde a resposta anterior", assistant.state(), 409
        )

    return api_response(True, "Mensagem enviada", assistant.state())

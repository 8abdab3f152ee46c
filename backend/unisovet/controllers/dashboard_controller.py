"""
Dashboard controller - overview counters and upcoming appointments.
"""

from flask import Blueprint

from unisovet.controllers.record_helpers import get_shell
from unisovet.core.api_utils import api_response
from unisovet.core.limiter_config import READ_LIMIT, limiter

dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/dashboard")


@dashboard_bp.route("/", methods=["GET"])
@limiter.limit(READ_LIMIT)
def dashboard():
    summary = get_shell().dashboard()
    return api_response(True, "Dashboard", summary.to_dict())

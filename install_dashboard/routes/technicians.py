# install_dashboard/routes/technicians.py
from flask import Blueprint, current_app, jsonify, render_template
import requests

from install_dashboard.config import MISSING_PROXY_SETTINGS_MESSAGE, missing_proxy_settings
from install_dashboard.models import Technician
from install_dashboard.services.servicetitan import ServiceTitanError, get_technicians_payload
from install_dashboard.services.technician_client import get_technicians

technicians_bp = Blueprint('technicians', __name__)


@technicians_bp.route('/.netlify/functions/technicians', methods=['GET'])
@technicians_bp.route('/api/technicians', methods=['GET'])
def technicians_proxy():
    """Fresh OAuth token, then the active technicians page from ServiceTitan."""
    missing = missing_proxy_settings(current_app.config)
    if missing:
        current_app.logger.error("Technicians proxy misconfigured, missing: %s", ", ".join(missing))
        return jsonify({"error": MISSING_PROXY_SETTINGS_MESSAGE}), 500

    try:
        payload = get_technicians_payload(current_app.config, api_session=requests.Session())
    except ServiceTitanError as e:
        # Upstream status and body go back untouched
        return current_app.response_class(e.body, status=e.status_code)
    except Exception as e:
        current_app.logger.exception("Technicians proxy failed")
        return jsonify({"error": str(e)}), 500

    return jsonify(payload)


@technicians_bp.route('/technicians', methods=['GET'])
def technicians_page():
    raw = get_technicians(current_app.config["TECHNICIANS_URL"], timeout=current_app.config["ST_HTTP_TIMEOUT"])
    technicians = [Technician.from_api(t) for t in raw if isinstance(t, dict)]
    return render_template("technicians.html", technicians=technicians)

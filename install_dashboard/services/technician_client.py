# install_dashboard/services/technician_client.py
import logging
import requests

log = logging.getLogger(__name__)


def get_technicians(url, api_session=None, timeout=30):
    """
    Fetch the proxied technician list.

    Never raises: network errors, non-2xx answers, bad JSON and unexpected
    shapes all come back as an empty list.
    """
    api_session = api_session or requests.Session()
    try:
        response = api_session.get(url, timeout=timeout)
        if not response.ok:
            raise ValueError(f"Failed to fetch technicians: {response.status_code}")
        data = response.json()
    except (requests.RequestException, ValueError) as e:
        log.error("Error in get_technicians: %s", e)
        return []

    technicians = data.get("technicians") if isinstance(data, dict) else None
    if not isinstance(technicians, list):
        log.warning("Unexpected technicians payload from %s", url)
        return []
    return technicians

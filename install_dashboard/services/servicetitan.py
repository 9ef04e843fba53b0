# install_dashboard/services/servicetitan.py
"""
ServiceTitan access for the technicians proxy.

Two sequential calls, no retries:
  1. client-credentials token from the identity endpoint
  2. technicians page with Bearer token + ST-App-Key
Any non-2xx answer is raised as ServiceTitanError carrying the upstream status and body.
"""
import logging
import requests

from install_dashboard.constants import TECHNICIANS_PAGE_SIZE

log = logging.getLogger(__name__)

DEFAULT_AUTH_URL = "https://auth.servicetitan.io/connect/token"
AUTH_MODE = "bearer+appkey"


class ServiceTitanError(Exception):
    """Upstream answered with a non-success status."""

    def __init__(self, status_code, body):
        super().__init__(f"ServiceTitan returned HTTP {status_code}")
        self.status_code = status_code
        self.body = body


def technicians_path(tenant_id):
    return f"/settings/v2/tenant/{tenant_id}/technicians"


def fetch_access_token(client_id, client_secret, auth_url=DEFAULT_AUTH_URL, api_session=None, timeout=30):
    """Exchange a client id/secret pair for a bearer token."""
    api_session = api_session or requests.Session()
    response = api_session.post(
        auth_url,
        headers={"Content-Type": "application/x-www-form-urlencoded"},
        data={
            "grant_type": "client_credentials",
            "client_id": client_id,
            "client_secret": client_secret,
        },
        timeout=timeout,
    )
    if not response.ok:
        log.error("Token request failed (HTTP %s)", response.status_code)
        raise ServiceTitanError(response.status_code, response.text)

    return response.json()["access_token"]


def fetch_technicians(token, base_url, tenant_id, app_key, api_session=None, timeout=30):
    """
    Return (technicians, count) for the first page of active technicians.

    Only one page of TECHNICIANS_PAGE_SIZE is requested.
    """
    api_session = api_session or requests.Session()
    url = f"{base_url.rstrip('/')}{technicians_path(tenant_id)}"
    params = {"active": "true", "page": 1, "pageSize": TECHNICIANS_PAGE_SIZE}
    headers = {
        "Authorization": f"Bearer {token}",
        "ST-App-Key": app_key,
    }

    response = api_session.get(url, headers=headers, params=params, timeout=timeout)
    if not response.ok:
        log.error("Technician request failed (HTTP %s) for %s", response.status_code, url)
        raise ServiceTitanError(response.status_code, response.text)

    payload = response.json()
    technicians = (payload.get("data") if isinstance(payload, dict) else None) or []
    return technicians, len(technicians)


def get_technicians_payload(config, api_session=None):
    """Run token exchange then resource fetch and build the proxy response body."""
    api_session = api_session or requests.Session()
    timeout = config.get("ST_HTTP_TIMEOUT", 30)

    token = fetch_access_token(
        config["SERVICETITAN_CLIENT_ID"],
        config["SERVICETITAN_CLIENT_SECRET"],
        auth_url=config.get("ST_AUTH_URL") or DEFAULT_AUTH_URL,
        api_session=api_session,
        timeout=timeout,
    )
    technicians, count = fetch_technicians(
        token,
        config["ST_BASE_URL"],
        config["ST_TENANT_ID"],
        config["ST_APP_KEY"],
        api_session=api_session,
        timeout=timeout,
    )
    log.info("Fetched %s technicians for tenant %s", count, config["ST_TENANT_ID"])

    return {
        "pathUsed": technicians_path(config["ST_TENANT_ID"]),
        "authMode": AUTH_MODE,
        "count": count,
        "technicians": technicians,
    }

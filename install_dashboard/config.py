# install_dashboard/config.py
import os
from dotenv import load_dotenv

load_dotenv()

PROXY_SETTINGS = (
    "ST_BASE_URL",
    "ST_TENANT_ID",
    "ST_APP_KEY",
    "SERVICETITAN_CLIENT_ID",
    "SERVICETITAN_CLIENT_SECRET",
)

MISSING_PROXY_SETTINGS_MESSAGE = (
    "Missing env vars. Need ST_BASE_URL, ST_TENANT_ID, ST_APP_KEY, "
    "SERVICETITAN_CLIENT_ID, SERVICETITAN_CLIENT_SECRET."
)


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "your_secret_key_here")

    # ServiceTitan proxy (OAuth client credentials + app key)
    ST_BASE_URL = os.getenv("ST_BASE_URL")
    ST_TENANT_ID = os.getenv("ST_TENANT_ID")
    ST_APP_KEY = os.getenv("ST_APP_KEY")
    SERVICETITAN_CLIENT_ID = os.getenv("SERVICETITAN_CLIENT_ID")
    SERVICETITAN_CLIENT_SECRET = os.getenv("SERVICETITAN_CLIENT_SECRET")
    ST_AUTH_URL = os.getenv("ST_AUTH_URL", "https://auth.servicetitan.io/connect/token")
    ST_HTTP_TIMEOUT = float(os.getenv("ST_HTTP_TIMEOUT", "30"))

    # Where the technician list page fetches the proxied payload from
    TECHNICIANS_URL = os.getenv("TECHNICIANS_URL", "http://localhost:5000/.netlify/functions/technicians")

    DEMO_LATENCY_SECONDS = float(os.getenv("DEMO_LATENCY_SECONDS", "0.12"))
    MAX_RANGE_DAYS = int(os.getenv("MAX_RANGE_DAYS", "366"))
    LOG_FILE = os.getenv("LOG_FILE")


def missing_proxy_settings(config):
    """Return the names of required proxy settings that are empty or absent."""
    return [name for name in PROXY_SETTINGS if not config.get(name)]

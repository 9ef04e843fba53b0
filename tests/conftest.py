import pytest
from install_dashboard import create_app


@pytest.fixture
def test_app(tmp_path):
    app = create_app({
        "TESTING": True,
        "DEMO_LATENCY_SECONDS": 0,
        "LOG_FILE": str(tmp_path / "test.log"),
        "ST_BASE_URL": "https://api.example.test",
        "ST_TENANT_ID": "12345",
        "ST_APP_KEY": "ak1.test",
        "SERVICETITAN_CLIENT_ID": "cid.test",
        "SERVICETITAN_CLIENT_SECRET": "cs1.test",
        "TECHNICIANS_URL": "http://proxy.test/.netlify/functions/technicians",
    })
    with app.app_context():
        yield app


@pytest.fixture
def client(test_app):
    return test_app.test_client()

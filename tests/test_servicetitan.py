# tests/test_servicetitan.py
from unittest.mock import MagicMock

import pytest

from install_dashboard.services.servicetitan import (
    ServiceTitanError,
    fetch_access_token,
    fetch_technicians,
    get_technicians_payload,
)

CONFIG = {
    "ST_BASE_URL": "https://api.example.test/",
    "ST_TENANT_ID": "12345",
    "ST_APP_KEY": "ak1.test",
    "SERVICETITAN_CLIENT_ID": "cid.test",
    "SERVICETITAN_CLIENT_SECRET": "cs1.test",
    "ST_AUTH_URL": "https://auth.example.test/connect/token",
    "ST_HTTP_TIMEOUT": 5,
}


def fake_response(status=200, json_data=None, text=""):
    response = MagicMock()
    response.status_code = status
    response.ok = 200 <= status < 300
    response.json.return_value = json_data
    response.text = text
    return response


def test_token_exchange_posts_client_credentials():
    api_session = MagicMock()
    api_session.post.return_value = fake_response(json_data={"access_token": "tok-1", "expires_in": 900})

    token = fetch_access_token("cid", "secret&=", auth_url="https://auth.example.test/connect/token",
                               api_session=api_session)

    assert token == "tok-1"
    args, kwargs = api_session.post.call_args
    assert args[0] == "https://auth.example.test/connect/token"
    assert kwargs["headers"]["Content-Type"] == "application/x-www-form-urlencoded"
    assert kwargs["data"] == {"grant_type": "client_credentials", "client_id": "cid", "client_secret": "secret&="}


def test_token_exchange_failure_surfaces_status_and_body():
    api_session = MagicMock()
    api_session.post.return_value = fake_response(status=401, text='{"error":"invalid_client"}')

    with pytest.raises(ServiceTitanError) as excinfo:
        fetch_access_token("cid", "bad", api_session=api_session)

    assert excinfo.value.status_code == 401
    assert excinfo.value.body == '{"error":"invalid_client"}'
    assert api_session.post.call_count == 1


def test_fetch_technicians_sends_bearer_and_app_key():
    api_session = MagicMock()
    api_session.get.return_value = fake_response(json_data={"data": [{"id": 1}, {"id": 2}], "hasMore": False})

    technicians, count = fetch_technicians("tok-1", "https://api.example.test/", "12345", "ak1.test",
                                           api_session=api_session)

    assert technicians == [{"id": 1}, {"id": 2}]
    assert count == 2
    args, kwargs = api_session.get.call_args
    assert args[0] == "https://api.example.test/settings/v2/tenant/12345/technicians"
    assert kwargs["headers"] == {"Authorization": "Bearer tok-1", "ST-App-Key": "ak1.test"}
    assert kwargs["params"] == {"active": "true", "page": 1, "pageSize": 200}


def test_fetch_technicians_missing_data_is_empty():
    api_session = MagicMock()
    api_session.get.return_value = fake_response(json_data={"page": 1})

    assert fetch_technicians("tok", "https://x.test", "1", "k", api_session=api_session) == ([], 0)


def test_fetch_technicians_failure_is_not_retried():
    api_session = MagicMock()
    api_session.get.return_value = fake_response(status=503, text="Service Unavailable")

    with pytest.raises(ServiceTitanError) as excinfo:
        fetch_technicians("tok", "https://x.test", "1", "k", api_session=api_session)

    assert excinfo.value.status_code == 503
    assert excinfo.value.body == "Service Unavailable"
    assert api_session.get.call_count == 1


def test_payload_chains_token_into_fetch():
    api_session = MagicMock()
    api_session.post.return_value = fake_response(json_data={"access_token": "tok-2"})
    api_session.get.return_value = fake_response(json_data={"data": [{"id": 7, "name": "Tim"}]})

    payload = get_technicians_payload(CONFIG, api_session=api_session)

    assert payload == {
        "pathUsed": "/settings/v2/tenant/12345/technicians",
        "authMode": "bearer+appkey",
        "count": 1,
        "technicians": [{"id": 7, "name": "Tim"}],
    }
    assert api_session.post.call_args[0][0] == CONFIG["ST_AUTH_URL"]
    assert api_session.get.call_args[1]["headers"]["Authorization"] == "Bearer tok-2"
    assert api_session.get.call_args[1]["timeout"] == 5


def test_payload_skips_fetch_when_token_fails():
    api_session = MagicMock()
    api_session.post.return_value = fake_response(status=400, text="bad request")

    with pytest.raises(ServiceTitanError):
        get_technicians_payload(CONFIG, api_session=api_session)

    api_session.get.assert_not_called()

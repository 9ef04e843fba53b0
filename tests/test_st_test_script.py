# tests/test_st_test_script.py
from unittest.mock import MagicMock

import requests

from install_dashboard.scripts.st_test import build_request, masked, preview_line, run, technician_list

ENV = {
    "ST_BASE_URL": "https://api.example.test/",
    "ST_TENANT_ID": "12345",
    "ST_API_TOKEN": "secret-token",
}


def session_with(status=200, json_data=None, text="{}"):
    response = MagicMock()
    response.status_code = status
    response.ok = 200 <= status < 300
    response.text = text
    response.json.return_value = json_data
    api_session = MagicMock()
    api_session.get.return_value = response
    return api_session


def test_build_request_defaults():
    url, headers = build_request(ENV)
    assert url == "https://api.example.test/v2/tenant/12345/technicians"
    assert headers["Authorization"] == "Bearer secret-token"
    assert "ST-App-Key" not in headers


def test_build_request_path_override_and_app_key():
    url, headers = build_request({**ENV, "ST_TECH_PATH": "/settings/v2/tenant/{id}/technicians", "ST_APP_KEY": "ak1"})
    assert url == "https://api.example.test/settings/v2/tenant/12345/technicians"
    assert headers["ST-App-Key"] == "ak1"


def test_token_is_masked():
    _, headers = build_request(ENV)
    assert "secret-token" not in str(masked(headers))


def test_technician_list_shapes():
    assert technician_list([{"id": 1}]) == [{"id": 1}]
    assert technician_list({"data": [{"id": 2}]}) == [{"id": 2}]
    assert technician_list(None) == []


def test_preview_line():
    assert preview_line({"id": 9, "firstName": "Tim", "lastName": "Ray"}) == "9 - Tim Ray"
    assert preview_line({"technicianId": 3, "displayName": "Adam"}) == "3 - Adam"
    assert preview_line({}) == "? - Unknown"


def test_run_missing_token_exits_1():
    api_session = MagicMock()
    assert run({"ST_TENANT_ID": "1"}, api_session=api_session) == 1
    api_session.get.assert_not_called()


def test_run_success():
    api_session = session_with(json_data={"data": [{"id": 1, "name": "Tim"}]})
    assert run(ENV, api_session=api_session) == 0
    assert api_session.get.call_args[1]["params"] == {"active": "true", "page": "1", "pageSize": "200"}


def test_run_http_failure_exits_1():
    assert run(ENV, api_session=session_with(status=401, text="Unauthorized")) == 1


def test_run_network_error_exits_1():
    api_session = MagicMock()
    api_session.get.side_effect = requests.Timeout("timed out")
    assert run(ENV, api_session=api_session) == 1

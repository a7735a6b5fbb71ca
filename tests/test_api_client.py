"""Tests for ApiClient.

These tests use the `requests_mock` fixture provided by the
`requests-mock` pytest plugin. No real HTTP calls are made.
"""

import pytest
import requests

from gestmaint.api_client import ApiClient
from gestmaint.errors import DecodeError, HttpStatusError, NetworkError

from conftest import BASE_URL, JSON, url


# ---------------------------------------------------------------------------
# request() : décodage et erreurs
# ---------------------------------------------------------------------------

def test_list_clients_decodes_json(api, requests_mock):
    requests_mock.get(url("/clients"), json=[{"clientId": 1}, {"clientId": 2}], headers=JSON)

    clients = api.list_clients()

    assert [c["clientId"] for c in clients] == [1, 2]
    assert requests_mock.last_request.headers["Content-Type"] == "application/json"


def test_non_json_response_returned_raw(api, requests_mock):
    requests_mock.delete(url("/clients/3"), status_code=204)

    resp = api.delete_client(3)

    assert isinstance(resp, requests.Response)
    assert resp.status_code == 204


def test_http_error_carries_status(api, requests_mock):
    requests_mock.get(url("/contracts/9"), status_code=404, text="not found")

    with pytest.raises(HttpStatusError) as excinfo:
        api.get_contract(9)

    assert excinfo.value.status_code == 404
    assert excinfo.value.body == "not found"
    assert "404" in str(excinfo.value)


def test_network_error_is_distinct(api, requests_mock):
    requests_mock.get(url("/clients"), exc=requests.exceptions.ConnectionError("refused"))

    with pytest.raises(NetworkError) as excinfo:
        api.list_clients()

    assert "fetch" in str(excinfo.value)


def test_malformed_json_raises_decode_error(api, requests_mock):
    requests_mock.get(url("/factures"), text="{oops", headers=JSON)

    with pytest.raises(DecodeError):
        api.list_invoices()


def test_list_rejects_html_page(api, requests_mock):
    requests_mock.get(url("/clients"), text="<html>proxy</html>", headers={"Content-Type": "text/html"})

    with pytest.raises(DecodeError) as excinfo:
        api.list_clients()

    assert "text/html" in str(excinfo.value)


def test_list_rejects_json_object(api, requests_mock):
    requests_mock.get(url("/contracts"), json={"content": []}, headers=JSON)

    with pytest.raises(DecodeError):
        api.list_contracts()


def test_list_empty_body_is_empty_list(api, requests_mock):
    requests_mock.get(url("/techniciens"), status_code=200, text="")

    assert api.list_technicians() == []


def test_caller_headers_are_merged(api, requests_mock):
    requests_mock.get(url("/techniciens"), json=[], headers=JSON)

    api.request("GET", "/techniciens", headers={"X-Trace": "abc"})

    sent = requests_mock.last_request.headers
    assert sent["X-Trace"] == "abc"
    assert sent["Content-Type"] == "application/json"


# ---------------------------------------------------------------------------
# Wrappers par entité : verbe + chemin
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "call, method, path",
    [
        (lambda a: a.create_client({"x": 1}), "POST", "/clients"),
        (lambda a: a.update_contract(4, {"x": 1}), "PUT", "/contracts/4"),
        (lambda a: a.get_invoice(5), "GET", "/factures/5"),
        (lambda a: a.delete_intervention(6), "DELETE", "/interventions/6"),
        (lambda a: a.create_equipment({"x": 1}), "POST", "/equipment"),
        (lambda a: a.update_technician(7, {"x": 1}), "PUT", "/techniciens/7"),
        (lambda a: a.list_upcoming_interventions(), "GET", "/interventions/upcoming"),
    ],
)
def test_entity_wrappers_hit_expected_endpoint(api, requests_mock, call, method, path):
    requests_mock.register_uri(method, url(path), json=[] if method == "GET" else {}, headers=JSON)

    call(api)

    assert requests_mock.last_request.method == method
    assert requests_mock.last_request.path == f"/api{path}"


def test_create_sends_json_body(api, requests_mock):
    payload = {"firstName": "John", "lastName": "Doe"}
    requests_mock.post(url("/clients"), status_code=201, json={"clientId": 1, **payload}, headers=JSON)

    result = api.create_client(payload)

    assert result["clientId"] == 1
    assert requests_mock.last_request.json() == payload


def test_total_revenue_accepts_plain_number(api, requests_mock):
    requests_mock.get(url("/factures/chiffre-affaires"), json=12500.5, headers=JSON)
    assert api.get_total_revenue() == 12500.5


def test_total_revenue_text_body(api, requests_mock):
    requests_mock.get(url("/factures/chiffre-affaires"), text="300")
    assert api.get_total_revenue() == 300.0


def test_chat_posts_message_and_history(requests_mock):
    client = ApiClient(BASE_URL, chat_url="http://chat.test/api/ai/chat")
    requests_mock.post("http://chat.test/api/ai/chat", json={"reply": "ok"}, headers=JSON)

    history = [{"role": "model", "text": "hello"}]
    assert client.chat("hi", history) == {"reply": "ok"}
    assert requests_mock.last_request.json() == {"message": "hi", "history": history}


def test_default_chat_url_under_base():
    assert ApiClient(BASE_URL + "/").chat_url == f"{BASE_URL}/ai/chat"


@pytest.mark.integration
def test_live_backend_lists_clients():
    client = ApiClient.from_config()
    assert isinstance(client.list_clients(), list)

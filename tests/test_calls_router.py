import pytest
from fastapi.testclient import TestClient

from conftest import make_response
from config import settings
from main import app


@pytest.fixture
def http(fake_api, monkeypatch):
    monkeypatch.setattr(settings, "CALL2FA_LOGIN", "demo")
    monkeypatch.setattr(settings, "CALL2FA_PASSWORD", "secret")
    return TestClient(app)


def test_root(http):
    assert http.get("/").json() == {"status": "ok"}


def test_initiate_call(http, fake_api):
    fake_api.add("POST", "/v1/call/", make_response(201, {"call_id": "95831458"}))

    response = http.post("/calls/", json={"phone_number": "+380631010121"})

    assert response.status_code == 200
    assert response.json() == {"success": True, "remote_identifier": "95831458", "error": None}


def test_initiate_call_failure_is_502(http, fake_api):
    fake_api.add("POST", "/v1/call/", make_response(503, text="unavailable"))

    response = http.post("/calls/", json={"phone_number": "+380631010121"})

    assert response.status_code == 502
    assert "503" in response.json()["detail"]


def test_initiate_call_without_credentials(http, fake_api, monkeypatch):
    monkeypatch.setattr(settings, "CALL2FA_PASSWORD", "")

    response = http.post("/calls/", json={"phone_number": "+380631010121"})

    assert response.status_code == 500
    assert response.json()["detail"] == "Call2FA credentials are not configured"
    assert fake_api.calls == []


def test_call_info(http, fake_api):
    fake_api.add("GET", "/v1/call/7/", make_response(200, {"id": 7}))

    response = http.get("/calls/7")

    assert response.status_code == 200
    assert response.json() == {"id": 7}


def test_call_info_failure_is_502(http, fake_api):
    fake_api.add("GET", "/v1/call/7/", make_response(404, {"detail": "Not found."}))

    response = http.get("/calls/7")

    assert response.status_code == 502


@pytest.mark.parametrize("phone_number", ["", "0631010121", "+380631010121 ext. 5"])
def test_initiate_call_bad_phone_is_400(http, fake_api, phone_number):
    response = http.post("/calls/", json={"phone_number": phone_number})

    assert response.status_code == 400
    assert response.json()["detail"]
    assert fake_api.calls == []

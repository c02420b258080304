# tests/conftest.py
import sys
import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests

# --- Ensure project root is importable
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def make_response(status_code, body=None, text=None):
    response = MagicMock()
    response.status_code = status_code
    if text is None:
        text = json.dumps(body) if body is not None else ""
    response.text = text
    if body is None:
        response.json.side_effect = requests.exceptions.JSONDecodeError("Expecting value", text, 0)
    else:
        response.json.return_value = body
    return response


class FakeApi:
    """Stands in for requests.request; answers by (method, path suffix)."""

    def __init__(self):
        self.routes = {}
        self.calls = []

    def add(self, method, suffix, response):
        self.routes[(method, suffix)] = response

    def __call__(self, method, url, json=None, headers=None, timeout=None):
        self.calls.append({"method": method, "url": url, "json": json, "headers": headers, "timeout": timeout})
        for (route_method, suffix), response in self.routes.items():
            if route_method == method and url.endswith(suffix):
                if isinstance(response, Exception):
                    raise response
                return response
        raise AssertionError(f"unexpected request {method} {url}")


@pytest.fixture
def fake_api(monkeypatch):
    api = FakeApi()
    api.add("POST", "/v1/auth/", make_response(200, {"jwt": "token-123"}))
    monkeypatch.setattr("services.call2fa.requests.request", api)
    return api

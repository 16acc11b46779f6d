"""Shared test fixtures for the check-in client tests."""

import os
from datetime import datetime, timezone
from unittest.mock import MagicMock
from urllib.parse import urlsplit

import pytest
import requests

from checkin_client.api.client import CheckinServiceClient
from checkin_client.core.view_model import CheckinViewModel


BASE_URL = "http://checkin.test"


def make_response(status_code=200, body=None):
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 400
    if isinstance(body, Exception):
        resp.json = MagicMock(side_effect=body)
    else:
        resp.json = MagicMock(return_value=body)
    return resp


class FakeCheckinService:
    """In-memory stand-in for the check-in service, dispatching on method and path."""

    def __init__(self):
        self.children = []
        self.checkins = []
        self.fail_checkin_status = None
        self.calls = []

    def handle(self, method, url, json=None, headers=None, timeout=None):
        path = urlsplit(url).path
        self.calls.append((method, path, json))
        if (method, path) == ("GET", "/child"):
            return make_response(200, list(self.children))
        if (method, path) == ("POST", "/child"):
            child = {"id": f"c{len(self.children) + 1}", "name": json["name"]}
            self.children.append(child)
            return make_response(200, child)
        if (method, path) == ("GET", "/checkin/latest"):
            return make_response(200, list(reversed(self.checkins)))
        if (method, path) == ("POST", "/checkin"):
            if self.fail_checkin_status:
                return make_response(self.fail_checkin_status, {"detail": "error"})
            record = dict(json, id=len(self.checkins) + 1, created_at=datetime.now(timezone.utc).isoformat())
            self.checkins.append(record)
            return make_response(201, record)
        return make_response(404, {"detail": "not found"})

    def count(self, method, path):
        return sum(1 for m, p, _ in self.calls if (m, p) == (method, path))


@pytest.fixture
def fake_service():
    return FakeCheckinService()


@pytest.fixture
def mock_session(fake_service):
    session = MagicMock(spec=requests.Session)
    session.request = MagicMock(side_effect=fake_service.handle)
    return session


@pytest.fixture
def client(mock_session):
    return CheckinServiceClient(BASE_URL, session=mock_session)


@pytest.fixture
def view_model(client):
    return CheckinViewModel(client)


@pytest.fixture
def sample_checkin_doc():
    return {
        "id": 7,
        "child_id": "c1",
        "lat": 37.77493,
        "lng": -122.41942,
        "accuracy": 12,
        "note": "At the park",
        "link": None,
        "created_at": "2026-10-16T15:30:00Z",
    }


@pytest.fixture
def dotenv_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("BACKEND_URL", raising=False)
    yield tmp_path
    # load_dotenv writes straight into os.environ
    os.environ.pop("BACKEND_URL", None)

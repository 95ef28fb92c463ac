"""Shared fixtures for the employee records tests."""

import base64
import io
from contextvars import copy_context
from unittest.mock import MagicMock

import pandas as pd
import pytest

from api import configure_client

API = "http://api.test"

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@pytest.fixture(autouse=True)
def records_client():
    """Shared client pointed at a fake base URL."""
    return configure_client(API, timeout=5)


@pytest.fixture
def mock_requests_module(mocker):
    """Mock the requests module for all HTTP methods used by the client."""
    return {
        "get": mocker.patch("api.client.requests.get"),
        "post": mocker.patch("api.client.requests.post"),
        "patch": mocker.patch("api.client.requests.patch"),
        "delete": mocker.patch("api.client.requests.delete"),
    }


def create_mock_response(status_code, json_data=None, reason="OK"):
    """Helper to create a mock Response object."""
    mock_resp = MagicMock()
    mock_resp.status_code = status_code
    mock_resp.ok = 200 <= status_code < 400
    mock_resp.reason = reason
    mock_resp.json.return_value = json_data
    return mock_resp


class FakeClient:
    """Records every call; delete/insert outcomes are scripted."""

    def __init__(self, failing_ids=(), insert_ok=True):
        self.failing_ids = set(failing_ids)
        self.insert_ok = insert_ok
        self.deleted = []
        self.inserted = []

    def delete_record(self, record_id):
        self.deleted.append(record_id)
        return record_id not in self.failing_ids

    def insert_many(self, rows):
        self.inserted.append(list(rows))
        return self.insert_ok


@pytest.fixture
def sample_records():
    return [
        {"id": "1", "name": "Ann", "position": "Dev", "level": "Junior"},
        {"id": "2", "name": "Bo", "position": "QA", "level": "Senior"},
        {"id": "3", "name": "Carla", "position": "Data Analyst", "level": "Intern"},
        {"id": "4", "name": "Dan", "position": "Senior Dev", "level": "Senior"},
    ]


def workbook_bytes(rows) -> bytes:
    buf = io.BytesIO()
    pd.DataFrame(rows).to_excel(buf, index=False)
    return buf.getvalue()


def upload_contents(rows) -> str:
    """A dcc.Upload ``contents`` data URL holding an .xlsx with ``rows``."""
    b64 = base64.b64encode(workbook_bytes(rows)).decode("ascii")
    return f"data:{XLSX_MIME};base64,{b64}"


def employee_rows(n):
    levels = ["Intern", "Junior", "Senior"]
    return [
        {"name": f"Person {i}", "position": f"Role {i}", "level": levels[i % 3]}
        for i in range(n)
    ]


def run_triggered(func, prop_id, value, *args):
    """Run a callback that reads ``dash.ctx`` with ``prop_id`` as the trigger."""
    from dash._callback_context import context_value
    from dash._utils import AttributeDict

    def _run():
        context_value.set(AttributeDict(triggered_inputs=[{"prop_id": prop_id, "value": value}]))
        return func(*args)

    return copy_context().run(_run)

"""Pytest configuration helpers.

Puts ``src/`` on ``sys.path`` and provides a fake ``requests`` session that
serves canned upstream responses.
"""
from __future__ import annotations

import json
import sys
import threading
from pathlib import Path
from typing import Any

import pytest
import requests

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from investment_admin.config import Settings  # noqa: E402

INVESTMENTS_URL = "http://investments.test"
COMPANIES_URL = "http://companies.test"

SAMPLE_INVESTMENTS = [
    {
        "id": "1",
        "userId": "123",
        "firstName": "Billy",
        "lastName": "Bob",
        "financialCompanyId": "1",
        "date": "2022-01-01",
        "investmentTotal": 1000,
        "investmentPercentage": 0.5,
    },
    {
        "id": "2",
        "userId": "456",
        "firstName": "Sheila",
        "lastName": "Aussie",
        "financialCompanyId": "2",
        "date": "2022-02-01",
        "investmentTotal": 2000,
        "investmentPercentage": 0.3,
    },
    {
        "id": "3",
        "userId": "789",
        "firstName": "John",
        "lastName": "Smith",
        "financialCompanyId": "3",
        "date": "2022-03-01",
        "investmentTotal": 3000,
        "investmentPercentage": 0.2,
    },
]

SAMPLE_COMPANIES = [
    {"id": "1", "name": "Acme"},
    {"id": "2", "name": "The Big Investment Company"},
]


def make_response(status: int, payload: Any = None, url: str = "") -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response.url = url
    response.encoding = "utf-8"
    response.headers["Content-Type"] = "application/json"
    response._content = b"" if payload is None else json.dumps(payload).encode("utf-8")
    return response


class FakeSession:
    """Stands in for ``requests.Session``; routes are keyed by (method, url)."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Any] = {}
        self.calls: list[dict[str, Any]] = []
        self._lock = threading.Lock()

    def add(self, method: str, url: str, status: int = 200, payload: Any = None) -> None:
        self.routes[(method, url)] = make_response(status, payload, url)

    def add_error(self, method: str, url: str, error: BaseException) -> None:
        self.routes[(method, url)] = error

    def called(self, method: str, url: str) -> list[dict[str, Any]]:
        return [call for call in self.calls if call["method"] == method and call["url"] == url]

    def request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        with self._lock:
            self.calls.append({"method": method, "url": url, **kwargs})
        try:
            outcome = self.routes[(method, url)]
        except KeyError:
            raise requests.ConnectionError(f"No route for {method} {url}") from None
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        investments_service_url=INVESTMENTS_URL,
        financial_companies_service_url=COMPANIES_URL,
        report_path=tmp_path / "report.csv",
        request_timeout=5.0,
    )


@pytest.fixture
def report_upstreams(session: FakeSession) -> FakeSession:
    """Session with healthy investments, companies and export endpoints."""

    session.add("GET", f"{INVESTMENTS_URL}/investments", payload=SAMPLE_INVESTMENTS)
    session.add("GET", f"{COMPANIES_URL}/companies", payload=SAMPLE_COMPANIES)
    session.add("POST", f"{INVESTMENTS_URL}/investments/export", status=204)
    return session

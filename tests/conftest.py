"""
Shared fixtures: a stub HTTP session so no test touches the network.
"""
import json
import pytest
import requests
from epidata_etl.core.config import FetchSettings
from epidata_etl.transforms.epiweeks import weeks_in_year


class StubResponse:
    def __init__(self, payload=None, status_code=200, text=None):
        self.status_code = status_code
        self._text = text if text is not None else json.dumps(payload)

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def json(self):
        return json.loads(self._text)


class StubSession:
    """Records each GET and answers from a callable or a fixed response."""

    def __init__(self, responder):
        self.responder = responder
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        if callable(self.responder):
            return self.responder(url, params)
        return self.responder


def fluview_payload(region, year, metric="wili", weeks=None):
    weeks = weeks if weeks is not None else range(1, weeks_in_year(year) + 1)
    rows = [
        {"region": region, "epiweek": year * 100 + w, metric: round(1.0 + w / 10, 2), "num_ili": w}
        for w in weeks
    ]
    return {"result": 1, "epidata": rows, "message": "success"}


def year_responder(url, params):
    region = params["regions"]
    year = int(params["epiweeks"][:4])
    return StubResponse(fluview_payload(region, year))


@pytest.fixture
def settings(tmp_path):
    return FetchSettings(base_url="https://example.test/epidata/fluview/", timeout=5, output_dir=tmp_path)


@pytest.fixture
def year_session():
    return StubSession(year_responder)


@pytest.fixture
def stub_response():
    return StubResponse


@pytest.fixture
def stub_session():
    return StubSession


@pytest.fixture
def make_payload():
    return fluview_payload


@pytest.fixture
def responder():
    return year_responder

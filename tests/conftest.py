import json

import pytest
import requests

from orderdesk_bridge.config import Settings


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        self._body = body
        self.text = text if text is not None else json.dumps(body)

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        if self._body is None:
            return json.loads(self.text)
        return self._body


class FakeSession:
    """Replays queued responses (or raises queued exceptions) and records every POST."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def settings():
    return Settings(submit_url="https://orderdesk.test/submit", submit_max_attempts=3)


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def fake_sleep(sleeps):
    return sleeps.append


@pytest.fixture
def connection_error():
    return requests.ConnectionError("connection refused")


BANNER = "Shipment Export\nGenerated 2024-05-01\nWarehouse: Cannon Hill\n\n"


def build_csv(header, *rows, banner=BANNER):
    return (banner + "\n".join([header, *rows]) + "\n").encode("utf-8")

from datetime import datetime, timezone
from decimal import Decimal
import random

import simplejson as json
import pytest
import requests

import inflow
from inflow.utils.cache import ResultCache
from inflow.utils.sources import SOURCES, Source
from inflow.utils.analytics.inflow import mock_inflow_data
from inflow.utils.analytics.bridge import mock_bridge_data
from inflow.utils.analytics.swap import mock_swap_data
from inflow.utils.errors import UpstreamFetchError

NOW = datetime(2024, 1, 1, 1, 7, 30, tzinfo=timezone.utc)
# `NOW` truncated to the hour.
REF = datetime(2024, 1, 1, 1, 0, tzinfo=timezone.utc)


class FakeClock(object):
    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class Producer(object):
    """
    Counts calls, fails while `fail` is set.
    """
    def __init__(self, make, fail: bool = False) -> None:
        self.make = make
        self.fail = fail
        self.calls = 0

    def __call__(self):
        self.calls += 1

        if self.fail:
            raise UpstreamFetchError('upstream is down')

        return self.make()


def make_response(payload=None, status: int = 200, text: str = None):
    r = requests.Response()
    r.status_code = status
    r.encoding = 'utf-8'

    if text is None:
        text = json.dumps(payload)

    r._content = text.encode()
    return r


class FakeSession(object):
    def __init__(self, response=None, exc: Exception = None) -> None:
        self.response = response
        self.exc = exc
        self.calls = []

    def request(self, method, url, *args, **kwargs):
        self.calls.append((method, url, kwargs))

        if self.exc is not None:
            raise self.exc

        return self.response


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def producers(monkeypatch):
    res = {
        'inflow': Producer(lambda: mock_inflow_data(NOW, random.Random(1))),
        'bridge': Producer(lambda: mock_bridge_data(NOW, random.Random(2))),
        'swap': Producer(lambda: mock_swap_data(NOW, random.Random(3))),
    }
    fallbacks = {
        'inflow': lambda: mock_inflow_data(NOW, random.Random(4)),
        'bridge': lambda: mock_bridge_data(NOW, random.Random(5)),
        'swap': lambda: mock_swap_data(NOW, random.Random(6)),
    }

    for key, producer in res.items():
        monkeypatch.setitem(
            SOURCES, key,
            Source(key, SOURCES[key].timeout, producer, fallbacks[key]))

    return res


@pytest.fixture
def app(producers, clock):
    return inflow.init({'TESTING': True}, cache=ResultCache(clock))


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def price():
    return Decimal('25.5')

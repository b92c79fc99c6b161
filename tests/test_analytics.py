from decimal import Decimal
import random

import simplejson as json
import pytest

from inflow import init
from inflow.utils.analytics import bridge, inflow, swap
from inflow.utils.cache import ResultCache
from inflow.utils.wrappa.coingecko import CoingeckoIDS
from inflow.utils.wrappa.bitfinex import Ticker
from inflow.utils.errors import UpstreamFetchError
from inflow.utils.data import WINDOWS

from conftest import NOW, REF

SOL_AT_0005 = int(REF.timestamp()) - 55 * 60
ETH_AT_0020 = int(REF.timestamp()) - 40 * 60

TRANSFERS = [
    {
        'timestamp': SOL_AT_0005,
        'fromChain': 'Solana',
        'toChain': 'Avalanche',
        'amount': '10'
    },
    {
        'timestamp': ETH_AT_0020 * 1000,
        'fromChain': 'Ethereum',
        'toChain': 'Avalanche',
        'amount': 5
    },
]


class FakeBitfinex(object):
    def __init__(self, ticker=None, exc=None):
        self._ticker = ticker
        self.exc = exc

    def ticker(self, symbol):
        if self.exc is not None:
            raise self.exc

        assert symbol == 'tAVAXUSD'
        return self._ticker


class FakeLlama(object):
    def __init__(self, transfers=None, exc=None):
        self.transfers = transfers if transfers is not None else []
        self.exc = exc

    def recent_transfers(self, to_chain=None):
        if self.exc is not None:
            raise self.exc

        assert to_chain == 'Avalanche'
        return self.transfers


class FakeCoingecko(object):
    def __init__(self, prices):
        self.prices = prices

    def simple_price(self, *ids, currency='usd'):
        return {x: self.prices[x] for x in ids}


@pytest.fixture
def upstream(monkeypatch):
    ticker = Ticker(Decimal('25'), Decimal('9600'))
    llama = FakeLlama(TRANSFERS)

    for module in [inflow, bridge]:
        monkeypatch.setattr(module, 'bitfinex', FakeBitfinex(ticker))
        monkeypatch.setattr(module, 'llama', llama)

    monkeypatch.setattr(swap, 'llama', llama)
    monkeypatch.setattr(
        swap, 'coingecko',
        FakeCoingecko({
            CoingeckoIDS.SOL: Decimal('150'),
            CoingeckoIDS.AVAX: Decimal('25'),
        }))


def assert_windows(res):
    assert [len(res[x]) for x in WINDOWS] == [4, 24, 48, 96]


def test_inflow_data(upstream):
    res = inflow.get_inflow_data(NOW)

    assert_windows(res)
    assert res['avaxPrice'] == Decimal('25')

    hour = res['1h']
    # 9600 over the 96 buckets of the day.
    assert all(x['exchangeAmount'] == 100 for x in res['24h'])
    assert hour[3]['solBridgeAmount'] == 10
    assert hour[3]['ethBridgeAmount'] == 0
    assert hour[2]['solBridgeAmount'] == 0
    assert hour[2]['ethBridgeAmount'] == 5
    assert hour[3]['totalInflow'] == 110
    assert hour[2]['totalInflow'] == 105
    assert hour[0]['totalInflow'] == 100


def test_inflow_upstream_failure(monkeypatch, upstream):
    monkeypatch.setattr(inflow, 'bitfinex',
                        FakeBitfinex(exc=UpstreamFetchError('bitfinex down')))

    with pytest.raises(UpstreamFetchError):
        inflow.get_inflow_data(NOW)


def test_unexpected_upstream_errors_are_wrapped(monkeypatch, upstream):
    monkeypatch.setattr(inflow, 'llama', FakeLlama(exc=KeyError('transfers')))

    with pytest.raises(UpstreamFetchError):
        inflow.get_inflow_data(NOW)


def test_bridge_data(upstream):
    res = bridge.get_bridge_data(NOW)

    assert_windows(res)
    assert res['avaxPrice'] == 25

    for records in res.values():
        if not isinstance(records, list):
            continue

        for x in records:
            assert x['totalBridgeAmount'] == \
                x['solBridgeAmount'] + x['ethBridgeAmount']
            assert x['usdValue'] == x['totalBridgeAmount'] * 25

    assert res['1h'][3]['usdValue'] == 250
    assert res['1h'][2]['usdValue'] == 125
    assert 'exchangeAmount' not in res['1h'][0]


def test_swap_data(upstream):
    res = swap.get_swap_data(NOW)

    assert_windows(res)
    assert res['solPrice'] == 150
    assert res['avaxPrice'] == 25

    # 10 SOL at 150 / 25 is 60 AVAX, the Ethereum transfer isn't a swap.
    assert res['1h'][3] == {
        'time': '2024-01-01T00:00:00.000Z',
        'amount': Decimal(60),
        'usdValue': Decimal(1500),
    }
    assert res['1h'][2]['amount'] == 0


@pytest.mark.parametrize('mock,fields', [
    (inflow.mock_inflow_data, ['exchangeAmount', 'solBridgeAmount',
                               'ethBridgeAmount', 'totalInflow']),
    (bridge.mock_bridge_data, ['solBridgeAmount', 'ethBridgeAmount',
                               'totalBridgeAmount', 'usdValue']),
    (swap.mock_swap_data, ['amount', 'usdValue']),
])
def test_mock_data_is_well_formed(mock, fields):
    res = mock(NOW, random.Random(7))

    assert_windows(res)
    assert res['avaxPrice'] > 0
    assert res['1h'][0]['time'] == '2024-01-01T00:45:00.000Z'

    for key in WINDOWS:
        for x in res[key]:
            assert set(x) == {'time', *fields}
            assert all(x[f] >= 0 for f in fields)


def test_mock_inflow_totals():
    res = inflow.mock_inflow_data(NOW, random.Random(11))

    for x in res['24h']:
        assert x['totalInflow'] == x['exchangeAmount'] + \
            x['solBridgeAmount'] + x['ethBridgeAmount']

    assert 20 <= res['avaxPrice'] <= 30


def test_mock_data_is_seeded():
    assert inflow.mock_inflow_data(NOW, random.Random(3)) == \
        inflow.mock_inflow_data(NOW, random.Random(3))


NON_FINITE = [
    {
        'timestamp': SOL_AT_0005,
        'fromChain': 'Solana',
        'toChain': 'Avalanche',
        'amount': 'NaN'
    },
    {
        'timestamp': ETH_AT_0020,
        'fromChain': 'Ethereum',
        'toChain': 'Avalanche',
        'amount': float('inf')
    },
]


def test_non_finite_transfers_are_dropped(monkeypatch, upstream):
    monkeypatch.setattr(inflow, 'llama', FakeLlama(TRANSFERS + NON_FINITE))
    res = inflow.get_inflow_data(NOW)

    assert res['1h'][3]['solBridgeAmount'] == 10
    assert res['1h'][2]['ethBridgeAmount'] == 5
    assert all(x['totalInflow'].is_finite() for x in res['24h'])
    json.dumps(res, allow_nan=False)


def test_non_finite_transfers_keep_the_route_serving(monkeypatch, upstream,
                                                     clock):
    monkeypatch.setattr(inflow, 'llama', FakeLlama(NON_FINITE))
    cache = ResultCache(clock)
    client = init({'TESTING': True}, cache=cache).test_client()

    for _ in range(2):
        r = client.get('/api/v1/inflow')

        assert r.status_code == 200
        assert 'error' not in r.get_json()

    assert cache.peek('inflow') is not None

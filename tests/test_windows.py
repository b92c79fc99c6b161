from datetime import datetime, timedelta, timezone

import pytest

from inflow.utils.windows import (Bucket, build_buckets, bucket_count,
                                  parse_window, round_to_hour)
from inflow.utils.errors import InvalidWindowError
from inflow.utils.data import BUCKET_WIDTH, WINDOWS

from conftest import NOW, REF


@pytest.mark.parametrize('key,expected', [
    ('1h', 4),
    ('6h', 24),
    ('12h', 48),
    ('24h', 96),
])
def test_bucket_counts(key, expected):
    assert len(build_buckets(NOW, parse_window(key))) == expected
    assert bucket_count(WINDOWS[key]) == expected


@pytest.mark.parametrize('key', list(WINDOWS))
def test_buckets_are_contiguous_and_disjoint(key):
    buckets = build_buckets(NOW, WINDOWS[key])

    assert buckets[0].end == REF
    assert buckets[-1].start == REF - WINDOWS[key]

    for newer, older in zip(buckets, buckets[1:]):
        assert older.end == newer.start
        assert newer.end - newer.start == BUCKET_WIDTH

    assert [x.index for x in buckets] == list(range(len(buckets)))


def test_bucket_formula():
    buckets = build_buckets(NOW, timedelta(hours=1))

    for i, bucket in enumerate(buckets):
        assert bucket == Bucket(REF - (i + 1) * BUCKET_WIDTH,
                                REF - i * BUCKET_WIDTH, i)


def test_worked_example_boundaries():
    buckets = build_buckets(REF, timedelta(hours=1))

    assert [(x.start.strftime('%H:%M'), x.end.strftime('%H:%M'))
            for x in buckets] == [
                ('00:45', '01:00'),
                ('00:30', '00:45'),
                ('00:15', '00:30'),
                ('00:00', '00:15'),
            ]


def test_same_hour_same_buckets():
    early = build_buckets(REF + timedelta(minutes=1), WINDOWS['24h'])
    late = build_buckets(REF + timedelta(minutes=59, seconds=59),
                         WINDOWS['24h'])

    assert early == late
    assert build_buckets(NOW, WINDOWS['6h']) == build_buckets(
        NOW, WINDOWS['6h'])


def test_next_hour_moves_buckets():
    assert build_buckets(REF + timedelta(hours=1), WINDOWS['1h'])[0].start \
        == REF


def test_half_open_membership():
    bucket = build_buckets(REF, WINDOWS['1h'])[0]

    assert bucket.contains(bucket.start)
    assert not bucket.contains(bucket.end)
    assert bucket.contains(bucket.end - timedelta(microseconds=1))


def test_naive_now_is_utc():
    naive = datetime(2024, 1, 1, 1, 7, 30)

    assert build_buckets(naive, WINDOWS['1h']) == build_buckets(
        NOW, WINDOWS['1h'])


def test_round_to_hour_converts_timezones():
    plus_two = timezone(timedelta(hours=2))
    date = datetime(2024, 1, 1, 3, 45, tzinfo=plus_two)

    assert round_to_hour(date) == REF


@pytest.mark.parametrize('duration', [
    timedelta(minutes=50),
    timedelta(0),
    timedelta(hours=-1),
])
def test_invalid_durations(duration):
    with pytest.raises(InvalidWindowError):
        build_buckets(NOW, duration)


def test_invalid_width():
    with pytest.raises(InvalidWindowError):
        build_buckets(NOW, WINDOWS['1h'], timedelta(0))


@pytest.mark.parametrize('key', ['2h', '', '1H', None, '24'])
def test_parse_window_rejects_unknown_keys(key):
    with pytest.raises(InvalidWindowError):
        parse_window(key)

#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
          Copyright Blaze 2021.
 Distributed under the Boost Software License, Version 1.0.
    (See accompanying file LICENSE_1_0.txt or copy at
          https://www.boost.org/LICENSE_1_0.txt)
"""

from typing import (Any, Callable, Dict, Iterable, List, Mapping, NamedTuple,
                    Optional, Sequence, Union)
from datetime import datetime, timedelta
from operator import attrgetter
from decimal import Decimal
from bisect import bisect_left

from inflow.utils.helpers import isoformat, to_datetime, to_decimal
from inflow.utils.windows import Bucket, build_buckets
from inflow.utils.data import BUCKET_WIDTH, WINDOWS


class RawEvent(NamedTuple):
    timestamp: datetime
    # Chain (e.g. Solana) or venue (e.g. bitfinex) the amount came from.
    source: str
    amount: Decimal


Classifier = Callable[[RawEvent], bool]
Deriver = Callable[[Dict[str, Decimal]], Decimal]
Record = Dict[str, Any]


def make_event(timestamp: Union[int, float, str, datetime], source: str,
               amount: Union[int, float, str, Decimal]) -> RawEvent:
    return RawEvent(to_datetime(timestamp), source, to_decimal(amount))


def from_source(*sources: str) -> Classifier:
    _sources = frozenset(sources)
    return lambda event: event.source in _sources


def any_event(event: RawEvent) -> bool:
    return True


def total_of(*fields: str) -> Deriver:
    return lambda sums: sum((sums[x] for x in fields), Decimal(0))


def scaled(field: str, factor: Union[int, str, Decimal]) -> Deriver:
    _factor = to_decimal(factor)
    return lambda sums: sums[field] * _factor


def aggregate(events: Iterable[RawEvent],
              buckets: Sequence[Bucket],
              classifiers: Mapping[str, Classifier],
              derived: Optional[Mapping[str, Deriver]] = None) -> List[Record]:
    """
    Reduce `events` into one record per bucket, in the order of `buckets`.

    Each record holds the bucket start as `time`, the sum of `amount` for
    every classifier (0 when nothing matched) and then every derived field,
    computed in order from the sums of that same record.

    Events are assigned by half-open membership `[start, end)`, events
    outside every bucket are dropped.
    """
    ordered = sorted(events, key=attrgetter('timestamp'))
    stamps = [x.timestamp for x in ordered]
    res: List[Record] = []

    for bucket in buckets:
        lo = bisect_left(stamps, bucket.start)
        hi = bisect_left(stamps, bucket.end)
        members = ordered[lo:hi]

        sums: Dict[str, Decimal] = {}
        for name, match in classifiers.items():
            sums[name] = sum((x.amount for x in members if match(x)),
                             Decimal(0))

        for name, derive in (derived or {}).items():
            sums[name] = derive(sums)

        res.append({'time': isoformat(bucket.start), **sums})

    return res


def aggregate_windows(
    events: Iterable[RawEvent],
    now: datetime,
    classifiers: Mapping[str, Classifier],
    derived: Optional[Mapping[str, Deriver]] = None,
    windows: Mapping[str, timedelta] = WINDOWS,
    width: timedelta = BUCKET_WIDTH,
) -> Dict[str, List[Record]]:
    events = list(events)
    res: Dict[str, List[Record]] = {}

    for key, duration in windows.items():
        res[key] = aggregate(events, build_buckets(now, duration, width),
                             classifiers, derived)

    return res

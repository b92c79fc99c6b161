#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
          Copyright Blaze 2021.
 Distributed under the Boost Software License, Version 1.0.
    (See accompanying file LICENSE_1_0.txt or copy at
          https://www.boost.org/LICENSE_1_0.txt)

Synthetic events, used when upstream is down and nothing is cached yet.
Fallbacks go through the same aggregation as live data so they keep every
invariant (totals, bucket alignment) the consumers rely on.
"""

from typing import List, Mapping, Optional
from datetime import datetime, timedelta
from decimal import Decimal
import random

from inflow.utils.aggregate import RawEvent, make_event
from inflow.utils.data import BUCKET_WIDTH, WINDOWS
from inflow.utils.windows import build_buckets

# Longest window, every other window is a suffix of it.
DAY = max(WINDOWS.values())


def synthetic_events(now: datetime,
                     ceilings: Mapping[str, int],
                     rng: Optional[random.Random] = None,
                     duration: timedelta = DAY) -> List[RawEvent]:
    """
    One event per source per bucket, at a random offset inside the bucket
    with a random whole amount in `[0, ceiling)`.
    """
    rng = rng or random.Random()
    res: List[RawEvent] = []

    for bucket in build_buckets(now, duration):
        for source, ceiling in ceilings.items():
            offset = rng.random() * BUCKET_WIDTH.total_seconds()
            res.append(
                make_event(bucket.start + timedelta(seconds=offset), source,
                           rng.randrange(ceiling)))

    return res


def synthetic_price(rng: random.Random, low: int, high: int) -> Decimal:
    return Decimal(str(round(rng.uniform(low, high), 2)))

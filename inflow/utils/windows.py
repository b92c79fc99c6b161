#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
          Copyright Blaze 2021.
 Distributed under the Boost Software License, Version 1.0.
    (See accompanying file LICENSE_1_0.txt or copy at
          https://www.boost.org/LICENSE_1_0.txt)
"""

from datetime import datetime, timedelta, timezone
from typing import List, NamedTuple

from inflow.utils.errors import InvalidWindowError
from inflow.utils.data import BUCKET_WIDTH, WINDOWS


class Bucket(NamedTuple):
    start: datetime
    end: datetime
    # 0 is the most recent bucket in a window.
    index: int

    def contains(self, when: datetime) -> bool:
        return self.start <= when < self.end


def to_utc(date: datetime) -> datetime:
    # Naive datetimes are assumed to already be UTC.
    if date.tzinfo is None:
        return date.replace(tzinfo=timezone.utc)

    return date.astimezone(timezone.utc)


def round_to_hour(date: datetime) -> datetime:
    return to_utc(date).replace(minute=0, second=0, microsecond=0)


def parse_window(key: str) -> timedelta:
    try:
        return WINDOWS[key]
    except (KeyError, TypeError):
        raise InvalidWindowError(
            f'expected window as one of {list(WINDOWS)} got {key!r}')


def bucket_count(duration: timedelta,
                 width: timedelta = BUCKET_WIDTH) -> int:
    if width <= timedelta(0) or duration <= timedelta(0):
        raise InvalidWindowError(
            f'window {duration} and bucket width {width} must be positive')
    elif duration % width:
        raise InvalidWindowError(
            f'window {duration} is not a multiple of bucket width {width}')

    return duration // width


def build_buckets(now: datetime,
                  duration: timedelta,
                  width: timedelta = BUCKET_WIDTH) -> List[Bucket]:
    """
    Build the buckets of a window ending at the top of the hour of `now`,
    most recent first.

    Bucket `i` spans `[ref - (i + 1) * width, ref - i * width)` where `ref`
    is `now` truncated to the hour, so every call within the same hour
    yields the same boundaries.

    Raises:
        InvalidWindowError: `duration` is not a positive multiple of `width`.
    """
    count = bucket_count(duration, width)
    ref = round_to_hour(now)

    return [
        Bucket(ref - (i + 1) * width, ref - i * width, i)
        for i in range(count)
    ]

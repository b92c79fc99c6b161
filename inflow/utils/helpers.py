#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
          Copyright Blaze 2021.
 Distributed under the Boost Software License, Version 1.0.
    (See accompanying file LICENSE_1_0.txt or copy at
          https://www.boost.org/LICENSE_1_0.txt)
"""

from typing import Any, Callable, Dict, Union
from datetime import datetime, timezone
import decimal
import logging

from gevent.greenlet import Greenlet
from gevent.pool import Pool
import dateutil.parser
import gevent

from inflow.utils.errors import UpstreamFetchError
from inflow.utils.windows import to_utc

logger = logging.getLogger(__name__)
D = decimal.Decimal
pool = Pool()

# Anything past this is an epoch in milliseconds (year 33658 in seconds).
_MS_THRESHOLD = 1e12


def to_decimal(value: Any) -> D:
    """
    Decimal from ints, floats or numeric strings, going through `str` so
    floats don't drag their binary noise along.

    Raises:
        ValueError: not a number, or NaN / infinity (which JSON can't carry).
    """
    try:
        res = value if isinstance(value, D) else D(str(value))
    except decimal.InvalidOperation:
        raise ValueError(f'expected a numeric amount got {value!r}')

    if not res.is_finite():
        raise ValueError(f'expected a finite amount got {value!r}')

    return res


def to_datetime(value: Union[int, float, str, datetime]) -> datetime:
    """
    Normalize epoch seconds, epoch milliseconds or an ISO-8601 string into
    an aware UTC datetime.
    """
    if isinstance(value, datetime):
        return to_utc(value)
    elif isinstance(value, str):
        try:
            return to_datetime(float(value))
        except ValueError:
            return to_utc(dateutil.parser.isoparse(value))

    value = float(value)
    if value > _MS_THRESHOLD:
        value /= 1000

    return datetime.fromtimestamp(value, tz=timezone.utc)


def isoformat(date: datetime) -> str:
    """
    `2021-11-06T13:45:00.000Z`, the same shape JS' `toISOString()` emits.
    """
    date = to_utc(date)
    return date.strftime('%Y-%m-%dT%H:%M:%S.') + \
        f'{date.microsecond // 1000:03d}Z'


def fan_out(**calls: Callable[[], Any]) -> Dict[str, Any]:
    """
    Run every call concurrently on the pool and wait for all of them.

    Raises:
        UpstreamFetchError: at least one call failed, after all finished.
    """
    jobs: Dict[str, Greenlet] = {}

    for name, call in calls.items():
        jobs[name] = pool.spawn(call)

    gevent.joinall(jobs.values())

    res: Dict[str, Any] = {}
    for name, job in jobs.items():
        if not job.successful():
            logger.warning(f'upstream job {name!r} failed: {job.exception!r}')

            if isinstance(job.exception, UpstreamFetchError):
                raise job.exception

            raise UpstreamFetchError(
                f'{name} failed: {job.exception}') from job.exception

        res[name] = job.value

    return res

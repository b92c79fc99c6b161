#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
          Copyright Blaze 2021.
 Distributed under the Boost Software License, Version 1.0.
    (See accompanying file LICENSE_1_0.txt or copy at
          https://www.boost.org/LICENSE_1_0.txt)

Call this file once the site is up to populate every source's cache, so the
first dashboard visitor doesn't pay for the upstream round trips.
"""

from typing import Dict, List
import sys

from gevent import monkey
import requests
import gevent

HOST = 'http://localhost:80'
routes = [
    '/api/v1/inflow',
    '/api/v1/bridge',
    '/api/v1/swap',
]


def trigger(host: str = HOST, routes: List[str] = routes) -> Dict[str, bool]:
    """
    Hit every route concurrently, returns whether each came back healthy
    (HTTP 2xx without a degraded `error` field).
    """
    jobs: Dict[str, gevent.Greenlet] = {}

    for route in routes:
        jobs[route] = gevent.spawn(requests.get, host + route, timeout=60)

    print(f'Waiting for {len(jobs)} jobs, this could take a few minutes.')
    gevent.joinall(jobs.values())

    res: Dict[str, bool] = {}
    for route, job in jobs.items():
        if not job.successful():
            print(f'{route}: {job.exception!r}')
            res[route] = False
            continue

        r = job.value
        res[route] = r.ok and 'error' not in r.json()
        print(f'{route}: {r.status_code}{"" if res[route] else " (degraded)"}')

    return res


if __name__ == '__main__':
    # Monkey patch stuff.
    monkey.patch_all()

    ret = trigger(sys.argv[1] if len(sys.argv) > 1 else HOST)
    exit(0 if all(ret.values()) else 1)

#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
          Copyright Blaze 2021.
 Distributed under the Boost Software License, Version 1.0.
    (See accompanying file LICENSE_1_0.txt or copy at
          https://www.boost.org/LICENSE_1_0.txt)
"""

from typing import Any, Callable, DefaultDict, Dict, NamedTuple, Optional
from collections import defaultdict
import logging
import time

from flask_caching.backends import SimpleCache
from gevent.lock import BoundedSemaphore

from inflow.utils.errors import EmptyCacheError

logger = logging.getLogger(__name__)

WindowedResult = Dict[str, Any]


class CacheEntry(NamedTuple):
    data: WindowedResult
    computed_at: float
    # Only set on synthetic fallbacks, which never get stored.
    error: Optional[str] = None


class ResultCache(object):
    """
    One entry per data source, kept for the lifetime of the process.

    Entries are stored without an expiry; freshness is tracked next to the
    data so a failed refresh can keep serving the old (stale) entry.
    """
    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        # default_timeout=0 means entries never expire.
        self._store = SimpleCache(default_timeout=0)
        self._locks: DefaultDict[str, BoundedSemaphore] = \
            defaultdict(BoundedSemaphore)
        self.clock = clock

    def peek(self, key: str) -> Optional[CacheEntry]:
        return self._store.get(key)

    def age(self, key: str) -> Optional[float]:
        if (entry := self.peek(key)) is None:
            return None

        return self.clock() - entry.computed_at

    def is_fresh(self, entry: Optional[CacheEntry], freshness: float) -> bool:
        return entry is not None and \
            self.clock() - entry.computed_at <= freshness

    def clear(self) -> None:
        self._store.clear()

    def get_or_refresh(
        self,
        key: str,
        freshness: float,
        producer: Callable[[], WindowedResult],
        fallback: Optional[Callable[[], WindowedResult]] = None,
    ) -> CacheEntry:
        """
        Serve `key` from the cache, running `producer` if the entry is
        missing or older than `freshness` seconds.

        If `producer` raises, an existing entry is served as is (stale) and
        left untouched. With nothing cached, `fallback()` is returned with
        `error` set; it is NOT stored so the next call tries again.

        Raises:
            EmptyCacheError: producer failed, nothing cached, no fallback.
        """
        entry = self.peek(key)
        if self.is_fresh(entry, freshness):
            return entry  # type: ignore

        # First caller refreshes, the others wait for it and re-check.
        with self._locks[key]:
            entry = self.peek(key)
            if self.is_fresh(entry, freshness):
                return entry  # type: ignore

            try:
                logger.info(f'refreshing {key!r}')
                data = producer()
            except Exception as e:
                if entry is not None:
                    logger.warning(
                        f'refresh of {key!r} failed ({e!r}), serving stale '
                        f'data from {entry.computed_at}')
                    return entry

                logger.exception(f'refresh of {key!r} failed, nothing cached')

                if fallback is None:
                    raise EmptyCacheError(key) from e

                return CacheEntry(fallback(), self.clock(), str(e))

            entry = CacheEntry(data, self.clock())
            if not self._store.set(key, entry):
                logger.critical(f'failed to store cache entry for {key!r}')

            return entry

#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
          Copyright Blaze 2021.
 Distributed under the Boost Software License, Version 1.0.
    (See accompanying file LICENSE_1_0.txt or copy at
          https://www.boost.org/LICENSE_1_0.txt)
"""

from typing import Callable, NamedTuple, Optional

from inflow.utils.analytics.bridge import get_bridge_data, mock_bridge_data
from inflow.utils.analytics.inflow import get_inflow_data, mock_inflow_data
from inflow.utils.analytics.swap import get_swap_data, mock_swap_data
from inflow.utils.data import BRIDGE_TIMEOUT, INFLOW_TIMEOUT, SWAP_TIMEOUT
from inflow.utils.cache import CacheEntry, ResultCache, WindowedResult


class Source(NamedTuple):
    key: str
    # Freshness in seconds.
    timeout: int
    producer: Callable[[], WindowedResult]
    fallback: Callable[[], WindowedResult]

    @property
    def config_key(self) -> str:
        return f'{self.key.upper()}_TIMEOUT'


SOURCES = {
    'inflow':
    Source('inflow', INFLOW_TIMEOUT, get_inflow_data, mock_inflow_data),
    'bridge':
    Source('bridge', BRIDGE_TIMEOUT, get_bridge_data, mock_bridge_data),
    'swap':
    Source('swap', SWAP_TIMEOUT, get_swap_data, mock_swap_data),
}


def serve(cache: ResultCache,
          source: Source,
          timeout: Optional[int] = None) -> CacheEntry:
    if timeout is None:
        timeout = source.timeout

    return cache.get_or_refresh(source.key, timeout, source.producer,
                                source.fallback)

#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
          Copyright Blaze 2021.
 Distributed under the Boost Software License, Version 1.0.
    (See accompanying file LICENSE_1_0.txt or copy at
          https://www.boost.org/LICENSE_1_0.txt)
"""

from typing import Any, Dict, List, Optional
import logging

import requests

from inflow.utils.data import LLAMA_BRIDGES_BASE_URL, REQUEST_TIMEOUT
from inflow.utils.aggregate import RawEvent, make_event
from inflow.utils.errors import UpstreamFetchError

logger = logging.getLogger(__name__)


class DefiLlamaBridges(object):
    """
    Simple bridges.llama.fi wrapper
    https://defillama.com/docs/api
    """
    def __init__(self,
                 url: str = LLAMA_BRIDGES_BASE_URL,
                 timeout: float = REQUEST_TIMEOUT) -> None:
        self.session = requests.Session()
        self.base = url
        self.timeout = timeout

    def __request(self, method: str, endpoint: str, *args, **kwargs) -> Any:
        try:
            r = self.session.request(method,
                                     self.base + endpoint,
                                     *args,
                                     timeout=self.timeout,
                                     **kwargs)
            r.raise_for_status()
            return r.json()
        except (requests.RequestException, ValueError) as e:
            raise UpstreamFetchError(f'llama {endpoint}: {e}') from e

    def recent_transfers(
            self,
            to_chain: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Recent cross chain transfers, optionally only those landing on
        `to_chain`.

        Schema:
        {
            "transfers": [
                {
                    "timestamp": 1636206300,
                    "fromChain": "Solana",
                    "toChain": "Avalanche",
                    "amount": "1520.5"
                }
            ]
        }
        """
        ret = self.__request('GET', '/transfers/recent')

        try:
            transfers = ret['transfers']
        except (KeyError, TypeError) as e:
            raise UpstreamFetchError('llama payload missing transfers') from e

        if to_chain is None:
            return transfers

        return [x for x in transfers if x.get('toChain') == to_chain]


def transfers_to_events(transfers: List[Dict[str, Any]]) -> List[RawEvent]:
    """
    Skips (and logs) malformed transfers instead of failing the batch.
    """
    res: List[RawEvent] = []

    for x in transfers:
        try:
            res.append(make_event(x['timestamp'], x['fromChain'], x['amount']))
        except (KeyError, TypeError, ValueError, OverflowError, OSError):
            logger.warning(f'skipping malformed transfer {x!r}')

    return res

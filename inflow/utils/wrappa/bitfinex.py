#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
          Copyright Blaze 2021.
 Distributed under the Boost Software License, Version 1.0.
    (See accompanying file LICENSE_1_0.txt or copy at
          https://www.boost.org/LICENSE_1_0.txt)
"""

from typing import Any, NamedTuple
from decimal import Decimal
import logging

import requests

from inflow.utils.data import BITFINEX_BASE_URL, REQUEST_TIMEOUT
from inflow.utils.errors import UpstreamFetchError
from inflow.utils.helpers import to_decimal

logger = logging.getLogger(__name__)


class Ticker(NamedTuple):
    last_price: Decimal
    # Base currency volume over the last 24h.
    volume: Decimal


class Bitfinex(object):
    """
    Simple api.bitfinex.com (v2 public) wrapper
    https://docs.bitfinex.com/reference/rest-public-ticker
    """
    def __init__(self,
                 url: str = BITFINEX_BASE_URL,
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
            raise UpstreamFetchError(f'bitfinex {endpoint}: {e}') from e

    def ticker(self, symbol: str) -> Ticker:
        """
        Schema (trading pairs):
        [
            BID, BID_SIZE, ASK, ASK_SIZE, DAILY_CHANGE,
            DAILY_CHANGE_RELATIVE, LAST_PRICE, VOLUME, HIGH, LOW
        ]
        """
        ret = self.__request('GET', f'/ticker/{symbol}')

        try:
            ticker = Ticker(to_decimal(ret[6]), to_decimal(ret[7]))
        except (IndexError, KeyError, TypeError, ValueError) as e:
            logger.warning(f'unexpected bitfinex ticker payload: {ret!r}')
            raise UpstreamFetchError(f'bad ticker for {symbol}') from e

        if ticker.last_price <= 0:
            raise UpstreamFetchError(
                f'non positive price for {symbol}: {ticker.last_price}')

        return ticker
